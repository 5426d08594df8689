"""Data models for a single page's reference to a resource."""

from dataclasses import dataclass

from gallery_audit.gallery_folder import GalleryFolder


@dataclass(frozen=True)
class ResourceReference:
    """One reference to a resource, seen from the page that uses it."""

    guid: str
    path: str
    parent: GalleryFolder | None
    page_url: str
    group_names: tuple[str, ...]  # editor groups of the referencing channel

    @property
    def folder_ancestry(self) -> list[GalleryFolder]:
        """Folders from the resource's parent up to the repository root."""
        if self.parent is None:
            return []
        return self.parent.ancestry()
