"""Data models for representing folders in the resource gallery tree."""

from dataclasses import dataclass


@dataclass(eq=False)
class GalleryFolder:
    """A folder in the CMS resource gallery tree.

    Folders are compared by identity so the root gallery can be recognised
    by reference, the same way the CMS hands it out.
    """

    name: str
    parent: "GalleryFolder | None" = None

    @property
    def path(self) -> str:
        """Slash-separated path from the root gallery down to this folder."""
        names = [folder.name for folder in reversed(self.ancestry())]
        return "/" + "/".join(names)

    def ancestry(self) -> list["GalleryFolder"]:
        """Return this folder followed by each parent up to the root."""
        chain: list[GalleryFolder] = []
        node: GalleryFolder | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain
