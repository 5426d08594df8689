"""Data models for representing resources held in the gallery tree."""

from dataclasses import dataclass

from gallery_audit.gallery_folder import GalleryFolder


@dataclass(frozen=True)
class Resource:
    """A resolved resource handle (image, document, etc.)."""

    guid: str
    path: str
    parent: GalleryFolder | None
