"""Interfaces for the collaborators that feed the audit.

The audit does not walk the CMS itself. It is driven by a traverser that
yields placeholder visits, a permission lookup that names the editor groups
of a channel, and a resolver that turns resource URLs into resources. The
repository snapshot implements all three; tests substitute their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gallery_audit.gallery_folder import GalleryFolder
    from gallery_audit.placeholder_visit import Channel, PlaceholderVisit
    from gallery_audit.resource import Resource


class ContentTraverser(Protocol):
    """Walks every placeholder in the repository."""

    @property
    def root_gallery(self) -> GalleryFolder:
        """The top of the resource gallery tree."""
        ...

    def iter_visits(self) -> Iterator[PlaceholderVisit]:
        """Yield one visit per placeholder on every page."""
        ...


class PermissionLookup(Protocol):
    """Reads CMS group permissions for a channel."""

    def editor_groups(self, channel: Channel) -> list[str]:
        """Return distinct editor group names in configured order."""
        ...


class ResourceResolver(Protocol):
    """Resolves resource URLs found on pages."""

    def resolve(self, url: str, context: dict[str, str]) -> Resource | None:
        """Return the resource behind a URL, or None if it is not one."""
        ...
