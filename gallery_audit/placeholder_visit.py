"""Data models for the events produced while walking the content tree."""

from dataclasses import dataclass, field
from datetime import datetime

PUBLISHED = "Published"


@dataclass(frozen=True)
class Channel:
    """A channel (site section) whose editor groups own its pages."""

    guid: str
    name: str
    path: str = ""


@dataclass(frozen=True)
class Posting:
    """A page in the CMS, with both the published and unpublished URL."""

    guid: str
    name: str
    state: str
    url_published: str
    url_unpublished: str
    expiry_date: datetime | None = None


@dataclass(frozen=True)
class Placeholder:
    """A content slot on a page.

    Image placeholders carry ``src``; every other kind carries its raw
    HTML in ``content``.
    """

    name: str
    kind: str  # "image" or "html"
    src: str = ""
    content: str = ""

    @property
    def is_image(self) -> bool:
        """Return True for image placeholders."""
        return self.kind == "image"


@dataclass(frozen=True)
class PlaceholderVisit:
    """One placeholder visited during traversal."""

    posting: Posting
    channel: Channel
    placeholder: Placeholder
    context: dict[str, str] = field(default_factory=dict)
