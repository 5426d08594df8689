"""Data models for the audit report handed to renderers."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReportEntry:
    """One resource that should be moved."""

    path: str
    belongs_in_folders: list[str]
    used_on_pages: list[str]


@dataclass
class AuditReport:
    """Ordered list of resources to move. Empty means nothing to report."""

    entries: list[ReportEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Return True when no resource qualified for the report."""
        return not self.entries
