"""Logic for turning the audit ledger into an ordered report."""

from collections.abc import Callable

from gallery_audit.report_entry import AuditReport, ReportEntry
from gallery_audit.resource_ledger import ResourceLedger


def required_gallery_count(ledger: ResourceLedger, guid: str) -> int:
    """Count the galleries a resource would need to be in to suit every page."""
    count = len(ledger.needs_to_move[guid].belongs_in_folders)
    used = ledger.used_correctly.get(guid)
    if used is not None:
        count += len(used.belongs_in_folders)
    return count


def build_report(
    ledger: ResourceLedger,
    *,
    include_conflicts: bool = False,
    link_corrector: Callable[[str], str] | None = None,
) -> AuditReport:
    """Build the report of resources to move, ordered by resource guid.

    A resource used correctly by one group but needing to move for another
    belongs in more than one gallery, so it is only reported when
    ``include_conflicts`` is set.
    """
    fix = link_corrector or (lambda url: url)
    report = AuditReport()

    for guid in sorted(ledger.needs_to_move):
        if not (required_gallery_count(ledger, guid) == 1 or include_conflicts):
            continue

        move = ledger.needs_to_move[guid]
        used = ledger.used_correctly.get(guid)

        folders = list(move.belongs_in_folders)
        pages = list(move.used_on_pages)
        if used is not None:
            folders.extend(used.belongs_in_folders)
            pages.extend(used.used_on_pages)

        report.entries.append(
            ReportEntry(
                path=move.current_path,
                belongs_in_folders=folders,
                used_on_pages=[fix(url) for url in pages],
            )
        )

    return report
