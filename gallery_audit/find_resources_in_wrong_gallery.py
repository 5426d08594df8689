"""Find CMS resources filed in a gallery their page's editors cannot use.

Web authors can only save a page when every resource on it lives in the
gallery named after their CMS group. This tool walks a repository snapshot,
lists resources that need to move and emails the list to the web team.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from gallery_audit.load_config import load_config
from gallery_audit.render_report_html import render_report_html
from gallery_audit.repository_snapshot import RepositorySnapshot
from gallery_audit.run_audit import run_audit
from gallery_audit.send_report_email import check_email_config, send_report_email
from gallery_audit.write_json_report import write_json_report


def _legacy_switches(argv: list[str]) -> list[str]:
    """Rewrite the old ``/reportconflicts`` style switch, in any case."""
    return [
        "--report-conflicts"
        if len(arg) > 1 and arg[0] in "-/" and arg[1:].upper() == "REPORTCONFLICTS"
        else arg
        for arg in argv
    ]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the gallery audit."""
    ap = argparse.ArgumentParser(
        description="Find CMS resources that are in the wrong resource gallery.",
    )
    ap.add_argument(
        "snapshot",
        type=Path,
        help="YAML export of the CMS channels, postings and resource galleries",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--report-conflicts",
        "-reportconflicts",
        action="store_true",
        default=None,
        help="Include resources which belong in more than one gallery",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the report instead of emailing it",
    )
    ap.add_argument(
        "--json-report",
        help="Also write the report as JSON to this path",
    )
    ap.add_argument(
        "--html-report",
        help="Also write the HTML email body to this path",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Log every resource that needs to move",
    )
    return ap.parse_args(_legacy_switches(sys.argv[1:] if argv is None else argv))


def main(argv: list[str] | None = None) -> int:
    """Run the audit and deliver the report."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.snapshot.exists():
        msg = f"Snapshot not found: {args.snapshot}"
        raise SystemExit(msg)

    config = load_config(args.config)
    include_conflicts = (
        args.report_conflicts
        if args.report_conflicts is not None
        else bool(config.get("report_conflicts"))
    )
    if not args.dry_run:
        check_email_config(config["email"])

    start_time = time.time()
    snapshot = RepositorySnapshot.load(args.snapshot)
    report, stats = run_audit(
        snapshot, snapshot, snapshot, config, include_conflicts=include_conflicts
    )

    body = render_report_html(report)
    if args.json_report:
        write_json_report(report, args.json_report, stats.as_dict(), start_time)
    if args.html_report:
        Path(args.html_report).write_text(body, encoding="utf-8")

    if report.is_empty:
        print("No resources need to move.")
        return 0

    if args.dry_run:
        for entry in report.entries:
            print(f"{entry.path} -> {', '.join(entry.belongs_in_folders)}")
            for url in entry.used_on_pages:
                print(f"    {url}")
    else:
        send_report_email(body, config["email"])

    print(f"Reported {len(report.entries)} resources to move.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
