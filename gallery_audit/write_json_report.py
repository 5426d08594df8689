"""Logic for writing the audit report as JSON."""

import json
import time
from pathlib import Path
from typing import Any

from gallery_audit.report_entry import AuditReport


def write_json_report(
    report: AuditReport, path: str, stats: dict[str, Any], start_time: float
) -> None:
    """Write the report and run statistics to a JSON file."""
    doc = {
        "meta": {
            "timestamp": time.time(),
            "duration": time.time() - start_time,
            "total_items": len(report.entries),
        },
        "results": [
            {
                "path": entry.path,
                "belongs_in": entry.belongs_in_folders,
                "used_on": entry.used_on_pages,
            }
            for entry in report.entries
        ],
        "stats": stats,
    }
    Path(path).write_text(json.dumps(doc, indent=2), encoding="utf-8")
