"""Tests for the JSON report output."""

import json
import time
from pathlib import Path

from gallery_audit.report_entry import AuditReport, ReportEntry
from gallery_audit.write_json_report import write_json_report


def test_json_report_generation(tmp_path: Path) -> None:
    """Verify that the JSON report is generated correctly."""
    report = AuditReport(
        [
            ReportEntry("/Resources/Groups/C/a.pdf", ["B"], ["/p1.htm"]),
            ReportEntry("/Resources/Groups/C/b.pdf", ["B", "A"], ["/p2.htm"]),
        ]
    )
    output_file = tmp_path / "report.json"

    write_json_report(report, str(output_file), {"visits": 7}, time.time())

    content = json.loads(output_file.read_text(encoding="utf-8"))
    two = 2
    assert content["meta"]["total_items"] == two
    assert content["results"][1] == {
        "path": "/Resources/Groups/C/b.pdf",
        "belongs_in": ["B", "A"],
        "used_on": ["/p2.htm"],
    }
    assert content["stats"] == {"visits": 7}
