"""Tests for the audit orchestration."""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

from gallery_audit.load_config import load_config
from gallery_audit.repository_snapshot import RepositorySnapshot
from gallery_audit.run_audit import run_audit

R1 = "11111111-0000-0000-0000-000000000001"
R2 = "22222222-0000-0000-0000-000000000002"
NOW = datetime(2024, 6, 1)


def link(guid: str, name: str = "file.pdf") -> str:
    """Build a resource link as the CMS writes it into HTML."""
    return f'<a href="/NR/rdonlyres/{guid}/0/{name}">{name}</a>'


def posting(name: str, *placeholders: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    """Build a posting entry for a snapshot."""
    return {
        "name": name,
        "url_published": f"/{name}.htm",
        "url_unpublished": f"/NR/exeres/{name}.htm",
        "placeholders": list(placeholders),
        **kwargs,
    }


def html(*links: str) -> dict[str, Any]:
    """Build an HTML placeholder entry."""
    return {"name": "Body", "kind": "html", "content": "".join(links)}


def build_snapshot(channels: list[dict[str, Any]]) -> RepositorySnapshot:
    """Snapshot with galleries A, B and C under Resources/Groups."""
    return RepositorySnapshot.from_dict(
        {
            "galleries": [
                {"name": "Groups", "children": [{"name": n} for n in "ABC"]},
            ],
            "resources": [
                {"guid": R1, "name": "r1.pdf", "gallery": "Groups/C"},
                {"guid": R2, "name": "r2.pdf", "gallery": "Groups/A"},
            ],
            "channels": channels,
        }
    )


def audit(snapshot: RepositorySnapshot, **kwargs: Any) -> Any:
    """Run the audit over a snapshot with default config."""
    config = kwargs.pop("config", None) or load_config(None)
    return run_audit(snapshot, snapshot, snapshot, config, now=NOW, **kwargs)


def test_end_to_end_conflict_is_reported_only_on_request() -> None:
    """Verify a resource used by groups A and B is a conflict."""
    snapshot = build_snapshot(
        [
            {
                "guid": "ch-a",
                "groups": {"Editor": ["A"]},
                "postings": [posting("P1", html(link(R2)))],
            },
            {
                "guid": "ch-b",
                "groups": {"Editor": ["B"]},
                "postings": [
                    posting("P2", html(link(R2))),
                    posting("P3", html(link(R2)), state="Saved"),
                ],
            },
        ]
    )

    report, stats = audit(snapshot)
    three = 3
    assert report.is_empty
    assert stats.references == three
    assert stats.correct == 1

    report, _ = audit(snapshot, include_conflicts=True)
    assert len(report.entries) == 1
    entry = report.entries[0]
    assert entry.path == "/Resources/Groups/A/r2.pdf"
    assert entry.belongs_in_folders == ["B", "A"]
    assert entry.used_on_pages == ["/P2.htm", "/NR/exeres/P3.htm", "/P1.htm"]


def test_image_and_html_placeholders_are_both_checked() -> None:
    """Verify image sources and HTML links are both classified."""
    image = {"name": "Photo", "kind": "image", "src": f"/NR/rdonlyres/{R1}/0/r1.jpg"}
    snapshot = build_snapshot(
        [
            {
                "guid": "ch-b",
                "groups": {"Editor": ["B", "A"]},
                "postings": [posting("P1", image, html(link(R2)))],
            }
        ]
    )

    report, stats = audit(snapshot)

    assert stats.correct == 1
    assert stats.needs_move == 1
    assert [e.path for e in report.entries] == ["/Resources/Groups/C/r1.pdf"]
    assert report.entries[0].belongs_in_folders == ["B"]


def test_ignored_expired_and_ownerless_pages_are_skipped() -> None:
    """Verify pages with no audit obligation never reach the classifier."""
    snapshot = build_snapshot(
        [
            {
                "guid": "ignored",
                "groups": {"Editor": ["B"]},
                "postings": [posting("P1", html(link(R1)))],
            },
            {
                "guid": "expired",
                "groups": {"Editor": ["B"]},
                "postings": [
                    posting("P2", html(link(R1)), expiry=datetime(2020, 1, 1))
                ],
            },
            {
                "guid": "no-editors",
                "groups": {"Author": ["B"]},
                "postings": [posting("P3", html(link(R1)))],
            },
            {
                "guid": "no-links",
                "groups": {"Editor": ["B"]},
                "postings": [posting("P4", html("<p>text</p>"))],
            },
        ]
    )
    config = load_config(None)
    config["ignore_channels"] = ["ignored"]

    report, stats = audit(snapshot, config=config)

    assert report.is_empty
    assert stats.ignored_channel == 1
    assert stats.expired == 1
    assert stats.no_editors == 1
    assert stats.references == 0


def test_unresolved_links_are_counted_not_classified() -> None:
    """Verify links to unknown resources are skipped."""
    unknown = "99999999-0000-0000-0000-000000000009"
    snapshot = build_snapshot(
        [
            {
                "guid": "ch-b",
                "groups": {"Editor": ["B"]},
                "postings": [posting("P1", html(link(unknown)))],
            }
        ]
    )

    report, stats = audit(snapshot)

    assert report.is_empty
    assert stats.unresolved == 1


def test_base_url_corrects_page_links() -> None:
    """Verify report links are made absolute with the base URL."""
    snapshot = build_snapshot(
        [
            {
                "guid": "ch-b",
                "groups": {"Editor": ["B"]},
                "postings": [posting("P1", html(link(R1)))],
            }
        ]
    )
    config = load_config(None)
    config["base_url"] = "https://www.example.gov.uk/"

    report, _ = audit(snapshot, config=config)

    assert report.entries[0].used_on_pages == ["https://www.example.gov.uk/P1.htm"]


def test_failure_is_logged_and_reraised(caplog: pytest.LogCaptureFixture) -> None:
    """Verify a resolver failure aborts the run instead of reporting."""
    snapshot = build_snapshot(
        [
            {
                "guid": "ch-b",
                "groups": {"Editor": ["B"]},
                "postings": [posting("P1", html(link(R1)))],
            }
        ]
    )
    resolver = MagicMock()
    resolver.resolve.side_effect = RuntimeError("CMS unavailable")

    with pytest.raises(RuntimeError, match="CMS unavailable"):
        run_audit(snapshot, snapshot, resolver, load_config(None), now=NOW)

    assert "Audit failed" in caplog.text


def test_ignored_channels_match_regardless_of_case() -> None:
    """Verify an ignored channel guid is matched without regard to case."""
    snapshot = build_snapshot(
        [
            {
                "guid": "CH-A",
                "groups": {"Editor": ["A"]},
                "postings": [posting("P1", html(link(R1)))],
            }
        ]
    )
    config = load_config(None)
    config["ignore_channels"] = ["ch-a"]

    report, stats = audit(snapshot, config=config)

    assert report.is_empty
    assert stats.ignored_channel == 1


def test_offset_aware_expiry_does_not_abort_audit() -> None:
    """Verify pages with UTC expiries are filtered, not fatal."""
    snapshot = build_snapshot(
        [
            {
                "guid": "ch-b",
                "groups": {"Editor": ["B"]},
                "postings": [
                    posting(
                        "P1",
                        html(link(R1)),
                        expiry=datetime(2099, 1, 1, tzinfo=timezone.utc),
                    ),
                    posting(
                        "P2",
                        html(link(R1)),
                        expiry=datetime(2001, 1, 1, tzinfo=timezone.utc),
                    ),
                ],
            }
        ]
    )

    report, stats = audit(snapshot)

    assert stats.expired == 1
    assert report.entries[0].used_on_pages == ["/P1.htm"]
