"""Tests for the resource ledger accumulators."""

import threading

from gallery_audit.resource_ledger import ResourceLedger


def test_records_are_created_lazily_and_deduplicated() -> None:
    """Verify repeated records add one entry per distinct group and page."""
    ledger = ResourceLedger()
    ledger.record_correct("R1", "HR", "/a.htm")
    ledger.record_correct("R1", "HR", "/a.htm")
    ledger.record_correct("R1", "Finance", "/b.htm")

    record = ledger.used_correctly["R1"]
    assert record.belongs_in_folders == ["HR", "Finance"]
    assert record.used_on_pages == ["/a.htm", "/b.htm"]


def test_move_keeps_first_seen_path() -> None:
    """Verify the current path comes from the first move recorded."""
    ledger = ResourceLedger()
    ledger.record_move("R1", "/Resources/Groups/Legal/a.pdf", "HR", "/a.htm")
    ledger.record_move("R1", "/elsewhere/a.pdf", "HR", "/b.htm")

    record = ledger.needs_to_move["R1"]
    assert record.current_path == "/Resources/Groups/Legal/a.pdf"
    assert record.used_on_pages == ["/a.htm", "/b.htm"]


def test_len_counts_distinct_resources() -> None:
    """Verify a resource in both maps is counted once."""
    ledger = ResourceLedger()
    ledger.record_correct("R1", "A", "/p1")
    ledger.record_move("R1", "/x", "B", "/p2")
    ledger.record_move("R2", "/y", "B", "/p2")
    two = 2
    assert len(ledger) == two


def test_merge_appends_in_order() -> None:
    """Verify merging keeps existing order and appends new entries."""
    first = ResourceLedger()
    first.record_move("R1", "/x", "B", "/p1")
    second = ResourceLedger()
    second.record_move("R1", "/x", "C", "/p2")
    second.record_move("R1", "/x", "B", "/p1")
    second.record_correct("R2", "A", "/p3")

    first.merge(second)

    assert first.needs_to_move["R1"].belongs_in_folders == ["B", "C"]
    assert first.needs_to_move["R1"].used_on_pages == ["/p1", "/p2"]
    assert first.used_correctly["R2"].belongs_in_folders == ["A"]


def test_concurrent_writers_do_not_duplicate() -> None:
    """Verify concurrent records of the same pair produce one entry."""
    ledger = ResourceLedger()

    def worker() -> None:
        for i in range(200):
            ledger.record_move("R1", "/x", "HR", f"/p{i % 10}")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    pages = 10
    assert ledger.needs_to_move["R1"].belongs_in_folders == ["HR"]
    assert len(ledger.needs_to_move["R1"].used_on_pages) == pages
