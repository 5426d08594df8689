"""Orchestration logic for auditing resource placement across the site."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from gallery_audit.build_report import build_report
from gallery_audit.classifier import Classifier
from gallery_audit.correct_link import correct_link
from gallery_audit.extract_resource_urls import (
    DEFAULT_DOWNLOAD_LINK_PATTERN,
    extract_resource_urls,
)
from gallery_audit.is_expired import is_expired
from gallery_audit.match_outcome import MatchOutcome
from gallery_audit.posting_url import posting_url
from gallery_audit.resource_ledger import ResourceLedger
from gallery_audit.resource_reference import ResourceReference

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gallery_audit.interfaces import (
        ContentTraverser,
        PermissionLookup,
        ResourceResolver,
    )
    from gallery_audit.placeholder_visit import PlaceholderVisit
    from gallery_audit.report_entry import AuditReport
    from gallery_audit.resource import Resource

logger = logging.getLogger(__name__)


@dataclass
class AuditStats:
    """Counters describing what a run looked at."""

    visits: int = 0
    ignored_channel: int = 0
    expired: int = 0
    no_editors: int = 0
    references: int = 0
    unresolved: int = 0
    correct: int = 0
    needs_move: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return the counters as a plain dict."""
        return asdict(self)


class PlaceholderAuditor:
    """Feeds each placeholder's resource references to the classifier."""

    def __init__(
        self,
        lookup: PermissionLookup,
        resolver: ResourceResolver,
        classifier: Classifier,
        config: dict[str, Any],
        now: datetime | None = None,
    ) -> None:
        """Initialize the auditor with its collaborators and config."""
        self.lookup = lookup
        self.resolver = resolver
        self.classifier = classifier
        self.ignore_channels = {
            str(guid).casefold() for guid in config.get("ignore_channels") or []
        }
        self.link_pattern = (
            config.get("download_link_pattern") or DEFAULT_DOWNLOAD_LINK_PATTERN
        )
        self.now = now or datetime.now()
        self.stats = AuditStats()

    def audit(self, visits: Iterable[PlaceholderVisit]) -> AuditStats:
        """Audit every visit in order."""
        for visit in visits:
            self.visit(visit)
        return self.stats

    def visit(self, visit: PlaceholderVisit) -> None:
        """Audit the resources referenced by a single placeholder."""
        self.stats.visits += 1

        if visit.channel.guid.casefold() in self.ignore_channels:
            self.stats.ignored_channel += 1
            return

        if is_expired(visit.posting, self.now):
            self.stats.expired += 1
            return

        logger.info("%s: %s", visit.posting.url_published, visit.placeholder.name)

        if visit.placeholder.is_image:
            resource = self.resolver.resolve(visit.placeholder.src, visit.context)
            groups = self._editor_groups(visit)
            if groups:
                self._check(visit, resource, groups)
            return

        urls = extract_resource_urls(visit.placeholder.content, self.link_pattern)
        if not urls:
            return

        groups = self._editor_groups(visit)
        if not groups:
            return

        for url in urls:
            self._check(visit, self.resolver.resolve(url, visit.context), groups)

    def _editor_groups(self, visit: PlaceholderVisit) -> list[str]:
        groups = self.lookup.editor_groups(visit.channel)
        if not groups:
            self.stats.no_editors += 1
        return groups

    def _check(
        self, visit: PlaceholderVisit, resource: Resource | None, groups: list[str]
    ) -> None:
        self.stats.references += 1
        if resource is None:
            self.stats.unresolved += 1
            return

        ref = ResourceReference(
            guid=resource.guid,
            path=resource.path,
            parent=resource.parent,
            page_url=posting_url(visit.posting),
            group_names=tuple(groups),
        )
        if self.classifier.classify(ref) is MatchOutcome.CORRECT:
            self.stats.correct += 1
        else:
            self.stats.needs_move += 1


def run_audit(
    traverser: ContentTraverser,
    lookup: PermissionLookup,
    resolver: ResourceResolver,
    config: dict[str, Any],
    *,
    include_conflicts: bool = False,
    now: datetime | None = None,
) -> tuple[AuditReport, AuditStats]:
    """Walk the whole site and build the report of resources to move.

    Any failure aborts the run: it is logged and re-raised, and no partial
    report is returned.
    """
    ledger = ResourceLedger()
    classifier = Classifier(traverser.root_gallery, ledger)
    auditor = PlaceholderAuditor(lookup, resolver, classifier, config, now=now)

    try:
        stats = auditor.audit(traverser.iter_visits())
    except Exception:
        logger.exception("Audit failed after %s placeholders", auditor.stats.visits)
        raise

    base_url = config.get("base_url") or ""
    report = build_report(
        ledger,
        include_conflicts=include_conflicts,
        link_corrector=lambda url: correct_link(url, base_url),
    )
    logger.info(
        "%s resources need to move, %s reported",
        len(ledger.needs_to_move),
        len(report.entries),
    )
    return report, stats
