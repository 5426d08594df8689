"""Logic for loading a YAML export of the CMS repository.

The snapshot describes the resource gallery tree, the resources filed in it,
and the channel tree with each channel's role groups and postings::

    root_gallery: Resources
    galleries:
      - name: Groups
        children:
          - name: Finance
    resources:
      - guid: 0B7F1C9E-...
        name: budget.pdf
        gallery: Groups/Finance
    channels:
      - guid: channel-1
        name: finance
        groups:
          Editor: [Finance]
        postings:
          - name: budget
            state: Published
            url_published: /finance/budget.htm
            url_unpublished: /NR/exeres/...
            placeholders:
              - {name: Body, kind: html, content: '<a href="...">'}
        channels: []
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from gallery_audit.gallery_folder import GalleryFolder
from gallery_audit.is_expired import to_local_naive
from gallery_audit.placeholder_visit import (
    Channel,
    Placeholder,
    PlaceholderVisit,
    Posting,
)
from gallery_audit.resource import Resource

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

EDITOR_ROLE = "Editor"
RESOURCE_URL_RE = re.compile(
    r"/NR/rdonlyres/\{?(?P<guid>[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-"
    r"[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12})\}?/",
    re.IGNORECASE,
)


class SnapshotFormatError(ValueError):
    """Raised when a repository snapshot is structurally invalid."""


class RepositorySnapshot:
    """An in-memory CMS repository that drives the audit.

    Implements the traverser, permission lookup and resource resolver
    interfaces over data loaded from a YAML file.
    """

    def __init__(
        self,
        root_gallery: GalleryFolder,
        resources: dict[str, Resource],
        channels: list[dict[str, Any]],
    ) -> None:
        """Initialize the snapshot from already-parsed parts."""
        self._root_gallery = root_gallery
        self.resources = resources  # upper-cased guid -> resource
        self.channels = channels
        self._groups: dict[str, dict[str, list[str]]] = {}
        _index_groups(channels, self._groups)

    @property
    def root_gallery(self) -> GalleryFolder:
        """The top of the resource gallery tree."""
        return self._root_gallery

    @classmethod
    def load(cls, path: Path) -> RepositorySnapshot:
        """Load a snapshot from a YAML file."""
        doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(doc, dict):
            msg = f"{path}: expected a mapping at the top level"
            raise SnapshotFormatError(msg)
        return cls.from_dict(doc)

    @classmethod
    def from_dict(cls, doc: dict[str, Any]) -> RepositorySnapshot:
        """Build a snapshot from the parsed YAML document."""
        root = GalleryFolder(str(doc.get("root_gallery") or "Resources"))
        folders: dict[str, GalleryFolder] = {}
        for node in doc.get("galleries") or []:
            _add_gallery(node, root, "", folders)

        resources: dict[str, Resource] = {}
        for raw in doc.get("resources") or []:
            resource = _parse_resource(raw, root, folders)
            resources[resource.guid.upper()] = resource

        channels = list(doc.get("channels") or [])
        return cls(root, resources, channels)

    def iter_visits(self) -> Iterator[PlaceholderVisit]:
        """Yield a visit for every placeholder on every page, depth first."""
        for raw in self.channels:
            yield from self._walk_channel(raw, "")

    def _walk_channel(
        self, raw: dict[str, Any], parent_path: str
    ) -> Iterator[PlaceholderVisit]:
        if not isinstance(raw, dict) or not raw.get("guid"):
            msg = f"Channel under '{parent_path or '/'}' has no guid"
            raise SnapshotFormatError(msg)

        name = str(raw.get("name") or raw["guid"])
        channel = Channel(
            guid=str(raw["guid"]), name=name, path=f"{parent_path}/{name}"
        )

        for raw_posting in raw.get("postings") or []:
            posting = _parse_posting(raw_posting, channel)
            for raw_placeholder in raw_posting.get("placeholders") or []:
                yield PlaceholderVisit(
                    posting=posting,
                    channel=channel,
                    placeholder=_parse_placeholder(raw_placeholder),
                    context={"channel_path": channel.path},
                )

        for child in raw.get("channels") or []:
            yield from self._walk_channel(child, channel.path)

    def read_groups_for_channel(self, channel: Channel) -> dict[str, list[str]]:
        """Return the channel's CMS groups keyed by role."""
        return self._groups.get(channel.guid, {})

    def editor_groups(self, channel: Channel) -> list[str]:
        """Return distinct editor group names in configured order."""
        groups: list[str] = []
        for name in self.read_groups_for_channel(channel).get(EDITOR_ROLE, []):
            if name not in groups:
                groups.append(name)
        return groups

    def resolve(self, url: str, context: dict[str, str]) -> Resource | None:
        """Return the resource behind a resource URL, or None."""
        m = RESOURCE_URL_RE.search(url or "")
        if not m:
            return None
        resource = self.resources.get(m.group("guid").upper())
        if resource is None:
            logger.debug(
                "No resource %s for link on %s", url, context.get("channel_path")
            )
        return resource


def _parse_groups(raw: dict[str, Any]) -> dict[str, list[str]]:
    groups = raw.get("groups") or {}
    if not isinstance(groups, dict):
        msg = f"Channel {raw.get('guid')} groups must map roles to group names"
        raise SnapshotFormatError(msg)
    return {
        str(role): [str(g) for g in (names or [])] for role, names in groups.items()
    }


def _index_groups(
    channels: list[dict[str, Any]], index: dict[str, dict[str, list[str]]]
) -> None:
    for raw in channels:
        if isinstance(raw, dict) and raw.get("guid"):
            index.setdefault(str(raw["guid"]), _parse_groups(raw))
            _index_groups(list(raw.get("channels") or []), index)


def _add_gallery(
    node: Any, parent: GalleryFolder, parent_key: str, folders: dict[str, GalleryFolder]
) -> None:
    if not isinstance(node, dict) or not node.get("name"):
        msg = f"Gallery under '{parent_key or parent.name}' has no name"
        raise SnapshotFormatError(msg)
    folder = GalleryFolder(str(node["name"]), parent)
    key = f"{parent_key}/{folder.name}".lstrip("/")
    folders[key.casefold()] = folder
    for child in node.get("children") or []:
        _add_gallery(child, folder, key, folders)


def _parse_resource(
    raw: Any, root: GalleryFolder, folders: dict[str, GalleryFolder]
) -> Resource:
    if not isinstance(raw, dict) or not raw.get("guid"):
        msg = f"Resource entry without a guid: {raw!r}"
        raise SnapshotFormatError(msg)

    gallery_key = str(raw.get("gallery") or "").strip("/")
    if not gallery_key:
        parent: GalleryFolder | None = root
    else:
        parent = folders.get(gallery_key.casefold())
        if parent is None:
            msg = f"Resource {raw['guid']} is in unknown gallery '{gallery_key}'"
            raise SnapshotFormatError(msg)

    name = str(raw.get("name") or raw["guid"])
    return Resource(guid=str(raw["guid"]), path=f"{parent.path}/{name}", parent=parent)


def _parse_posting(raw: Any, channel: Channel) -> Posting:
    if not isinstance(raw, dict) or not raw.get("name"):
        msg = f"Posting in channel '{channel.path}' has no name"
        raise SnapshotFormatError(msg)

    expiry = raw.get("expiry")
    if isinstance(expiry, str):
        try:
            expiry = datetime.fromisoformat(re.sub(r"[zZ]$", "+00:00", expiry))
        except ValueError as exc:
            msg = f"Posting '{raw['name']}' has an invalid expiry: {expiry!r}"
            raise SnapshotFormatError(msg) from exc
    elif isinstance(expiry, date) and not isinstance(expiry, datetime):
        expiry = datetime.combine(expiry, time.min)
    if expiry is not None and not isinstance(expiry, datetime):
        msg = f"Posting '{raw['name']}' has an invalid expiry: {expiry!r}"
        raise SnapshotFormatError(msg)
    if expiry is not None:
        expiry = to_local_naive(expiry)

    url_published = str(raw.get("url_published") or "")
    return Posting(
        guid=str(raw.get("guid") or raw["name"]),
        name=str(raw["name"]),
        state=str(raw.get("state") or "Published"),
        url_published=url_published,
        url_unpublished=str(raw.get("url_unpublished") or url_published),
        expiry_date=expiry,
    )


def _parse_placeholder(raw: Any) -> Placeholder:
    if not isinstance(raw, dict):
        msg = f"Invalid placeholder entry: {raw!r}"
        raise SnapshotFormatError(msg)
    return Placeholder(
        name=str(raw.get("name") or ""),
        kind=str(raw.get("kind") or "html").lower(),
        src=str(raw.get("src") or ""),
        content=str(raw.get("content") or ""),
    )
