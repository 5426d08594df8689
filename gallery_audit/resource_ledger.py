"""Logic for accumulating classification records across an audit run."""

import threading

from gallery_audit.resource_location import ResourceLocation


class ResourceLedger:
    """Caller-owned accumulator for correctly placed and misplaced resources.

    ``used_correctly`` maps a resource guid to the groups whose gallery it is
    in. ``needs_to_move`` maps a resource guid to the groups it should be
    moved to. A guid can be present in both maps when the resource is shared
    between groups.
    """

    def __init__(self) -> None:
        """Initialize empty accumulators."""
        self.used_correctly: dict[str, ResourceLocation] = {}
        self.needs_to_move: dict[str, ResourceLocation] = {}
        self._lock = threading.Lock()

    def record_correct(self, guid: str, group_name: str, page_url: str) -> None:
        """Record that a page uses the resource from the group's own gallery."""
        with self._lock:
            location = self.used_correctly.setdefault(guid, ResourceLocation(guid))
            location.add_folder(group_name)
            location.add_page(page_url)

    def record_move(
        self, guid: str, current_path: str, group_name: str, page_url: str
    ) -> None:
        """Record that the resource should move to the group's gallery."""
        with self._lock:
            location = self.needs_to_move.get(guid)
            if location is None:
                location = ResourceLocation(guid, current_path=current_path)
                self.needs_to_move[guid] = location
            location.add_folder(group_name)
            location.add_page(page_url)

    def merge(self, other: "ResourceLedger") -> None:
        """Fold another ledger's records into this one.

        Entries already held here keep their order; the other ledger's
        entries are appended after them in the order it saw them.
        """
        with other._lock:
            used = [_copy(loc) for loc in other.used_correctly.values()]
            moves = [_copy(loc) for loc in other.needs_to_move.values()]

        for loc in used:
            for folder in loc.belongs_in_folders:
                for page in loc.used_on_pages:
                    self.record_correct(loc.guid, folder, page)
        for loc in moves:
            for folder in loc.belongs_in_folders:
                for page in loc.used_on_pages:
                    self.record_move(loc.guid, loc.current_path, folder, page)

    def __len__(self) -> int:
        """Return the number of distinct resources recorded in either map."""
        return len(self.used_correctly.keys() | self.needs_to_move.keys())


def _copy(location: ResourceLocation) -> ResourceLocation:
    return ResourceLocation(
        guid=location.guid,
        current_path=location.current_path,
        belongs_in_folders=list(location.belongs_in_folders),
        used_on_pages=list(location.used_on_pages),
    )
