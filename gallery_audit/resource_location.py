"""Data models for recording where a resource is used and where it belongs."""

from dataclasses import dataclass, field


@dataclass
class ResourceLocation:
    """Accumulated classification record for one resource."""

    guid: str
    current_path: str = ""
    belongs_in_folders: list[str] = field(default_factory=list)
    used_on_pages: list[str] = field(default_factory=list)

    def add_folder(self, name: str) -> None:
        """Append a group/folder name unless it is already recorded."""
        if name not in self.belongs_in_folders:
            self.belongs_in_folders.append(name)

    def add_page(self, url: str) -> None:
        """Append a page URL unless it is already recorded."""
        if url not in self.used_on_pages:
            self.used_on_pages.append(url)
