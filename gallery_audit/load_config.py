"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from gallery_audit.deep_merge import deep_merge
from gallery_audit.extract_resource_urls import DEFAULT_DOWNLOAD_LINK_PATTERN

DEFAULT_CONFIG: dict[str, Any] = {
    "ignore_channels": [],
    "base_url": "",
    "report_conflicts": False,
    "download_link_pattern": DEFAULT_DOWNLOAD_LINK_PATTERN,
    "email": {
        "from": "",
        "to": "",
        "subject": "CMS resources to move",
        "smtp_host": "localhost",
        "smtp_port": 25,
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
