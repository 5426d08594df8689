"""Logic for finding links to resources inside placeholder HTML."""

import re

DEFAULT_DOWNLOAD_LINK_PATTERN = (
    r"(?:href|src)\s*=\s*[\"'](?P<url>[^\"']*/NR/rdonlyres/[^\"']+)[\"']"
)


def extract_resource_urls(
    raw_content: str, pattern: str = DEFAULT_DOWNLOAD_LINK_PATTERN
) -> list[str]:
    """Return every resource URL matched in the HTML, in document order.

    The pattern must define a ``url`` named group. Matching ignores case.
    """
    if not raw_content:
        return []
    return [
        m.group("url") for m in re.finditer(pattern, raw_content, flags=re.IGNORECASE)
    ]
