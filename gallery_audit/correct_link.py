"""Logic for turning site-relative page links into absolute URLs."""

from urllib.parse import urljoin


def correct_link(url: str, base_url: str = "") -> str:
    """Resolve a page URL against the site's base URL.

    Absolute URLs are returned unchanged, as is everything when no base URL
    is configured.
    """
    if not base_url:
        return url
    return urljoin(base_url, url)
