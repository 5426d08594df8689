"""Logic for choosing which URL identifies a page in the report."""

from gallery_audit.placeholder_visit import PUBLISHED, Posting


def posting_url(posting: Posting) -> str:
    """Return the published URL for published pages, else the unpublished one."""
    if posting.state.casefold() == PUBLISHED.casefold():
        return posting.url_published
    return posting.url_unpublished
