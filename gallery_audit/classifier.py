"""Logic for deciding whether a referenced resource is in the right gallery."""

import logging

from gallery_audit.find_gallery import find_gallery
from gallery_audit.gallery_folder import GalleryFolder
from gallery_audit.match_outcome import MatchOutcome
from gallery_audit.resource_ledger import ResourceLedger
from gallery_audit.resource_reference import ResourceReference

logger = logging.getLogger(__name__)


class Classifier:
    """Compares each resource's gallery with the editor groups of its page.

    A resource is correctly placed when its gallery is named after one of the
    editor groups of the channel that references it. When several groups
    edit the channel, the first matching group wins; when none match, the
    first group listed is suggested as the destination.
    """

    def __init__(self, root_gallery: GalleryFolder, ledger: ResourceLedger) -> None:
        """Initialize the classifier with the root gallery and a ledger to fill."""
        self.root_gallery = root_gallery
        self.ledger = ledger

    def classify(self, ref: ResourceReference) -> MatchOutcome:
        """Classify one reference and record the result in the ledger."""
        # Without a gallery or an owning group there is nothing to compare.
        if ref.parent is None or ref.parent.parent is None or not ref.group_names:
            return MatchOutcome.CORRECT

        gallery = find_gallery(ref.parent, self.root_gallery)
        gallery_key = gallery.name.casefold()

        for group_name in ref.group_names:
            if group_name.casefold() == gallery_key:
                self.ledger.record_correct(ref.guid, group_name, ref.page_url)
                return MatchOutcome.CORRECT

        destination = ref.group_names[0]
        logger.debug(
            "%s is in gallery %s but %s edits %s",
            ref.path,
            gallery.name,
            destination,
            ref.page_url,
        )
        self.ledger.record_move(ref.guid, ref.path, destination, ref.page_url)
        return MatchOutcome.NEEDS_MOVE
