"""Logic for locating the gallery a resource is filed under."""

from gallery_audit.gallery_folder import GalleryFolder


def find_gallery(parent: GalleryFolder, root_gallery: GalleryFolder) -> GalleryFolder:
    """Walk up from a resource's parent folder to its gallery.

    The gallery is the first folder whose grandparent is the root resource
    gallery, or the highest folder that still has a parent and grandparent.
    """
    gallery = parent
    while (
        gallery.parent is not None
        and gallery.parent.parent is not None
        and gallery.parent.parent is not root_gallery
    ):
        gallery = gallery.parent
    return gallery
