"""Tests for locating a resource's gallery."""

from gallery_audit.find_gallery import find_gallery
from gallery_audit.gallery_folder import GalleryFolder


def build_tree() -> dict[str, GalleryFolder]:
    """Create Resources/Groups/HR/Policies/2024."""
    root = GalleryFolder("Resources")
    groups = GalleryFolder("Groups", root)
    hr = GalleryFolder("HR", groups)
    policies = GalleryFolder("Policies", hr)
    year = GalleryFolder("2024", policies)
    return {
        "root": root,
        "groups": groups,
        "hr": hr,
        "policies": policies,
        "year": year,
    }


def test_gallery_is_folder_whose_grandparent_is_root() -> None:
    """Verify the walk stops one level below the top-level container."""
    tree = build_tree()
    assert find_gallery(tree["year"], tree["root"]) is tree["hr"]
    assert find_gallery(tree["policies"], tree["root"]) is tree["hr"]
    assert find_gallery(tree["hr"], tree["root"]) is tree["hr"]


def test_gallery_stops_at_top_of_tree() -> None:
    """Verify a folder directly under the root is its own gallery."""
    tree = build_tree()
    assert find_gallery(tree["groups"], tree["root"]) is tree["groups"]


def test_gallery_walk_uses_identity_of_root() -> None:
    """Verify a folder that only shares the root's name is not the root."""
    tree = build_tree()
    impostor = GalleryFolder("Resources")
    assert find_gallery(tree["year"], impostor) is tree["groups"]


def test_folder_path_and_ancestry() -> None:
    """Verify folder paths are built from the root down."""
    tree = build_tree()
    assert tree["policies"].path == "/Resources/Groups/HR/Policies"
    assert [f.name for f in tree["hr"].ancestry()] == ["HR", "Groups", "Resources"]
