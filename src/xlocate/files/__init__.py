"""Filesystem discovery for xlocate."""

from xlocate.files.drives import list_drives
from xlocate.files.manifests import APP_MANIFEST
from xlocate.files.manifests import find_manifests
from xlocate.files.manifests import load_manifest
from xlocate.files.manifests import manifest_identity
from xlocate.files.marker import decode_gaming_root
from xlocate.files.marker import find_gaming_root_paths
from xlocate.files.marker import read_gaming_root

__all__ = [
    "APP_MANIFEST",
    "decode_gaming_root",
    "find_gaming_root_paths",
    "find_manifests",
    "list_drives",
    "load_manifest",
    "manifest_identity",
    "read_gaming_root",
]
