"""Locating and reading appxmanifest.xml files."""

import logging
import stat
import xml.etree.ElementTree as ET
from pathlib import Path

logger = logging.getLogger(__name__)

APP_MANIFEST = "appxmanifest.xml"


def _local_name(tag: str) -> str:
    """Strip the "{namespace}" prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _is_hidden(path: Path) -> bool:
    """Check for a dot-prefixed name or the Windows hidden attribute."""
    if path.name.startswith("."):
        return True
    try:
        attributes = getattr(path.lstat(), "st_file_attributes", 0)
    except OSError:
        return True
    return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)


def find_manifests(root: Path, recurse: bool) -> list[Path]:
    """Find app manifests under root.

    Hidden entries, symlinks and directories that cannot be read are
    skipped; unreadable directories do not abort the walk.

    Args:
        root: Directory to scan
        recurse: If False, only files directly inside root are considered

    Returns:
        Sorted list of absolute manifest paths
    """

    def on_error(error: OSError) -> None:
        logger.debug("Skipping inaccessible path %s: %s", error.filename, error)

    manifests = []
    for dirpath, dirnames, filenames in root.absolute().walk(on_error=on_error):
        # Prune in place so walk() never descends into skipped directories
        dirnames[:] = (
            []
            if not recurse
            else [
                name
                for name in dirnames
                if not _is_hidden(dirpath / name)
                and not (dirpath / name).is_symlink()
            ]
        )
        for filename in filenames:
            if filename != APP_MANIFEST:
                continue
            full_path = dirpath / filename
            if full_path.is_symlink() or _is_hidden(full_path):
                continue
            manifests.append(full_path)

    return sorted(manifests)


def load_manifest(game_dir: Path) -> ET.Element | None:
    """Read and parse the manifest in a game directory.

    Args:
        game_dir: Directory containing APP_MANIFEST

    Returns:
        Root element of the manifest, or None if it cannot be read or parsed
    """
    manifest_path = game_dir / APP_MANIFEST
    try:
        return ET.fromstring(manifest_path.read_bytes())
    except (OSError, ET.ParseError) as e:
        logger.debug("Unable to load manifest %s: %s", manifest_path, e)
        return None


def manifest_identity(manifest: ET.Element) -> str | None:
    """Get the package identity name from a parsed manifest.

    Returns:
        The Name attribute of Package/Identity, or None if absent
    """
    if _local_name(manifest.tag) != "Package":
        return None
    for child in manifest:
        if _local_name(child.tag) == "Identity":
            return child.get("Name") or None
    return None
