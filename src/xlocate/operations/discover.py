"""Finding installed games by scanning drives for the Xbox games folder."""

import logging
from collections.abc import Sequence
from pathlib import Path

from xlocate.files.drives import list_drives
from xlocate.files.manifests import find_manifests
from xlocate.files.manifests import load_manifest
from xlocate.files.manifests import manifest_identity
from xlocate.files.marker import find_gaming_root_paths

logger = logging.getLogger(__name__)


def find_xbox_gaming_root_paths(search_paths: Sequence[str] | None = None) -> list[str]:
    """Decode the games folder of every drive that has one.

    Args:
        search_paths: Drive roots to probe. If empty or None, all local drives.
    """
    volume_roots = list(search_paths) if search_paths else list_drives()
    return find_gaming_root_paths(volume_roots)


def find_installed_games(search_paths: Sequence[str] | None = None) -> dict[str, str]:
    """Map each installed game's identity name to its install directory.

    Games whose manifest cannot be read are left out. When the same identity
    is found on several drives the last drive wins.

    Args:
        search_paths: Drive roots to probe. If empty or None, all local drives.

    Returns:
        Dict of identity name -> install directory
    """
    game_paths: dict[str, str] = {}
    for gaming_root in find_xbox_gaming_root_paths(search_paths):
        for manifest in find_manifests(Path(gaming_root), recurse=True):
            game_dir = manifest.parent
            data = load_manifest(game_dir)
            if data is None:
                continue
            app_id = manifest_identity(data)
            if not app_id:
                logger.debug("No identity in %s", manifest)
                continue
            game_paths[app_id] = str(game_dir)
    return game_paths
