"""High-level discovery operations for xlocate."""

from xlocate.operations.discover import find_installed_games
from xlocate.operations.discover import find_xbox_gaming_root_paths
from xlocate.operations.packages import enumerate_packages
from xlocate.operations.packages import resolve_package
from xlocate.operations.resolve import resolve_display_name
from xlocate.operations.resolve import resolve_mutable_location

__all__ = [
    "enumerate_packages",
    "find_installed_games",
    "find_xbox_gaming_root_paths",
    "resolve_display_name",
    "resolve_mutable_location",
    "resolve_package",
]
