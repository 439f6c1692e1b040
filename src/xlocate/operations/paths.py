"""Registry locations used to resolve installed packages."""

from xlocate.keystore import join_key

CLASSES_ROOT = "HKEY_CLASSES_ROOT"
LOCAL_MACHINE = "HKEY_LOCAL_MACHINE"

# Generally contains all game specific information.
# Please note: package display names might not be resolved here.
REPOSITORY_PATH = (
    r"Local Settings\Software\Microsoft\Windows\CurrentVersion"
    r"\AppModel\Repository\Packages"
)

# Per-package subkeys are application ids, e.g. "<PackageFamily>!App"
EXECUTION_REPOSITORY_PATH = (
    r"Local Settings\Software\Microsoft\Windows\CurrentVersion"
    r"\AppModel\PackageRepository\Packages"
)

# The Xbox app always keeps an entry for a package inside
# C:\Program Files\WindowsApps, even when it is installed to another drive.
RESOURCES_PATH = (
    r"Local Settings\MrtCache"
    r"\C:%5CProgram Files%5CWindowsApps%5C{{PACKAGE_ID}}%5Cresources.pri"
)

# Children map a package's symlinked root folder to its real location.
STATE_CACHE_PATH = (
    r"SOFTWARE\Microsoft\Windows\CurrentVersion"
    r"\AppModel\StateRepository\Cache\Package\Data"
)


def resources_path(package_id: str) -> str:
    """Resource cache key for a package."""
    return RESOURCES_PATH.replace("{{PACKAGE_ID}}", package_id)


def package_path(package_id: str) -> str:
    """Package repository key for a package."""
    return join_key(REPOSITORY_PATH, package_id)


def execution_path(package_id: str) -> str:
    """Application id key for a package."""
    return join_key(EXECUTION_REPOSITORY_PATH, package_id)
