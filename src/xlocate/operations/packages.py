"""Enumerating installed packages from the package repository.

The repository lists regular Microsoft Store apps alongside Xbox games and
offers no flag telling the two apart, so platform packages are filtered out
with the IGNORABLE prefix list.
"""

import logging
from collections.abc import Sequence

from xlocate.exceptions import StoreAccessError
from xlocate.keystore import KeyStore
from xlocate.models import XboxEntry
from xlocate.operations.paths import CLASSES_ROOT
from xlocate.operations.paths import REPOSITORY_PATH
from xlocate.operations.paths import execution_path
from xlocate.operations.paths import package_path
from xlocate.operations.resolve import first_key_name
from xlocate.operations.resolve import key_names
from xlocate.operations.resolve import resolve_display_name
from xlocate.operations.resolve import resolve_mutable_location
from xlocate.operations.resolve import value_of

logger = logging.getLogger(__name__)

STORE_ID = "xbox"
DEFAULT_EXECUTION_NAME = "App"

# Package name prefixes which are safe to ignore (lowercase)
IGNORABLE = (
    "microsoft.accounts",
    "microsoft.aad",
    "microsoft.advertising",
    "microsoft.bing",
    "microsoft.desktop",
    "microsoft.directx",
    "microsoft.gamingapp",
    "microsoft.gamingservices",
    "microsoft.gethelp",
    "microsoft.getstarted",
    "microsoft.hefi",
    "microsoft.lockapp",
    "microsoft.microsoft",
    "microsoft.net",
    "microsoft.office",
    "microsoft.oneconnect",
    "microsoft.services",
    "microsoft.ui",
    "microsoft.vclibs",
    "microsoft.windows",
    "microsoft.xbox",
    "microsoft.zune",
    "nvidiacorp",
    "realtek",
    "samsung",
    "synapticsincorporated",
    "windows",
)


def parse_package_key(package_id: str) -> tuple[str, str] | None:
    """Split a package key into its identity and publisher id.

    Args:
        package_id: Key name like "<Identity>_<Version>_<Arch>_<PublisherId>"

    Returns:
        (app_id, publisher_id), or None if the key has no underscore
    """
    if "_" not in package_id:
        return None
    app_id = package_id[: package_id.index("_")]
    publisher_id = package_id[package_id.rindex("_") + 1 :]
    if not app_id or not publisher_id:
        return None
    return app_id, publisher_id


def execution_name(store: KeyStore, package_id: str) -> str:
    """Get the application id used to launch a package, "App" by default."""
    first_key = first_key_name(store, CLASSES_ROOT, execution_path(package_id))
    if not first_key.found:
        return DEFAULT_EXECUTION_NAME
    return first_key.value.split("!")[-1] or DEFAULT_EXECUTION_NAME


def resolve_package(store: KeyStore, package_id: str) -> XboxEntry | None:
    """Build an entry for one package key.

    Read failures are absorbed by the lookup helpers, so nothing here raises.

    Returns:
        The resolved entry, or None if a required field cannot be resolved
    """
    identity = parse_package_key(package_id)
    if identity is None:
        logger.info("Skipping %s: not a package key", package_id)
        return None
    app_id, publisher_id = identity

    display_name = value_of(
        store, CLASSES_ROOT, package_path(package_id), "DisplayName"
    )
    if not display_name.found:
        logger.info("Skipping %s: no display name", package_id)
        return None

    name = resolve_display_name(store, package_id, str(display_name.value.data))
    if name is None:
        logger.info(
            "Skipping %s: unable to resolve display name %s",
            package_id,
            display_name.value.data,
        )
        return None

    root_folder = value_of(
        store, CLASSES_ROOT, package_path(package_id), "PackageRootFolder"
    )
    if not root_folder.found:
        logger.info("Skipping %s: no package root folder", package_id)
        return None
    package_root = str(root_folder.value.data)
    game_path = resolve_mutable_location(store, package_root) or package_root

    return XboxEntry(
        app_id=app_id,
        publisher_id=publisher_id,
        execution_name=execution_name(store, package_id),
        game_path=game_path,
        name=name,
        game_store_id=STORE_ID,
        package_id=package_id,
    )


def enumerate_packages(
    store: KeyStore, extra_ignore: Sequence[str] = ()
) -> list[XboxEntry]:
    """Resolve every non-platform package in the package repository.

    Args:
        store: Key store to read
        extra_ignore: Additional package prefixes to skip

    Returns:
        Resolved entries in store enumeration order

    Raises:
        StoreAccessError: If the package repository cannot be read
    """
    ignore = IGNORABLE + tuple(prefix.lower() for prefix in extra_ignore)
    package_ids = key_names(store, CLASSES_ROOT, REPOSITORY_PATH, ignore=ignore)
    if not package_ids.found:
        raise StoreAccessError(
            f"Unable to read package repository: {package_ids.error}"
        )

    entries = []
    for package_id in package_ids.value:
        entry = resolve_package(store, package_id)
        if entry is not None:
            entries.append(entry)
    logger.debug("Resolved %d of %d packages", len(entries), len(package_ids.value))
    return entries
