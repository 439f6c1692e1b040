"""Best-effort resolution of package display names and install locations.

Every step reports a Lookup so callers can tell a key that legitimately
does not exist apart from one that could not be read. Enumeration order is
whatever the store returns; results are never sorted.
"""

import logging
from collections.abc import Sequence

from xlocate.keystore import KeyStore
from xlocate.keystore import join_key
from xlocate.models import Lookup
from xlocate.models import RegistryValue
from xlocate.operations.paths import CLASSES_ROOT
from xlocate.operations.paths import LOCAL_MACHINE
from xlocate.operations.paths import STATE_CACHE_PATH
from xlocate.operations.paths import resources_path

logger = logging.getLogger(__name__)

INDIRECT_PREFIX = "@"
MUTABLE_LINK = "MutableLink"
MUTABLE_LOCATION = "MutableLocation"


def _failure(error: OSError, what: str) -> Lookup:
    if isinstance(error, FileNotFoundError):
        logger.debug("%s does not exist", what)
        return Lookup.miss(error)
    logger.error("Unable to read %s: %s", what, error)
    return Lookup.failed(error)


def key_names(
    store: KeyStore,
    hive: str,
    path: str,
    ignore: Sequence[str] | None = None,
) -> Lookup[list[str]]:
    """List child key names, excluding names that start with an ignored prefix.

    Args:
        store: Key store to read
        hive: Root hive name
        path: Key path under hive
        ignore: Lowercase prefixes to exclude (compared case-insensitively)

    Returns:
        Lookup holding the names in store order
    """
    try:
        with store.open(hive, path) as key:
            names = key.subkeys()
    except OSError as e:
        return _failure(e, f"{hive}\\{path}")

    if ignore:
        names = [
            name
            for name in names
            if not any(name.lower().startswith(prefix) for prefix in ignore)
        ]
    return Lookup.hit(names)


def first_key_name(store: KeyStore, hive: str, path: str) -> Lookup[str]:
    """Get the first child key name in store order."""
    names = key_names(store, hive, path)
    if not names.found:
        return names
    if not names.value:
        return Lookup.miss()
    return Lookup.hit(names.value[0])


def value_of(store: KeyStore, hive: str, path: str, name: str) -> Lookup[RegistryValue]:
    """Read a single named value."""
    try:
        with store.open(hive, path) as key:
            return Lookup.hit(key.get(name))
    except OSError as e:
        return _failure(e, f"{hive}\\{path}\\{name}")


def resolve_display_name(
    store: KeyStore, package_id: str, display_name: str
) -> str | None:
    """Resolve a package's DisplayName, following "@{...}" resource references.

    Only the first key under the package's resource cache is consulted. All
    of its hives are scanned and the first hive holding a value named after
    the reference supplies the name.

    Args:
        store: Key store to read
        package_id: Full package key name
        display_name: Raw DisplayName value from the package repository

    Returns:
        The display name, or None if the reference cannot be resolved
    """
    if not display_name.startswith(INDIRECT_PREFIX):
        return display_name

    cache_path = resources_path(package_id)
    first_key = first_key_name(store, CLASSES_ROOT, cache_path)
    if not first_key.found:
        return None

    hives_path = join_key(cache_path, first_key.value)
    hives = key_names(store, CLASSES_ROOT, hives_path)
    if not hives.found or not hives.value:
        return None

    name = None
    for hive in hives.value:
        hive_path = join_key(hives_path, hive)
        try:
            with store.open(CLASSES_ROOT, hive_path) as key:
                if name is None and any(
                    value.name == display_name for value in key.values()
                ):
                    name = str(key.get(display_name).data)
        except OSError as e:
            # One unreadable hive must not hide a match in a later one
            _failure(e, f"{CLASSES_ROOT}\\{hive_path}")
    return name


def resolve_mutable_location(store: KeyStore, package_root_folder: str) -> str | None:
    """Find where a package really lives when its root folder is a link.

    Args:
        store: Key store to read
        package_root_folder: PackageRootFolder value of the package

    Returns:
        MutableLocation of the first state cache record whose MutableLink
        equals package_root_folder, or None if there is none
    """
    records = key_names(store, LOCAL_MACHINE, STATE_CACHE_PATH)
    if not records.found:
        return None

    for record in records.value:
        record_path = join_key(STATE_CACHE_PATH, record)
        try:
            with store.open(LOCAL_MACHINE, record_path) as key:
                strings = {
                    value.name: value.data
                    for value in key.values()
                    if value.type.is_string
                }
        except OSError as e:
            _failure(e, f"{LOCAL_MACHINE}\\{record_path}")
            continue

        if MUTABLE_LINK not in strings or MUTABLE_LOCATION not in strings:
            continue
        if strings[MUTABLE_LINK] == package_root_folder:
            return strings[MUTABLE_LOCATION]

    return None
