"""Shared fixtures for xlocate tests."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import field

import pytest

from xlocate.models import RegistryValue
from xlocate.models import ValueType
from xlocate.operations.paths import CLASSES_ROOT
from xlocate.operations.paths import REPOSITORY_PATH
from xlocate.operations.paths import execution_path
from xlocate.operations.paths import package_path


@dataclass
class Node:
    """A key in the in-memory registry."""

    subkeys: dict[str, "Node"] = field(default_factory=dict)
    values: dict[str, RegistryValue] = field(default_factory=dict)
    denied: bool = False


class MemoryKeyHandle:
    """KeyHandle over a Node."""

    def __init__(self, node: Node, where: str):
        self._node = node
        self._where = where

    def subkeys(self) -> list[str]:
        return list(self._node.subkeys)

    def values(self) -> list[RegistryValue]:
        return list(self._node.values.values())

    def get(self, name: str) -> RegistryValue:
        if name not in self._node.values:
            raise FileNotFoundError(f"No value {name} in {self._where}")
        return self._node.values[name]


class MemoryKeyStore:
    """In-memory KeyStore. Child keys enumerate in insertion order."""

    def __init__(self) -> None:
        self.hives: dict[str, Node] = {}
        self.open_calls = 0

    def _walk(self, node: Node, path: str, where: str) -> Node:
        for part in filter(None, path.split("\\")):
            if part not in node.subkeys:
                raise FileNotFoundError(f"No key {path} under {where}")
            node = node.subkeys[part]
            if node.denied:
                raise PermissionError(f"Access denied: {path}")
        return node

    def add_key(self, hive: str, path: str) -> Node:
        node = self.hives.setdefault(hive, Node())
        for part in filter(None, path.split("\\")):
            node = node.subkeys.setdefault(part, Node())
        return node

    def set_value(
        self,
        hive: str,
        path: str,
        name: str,
        data: object,
        type: ValueType = ValueType.STRING,
    ) -> None:
        self.add_key(hive, path).values[name] = RegistryValue(name, data, type)

    def deny(self, hive: str, path: str) -> None:
        self.add_key(hive, path).denied = True

    @contextmanager
    def open(self, hive: str, path: str) -> Iterator[MemoryKeyHandle]:
        self.open_calls += 1
        if hive not in self.hives:
            raise FileNotFoundError(f"No hive {hive}")
        node = self._walk(self.hives[hive], path, hive)
        yield MemoryKeyHandle(node, f"{hive}\\{path}")

    def add_package(
        self,
        package_id: str,
        display_name: str | None = None,
        root_folder: str | None = None,
        app_key: str | None = None,
    ) -> None:
        """Register a package the way the package repository lays it out."""
        self.add_key(CLASSES_ROOT, package_path(package_id))
        if display_name is not None:
            self.set_value(
                CLASSES_ROOT, package_path(package_id), "DisplayName", display_name
            )
        if root_folder is not None:
            self.set_value(
                CLASSES_ROOT,
                package_path(package_id),
                "PackageRootFolder",
                root_folder,
            )
        if app_key is not None:
            self.add_key(CLASSES_ROOT, f"{execution_path(package_id)}\\{app_key}")


XBOX_APP_PACKAGE = "Microsoft.XboxApp_48.104.4001.0_x64__8wekyb3d8bbwe"


@pytest.fixture
def key_store() -> MemoryKeyStore:
    """An empty in-memory registry with the package repository present."""
    store = MemoryKeyStore()
    store.add_key(CLASSES_ROOT, REPOSITORY_PATH)
    return store


@pytest.fixture
def xbox_key_store(key_store: MemoryKeyStore) -> MemoryKeyStore:
    """In-memory registry with the Xbox app installed."""
    key_store.add_package(XBOX_APP_PACKAGE, "Xbox", r"C:\Program Files\WindowsApps\Xbox")
    return key_store
