"""Access to the hierarchical key-value store (the Windows registry).

Resolution code only relies on the KeyStore/KeyHandle protocols. Missing
keys and values raise FileNotFoundError; any other failure raises OSError.
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager
from contextlib import contextmanager
from typing import Any
from typing import Protocol

from xlocate.models import RegistryValue
from xlocate.models import ValueType

try:
    import winreg
except ImportError:  # not on Windows
    winreg = None


class KeyHandle(Protocol):
    """An open registry key."""

    def subkeys(self) -> list[str]: ...

    def values(self) -> list[RegistryValue]: ...

    def get(self, name: str) -> RegistryValue: ...


class KeyStore(Protocol):
    """Something registry keys can be opened from."""

    def open(self, hive: str, path: str) -> AbstractContextManager[KeyHandle]: ...


class WinregKeyHandle:
    """KeyHandle over an open winreg key."""

    def __init__(self, hkey: Any):
        self._hkey = hkey

    def subkeys(self) -> list[str]:
        count = winreg.QueryInfoKey(self._hkey)[0]
        return [winreg.EnumKey(self._hkey, i) for i in range(count)]

    def values(self) -> list[RegistryValue]:
        count = winreg.QueryInfoKey(self._hkey)[1]
        result = []
        for i in range(count):
            name, data, type_code = winreg.EnumValue(self._hkey, i)
            result.append(RegistryValue(name, data, ValueType.from_winreg(type_code)))
        return result

    def get(self, name: str) -> RegistryValue:
        data, type_code = winreg.QueryValueEx(self._hkey, name)
        return RegistryValue(name, data, ValueType.from_winreg(type_code))


class WinregKeyStore:
    """KeyStore backed by the winreg module. Windows only."""

    def __init__(self) -> None:
        if winreg is None:
            raise OSError("The Windows registry is only available on Windows")

    @contextmanager
    def open(self, hive: str, path: str) -> Iterator[WinregKeyHandle]:
        try:
            root = getattr(winreg, hive)
        except AttributeError:
            raise FileNotFoundError(f"Unknown registry hive: {hive}") from None
        with winreg.OpenKey(root, path) as hkey:
            yield WinregKeyHandle(hkey)


def join_key(*parts: str) -> str:
    """Join registry key path components with backslashes."""
    return "\\".join(part.strip("\\") for part in parts if part)
