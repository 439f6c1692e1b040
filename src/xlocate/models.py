"""Data models for xlocate."""

from dataclasses import dataclass
from enum import Enum
from enum import auto
from typing import Generic
from typing import Self
from typing import TypeVar

T = TypeVar("T")

# winreg value type codes
REG_SZ = 1
REG_EXPAND_SZ = 2
REG_BINARY = 3
REG_DWORD = 4
REG_MULTI_SZ = 7
REG_QWORD = 11


@dataclass
class XboxEntry:
    """An installed package resolved from the package repository."""

    app_id: str  # Package identity (before the first underscore)
    publisher_id: str  # Publisher hash (after the last underscore)
    execution_name: str  # Application id inside the package, e.g. "App"
    game_path: str  # Mutable install location, or PackageRootFolder
    name: str  # Resolved display name
    game_store_id: str
    package_id: str  # Full package key name

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "appid": self.app_id,
            "publisherId": self.publisher_id,
            "executionName": self.execution_name,
            "gamePath": self.game_path,
            "name": self.name,
            "gameStoreId": self.game_store_id,
            "packageId": self.package_id,
        }


class ValueType(Enum):
    """Kind of data held by a registry value."""

    STRING = auto()
    EXPAND_STRING = auto()
    MULTI_STRING = auto()
    INTEGER = auto()
    BINARY = auto()
    OTHER = auto()

    @classmethod
    def from_winreg(cls, code: int) -> Self:
        """Map a winreg REG_* type code to a ValueType."""
        return {
            REG_SZ: cls.STRING,
            REG_EXPAND_SZ: cls.EXPAND_STRING,
            REG_MULTI_SZ: cls.MULTI_STRING,
            REG_DWORD: cls.INTEGER,
            REG_QWORD: cls.INTEGER,
            REG_BINARY: cls.BINARY,
        }.get(code, cls.OTHER)

    @property
    def is_string(self) -> bool:
        return self in (ValueType.STRING, ValueType.EXPAND_STRING)


@dataclass(frozen=True)
class RegistryValue:
    """A named value read from a registry key."""

    name: str
    data: object
    type: ValueType = ValueType.STRING


class LookupStatus(Enum):
    """Outcome of a single registry resolution step."""

    FOUND = auto()
    NOT_FOUND = auto()
    ACCESS_ERROR = auto()


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Result of a resolution step that distinguishes absence from failure."""

    status: LookupStatus
    value: T | None = None
    error: OSError | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @classmethod
    def hit(cls, value: T) -> "Lookup[T]":
        return cls(LookupStatus.FOUND, value)

    @classmethod
    def miss(cls, error: OSError | None = None) -> "Lookup[T]":
        return cls(LookupStatus.NOT_FOUND, error=error)

    @classmethod
    def failed(cls, error: OSError) -> "Lookup[T]":
        return cls(LookupStatus.ACCESS_ERROR, error=error)
