"""Custom exceptions for xlocate."""

from collections.abc import Sequence


class XlocateError(Exception):
    """Base exception for xlocate."""


class GameEntryNotFoundError(XlocateError):
    """No installed game matched the requested id(s) or name."""

    def __init__(self, names: str | Sequence[str], store_id: str):
        if not isinstance(names, str):
            names = ", ".join(names)
        self.names = names
        self.store_id = store_id
        super().__init__(f"Game entry not found: {names} (store: {store_id})")


class ArgumentInvalidError(XlocateError, ValueError):
    """Caller supplied an unusable argument."""


class MarkerDecodeError(XlocateError):
    """A .GamingRoot marker file exists but cannot be decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f'{reason}: "{path}"')


class StoreAccessError(XlocateError):
    """The package repository could not be read."""


class ConfigValidationError(XlocateError):
    """Config file is invalid or malformed."""
