"""User configuration for xlocate."""

import json
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Self

from platformdirs import user_config_path

from xlocate.exceptions import ConfigValidationError

CONFIG_VERSION = 1


def _string_list(data: dict, key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(f"Config '{key}' must be a list of strings")
    return value


@dataclass
class Settings:
    """Settings read from the user's config file."""

    version: int = CONFIG_VERSION
    search_paths: list[str] = field(default_factory=list)  # drive roots to probe
    ignore_prefixes: list[str] = field(default_factory=list)  # extra packages to skip

    @classmethod
    def default_path(cls) -> Path:
        """Get default config location using platformdirs."""
        return user_config_path("xlocate") / "config.json"

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "version": self.version,
            "search_paths": list(self.search_paths),
            "ignore_prefixes": list(self.ignore_prefixes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from dict loaded from JSON."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Config must be a JSON object")
        if "version" not in data:
            raise ConfigValidationError("Config missing 'version' key")

        version = data["version"]
        if not isinstance(version, int):
            raise ConfigValidationError("Config 'version' must be an integer")
        if version > CONFIG_VERSION:
            raise ConfigValidationError(
                f"Config version {version} is newer than supported version {CONFIG_VERSION}"
            )

        return cls(
            version=version,
            search_paths=_string_list(data, "search_paths"),
            ignore_prefixes=_string_list(data, "ignore_prefixes"),
        )

    def add_search_path(self, volume_root: str) -> bool:
        """Add a drive root to probe. Returns False if it is already listed."""
        if volume_root in self.search_paths:
            return False
        self.search_paths.append(volume_root)
        return True

    def add_ignore_prefix(self, prefix: str) -> bool:
        """Add a package prefix to skip. Returns False if it is already listed."""
        prefix = prefix.lower()
        if prefix in (p.lower() for p in self.ignore_prefixes):
            return False
        self.ignore_prefixes.append(prefix)
        return True

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """Read settings, falling back to defaults when there is no file.

        Raises:
            ConfigValidationError: If the file is not valid settings JSON
        """
        path = path or cls.default_path()
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON in {path}: {e}") from None
        return cls.from_dict(data)

    def save(self, path: Path | None = None) -> Path:
        """Write settings next to a temporary copy, then swap it into place.

        Returns:
            The path written
        """
        path = path or self.default_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        staged = path.with_name(f"{path.name}.tmp")
        staged.write_text(
            json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8"
        )
        staged.replace(path)
        return path
