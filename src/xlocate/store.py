"""The Xbox game store session."""

import logging
import re
import subprocess
import sys
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any

from xlocate.config import Settings
from xlocate.exceptions import ArgumentInvalidError
from xlocate.exceptions import GameEntryNotFoundError
from xlocate.exceptions import StoreAccessError
from xlocate.keystore import KeyStore
from xlocate.keystore import WinregKeyStore
from xlocate.models import XboxEntry
from xlocate.operations.discover import find_installed_games
from xlocate.operations.packages import STORE_ID
from xlocate.operations.packages import enumerate_packages
from xlocate.operations.paths import CLASSES_ROOT
from xlocate.operations.paths import REPOSITORY_PATH
from xlocate.operations.resolve import key_names

logger = logging.getLogger(__name__)

XBOX_APP_NAMES = ("microsoft.xboxapp", "microsoft.gamingapp")


def run_launcher(command: list[str]) -> None:
    """Run a launch command and wait for it to exit.

    explorer.exe hands shell:appsFolder targets to the running shell and
    returns at once. Its exit status says nothing about the game starting.
    """
    subprocess.run(
        command,
        check=False,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )


class XboxStore:
    """Installed games known to the Xbox app, cached for the session.

    Availability is probed once on construction. An unavailable store never
    touches the registry again and reports no games.
    """

    id = STORE_ID

    def __init__(
        self,
        key_store: KeyStore | None = None,
        settings: Settings | None = None,
        platform: str = sys.platform,
        opener: Callable[[list[str]], Any] | None = None,
    ):
        self.settings = settings if settings is not None else Settings()
        self._key_store = key_store
        self._opener = opener
        self._cache: list[XboxEntry] | None = None
        self._installed = self._probe(platform)

    def _probe(self, platform: str) -> bool:
        if platform != "win32":
            logger.info("xbox launcher not found: only available on Windows systems")
            return False

        if self._key_store is None:
            try:
                self._key_store = WinregKeyStore()
            except OSError as e:
                logger.info("xbox launcher not found: %s", e)
                return False

        packages = key_names(self._key_store, CLASSES_ROOT, REPOSITORY_PATH)
        if not packages.found:
            logger.info("xbox launcher not found: %s", packages.error)
            return False

        installed = any(
            name.lower().startswith(XBOX_APP_NAMES) for name in packages.value
        )
        if not installed:
            logger.info("xbox launcher not found: app package is not installed")
        return installed

    def is_store_installed(self) -> bool:
        return self._installed

    def all_games(self) -> list[XboxEntry]:
        """Get every resolved package, querying the registry on first use."""
        if not self._installed:
            return []
        if self._cache is None:
            try:
                self._cache = enumerate_packages(
                    self._key_store, extra_ignore=self.settings.ignore_prefixes
                )
            except StoreAccessError as e:
                logger.error("%s", e)
                self._cache = []
        return self._cache

    def reload_games(self) -> None:
        """Forget cached entries so the next query reads the registry again."""
        self._cache = None

    def find_by_app_id(self, app_id: str | Sequence[str]) -> XboxEntry:
        """Find the first game with the specified appid or one of the specified appids.

        Raises:
            GameEntryNotFoundError: If no entry matches
        """
        app_ids = [app_id] if isinstance(app_id, str) else list(app_id)
        for entry in self.all_games():
            if entry.app_id in app_ids:
                return entry
        raise GameEntryNotFoundError(app_ids, STORE_ID)

    def find_by_name(self, pattern: str) -> XboxEntry:
        """Find the first game whose display name matches a regular expression.

        Raises:
            ArgumentInvalidError: If pattern is not a valid regular expression
            GameEntryNotFoundError: If no entry matches
        """
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise ArgumentInvalidError(
                f"Invalid name pattern {pattern!r}: {e}"
            ) from None

        for entry in self.all_games():
            if regex.search(entry.name):
                return entry
        raise GameEntryNotFoundError(pattern, STORE_ID)

    def find_installed_games(self) -> dict[str, str]:
        """Scan the configured drives for installed games."""
        return find_installed_games(self.settings.search_paths)

    @staticmethod
    def launch_command(entry: XboxEntry) -> list[str]:
        """Build the explorer command that starts a package's application.

        e.g. explorer.exe shell:appsFolder\\SystemEraSoftworks.29415440E1269_ftk5pbg2rayv2!ASTRONEER
        """
        app_user_model_id = (
            f"{entry.app_id}_{entry.publisher_id}!{entry.execution_name}"
        )
        return ["explorer.exe", f"shell:appsFolder\\{app_user_model_id}"]

    def launch_game(self, app_info: str | Sequence[str] | None) -> None:
        """Launch a game through the Xbox app.

        Raises:
            ArgumentInvalidError: If app_info is empty
            GameEntryNotFoundError: If no entry matches app_info
        """
        if not app_info:
            raise ArgumentInvalidError("app_info is undefined/null")

        entry = self.find_by_app_id(app_info)
        command = self.launch_command(entry)
        logger.debug("launching game through xbox store: %s", " ".join(command))
        try:
            (self._opener or run_launcher)(command)
        except OSError as e:
            logger.error("Failed to launch %s: %s", entry.app_id, e)
