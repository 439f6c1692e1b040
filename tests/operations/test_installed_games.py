"""Tests for finding installed games by scanning drives."""

from pathlib import Path
from unittest.mock import patch

from xlocate.files.manifests import APP_MANIFEST
from xlocate.files.marker import GAMING_ROOT_FILENAME
from xlocate.files.marker import GAMING_ROOT_SIGNATURE
from xlocate.operations import find_installed_games
from xlocate.operations import find_xbox_gaming_root_paths

MANIFEST_XML = (
    '<Package xmlns="http://schemas.microsoft.com/appx/manifest/foundation/windows10">'
    '<Identity Name="{name}" Publisher="CN=Publisher" Version="1.0.0.0"/>'
    "</Package>"
)


def make_volume(path, folder="XboxGames"):
    """Create a fake drive whose marker points at folder."""
    path.mkdir(parents=True)
    (path / GAMING_ROOT_FILENAME).write_bytes(
        GAMING_ROOT_SIGNATURE + folder.encode("utf-16-le") + b"\x00\x00"
    )
    (path / folder).mkdir()
    return f"{path}/"


def install_game(volume_root, name, folder="XboxGames", title=None):
    """Create an installed game with a manifest under the games folder."""
    game_dir = f"{volume_root}{folder}/{title or name}/Content"

    Path(game_dir).mkdir(parents=True)
    (Path(game_dir) / APP_MANIFEST).write_text(MANIFEST_XML.format(name=name))
    return game_dir


class TestFindInstalledGames:
    """Tests for find_installed_games()."""

    def test_maps_identity_to_install_directory(self, tmp_path):
        """Test that each manifest's directory is indexed by its identity."""
        volume = make_volume(tmp_path / "D")
        astroneer = install_game(volume, "SystemEraSoftworks.29415440E1269")
        grounded = install_game(volume, "Microsoft.Maine")

        games = find_installed_games([volume])

        assert games == {
            "SystemEraSoftworks.29415440E1269": astroneer,
            "Microsoft.Maine": grounded,
        }

    def test_volume_without_marker_contributes_nothing(self, tmp_path):
        """Test that drives without a marker are skipped."""
        plain = tmp_path / "C"
        plain.mkdir()
        volume = make_volume(tmp_path / "D")
        game_dir = install_game(volume, "Game.One")

        assert find_installed_games([f"{plain}/", volume]) == {"Game.One": game_dir}

    def test_malformed_manifest_is_skipped(self, tmp_path):
        """Test that a broken manifest only excludes its own game."""
        volume = make_volume(tmp_path / "D")
        good = install_game(volume, "Game.Good")
        broken = install_game(volume, "Game.Broken")

        (Path(broken) / APP_MANIFEST).write_text("<Package")

        assert find_installed_games([volume]) == {"Game.Good": good}

    def test_manifest_without_identity_is_skipped(self, tmp_path):
        """Test that a manifest without an identity name is ignored."""
        volume = make_volume(tmp_path / "D")
        install_game(volume, "")

        assert find_installed_games([volume]) == {}

    def test_later_volume_wins_for_same_identity(self, tmp_path):
        """Test that duplicate identities resolve to the last volume scanned."""
        first = make_volume(tmp_path / "D")
        second = make_volume(tmp_path / "E")
        install_game(first, "Game.Same")
        later = install_game(second, "Game.Same")

        assert find_installed_games([first, second]) == {"Game.Same": later}

    def test_corrupt_marker_does_not_stop_scan(self, tmp_path):
        """Test that a volume with a corrupt marker is isolated."""
        corrupt = tmp_path / "C"
        corrupt.mkdir()
        (corrupt / GAMING_ROOT_FILENAME).write_bytes(b"\x01\x02\x03")
        volume = make_volume(tmp_path / "D")
        game_dir = install_game(volume, "Game.One")

        assert find_installed_games([f"{corrupt}/", volume]) == {"Game.One": game_dir}

    def test_marker_with_embedded_null_does_not_stop_scan(self, tmp_path):
        """Test that a marker naming an impossible path only skips its volume."""
        bad = make_volume(tmp_path / "C")
        (tmp_path / "C" / GAMING_ROOT_FILENAME).write_bytes(
            GAMING_ROOT_SIGNATURE + "Xbox\x00Games".encode("utf-16-le") + b"\x00\x00"
        )
        good = make_volume(tmp_path / "D")
        game_dir = install_game(good, "Good.Game")

        assert find_installed_games([bad, good]) == {"Good.Game": game_dir}

    def test_defaults_to_all_drives(self, tmp_path):
        """Test that local drives are listed when no search paths are given."""
        volume = make_volume(tmp_path / "D")
        game_dir = install_game(volume, "Game.One")

        with patch(
            "xlocate.operations.discover.list_drives", return_value=[volume]
        ) as mock_drives:
            games = find_installed_games([])

        mock_drives.assert_called_once()
        assert games == {"Game.One": game_dir}


class TestFindXboxGamingRootPaths:
    """Tests for find_xbox_gaming_root_paths()."""

    def test_uses_search_paths_when_given(self, tmp_path):
        """Test that explicit search paths bypass drive listing."""
        volume = make_volume(tmp_path / "D", folder="Games")

        with patch("xlocate.operations.discover.list_drives") as mock_drives:
            roots = find_xbox_gaming_root_paths([volume])

        mock_drives.assert_not_called()
        assert roots == [f"{volume}Games"]
