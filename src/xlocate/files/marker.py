"""Reading the .GamingRoot marker the Xbox app writes at a drive root.

The file is the byte sequence ``52 47 42 58 01 00 00 00`` followed by the
null-terminated UTF-16LE location of the Xbox games folder on the same
drive, relative to the drive root.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from xlocate.exceptions import MarkerDecodeError

logger = logging.getLogger(__name__)

GAMING_ROOT_FILENAME = ".GamingRoot"
GAMING_ROOT_SIGNATURE = b"RGBX\x01\x00\x00\x00"
CHAR16_PATH_OFFSET = 4


def decode_gaming_root(data: bytes, marker_path: str) -> str:
    """Decode the relative install path stored in a marker file.

    The header units are not checked against GAMING_ROOT_SIGNATURE and the
    final unit is dropped as the terminator without checking its value.

    Args:
        data: Raw marker file content
        marker_path: Path the data was read from (for error reporting)

    Returns:
        Relative path of the games folder

    Raises:
        MarkerDecodeError: If the length is odd, too few units are present
            or the path holds a null unit before the terminator
    """
    if len(data) % 2 != 0:
        raise MarkerDecodeError(
            marker_path, "Found a non-even number of bytes in the file"
        )

    units = [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]

    if len(units) < CHAR16_PATH_OFFSET + 1:
        raise MarkerDecodeError(
            marker_path,
            f"The file is shorter than expected ({len(units)} char16_t long)",
        )

    if data[: len(GAMING_ROOT_SIGNATURE)] != GAMING_ROOT_SIGNATURE:
        logger.debug("Unrecognised .GamingRoot header in %s", marker_path)

    relative_path = "".join(chr(unit) for unit in units[CHAR16_PATH_OFFSET:-1])
    if "\x00" in relative_path:
        raise MarkerDecodeError(marker_path, "Found an embedded null in the path")
    return relative_path


def read_gaming_root(volume_root: str) -> str | None:
    """Find the Xbox games folder named by a drive's marker file.

    Args:
        volume_root: Drive root including its trailing separator, e.g. "D:\\"

    Returns:
        volume_root joined with the decoded relative path, or None when the
        drive has no readable marker (missing file, drive not ready, ...)

    Raises:
        MarkerDecodeError: If the marker exists but is corrupt
    """
    marker_path = f"{volume_root}{GAMING_ROOT_FILENAME}"
    try:
        marker = Path(marker_path)
        if not marker.is_file():
            logger.debug("No marker file at %s", marker_path)
            return None
        data = marker.read_bytes()
    except OSError as e:
        logger.debug("Unable to read %s: %s", marker_path, e)
        return None

    logger.debug(
        "Read the following bytes from %s: %s",
        marker_path,
        " ".join(f"0x{byte:02x}" for byte in data),
    )
    relative_path = decode_gaming_root(data, marker_path)
    logger.debug("Read relative path %r from %s", relative_path, marker_path)
    return f"{volume_root}{relative_path}"


def find_gaming_root_paths(volume_roots: Iterable[str]) -> list[str]:
    """Decode the marker on every volume, skipping volumes without one.

    A corrupt marker on one volume is logged and does not stop the scan.

    Args:
        volume_roots: Drive roots to probe, in order

    Returns:
        Gaming root paths in the order their volumes were given
    """
    gaming_roots = []
    for volume_root in volume_roots:
        try:
            gaming_root = read_gaming_root(volume_root)
        except MarkerDecodeError as e:
            logger.error("Not a valid xbox gaming path: %s", e)
            continue
        if gaming_root is not None:
            gaming_roots.append(gaming_root)
    return gaming_roots
