"""Local drive enumeration."""

import string
import sys
from pathlib import Path


def list_drives() -> list[str]:
    """List local drive roots, each with a trailing separator.

    Returns:
        Existing "A:\\" .. "Z:\\" roots on Windows, ["/"] elsewhere
    """
    if sys.platform != "win32":
        return ["/"]
    return [
        f"{letter}:\\"
        for letter in string.ascii_uppercase
        if Path(f"{letter}:\\").exists()
    ]
