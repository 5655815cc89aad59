"""
Native helper executables used to find, close, resize and screenshot
browser windows.

The helpers are external collaborators invoked as opaque executables.
Paths are resolved against the package's bin/ directory, which this
distribution does not ship, so they may not exist until the helpers are
installed there. Linux has none.
"""

from pathlib import Path
from typing import Optional

from .utils.platform import LINUX, MAC, WINDOWS, get_platform

BIN_DIR = Path(__file__).resolve().parent / "bin"

_HELPERS = {
    WINDOWS: {
        "findWindow": "win/find-window.exe",
        "close": "win/close.exe",
        "screenshot": "win/screenshot.exe",
        "resize": "win/resize.exe",
    },
    MAC: {
        "open": "mac/open.scpt",
        "findWindow": "mac/find-window.scpt",
        "close": "mac/close.scpt",
        "screenshot": "mac/screenshot",
        "resize": "mac/resize.scpt",
    },
    LINUX: {},
}


def get_binaries(platform: Optional[str] = None) -> Optional[dict[str, str]]:
    """
    Return absolute helper paths for a platform family.

    Returns None for platforms without helper support.
    """
    helpers = _HELPERS.get(platform or get_platform())
    if helpers is None:
        return None
    return {key: str(BIN_DIR / relative) for key, relative in helpers.items()}
