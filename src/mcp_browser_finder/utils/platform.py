"""
Operating system detection.

Discovery supports exactly three platform families: 'windows', 'mac'
and 'linux'. Anything else is reported as 'unknown'.
"""

import sys
from typing import Optional

WINDOWS = "windows"
MAC = "mac"
LINUX = "linux"
UNKNOWN = "unknown"


def get_platform(platform: Optional[str] = None) -> str:
    """
    Return the platform family for a sys.platform value.

    Args:
        platform: Value to classify (defaults to sys.platform)
    """
    plat = platform if platform is not None else sys.platform

    if plat.startswith("darwin"):
        return MAC
    elif plat.startswith("win"):
        return WINDOWS
    elif plat.startswith("linux"):
        return LINUX
    return UNKNOWN
