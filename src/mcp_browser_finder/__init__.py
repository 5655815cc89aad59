"""
mcp-browser-finder: discover locally installed web browsers.

Finds browsers through the Windows registry, macOS /Applications or the
Linux alternatives system and describes how to launch them.
"""

from .server import mcp, main
from .finder import browser_finder, BrowserFinder, get_installations, get_browser_info
from .installations import Installation
from .binaries import get_binaries

__version__ = "0.1.0"
__all__ = [
    "mcp",
    "main",
    "browser_finder",
    "BrowserFinder",
    "get_installations",
    "get_browser_info",
    "Installation",
    "get_binaries",
]
