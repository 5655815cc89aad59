"""
mcp-browser-finder MCP Server

Reports which web browsers are installed on this machine and how to
launch them.
"""

import logging
from typing import Optional

from fastmcp import FastMCP

from .binaries import get_binaries
from .config import load_settings
from .finder import browser_finder

logger = logging.getLogger(__name__)

# Create MCP server
mcp = FastMCP(
    "mcp-browser-finder",
    instructions="Discovers locally installed web browsers and their launch commands.",
)


# =============================================================================
# Discovery Tools
# =============================================================================

@mcp.tool()
async def browsers_list() -> dict:
    """
    List installed browsers.

    Returns a mapping of browser identifier (e.g. "chrome", "firefox") to
    its path, extra command line arguments and launch templates.
    """
    installations = await browser_finder.get_installations()
    return {name: installation.to_dict() for name, installation in installations.items()}


@mcp.tool()
async def browser_info(browser: str) -> Optional[dict]:
    """
    Get launch information for one browser.

    Args:
        browser: Browser identifier (e.g. "chrome") or path to a browser executable
    """
    installation = await browser_finder.get_browser_info(browser)
    return installation.to_dict() if installation else None


@mcp.tool()
async def browser_binaries() -> dict:
    """List the native helper executables available on this platform."""
    return get_binaries() or {}


# =============================================================================
# Server Lifecycle
# =============================================================================

def main():
    """Entry point for the MCP server."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger.info("Starting mcp-browser-finder MCP server...")
    mcp.run()


if __name__ == "__main__":
    main()
