"""
Browser Finder - discover browsers installed on this machine.

Handles:
- Picking the enumerator for the running OS
- Caching the discovery result for the process lifetime
- Resolving an alias or executable path to launch metadata
"""

import logging
import os
from typing import Optional

from .aliases import ALIASES, MAC_OPEN, CatalogEntry
from .cache import InstallationsCache, installations_cache
from .enumerators import CommandRunner, UnsupportedEnumerator, select_enumerator
from .installations import ExistsCheck, Installation
from .utils.exec import exec_command
from .utils.fs import StatError, path_exists
from .utils.platform import get_platform

logger = logging.getLogger(__name__)


class BrowserFinder:
    """
    Discovers installed browsers for one platform.

    The command runner, existence check, platform and cache can be
    injected, so discovery can run against canned OS output.
    """

    def __init__(
        self,
        run: CommandRunner = exec_command,
        exists: ExistsCheck = path_exists,
        platform: Optional[str] = None,
        cache: Optional[InstallationsCache] = None,
        aliases: tuple[CatalogEntry, ...] = ALIASES,
    ):
        self.platform = platform or get_platform()
        self.exists = exists
        self.cache = cache if cache is not None else InstallationsCache()
        self.enumerator = select_enumerator(self.platform, run=run, exists=exists, aliases=aliases)

    @property
    def supported(self) -> bool:
        return not isinstance(self.enumerator, UnsupportedEnumerator)

    async def _discover(self) -> dict[str, Installation]:
        logger.info(f"Discovering installed browsers ({self.platform})")
        installations = await self.enumerator.enumerate()
        logger.info(f"Found browsers: {', '.join(sorted(installations)) or 'none'}")
        return installations

    async def get_installations(self) -> dict[str, Installation]:
        """
        Return installed browsers keyed by identifier.

        The first successful result is cached; later calls return the same
        mapping without querying the OS again. Unsupported platforms yield
        an empty mapping that is not cached.

        Raises:
            ExecutionError: If a required OS query fails
        """
        if not self.supported:
            logger.debug(f"Unsupported platform {self.platform}, no browsers discovered")
            return {}

        return await self.cache.get_or_load(self._discover)

    async def get_browser_info(self, browser: str) -> Optional[Installation]:
        """
        Resolve a browser alias or executable path to launch metadata.

        Args:
            browser: Catalog identifier (e.g. "firefox") or path to a browser

        Returns:
            The installation, or None if the browser is neither installed
            nor an existing path
        """
        installations = await self.get_installations()
        if browser in installations:
            return installations[browser]

        try:
            found = await self.exists(browser)
        except StatError as e:
            logger.debug(f"Cannot resolve {browser}: {e}")
            return None

        if found:
            name = os.path.splitext(os.path.basename(browser.rstrip("/\\")))[0]
            return Installation(
                identifier=name,
                path=browser,
                extra_args="",
                mac_launch_template=MAC_OPEN,
            )

        return None


# Singleton instance sharing the process-wide cache
browser_finder = BrowserFinder(cache=installations_cache)


async def get_installations() -> dict[str, Installation]:
    """Return installed browsers keyed by identifier (cached)."""
    return await browser_finder.get_installations()


async def get_browser_info(browser: str) -> Optional[Installation]:
    """Resolve a browser alias or executable path to launch metadata."""
    return await browser_finder.get_browser_info(browser)
