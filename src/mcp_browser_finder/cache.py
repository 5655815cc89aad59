"""
Process-lifetime cache for discovery results.

Browser installations are assumed not to change while the process runs,
so the first successful discovery is kept forever. Concurrent first
callers share a single discovery run.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Callable, Optional

from .installations import Installation

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[dict[str, Installation]]]


class InstallationsCache:
    """Holds at most one discovery result."""

    def __init__(self):
        self._installations: Optional[dict[str, Installation]] = None
        self._lock = asyncio.Lock()

    @property
    def populated(self) -> bool:
        return self._installations is not None

    def peek(self) -> Optional[dict[str, Installation]]:
        """Return the cached result without triggering discovery."""
        return self._installations

    async def get_or_load(self, loader: Loader) -> dict[str, Installation]:
        """
        Return the cached result, running the loader on first use.

        If the loader raises, nothing is cached and the next call retries.
        """
        if self._installations is not None:
            return self._installations

        async with self._lock:
            if self._installations is None:
                installations = await loader()
                self._installations = installations
                logger.debug(f"Cached {len(installations)} installation(s)")
            return self._installations


# Singleton instance for the module-level API
installations_cache = InstallationsCache()
