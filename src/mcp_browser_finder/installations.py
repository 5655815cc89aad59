"""
Installation records and candidate matching.

A Candidate is a raw (name, path) pair parsed from OS output. It becomes
an Installation once its path is confirmed on disk and its name matches
a catalog entry.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .aliases import ALIASES, CatalogEntry, match_by_name
from .utils.fs import StatError, path_exists

logger = logging.getLogger(__name__)

ExistsCheck = Callable[[str], Awaitable[bool]]


@dataclass(frozen=True)
class Candidate:
    """Unverified (name, path) pair parsed from OS output."""

    raw_name: str
    raw_path: str


@dataclass(frozen=True)
class Installation:
    """
    A discovered browser.

    Attributes:
        identifier: Catalog identifier, e.g. "chrome"
        path: Executable or app bundle path (None for registry-only installs)
        extra_args: Additional command line parameters
        mac_launch_template: Mustache template for launching on macOS
        windows_launch_template: Mustache template for launching on Windows;
            when None the path is launched directly
    """

    identifier: str
    path: Optional[str]
    extra_args: str
    mac_launch_template: str
    windows_launch_template: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: CatalogEntry, path: Optional[str] = None) -> "Installation":
        """Build an installation, preferring the entry's fixed path."""
        return cls(
            identifier=entry.identifier,
            path=entry.fixed_path or path,
            extra_args=entry.extra_args,
            mac_launch_template=entry.mac_launch_template,
            windows_launch_template=entry.windows_launch_template,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the browser info shape, omitting absent fields."""
        info: dict[str, Any] = {}
        if self.path:
            info["path"] = self.path
        info["cmd"] = self.extra_args
        info["macOpenCmdTemplate"] = self.mac_launch_template
        if self.windows_launch_template:
            info["winOpenCmdTemplate"] = self.windows_launch_template
        return info


async def add_installation(
    installations: dict[str, Installation],
    name: str,
    path: str,
    *,
    exists: ExistsCheck = path_exists,
    lock: Optional[asyncio.Lock] = None,
    aliases: tuple[CatalogEntry, ...] = ALIASES,
) -> Optional[Installation]:
    """
    Record a candidate if its path exists and its name is a known browser.

    Missing paths, unreadable paths and unknown names are skipped silently.

    Args:
        installations: Result mapping to update
        name: Raw browser name (extension already stripped)
        path: Path reported by the OS
        exists: Existence check coroutine
        lock: Guards writes when several candidates are matched concurrently
        aliases: Catalog to match against

    Returns:
        The recorded installation, or None if the candidate was skipped
    """
    try:
        found = await exists(path)
    except StatError as e:
        logger.debug(f"Skipping {name}: {e}")
        return None

    if not found:
        logger.debug(f"Skipping {name}: {path} does not exist")
        return None

    entry = match_by_name(name, aliases)
    if entry is None:
        logger.debug(f"Skipping {name}: not a known browser")
        return None

    installation = Installation.from_entry(entry, path)

    if lock is None:
        installations[entry.identifier] = installation
    else:
        async with lock:
            installations[entry.identifier] = installation

    logger.debug(f"Found {entry.identifier} at {installation.path}")
    return installation


async def add_candidates(
    installations: dict[str, Installation],
    candidates: list[Candidate],
    *,
    exists: ExistsCheck = path_exists,
    aliases: tuple[CatalogEntry, ...] = ALIASES,
) -> dict[str, Installation]:
    """Match candidates concurrently into the installations mapping."""
    lock = asyncio.Lock()
    await asyncio.gather(*(
        add_installation(
            installations,
            candidate.raw_name,
            candidate.raw_path,
            exists=exists,
            lock=lock,
            aliases=aliases,
        )
        for candidate in candidates
    ))
    return installations
