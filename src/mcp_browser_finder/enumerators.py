"""
Platform enumerators.

Each enumerator queries its OS for installed browsers:
- Windows: the StartMenuInternet registry key, plus an Edge registration check
- macOS: application bundles in /Applications
- Linux: alternatives registered for x-www-browser

Parsing is kept in plain functions that take raw command output, so it
can be tested without running any OS command.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from .aliases import ALIASES, CatalogEntry, get_alias
from .installations import Candidate, ExistsCheck, Installation, add_candidates
from .utils.exec import ExecutionError, exec_command
from .utils.fs import path_exists
from .utils.platform import LINUX, MAC, WINDOWS

logger = logging.getLogger(__name__)

CommandRunner = Callable[[str], Awaitable[str]]

UTF8_CODE_PAGE = "65001"

START_MENU_INTERNET_KEY = "HKEY_LOCAL_MACHINE\\SOFTWARE\\Clients\\StartMenuInternet\\"
EDGE_ACTIVATABLE_CLASSES_KEY = "HKCU\\Software\\Classes\\ActivatableClasses"

REGISTRY_QUERY_COMMAND = f"reg query {START_MENU_INTERNET_KEY} /s"
EDGE_QUERY_COMMAND = (
    f"reg query {EDGE_ACTIVATABLE_CLASSES_KEY} /s /f MicrosoftEdge /k "
    "&& echo SUCCESS || echo FAIL"
)

APPLICATIONS_DIR = "/Applications/"
# spaces in bundle names are encoded while they pass through the pipeline
SPACE_SENTINEL = "032"
MAC_LIST_COMMAND = (
    f'ls "{APPLICATIONS_DIR}" '
    '| grep -E "Chrome|Firefox|Opera|Safari|Chromium" '
    f'| sed -E "s/ /{SPACE_SENTINEL}/g"'
)

LINUX_ALTERNATIVES_COMMAND = "update-alternatives --list x-www-browser"

_BROWSER_KEY_RE = re.compile(
    re.escape(START_MENU_INTERNET_KEY)
    + r"([^\\]+)\\shell\\open\\command"
    + r"\s+\([^)]+\)\s+reg_sz\s+([^\n]+)\n",
    re.I,
)
_EXE_SUFFIX_RE = re.compile(r"\.exe$", re.I)
_CODE_PAGE_RE = re.compile(r"\d{1,5}")

# chcp changes the console code page for every process sharing the console
_code_page_lock = asyncio.Lock()


# =============================================================================
# Parsers
# =============================================================================

def parse_registry_output(stdout: str) -> list[Candidate]:
    """
    Extract browser candidates from `reg query ...StartMenuInternet /s` output.

    The registry key name (minus ".exe") becomes the raw name; the default
    value of its shell\\open\\command subkey becomes the raw path.
    """
    text = stdout.replace("\r\n", "\n")
    if not text.endswith("\n"):
        text += "\n"

    candidates = []
    for match in _BROWSER_KEY_RE.finditer(text):
        name = _EXE_SUFFIX_RE.sub("", match.group(1))
        path = match.group(2).replace('"', "").rstrip().rstrip("\\").rstrip()
        candidates.append(Candidate(raw_name=name, raw_path=path))
    return candidates


def parse_code_page(stdout: str) -> str:
    """Read the active code page number from `chcp` output."""
    match = _CODE_PAGE_RE.search(stdout)
    if not match:
        raise ValueError(f"Unexpected chcp output: {stdout!r}")
    return match.group(0)


def parse_edge_query(stdout: str) -> bool:
    """Check the result marker printed by the Edge registry query."""
    return "SUCCESS" in stdout


def parse_mac_listing(stdout: str) -> list[Candidate]:
    """Turn the filtered /Applications listing into candidates."""
    candidates = []
    for line in stdout.split("\n"):
        line = line.strip()
        if not line:
            continue

        file_name = line.replace(SPACE_SENTINEL, " ")
        name = file_name[:-len(".app")] if file_name.endswith(".app") else file_name
        candidates.append(Candidate(raw_name=name, raw_path=f"{APPLICATIONS_DIR}{file_name}"))
    return candidates


def parse_alternatives_output(stdout: str) -> list[Candidate]:
    """Turn `update-alternatives --list` output into candidates."""
    candidates = []
    for line in stdout.split("\n"):
        path = line.strip()
        if not path:
            continue
        candidates.append(Candidate(raw_name=path.rsplit("/", 1)[-1], raw_path=path))
    return candidates


# =============================================================================
# Code page scope
# =============================================================================

@asynccontextmanager
async def utf8_code_page(run: CommandRunner = exec_command) -> AsyncIterator[str]:
    """
    Switch the console to UTF-8 for the duration of the block.

    Registry output is only reliable regardless of the Windows locale when
    read in code page 65001. The original code page is restored on exit,
    including when the block raises.

    Yields:
        The original code page
    """
    async with _code_page_lock:
        original = parse_code_page(await run("chcp"))
        try:
            await run(f"chcp {UTF8_CODE_PAGE}")
            yield original
        finally:
            logger.debug(f"Restoring code page {original}")
            try:
                await run(f"chcp {original}")
            except ExecutionError as e:
                logger.warning(f"Failed to restore code page {original}: {e}")
                raise


# =============================================================================
# Enumerators
# =============================================================================

class Enumerator(ABC):
    """
    Abstract base class for platform strategies.

    Subclasses implement enumerate() and use _match() to turn candidates
    into installations.
    """

    platform: Optional[str] = None

    def __init__(
        self,
        run: CommandRunner = exec_command,
        exists: ExistsCheck = path_exists,
        aliases: tuple[CatalogEntry, ...] = ALIASES,
    ):
        self.run = run
        self.exists = exists
        self.aliases = aliases

    @abstractmethod
    async def enumerate(self) -> dict[str, Installation]:
        """Query the OS and return installations keyed by identifier."""

    async def _match(self, candidates: list[Candidate]) -> dict[str, Installation]:
        installations: dict[str, Installation] = {}
        return await add_candidates(
            installations, candidates, exists=self.exists, aliases=self.aliases
        )


class WindowsEnumerator(Enumerator):
    platform = WINDOWS

    async def enumerate(self) -> dict[str, Installation]:
        async with utf8_code_page(self.run):
            stdout = await self.run(REGISTRY_QUERY_COMMAND)
            installations = await self._match(parse_registry_output(stdout))

            # Edge is registered as an app package, not a file path
            if await self.detect_edge():
                edge = get_alias("edge", self.aliases)
                if edge is not None:
                    installations["edge"] = Installation.from_entry(edge)

        return installations

    async def detect_edge(self) -> bool:
        return parse_edge_query(await self.run(EDGE_QUERY_COMMAND))


class MacEnumerator(Enumerator):
    platform = MAC

    async def enumerate(self) -> dict[str, Installation]:
        stdout = await self.run(MAC_LIST_COMMAND)
        return await self._match(parse_mac_listing(stdout))


class LinuxEnumerator(Enumerator):
    platform = LINUX

    async def enumerate(self) -> dict[str, Installation]:
        stdout = await self.run(LINUX_ALTERNATIVES_COMMAND)
        return await self._match(parse_alternatives_output(stdout))


class UnsupportedEnumerator(Enumerator):
    """Fallback for platforms without a known browser registry."""

    async def enumerate(self) -> dict[str, Installation]:
        return {}


ENUMERATORS: dict[str, type[Enumerator]] = {
    WINDOWS: WindowsEnumerator,
    MAC: MacEnumerator,
    LINUX: LinuxEnumerator,
}


def select_enumerator(
    platform: str,
    run: CommandRunner = exec_command,
    exists: ExistsCheck = path_exists,
    aliases: tuple[CatalogEntry, ...] = ALIASES,
) -> Enumerator:
    """Create the enumerator for a platform family."""
    enumerator_cls = ENUMERATORS.get(platform, UnsupportedEnumerator)
    return enumerator_cls(run=run, exists=exists, aliases=aliases)
