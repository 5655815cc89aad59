"""
Catalog of known browsers.

Entries are matched in declared order and the first match wins, so more
specific patterns (e.g. Chrome Canary) must come before general ones.

Launch templates are Mustache templates with {{{path}}}, {{{pageUrl}}}
and {{{cmd}}} placeholders.
"""

import re
from dataclasses import dataclass
from typing import Optional

MAC_OPEN_NEW_INSTANCE = 'open -n -a "{{{path}}}" --args {{{pageUrl}}} {{{cmd}}}'
MAC_OPEN = 'open -a "{{{path}}}" {{{pageUrl}}} --args {{{cmd}}}'


@dataclass(frozen=True)
class CatalogEntry:
    """Name pattern and launch metadata for one browser."""

    identifier: str
    name_re: re.Pattern
    extra_args: str = ""
    mac_launch_template: str = ""
    windows_launch_template: Optional[str] = None
    fixed_path: Optional[str] = None

    def matches(self, name: str) -> bool:
        return self.name_re.search(name) is not None


ALIASES: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        identifier="ie",
        name_re=re.compile(r"internet explorer|iexplore", re.I),
        extra_args="-nomerge",
    ),
    CatalogEntry(
        identifier="edge",
        name_re=re.compile(r"microsoft\s?edge|msedge", re.I),
        windows_launch_template="start microsoft-edge:{{{pageUrl}}}",
    ),
    CatalogEntry(
        identifier="firefox",
        name_re=re.compile(r"firefox", re.I),
        extra_args="-new-window",
        mac_launch_template=MAC_OPEN,
    ),
    CatalogEntry(
        identifier="chrome-canary",
        name_re=re.compile(r"chrome\s*canary", re.I),
        extra_args="--new-window",
        mac_launch_template=MAC_OPEN_NEW_INSTANCE,
    ),
    CatalogEntry(
        identifier="chromium",
        name_re=re.compile(r"chromium", re.I),
        extra_args="--new-window",
        mac_launch_template=MAC_OPEN_NEW_INSTANCE,
    ),
    CatalogEntry(
        identifier="chrome",
        name_re=re.compile(r"chrome", re.I),
        extra_args="--new-window",
        mac_launch_template=MAC_OPEN_NEW_INSTANCE,
    ),
    CatalogEntry(
        identifier="opera",
        name_re=re.compile(r"opera", re.I),
        extra_args="--new-window",
        mac_launch_template=MAC_OPEN_NEW_INSTANCE,
    ),
    CatalogEntry(
        identifier="safari",
        name_re=re.compile(r"safari", re.I),
        mac_launch_template='open -a "{{{path}}}" {{{pageUrl}}}',
    ),
)


def match_by_name(name: str, aliases: tuple[CatalogEntry, ...] = ALIASES) -> Optional[CatalogEntry]:
    """Return the first catalog entry whose pattern matches the name."""
    for entry in aliases:
        if entry.matches(name):
            return entry
    return None


def get_alias(identifier: str, aliases: tuple[CatalogEntry, ...] = ALIASES) -> Optional[CatalogEntry]:
    """Look up a catalog entry by its identifier."""
    return next((entry for entry in aliases if entry.identifier == identifier), None)
