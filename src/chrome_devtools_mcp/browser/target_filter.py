"""Which browser targets are visible to tools."""

from typing import Callable, FrozenSet

from ..constants import NEW_TAB_URL, INTERNAL_TARGET_PREFIXES, DEVTOOLS_TARGET_PREFIX


TargetFilter = Callable[[str], bool]

_PREFIXES_WITH_DEVTOOLS: FrozenSet[str] = frozenset(INTERNAL_TARGET_PREFIXES)
_PREFIXES_WITHOUT_DEVTOOLS: FrozenSet[str] = frozenset(INTERNAL_TARGET_PREFIXES | {DEVTOOLS_TARGET_PREFIX})


def ignored_prefixes(devtools: bool) -> FrozenSet[str]:
    """devtools:// pages surface as ordinary targets only when devtools integration is on."""
    return _PREFIXES_WITH_DEVTOOLS if devtools else _PREFIXES_WITHOUT_DEVTOOLS


def should_expose(url: str, devtools: bool) -> bool:
    """
    Return True if a target with this URL should be visible to automation.

    The new-tab page is always exposed; other internal browser surfaces
    (chrome://, extensions, untrusted pages, and devtools:// unless enabled)
    are hidden.
    """
    url = url or ""
    if url == NEW_TAB_URL:
        return True
    for prefix in ignored_prefixes(devtools):
        if url.startswith(prefix):
            return False
    return True


def make_target_filter(devtools: bool) -> TargetFilter:
    """Bind ``should_expose`` to a devtools flag for use by the driver."""
    def target_filter(url: str) -> bool:
        return should_expose(url, devtools)
    return target_filter


__all__ = [
    "TargetFilter",
    "ignored_prefixes",
    "should_expose",
    "make_target_filter",
]
