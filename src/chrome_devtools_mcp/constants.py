"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

# ============================================================================
# Protocol Configuration
# ============================================================================

PROTOCOL_TIMEOUT_SECS = 10
"""No single DevTools protocol command is expected to take longer than this."""


# ============================================================================
# Target Filtering
# ============================================================================

NEW_TAB_URL = "chrome://newtab/"
"""The browser's own new-tab page, always visible to tools."""

INTERNAL_TARGET_PREFIXES = frozenset({
    "chrome://",
    "chrome-extension://",
    "chrome-untrusted://",
})
"""URL prefixes of internal browser surfaces hidden from tools."""

DEVTOOLS_TARGET_PREFIX = "devtools://"
"""Hidden as well, unless devtools integration is enabled."""


# ============================================================================
# Chrome Startup Configuration
# ============================================================================

PROFILE_ROOT_NAME = "chrome-devtools-mcp"
"""Directory under the user cache root holding derived profiles."""

PROFILE_DIR_NAME = "chrome-profile"
"""Base name of the derived profile directory; non-stable channels get a suffix."""

DEFAULT_STARTUP_ARGS = (
    "--remote-debugging-pipe",
    "--no-first-run",
    "--hide-crash-restore-bubble",
)
"""Pipe transport plus flags suppressing first-run and crash-restore UI."""

ALREADY_RUNNING_MARKERS = (
    "The browser is already running",
    "user data directory is already in use",
)
"""Substrings of launch failures caused by another Chrome holding the profile."""


__all__ = [
    "PROTOCOL_TIMEOUT_SECS",
    "NEW_TAB_URL",
    "INTERNAL_TARGET_PREFIXES",
    "DEVTOOLS_TARGET_PREFIX",
    "PROFILE_ROOT_NAME",
    "PROFILE_DIR_NAME",
    "DEFAULT_STARTUP_ARGS",
    "ALREADY_RUNNING_MARKERS",
]
