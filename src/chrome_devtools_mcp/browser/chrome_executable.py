"""Chrome executable resolution per release channel."""

import os
import shutil
import platform
from typing import Optional

from ..config.options import Channel

import logging
logger = logging.getLogger(__name__)


STABLE_DRIVER_CHANNEL = "chrome"


def driver_channel(channel: Optional[Channel], executable_path: Optional[str]) -> Optional[str]:
    """
    Map a release channel to the driver's channel identifier.

    An explicit executable wins and no channel is used. Otherwise non-stable
    channels map to ``chrome-<channel>`` and everything else to ``chrome``.
    """
    if executable_path:
        return None
    channel = Channel.parse(channel)
    if channel and channel is not Channel.STABLE:
        return f"chrome-{channel.value}"
    return STABLE_DRIVER_CHANNEL


def _channel_candidates(identifier: str) -> list[str]:
    """Well-known install locations for a driver channel on this platform."""
    system = platform.system()

    if system == "Windows":
        local = os.environ.get("LOCALAPPDATA", "")
        program_files = os.environ.get("PROGRAMFILES", r"C:\Program Files")
        folders = {
            "chrome": [os.path.join(program_files, "Google", "Chrome", "Application", "chrome.exe")],
            "chrome-beta": [os.path.join(program_files, "Google", "Chrome Beta", "Application", "chrome.exe")],
            "chrome-dev": [os.path.join(program_files, "Google", "Chrome Dev", "Application", "chrome.exe")],
            "chrome-canary": [os.path.join(local, "Google", "Chrome SxS", "Application", "chrome.exe")] if local else [],
        }
    elif system == "Darwin":
        folders = {
            "chrome": ["/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"],
            "chrome-beta": ["/Applications/Google Chrome Beta.app/Contents/MacOS/Google Chrome Beta"],
            "chrome-dev": ["/Applications/Google Chrome Dev.app/Contents/MacOS/Google Chrome Dev"],
            "chrome-canary": ["/Applications/Google Chrome Canary.app/Contents/MacOS/Google Chrome Canary"],
        }
    else:
        folders = {
            "chrome": ["/opt/google/chrome/chrome", "google-chrome", "google-chrome-stable"],
            "chrome-beta": ["/opt/google/chrome-beta/chrome", "google-chrome-beta"],
            "chrome-dev": ["/opt/google/chrome-unstable/chrome", "google-chrome-unstable"],
            "chrome-canary": ["/opt/google/chrome-canary/chrome", "google-chrome-canary"],
        }
    return folders.get(identifier, [])


def resolve_channel_executable(identifier: Optional[str]) -> Optional[str]:
    """
    Find the installed binary for a driver channel.

    Returns None when nothing is installed at the usual locations; the
    driver then lets Selenium Manager locate (or download) the channel.
    """
    if not identifier:
        return None
    for candidate in _channel_candidates(identifier):
        if os.path.isfile(candidate):
            return candidate
        found = shutil.which(candidate)
        if found:
            return found
    logger.debug(f"No installed binary found for channel {identifier}")
    return None


def browser_version_for(identifier: Optional[str]) -> Optional[str]:
    """Selenium Manager's browser_version label for a driver channel."""
    if not identifier:
        return None
    if identifier == STABLE_DRIVER_CHANNEL:
        return Channel.STABLE.value
    return identifier.split("-", 1)[1]


__all__ = [
    "STABLE_DRIVER_CHANNEL",
    "driver_channel",
    "resolve_channel_executable",
    "browser_version_for",
]
