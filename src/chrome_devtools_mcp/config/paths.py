"""Path utilities for browser profiles and driver logs."""

import os
import tempfile
from pathlib import Path
from typing import Optional

from ..constants import PROFILE_ROOT_NAME, PROFILE_DIR_NAME
from .options import Channel


def get_cache_root() -> Path:
    """The per-user cache directory (``~/.cache``)."""
    return Path.home() / ".cache"


def profile_dir_name(channel: Optional[Channel]) -> str:
    """
    Profile directory name for a release channel.

    Stable (or no channel) shares ``chrome-profile``; other channels get
    their own ``chrome-profile-<channel>`` so profiles never mix versions.
    """
    channel = Channel.parse(channel)
    if channel and channel is not Channel.STABLE:
        return f"{PROFILE_DIR_NAME}-{channel.value}"
    return PROFILE_DIR_NAME


def default_user_data_dir(channel: Optional[Channel]) -> str:
    """Deterministic profile path reused across runs for the given channel."""
    return str(get_cache_root() / PROFILE_ROOT_NAME / profile_dir_name(channel))


def ensure_dir(path: str) -> str:
    """Create ``path`` recursively if missing. Idempotent."""
    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def chromedriver_log_path() -> str:
    """Get the path to the ChromeDriver log file for this process."""
    return os.path.join(tempfile.gettempdir(), f"chromedriver_{PROFILE_ROOT_NAME}_{os.getpid()}.log")


def same_dir(a: str, b: str) -> bool:
    """Compare two directory paths for equality, normalizing for platform differences."""
    if not a or not b:
        return False
    try:
        return os.path.normcase(os.path.realpath(a)) == os.path.normcase(os.path.realpath(b))
    except (OSError, ValueError):
        return a == b


__all__ = [
    "get_cache_root",
    "profile_dir_name",
    "default_user_data_dir",
    "ensure_dir",
    "chromedriver_log_path",
    "same_dir",
]
