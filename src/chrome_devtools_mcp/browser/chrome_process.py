"""Chrome process discovery."""

from typing import Optional
import psutil

from ..config.paths import same_dir

import logging
logger = logging.getLogger(__name__)


def _user_data_dir_arg(cmdline: list) -> Optional[str]:
    for arg in cmdline:
        if (arg or "").startswith("--user-data-dir="):
            return arg.split("=", 1)[1].strip('"')
    return None


def find_chrome_by_userdata(user_data_dir: str) -> Optional[psutil.Process]:
    """
    Find the first Chrome process using the specified user-data-dir.

    Args:
        user_data_dir: Path to Chrome user data directory

    Returns:
        Optional[psutil.Process]: Chrome process if found, None otherwise
    """
    for p in psutil.process_iter(["name", "cmdline"]):
        try:
            if not p.info["name"] or "chrome" not in p.info["name"].lower():
                continue
            arg = _user_data_dir_arg(p.info.get("cmdline") or [])
            if arg and same_dir(arg, user_data_dir):
                return p
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return None


def is_chrome_running_with_userdata(user_data_dir: str) -> bool:
    """True if any Chrome process is running with the specified user-data-dir."""
    return find_chrome_by_userdata(user_data_dir) is not None


__all__ = [
    "find_chrome_by_userdata",
    "is_chrome_running_with_userdata",
]
