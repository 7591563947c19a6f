"""Chrome launch planning and command-line building."""

from typing import Optional
from dataclasses import dataclass, field

from ..constants import DEFAULT_STARTUP_ARGS
from ..config.options import LaunchOptions
from ..config.paths import default_user_data_dir, ensure_dir
from .chrome_executable import driver_channel

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchPlan:
    """
    Everything the driver needs to start Chrome.

    Attributes:
        args: Extra Chrome command-line switches (no user-data-dir, no headless)
        channel: Driver channel identifier, None when an executable is given
        executable_path: Explicit Chrome binary
        user_data_dir: Profile directory, None for a throwaway profile
        headless: Start without a window
        devtools: Devtools integration enabled
    """

    args: tuple = field(default_factory=tuple)
    channel: Optional[str] = None
    executable_path: Optional[str] = None
    user_data_dir: Optional[str] = None
    headless: bool = False
    devtools: bool = False


def resolve_user_data_dir(options: LaunchOptions) -> Optional[str]:
    """
    Pick the profile directory for a launch.

    Isolated launches never persist a profile. Otherwise an explicit
    directory is used as-is, or a per-channel directory is derived and
    created so repeated runs reuse the same profile.
    """
    if options.isolated:
        return None
    if options.user_data_dir:
        return options.user_data_dir
    return ensure_dir(default_user_data_dir(options.channel))


def build_chrome_args(options: LaunchOptions) -> list[str]:
    """
    Build Chrome command-line switches for a launch.

    Args:
        options: Launch options

    Returns:
        list[str]: Startup flags, plus devtools-related ones when configured
    """
    args = list(DEFAULT_STARTUP_ARGS)
    if options.custom_devtools:
        args.append(f"--custom-devtools-frontend=file://{options.custom_devtools}")
    if options.devtools:
        args.append("--auto-open-devtools-for-tabs")
    return args


def build_launch_plan(options: LaunchOptions) -> LaunchPlan:
    """Resolve options into a concrete plan. Creates a derived profile directory."""
    plan = LaunchPlan(
        args=tuple(build_chrome_args(options)),
        channel=driver_channel(options.channel, options.executable_path),
        executable_path=options.executable_path,
        user_data_dir=resolve_user_data_dir(options),
        headless=options.headless,
        devtools=options.devtools,
    )
    logger.debug(f"Launch plan: {plan}")
    return plan


__all__ = [
    "LaunchPlan",
    "resolve_user_data_dir",
    "build_chrome_args",
    "build_launch_plan",
]
