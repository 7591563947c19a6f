"""Immutable session configuration values."""

from enum import Enum
from typing import Optional
from dataclasses import dataclass, field


class Channel(str, Enum):
    """Chrome release channels that can be launched."""

    STABLE = "stable"
    CANARY = "canary"
    BETA = "beta"
    DEV = "dev"

    @classmethod
    def parse(cls, value) -> Optional["Channel"]:
        if value is None or isinstance(value, cls):
            return value
        value = str(value).strip().lower()
        if not value:
            return None
        return cls(value)


@dataclass(frozen=True)
class LaunchOptions:
    """
    How to start a fresh browser when no endpoint is given.

    Attributes:
        executable_path: Explicit Chrome binary; disables channel resolution
        custom_devtools: Path to a custom DevTools frontend checkout
        channel: Release channel used to pick the binary and the profile name
        user_data_dir: Profile directory; derived from the channel when absent
        headless: Run without a visible window
        isolated: Use a throwaway profile that is never reused
        devtools: Auto-open DevTools and expose devtools:// targets
    """

    executable_path: Optional[str] = None
    custom_devtools: Optional[str] = None
    channel: Optional[Channel] = None
    user_data_dir: Optional[str] = None
    headless: bool = False
    isolated: bool = False
    devtools: bool = False


@dataclass(frozen=True)
class SessionConfig:
    """Either a running browser to attach to, or options to launch one."""

    browser_url: Optional[str] = None
    launch: LaunchOptions = field(default_factory=LaunchOptions)

    @property
    def devtools(self) -> bool:
        return self.launch.devtools

    def describe(self) -> str:
        if self.browser_url:
            return f"attach to {self.browser_url}"
        channel = self.launch.channel.value if self.launch.channel else Channel.STABLE.value
        return f"launch chrome ({self.launch.executable_path or channel})"


__all__ = [
    "Channel",
    "LaunchOptions",
    "SessionConfig",
]
