"""Decide between attaching to a running browser and launching a new one."""

import asyncio
from typing import Optional, Protocol

from ..constants import ALREADY_RUNNING_MARKERS
from ..config.options import LaunchOptions, SessionConfig
from ..context import SessionCache
from ..errors import BrowserAlreadyRunningError
from .chrome_launcher import LaunchPlan, build_launch_plan
from .chrome_process import is_chrome_running_with_userdata
from .session import BrowserSession
from .target_filter import TargetFilter, make_target_filter

import logging
logger = logging.getLogger(__name__)


class BrowserDriver(Protocol):
    async def connect(self, browser_url: str, target_filter: TargetFilter) -> BrowserSession: ...

    async def launch(self, plan: LaunchPlan, target_filter: TargetFilter) -> BrowserSession: ...


def is_profile_in_use_error(error: BaseException, user_data_dir: str) -> bool:
    """True if a launch failed because another Chrome holds ``user_data_dir``."""
    message = str(error)
    if any(marker in message for marker in ALREADY_RUNNING_MARKERS):
        return True
    return is_chrome_running_with_userdata(user_data_dir)


class SessionResolver:
    """
    Hands out the single shared BrowserSession.

    A connected cached session is always returned as-is; otherwise the
    resolver attaches to ``browser_url`` or launches Chrome, and caches the
    result. Failures propagate to the caller, nothing is retried here.
    """

    def __init__(self, driver: Optional[BrowserDriver] = None, cache: Optional[SessionCache] = None):
        if driver is None:
            from .driver import SeleniumDriver
            driver = SeleniumDriver()
        self.driver = driver
        self.cache = cache if cache is not None else SessionCache()
        self._lock = asyncio.Lock()

    async def resolve(self, config: SessionConfig) -> BrowserSession:
        async with self._lock:
            cached = await asyncio.to_thread(self.cache.get)
            if cached is not None:
                return cached
            if config.browser_url:
                session = await self.driver.connect(config.browser_url, make_target_filter(config.devtools))
            else:
                session = await self.launch(config.launch)
            return self.cache.store(session)

    async def launch(self, options: LaunchOptions) -> BrowserSession:
        """
        Launch Chrome without touching the cache.

        Raises:
            BrowserAlreadyRunningError: The profile directory is held by another Chrome
        """
        plan = build_launch_plan(options)
        try:
            return await self.driver.launch(plan, make_target_filter(plan.devtools))
        except Exception as e:
            if plan.user_data_dir and is_profile_in_use_error(e, plan.user_data_dir):
                logger.warning(f"Chrome profile {plan.user_data_dir} is already in use")
                raise BrowserAlreadyRunningError(plan.user_data_dir) from e
            raise


__all__ = [
    "BrowserDriver",
    "is_profile_in_use_error",
    "SessionResolver",
]
