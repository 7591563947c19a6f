"""Selenium-backed browser driver: attach to or launch Chrome."""

import asyncio
import contextlib
from urllib.parse import urlparse

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service as ChromeService

from ..constants import PROTOCOL_TIMEOUT_SECS
from ..config.paths import chromedriver_log_path
from .chrome_executable import resolve_channel_executable, browser_version_for
from .chrome_launcher import LaunchPlan
from .session import BrowserSession
from .target_filter import TargetFilter

import logging
logger = logging.getLogger(__name__)


def debugger_address(browser_url: str) -> str:
    """``http://127.0.0.1:9222`` -> ``127.0.0.1:9222``; bare host:port passes through."""
    parsed = urlparse(browser_url)
    if parsed.netloc:
        return parsed.netloc
    return browser_url.strip().rstrip("/")


def apply_protocol_timeout(driver: webdriver.Chrome, timeout: float = PROTOCOL_TIMEOUT_SECS) -> None:
    """Bound every command sent to the driver."""
    driver.command_executor.client_config.timeout = timeout


def _make_service() -> ChromeService:
    return ChromeService(log_output=chromedriver_log_path())


def build_connect_options(browser_url: str) -> Options:
    options = Options()
    options.add_experimental_option("debuggerAddress", debugger_address(browser_url))
    return options


def build_launch_options(plan: LaunchPlan) -> Options:
    """Translate a launch plan into ChromeDriver options."""
    options = Options()
    for arg in plan.args:
        options.add_argument(arg)
    if plan.user_data_dir:
        options.add_argument(f"--user-data-dir={plan.user_data_dir}")
    if plan.headless:
        options.add_argument("--headless=new")

    if plan.executable_path:
        options.binary_location = plan.executable_path
    elif plan.channel:
        binary = resolve_channel_executable(plan.channel)
        if binary:
            options.binary_location = binary
        else:
            options.browser_version = browser_version_for(plan.channel)
    return options


class SeleniumDriver:
    """
    Creates BrowserSessions through ChromeDriver.

    Selenium calls block, so they run in a worker thread. A driver whose
    setup fails after ChromeDriver started is quit before the error
    propagates.
    """

    def _open_session(self, options: Options, target_filter: TargetFilter, **session_kwargs) -> BrowserSession:
        driver = webdriver.Chrome(service=_make_service(), options=options)
        try:
            apply_protocol_timeout(driver)
            session = BrowserSession(driver, target_filter, **session_kwargs)
            _select_first_page(session)
        except BaseException:
            with contextlib.suppress(Exception):
                driver.quit()
            raise
        return session

    async def connect(self, browser_url: str, target_filter: TargetFilter) -> BrowserSession:
        logger.info(f"Attaching to browser at {browser_url}")
        options = build_connect_options(browser_url)
        return await asyncio.to_thread(self._open_session, options, target_filter, endpoint=browser_url)

    async def launch(self, plan: LaunchPlan, target_filter: TargetFilter) -> BrowserSession:
        logger.info(
            f"Launching Chrome (channel={plan.channel}, executable={plan.executable_path}, "
            f"user_data_dir={plan.user_data_dir}, headless={plan.headless})"
        )
        options = build_launch_options(plan)
        endpoint = plan.executable_path or plan.channel or "chrome"
        return await asyncio.to_thread(
            self._open_session,
            options,
            target_filter,
            endpoint=f"launched {endpoint}",
            user_data_dir=plan.user_data_dir,
        )


def _select_first_page(session: BrowserSession) -> None:
    """Start on a visible page rather than an internal surface."""
    pages = session.pages()
    if pages:
        session.switch_to_page(pages[0])


__all__ = [
    "debugger_address",
    "apply_protocol_timeout",
    "build_connect_options",
    "build_launch_options",
    "SeleniumDriver",
]
