"""The live browser session handle."""

from typing import Optional
from dataclasses import dataclass

from urllib3.exceptions import HTTPError
from selenium import webdriver
from selenium.common.exceptions import WebDriverException

from .target_filter import TargetFilter

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageInfo:
    """A page target visible to tools."""

    target_id: str
    url: str
    title: str = ""


class BrowserSession:
    """
    A Selenium WebDriver attached to one Chrome instance.

    Liveness is checked lazily through ``connected``; once the driver reports
    the browser gone, or ChromeDriver itself stops answering, the session
    stays disconnected for good.

    Attributes:
        driver: Selenium WebDriver instance
        target_filter: Predicate deciding which target URLs tools may see
        endpoint: The browser URL attached to, or a description of the launch
        user_data_dir: Profile directory of a launched browser, if any
    """

    def __init__(
        self,
        driver: webdriver.Chrome,
        target_filter: TargetFilter,
        endpoint: str,
        user_data_dir: Optional[str] = None,
    ):
        self.driver = driver
        self.target_filter = target_filter
        self.endpoint = endpoint
        self.user_data_dir = user_data_dir
        self._disconnected = False

    def __repr__(self) -> str:
        state = "disconnected" if self._disconnected else "connected"
        return f"<BrowserSession {self.endpoint} ({state})>"

    @property
    def connected(self) -> bool:
        if self._disconnected:
            return False
        try:
            self.driver.window_handles
        except (WebDriverException, HTTPError, OSError) as e:
            logger.info(f"Browser session {self.endpoint} disconnected: {getattr(e, 'msg', None) or e}")
            self._disconnected = True
        return not self._disconnected

    def mark_disconnected(self) -> None:
        self._disconnected = True

    def pages(self) -> list[PageInfo]:
        """Page targets that pass the target filter, in browser order."""
        info = self.driver.execute_cdp_cmd("Target.getTargets", {}) or {}
        pages = []
        for target in info.get("targetInfos") or []:
            if target.get("type") != "page":
                continue
            url = target.get("url") or ""
            if not self.target_filter(url):
                continue
            pages.append(PageInfo(target_id=target.get("targetId", ""), url=url, title=target.get("title") or ""))
        return pages

    def switch_to_page(self, page: PageInfo) -> None:
        """Point the driver at the window handle backing ``page``."""
        for handle in self.driver.window_handles:
            if handle == page.target_id or handle.endswith(page.target_id):
                self.driver.switch_to.window(handle)
                return
        raise LookupError(f"No window handle for target {page.target_id}")


__all__ = [
    "PageInfo",
    "BrowserSession",
]
