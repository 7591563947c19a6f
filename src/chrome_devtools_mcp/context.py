"""
Explicitly owned browser state.

``SessionCache`` holds the one live BrowserSession a resolver hands out.
``McpContext`` is what tool handlers receive: the session plus page selection.

Thread Safety:
    Neither object is thread-safe. Tool calls are serialized by the
    ToolInvocationGate, and the resolver serializes its own cache access.

Usage:
    cache = SessionCache()
    session = cache.get()       # None until a session is stored
    cache.store(session)
    cache.reset()               # back to "no session"
"""

import logging
from typing import Optional

from .browser.session import BrowserSession, PageInfo


class SessionCache:
    """
    Memoizes the live browser session.

    States: "no session" (initial, and after ``reset``) and "cached".
    ``get`` drops a cached session that reports itself disconnected.
    """

    def __init__(self):
        self._session: Optional[BrowserSession] = None

    @property
    def session(self) -> Optional[BrowserSession]:
        """The cached session, without a liveness check."""
        return self._session

    def get(self) -> Optional[BrowserSession]:
        """Return the cached session if it is still connected."""
        session = self._session
        if session is None:
            return None
        if session.connected:
            return session
        self.reset()
        return None

    def store(self, session: BrowserSession) -> BrowserSession:
        self._session = session
        return session

    def reset(self) -> None:
        """Forget the cached session. It is not closed."""
        self._session = None


class McpContext:
    """
    State shared by tool handlers for one browser session.

    Attributes:
        session: The live browser session
        logger: Logger tools should report through
        selected_page_index: Index into ``pages()`` of the page tools act on
    """

    def __init__(self, session: BrowserSession, logger: Optional[logging.Logger] = None):
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self.selected_page_index = 0

    @classmethod
    def from_session(cls, session: BrowserSession, logger: Optional[logging.Logger] = None) -> "McpContext":
        return cls(session, logger)

    @property
    def driver(self):
        return self.session.driver

    def pages(self) -> list[PageInfo]:
        return self.session.pages()

    def get_selected_page(self) -> PageInfo:
        pages = self.pages()
        if not pages:
            raise LookupError("No open pages are available")
        if self.selected_page_index >= len(pages):
            self.selected_page_index = 0
        return pages[self.selected_page_index]

    def select_page(self, index: int) -> PageInfo:
        pages = self.pages()
        if not 0 <= index < len(pages):
            raise IndexError(f"No page at index {index}; {len(pages)} page(s) open")
        self.selected_page_index = index
        page = pages[index]
        self.session.switch_to_page(page)
        return page


__all__ = [
    "SessionCache",
    "McpContext",
]
