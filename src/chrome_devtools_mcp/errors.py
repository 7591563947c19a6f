"""Exception hierarchy shared by the session and tool layers."""


class ChromeDevToolsMcpError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(ChromeDevToolsMcpError, ValueError):
    """Invalid combination of CLI flags or environment variables."""


class SessionResolutionError(ChromeDevToolsMcpError, RuntimeError):
    """Attaching to or launching the browser failed."""


class BrowserAlreadyRunningError(SessionResolutionError):
    """
    Another Chrome instance already holds the profile directory.

    Raised from the original launch failure, which stays available as ``__cause__``.
    """

    def __init__(self, user_data_dir: str):
        self.user_data_dir = user_data_dir
        super().__init__(
            f"The browser is already running for {user_data_dir}. "
            "Use --isolated to run multiple browser instances."
        )


class ResponseAlreadyHandledError(ChromeDevToolsMcpError, RuntimeError):
    """A response builder was finalized twice."""


__all__ = [
    "ChromeDevToolsMcpError",
    "ConfigurationError",
    "SessionResolutionError",
    "BrowserAlreadyRunningError",
    "ResponseAlreadyHandledError",
]
