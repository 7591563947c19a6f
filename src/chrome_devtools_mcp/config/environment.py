"""Environment configuration and validation."""

import os
from typing import Optional, Mapping

from ..errors import ConfigurationError
from .options import Channel, LaunchOptions, SessionConfig

import logging
logger = logging.getLogger(__name__)


_TRUE_VALUES = ("1", "true", "yes", "on")


def _str_env(env: Mapping[str, str], name: str) -> Optional[str]:
    return (env.get(name) or "").strip() or None


def _bool_env(env: Mapping[str, str], name: str) -> bool:
    return (env.get(name) or "").strip().lower() in _TRUE_VALUES


def get_env_config(env: Optional[Mapping[str, str]] = None) -> SessionConfig:
    """
    Read session configuration from environment variables.

    Optional:   CHROME_BROWSER_URL       attach to a running browser instead of launching
                CHROME_EXECUTABLE_PATH   explicit Chrome binary
                CHROME_CUSTOM_DEVTOOLS   custom DevTools frontend path
                CHROME_CHANNEL           stable | canary | beta | dev
                CHROME_PROFILE_USER_DATA_DIR
                MCP_HEADLESS, MCP_ISOLATED, MCP_DEVTOOLS   (1/true/yes)

    CLI flags are layered on top of this in ``__main__``.
    """
    if env is None:
        env = os.environ

    channel_value = _str_env(env, "CHROME_CHANNEL")
    try:
        channel = Channel.parse(channel_value)
    except ValueError:
        allowed = ", ".join(c.value for c in Channel)
        raise ConfigurationError(f"CHROME_CHANNEL must be one of {allowed}, got {channel_value!r}.")

    config = SessionConfig(
        browser_url=_str_env(env, "CHROME_BROWSER_URL"),
        launch=LaunchOptions(
            executable_path=_str_env(env, "CHROME_EXECUTABLE_PATH"),
            custom_devtools=_str_env(env, "CHROME_CUSTOM_DEVTOOLS"),
            channel=channel,
            user_data_dir=_str_env(env, "CHROME_PROFILE_USER_DATA_DIR"),
            headless=_bool_env(env, "MCP_HEADLESS"),
            isolated=_bool_env(env, "MCP_ISOLATED"),
            devtools=_bool_env(env, "MCP_DEVTOOLS"),
        ),
    )
    validate_config(config)
    return config


def validate_config(config: SessionConfig) -> SessionConfig:
    """
    Reject combinations that cannot be honored.

    Raises:
        ConfigurationError: On conflicting options
    """
    launch = config.launch
    if config.browser_url:
        if launch.executable_path:
            raise ConfigurationError("A browser URL cannot be combined with an executable path.")
        if launch.channel:
            raise ConfigurationError("A browser URL cannot be combined with a channel.")
    if launch.isolated and launch.user_data_dir:
        logger.warning(f"Ignoring user data dir {launch.user_data_dir} because isolated mode is on")
    return config


__all__ = [
    "get_env_config",
    "validate_config",
]
