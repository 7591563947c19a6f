"""Configuration management for browser sessions."""

from .options import (
    Channel,
    LaunchOptions,
    SessionConfig,
)

from .environment import (
    get_env_config,
    validate_config,
)

from .paths import (
    get_cache_root,
    profile_dir_name,
    default_user_data_dir,
    ensure_dir,
    chromedriver_log_path,
    same_dir,
)

__all__ = [
    "Channel",
    "LaunchOptions",
    "SessionConfig",
    "get_env_config",
    "validate_config",
    "get_cache_root",
    "profile_dir_name",
    "default_user_data_dir",
    "ensure_dir",
    "chromedriver_log_path",
    "same_dir",
]
