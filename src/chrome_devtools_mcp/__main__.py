#region Overview
"""
## chrome_devtools_mcp

Exposes one shared Chrome session to MCP clients. Tools are contributed by
plugins (see ``chrome_devtools_mcp.tools``) and run strictly one at a time.

## Browser Session

By default Chrome is launched on first use with a persistent profile under
``~/.cache/chrome-devtools-mcp/chrome-profile[-<channel>]``. Pass
``--isolated`` for a throwaway profile (needed to run several servers at
once), or ``--browser-url`` to attach to a Chrome that is already running
with remote debugging enabled.

If the browser goes away, the next tool call launches (or attaches) again.

## Configuration

Flags override environment variables; a ``.env`` file is loaded first.

    --browser-url, -u      CHROME_BROWSER_URL
    --executable-path, -e  CHROME_EXECUTABLE_PATH
    --custom-devtools      CHROME_CUSTOM_DEVTOOLS
    --channel              CHROME_CHANNEL
    --user-data-dir        CHROME_PROFILE_USER_DATA_DIR
    --headless             MCP_HEADLESS
    --isolated             MCP_ISOLATED
    --devtools             MCP_DEVTOOLS
    --log-file             MCP_LOG_FILE
"""
#endregion

#region Imports
import os
import sys
import logging
import argparse
from dataclasses import replace
from typing import Optional, Sequence

from dotenv import load_dotenv
#endregion

#region Import from your package
from chrome_devtools_mcp.config import Channel, SessionConfig, get_env_config, validate_config
from chrome_devtools_mcp.errors import ConfigurationError
from chrome_devtools_mcp.server import create_server
from chrome_devtools_mcp.tools import load_tools
#endregion

#region Logger
logger = logging.getLogger(__name__)
#endregion

#region CLI
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chrome-devtools-mcp",
        description="MCP server sharing one Chrome session between serialized tool calls.",
    )
    parser.add_argument("-u", "--browser-url", dest="browser_url",
                        help="Attach to a running Chrome, e.g. http://127.0.0.1:9222.")
    parser.add_argument("-e", "--executable-path", dest="executable_path",
                        help="Path to a custom Chrome executable.")
    parser.add_argument("--custom-devtools", dest="custom_devtools",
                        help="Path to a custom DevTools frontend.")
    parser.add_argument("--channel", choices=[c.value for c in Channel],
                        help="Chrome release channel to launch. Defaults to stable.")
    parser.add_argument("--user-data-dir", dest="user_data_dir",
                        help="Profile directory. Defaults to a per-channel directory in the user cache.")
    parser.add_argument("--headless", action="store_true", default=None,
                        help="Run Chrome without a window.")
    parser.add_argument("--isolated", action="store_true", default=None,
                        help="Use a temporary profile that is discarded afterwards.")
    parser.add_argument("--devtools", action="store_true", default=None,
                        help="Open DevTools for new tabs and expose devtools:// pages.")
    parser.add_argument("--log-file", dest="log_file",
                        help="Write debug logs to this file.")
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[SessionConfig] = None) -> SessionConfig:
    """Layer parsed CLI flags over ``base`` (the environment configuration)."""
    if base is None:
        base = SessionConfig()

    launch_overrides = {}
    for name in ("executable_path", "custom_devtools", "user_data_dir", "headless", "isolated", "devtools"):
        value = getattr(args, name, None)
        if value is not None:
            launch_overrides[name] = value
    if getattr(args, "channel", None):
        launch_overrides["channel"] = Channel.parse(args.channel)

    config = SessionConfig(
        browser_url=args.browser_url or base.browser_url,
        launch=replace(base.launch, **launch_overrides),
    )
    return validate_config(config)
#endregion

#region Logging
def configure_logging(log_file: Optional[str] = None) -> None:
    """
    stdout carries the MCP stream, so logs go to stderr (warnings and up)
    and, when requested, to a debug log file.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setLevel(logging.WARNING)
    level = logging.WARNING
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
#endregion

#region Main
def main(argv: Optional[Sequence[str]] = None) -> None:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_file or os.getenv("MCP_LOG_FILE"))

    try:
        config = config_from_args(args, get_env_config())
    except ConfigurationError as e:
        parser.error(str(e))

    tools = load_tools()
    if not tools:
        logger.warning("No tools are installed; the server will expose an empty tool list")
    logger.info(f"Starting MCP server: {config.describe()}, {len(tools)} tool(s)")

    server = create_server(config, tools)
    server.run("stdio")


if __name__ == "__main__":
    main()
#endregion
