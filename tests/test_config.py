import pytest

from chrome_devtools_mcp.__main__ import build_parser, config_from_args
from chrome_devtools_mcp.config import Channel, LaunchOptions, SessionConfig, get_env_config
from chrome_devtools_mcp.errors import ConfigurationError
from chrome_devtools_mcp.tools import ToolDefinition, define_tool, load_tools
from chrome_devtools_mcp import tools as tools_module


class TestEnvConfig:
    def test_defaults(self):
        config = get_env_config({})
        assert config == SessionConfig()
        assert config.browser_url is None
        assert config.launch == LaunchOptions()

    def test_reads_all_variables(self):
        config = get_env_config({
            "CHROME_EXECUTABLE_PATH": " /opt/chrome ",
            "CHROME_CUSTOM_DEVTOOLS": "/src/devtools",
            "CHROME_CHANNEL": "Beta",
            "CHROME_PROFILE_USER_DATA_DIR": "/data/profile",
            "MCP_HEADLESS": "true",
            "MCP_ISOLATED": "0",
            "MCP_DEVTOOLS": "yes",
        })
        launch = config.launch
        assert launch.executable_path == "/opt/chrome"
        assert launch.custom_devtools == "/src/devtools"
        assert launch.channel is Channel.BETA
        assert launch.user_data_dir == "/data/profile"
        assert launch.headless is True
        assert launch.isolated is False
        assert launch.devtools is True

    def test_rejects_unknown_channel(self):
        with pytest.raises(ConfigurationError):
            get_env_config({"CHROME_CHANNEL": "nightly"})

    def test_rejects_browser_url_with_executable(self):
        with pytest.raises(ConfigurationError):
            get_env_config({"CHROME_BROWSER_URL": "http://localhost:9222", "CHROME_EXECUTABLE_PATH": "/opt/chrome"})


class TestCli:
    def test_flags_override_env(self):
        base = get_env_config({"CHROME_CHANNEL": "beta", "MCP_HEADLESS": "1"})
        args = build_parser().parse_args(["--channel", "canary", "--isolated"])
        config = config_from_args(args, base)
        assert config.launch.channel is Channel.CANARY
        assert config.launch.isolated is True
        assert config.launch.headless is True  # untouched env value

    def test_browser_url_short_flag(self):
        args = build_parser().parse_args(["-u", "http://127.0.0.1:9222", "--devtools"])
        config = config_from_args(args)
        assert config.browser_url == "http://127.0.0.1:9222"
        assert config.devtools is True
        assert config.describe() == "attach to http://127.0.0.1:9222"

    def test_conflicting_flags(self):
        args = build_parser().parse_args(["-u", "http://127.0.0.1:9222", "--channel", "dev"])
        with pytest.raises(ConfigurationError):
            config_from_args(args)

    def test_invalid_channel_choice_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--channel", "nightly"])


class _EntryPoint:
    def __init__(self, name, value=None, error=None):
        self.name = name
        self.value = value
        self.error = error

    def load(self):
        if self.error:
            raise self.error
        return self.value


async def _noop(request, response, context):
    pass


def test_load_tools_from_entry_points(monkeypatch):
    one = define_tool("one", "first", _noop)
    two = define_tool("two", "second", _noop)
    dup = define_tool("one", "duplicate", _noop)
    eps = [
        _EntryPoint("single", one),
        _EntryPoint("many", [two, dup, "not a tool"]),
        _EntryPoint("broken", error=ImportError("missing dependency")),
        _EntryPoint("junk", 42),
    ]
    monkeypatch.setattr(tools_module, "entry_points", lambda group: eps)

    tools = load_tools()
    assert [t.name for t in tools] == ["one", "two"]
    assert all(isinstance(t, ToolDefinition) for t in tools)
