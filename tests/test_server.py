import asyncio
import inspect
from typing import Optional

import pytest
from pydantic import BaseModel, Field
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from chrome_devtools_mcp.browser.resolver import SessionResolver
from chrome_devtools_mcp.config import SessionConfig, LaunchOptions
from chrome_devtools_mcp.errors import BrowserAlreadyRunningError
from chrome_devtools_mcp.locking.tool_gate import ToolInvocationGate
from chrome_devtools_mcp.server import ToolRegistrar, create_server, tool_signature
from chrome_devtools_mcp.tools import define_tool

from _utils import FakeDriver, FakeServer


class NavigateParams(BaseModel):
    url: str = Field(description="Where to go")
    timeout: Optional[int] = None


async def _echo(request, response, context):
    response.append_response_line(f"url={request.params.url}")


async def _explode(request, response, context):
    raise RuntimeError("handler blew up")


ECHO = define_tool("echo", "Echo the url", _echo, NavigateParams, read_only=True)
EXPLODE = define_tool("explode", "Always fails", _explode)


def make_registrar(driver=None, config=None):
    server = FakeServer()
    resolver = SessionResolver(driver or FakeDriver())
    registrar = ToolRegistrar(
        server,
        config or SessionConfig(launch=LaunchOptions(isolated=True)),
        resolver=resolver,
        gate=ToolInvocationGate(),
    )
    return server, registrar


def test_successful_call_returns_assembled_content(event_loop):
    _, registrar = make_registrar()

    result = event_loop.run_until_complete(registrar.invoke(ECHO, {"url": "https://example.com"}))

    assert isinstance(result, CallToolResult)
    assert not result.isError
    assert result.content[0].text == "# echo response\nurl=https://example.com"
    assert not registrar.gate.locked


def test_failing_handler_releases_gate_and_next_call_succeeds(event_loop):
    _, registrar = make_registrar()

    async def test_logic():
        failed = await registrar.invoke(EXPLODE, {})
        ok = await asyncio.wait_for(registrar.invoke(ECHO, {"url": "a"}), timeout=1)
        return failed, ok

    failed, ok = event_loop.run_until_complete(test_logic())
    assert failed.isError is True
    assert failed.content[0].text == "handler blew up"
    assert not ok.isError
    assert not registrar.gate.locked


def test_invalid_params_are_a_result_level_error(event_loop):
    _, registrar = make_registrar()

    result = event_loop.run_until_complete(registrar.invoke(ECHO, {}))

    assert result.isError is True
    assert "url" in result.content[0].text


def test_session_resolution_failure_propagates_and_releases_gate(event_loop, tmp_path):
    original = RuntimeError("The browser is already running")
    driver = FakeDriver(launch_error=original)
    config = SessionConfig(launch=LaunchOptions(user_data_dir=str(tmp_path)))
    _, registrar = make_registrar(driver, config)

    async def test_logic():
        with pytest.raises(BrowserAlreadyRunningError):
            await registrar.invoke(ECHO, {"url": "a"})

    event_loop.run_until_complete(test_logic())
    assert not registrar.gate.locked


def test_handler_executions_do_not_overlap(event_loop):
    _, registrar = make_registrar()
    active = {"now": 0, "max": 0}
    finished = []

    async def slow(request, response, context):
        active["now"] += 1
        active["max"] = max(active["max"], active["now"])
        await asyncio.sleep(0.005)
        finished.append(request.params.url)
        active["now"] -= 1

    tool = define_tool("slow", "Slow tool", slow, NavigateParams)

    async def test_logic():
        return await asyncio.gather(*(registrar.invoke(tool, {"url": str(i)}) for i in range(10)))

    results = event_loop.run_until_complete(test_logic())
    assert active["max"] == 1
    assert sorted(finished, key=int) == [str(i) for i in range(10)]
    assert all(not r.isError for r in results)


def test_context_is_shared_until_session_changes(event_loop):
    driver = FakeDriver()
    _, registrar = make_registrar(driver)

    async def test_logic():
        first = await registrar.get_context()
        again = await registrar.get_context()
        first.session.connected = False
        fresh = await registrar.get_context()
        return first, again, fresh

    first, again, fresh = event_loop.run_until_complete(test_logic())
    assert first is again
    assert fresh is not first
    assert fresh.session is driver.sessions[1]


def test_register_passes_metadata_to_server(event_loop):
    server, registrar = make_registrar()
    registrar.register(ECHO)

    entry = server.tools["echo"]
    assert entry["description"] == "Echo the url"
    assert entry["annotations"].readOnlyHint is True
    assert entry["structured_output"] is False

    fn = entry["fn"]
    assert inspect.iscoroutinefunction(fn)
    assert fn.__name__ == "echo"
    result = event_loop.run_until_complete(fn(url="https://example.com"))
    assert result.content[0].text.endswith("url=https://example.com")


def test_tool_signature_mirrors_schema():
    signature = tool_signature(NavigateParams)
    url, timeout = signature.parameters["url"], signature.parameters["timeout"]
    assert url.default is inspect.Parameter.empty
    assert url.kind is inspect.Parameter.KEYWORD_ONLY
    assert timeout.default is None


def test_fastmcp_publishes_schema_fields(event_loop):
    server = create_server(
        SessionConfig(launch=LaunchOptions(isolated=True)),
        [ECHO, EXPLODE],
        resolver=SessionResolver(FakeDriver()),
        gate=ToolInvocationGate(),
    )
    assert isinstance(server, FastMCP)

    tools = {t.name: t for t in event_loop.run_until_complete(server.list_tools())}
    assert set(tools) == {"echo", "explode"}
    schema = tools["echo"].inputSchema
    assert set(schema["properties"]) == {"url", "timeout"}
    assert schema["required"] == ["url"]
    assert schema["properties"]["url"]["description"] == "Where to go"
