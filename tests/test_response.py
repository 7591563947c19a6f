import asyncio
import base64
import pytest

from mcp.types import CallToolResult, TextContent

from chrome_devtools_mcp.browser.session import PageInfo
from chrome_devtools_mcp.context import McpContext
from chrome_devtools_mcp.errors import ResponseAlreadyHandledError
from chrome_devtools_mcp.response import McpResponse, finalize

from _utils import FakeSession


class _Builder:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error

    async def handle(self, tool_name, context):
        if self.error is not None:
            raise self.error
        return self.content


def test_finalize_wraps_content_on_success(event_loop):
    content = [TextContent(type="text", text="hello")]

    result = event_loop.run_until_complete(finalize(_Builder(content=content), "tool", None))

    assert isinstance(result, CallToolResult)
    assert not result.isError
    assert result.content == content


def test_finalize_turns_failure_into_error_result(event_loop):
    result = event_loop.run_until_complete(finalize(_Builder(error=ValueError("boom")), "tool", None))

    assert result.isError is True
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert result.content[0].text == "boom"


def test_finalize_uses_class_name_for_empty_messages(event_loop):
    result = event_loop.run_until_complete(finalize(_Builder(error=KeyError()), "tool", None))
    assert result.isError is True
    assert result.content[0].text == "KeyError"


def test_finalize_does_not_swallow_cancellation(event_loop):
    async def test_logic():
        with pytest.raises(asyncio.CancelledError):
            await finalize(_Builder(error=asyncio.CancelledError()), "tool", None)

    event_loop.run_until_complete(test_logic())


def test_response_formats_lines_and_pages(event_loop):
    session = FakeSession(pages=[
        PageInfo(target_id="A", url="https://example.com"),
        PageInfo(target_id="B", url="chrome://newtab/"),
    ])
    context = McpContext.from_session(session)
    context.selected_page_index = 1

    response = McpResponse()
    response.append_response_line("Clicked the button")
    response.set_include_pages(True)

    content = event_loop.run_until_complete(response.handle("click", context))

    assert len(content) == 1
    assert content[0].text == "\n".join([
        "# click response",
        "Clicked the button",
        "## Pages",
        "0: https://example.com",
        "1: chrome://newtab/ [selected]",
    ])


def test_response_attaches_images(event_loop):
    response = McpResponse()
    response.attach_image(b"\x89PNG", "image/png")

    content = event_loop.run_until_complete(response.handle("screenshot", None))

    assert content[0].text == "# screenshot response"
    assert content[1].type == "image"
    assert content[1].mimeType == "image/png"
    assert base64.b64decode(content[1].data) == b"\x89PNG"


def test_response_is_single_use(event_loop):
    response = McpResponse()

    async def test_logic():
        await response.handle("tool", None)
        with pytest.raises(ResponseAlreadyHandledError):
            await response.handle("tool", None)

    event_loop.run_until_complete(test_logic())


def test_second_finalize_reports_error_result(event_loop):
    response = McpResponse()

    async def test_logic():
        first = await finalize(response, "tool", None)
        second = await finalize(response, "tool", None)
        return first, second

    first, second = event_loop.run_until_complete(test_logic())
    assert not first.isError
    assert second.isError is True
    assert "already handled" in second.content[0].text
