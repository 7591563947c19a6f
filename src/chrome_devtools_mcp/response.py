"""Tool output accumulation and conversion into MCP results."""

import base64
import asyncio
import inspect
from typing import Optional, Union

from mcp.types import CallToolResult, ImageContent, TextContent

from .context import McpContext
from .errors import ResponseAlreadyHandledError

import logging
logger = logging.getLogger(__name__)


ContentBlock = Union[TextContent, ImageContent]


class McpResponse:
    """
    What a tool reports back, filled in while its handler runs.

    A response is handled exactly once; ``handle`` renders the accumulated
    lines (and, on request, the list of open pages) as MCP content blocks.
    """

    def __init__(self):
        self._lines: list[str] = []
        self._images: list[tuple[str, str]] = []
        self._include_pages = False
        self._handled = False

    @property
    def response_lines(self) -> list[str]:
        return list(self._lines)

    @property
    def include_pages(self) -> bool:
        return self._include_pages

    @property
    def images(self) -> list[tuple[str, str]]:
        return list(self._images)

    def append_response_line(self, line: str) -> None:
        self._lines.append(line)

    def set_include_pages(self, value: bool = True) -> None:
        self._include_pages = value

    def attach_image(self, data: Union[str, bytes], mime_type: str = "image/png") -> None:
        """Attach an image; raw bytes are base64-encoded."""
        if isinstance(data, bytes):
            data = base64.b64encode(data).decode("ascii")
        self._images.append((data, mime_type))

    def format(self, tool_name: str, context: Optional[McpContext]) -> str:
        parts = [f"# {tool_name} response"]
        parts.extend(self._lines)
        if self._include_pages and context is not None:
            parts.append("## Pages")
            selected = context.selected_page_index
            for idx, page in enumerate(context.pages()):
                marker = " [selected]" if idx == selected else ""
                parts.append(f"{idx}: {page.url}{marker}")
        return "\n".join(parts)

    async def handle(self, tool_name: str, context: Optional[McpContext]) -> list[ContentBlock]:
        if self._handled:
            raise ResponseAlreadyHandledError(f"Response for {tool_name} was already handled")
        self._handled = True

        text = self.format(tool_name, context)
        content: list[ContentBlock] = [TextContent(type="text", text=text)]
        for data, mime_type in self._images:
            content.append(ImageContent(type="image", data=data, mimeType=mime_type))
        return content


def error_result(message: str) -> CallToolResult:
    """A result-level failure carrying a single text block."""
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)


def error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


async def finalize(response, tool_name: str, context: Optional[McpContext]) -> CallToolResult:
    """
    Turn a populated response into the protocol result.

    Failures while rendering the response are reported as an error result
    with the message verbatim; they never propagate to the server.
    """
    try:
        content = response.handle(tool_name, context)
        if inspect.isawaitable(content):
            content = await content
    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.warning(f"{tool_name} response could not be assembled: {e}")
        return error_result(error_message(e))
    return CallToolResult(content=list(content))


__all__ = [
    "ContentBlock",
    "McpResponse",
    "error_result",
    "error_message",
    "finalize",
]
