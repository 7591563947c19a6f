"""
Wiring tool definitions into the MCP server.

Every call goes through the same pipeline:

    log -> acquire gate -> resolve session -> run handler -> finalize -> release gate

Session resolution failures (the browser cannot be attached or launched)
propagate to the protocol layer. Handler failures and response assembly
failures come back to the client as error results, so one bad tool call never
takes the server down or wedges the gate.
"""

import json
import asyncio
import inspect
from typing import Annotated, Iterable, Optional

from pydantic import BaseModel, Field
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from .browser.resolver import SessionResolver
from .config.options import SessionConfig
from .context import McpContext
from .locking.tool_gate import ToolInvocationGate, get_tool_gate
from .response import McpResponse, error_message, error_result, finalize
from .tools.definition import ToolDefinition, ToolRequest

import logging
logger = logging.getLogger(__name__)


SERVER_NAME = "chrome_devtools_mcp"


def tool_signature(schema: type[BaseModel]) -> inspect.Signature:
    """
    A keyword-only signature mirroring the schema's fields.

    FastMCP derives the published input schema and its argument validation
    from the handler signature.
    """
    params = []
    for name, field in schema.model_fields.items():
        if field.is_required():
            default = inspect.Parameter.empty
        else:
            default = field.get_default(call_default_factory=True)
        annotation = field.annotation
        if field.description:
            annotation = Annotated[annotation, Field(description=field.description)]
        params.append(inspect.Parameter(name, inspect.Parameter.KEYWORD_ONLY, default=default, annotation=annotation))
    return inspect.Signature(params)


class ToolRegistrar:
    """
    Registers tools on a FastMCP server and runs their calls one at a time.

    Attributes:
        server: The FastMCP server tools are added to
        config: Where the browser session comes from
        resolver: Source of the shared browser session
        gate: Serializes tool calls; the process-wide gate by default
    """

    def __init__(
        self,
        server: FastMCP,
        config: SessionConfig,
        *,
        resolver: Optional[SessionResolver] = None,
        gate: Optional[ToolInvocationGate] = None,
    ):
        self.server = server
        self.config = config
        self.resolver = resolver or SessionResolver()
        self.gate = gate or get_tool_gate()
        self._context: Optional[McpContext] = None

    async def get_context(self) -> McpContext:
        """The tool context for the current session; rebuilt when the session changes."""
        session = await self.resolver.resolve(self.config)
        if self._context is None or self._context.session is not session:
            self._context = McpContext.from_session(session, logger)
        return self._context

    async def invoke(self, tool: ToolDefinition, params: dict) -> CallToolResult:
        """Run one tool call through the serialized pipeline."""
        logger.debug(f"{tool.name} request: {json.dumps(params, indent=2, default=str)}")
        async with await self.gate.acquire():
            try:
                context = await self.get_context()
            except Exception:
                logger.exception(f"{tool.name}: could not obtain a browser session ({self.config.describe()})")
                raise

            response = McpResponse()
            try:
                request = ToolRequest(params=tool.schema.model_validate(params))
                await tool.handler(request, response, context)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"{tool.name} failed")
                return error_result(error_message(e))

            return await finalize(response, tool.name, context)

    def make_handler(self, tool: ToolDefinition):
        """The coroutine function FastMCP calls for ``tool``."""
        async def handler(**params) -> CallToolResult:
            return await self.invoke(tool, params)

        handler.__name__ = tool.name
        handler.__qualname__ = tool.name
        handler.__doc__ = tool.description
        handler.__signature__ = tool_signature(tool.schema)
        return handler

    def register(self, tool: ToolDefinition) -> None:
        self.server.add_tool(
            self.make_handler(tool),
            name=tool.name,
            description=tool.description,
            annotations=tool.annotations,
            structured_output=False,
        )
        logger.debug(f"Registered tool {tool.name}")

    def register_all(self, tools: Iterable[ToolDefinition]) -> None:
        for tool in tools:
            self.register(tool)


def create_server(
    config: SessionConfig,
    tools: Iterable[ToolDefinition] = (),
    *,
    resolver: Optional[SessionResolver] = None,
    gate: Optional[ToolInvocationGate] = None,
) -> FastMCP:
    """Build the MCP server with ``tools`` registered against one shared browser session."""
    server = FastMCP(SERVER_NAME)
    registrar = ToolRegistrar(server, config, resolver=resolver, gate=gate)
    registrar.register_all(tools)
    return server


__all__ = [
    "SERVER_NAME",
    "tool_signature",
    "ToolRegistrar",
    "create_server",
]
