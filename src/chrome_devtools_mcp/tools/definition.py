"""Tool definitions as handed to the registrar."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Type

from pydantic import BaseModel
from mcp.types import ToolAnnotations


class EmptyParams(BaseModel):
    """Parameter schema of tools that take no arguments."""


@dataclass(frozen=True)
class ToolRequest:
    """A single tool call: the validated parameters."""

    params: BaseModel


ToolHandler = Callable[[ToolRequest, Any, Any], Awaitable[None]]


@dataclass(frozen=True)
class ToolDefinition:
    """
    A tool as published to MCP clients.

    Attributes:
        name: Unique tool name
        description: Shown to the client model
        handler: ``async (request, response, context) -> None``; populates ``response``
        schema: Pydantic model of the parameters
        annotations: MCP tool hints (read-only, destructive, ...)
    """

    name: str
    description: str
    handler: ToolHandler
    schema: Type[BaseModel] = EmptyParams
    annotations: Optional[ToolAnnotations] = field(default=None)


def define_tool(
    name: str,
    description: str,
    handler: ToolHandler,
    schema: Type[BaseModel] = EmptyParams,
    *,
    read_only: Optional[bool] = None,
    title: Optional[str] = None,
) -> ToolDefinition:
    annotations = None
    if read_only is not None or title is not None:
        annotations = ToolAnnotations(title=title, readOnlyHint=read_only)
    return ToolDefinition(
        name=name,
        description=description,
        handler=handler,
        schema=schema,
        annotations=annotations,
    )


__all__ = [
    "EmptyParams",
    "ToolRequest",
    "ToolHandler",
    "ToolDefinition",
    "define_tool",
]
