# chrome_devtools_mcp/tools/__init__.py
"""
Tool definitions and discovery.

The server ships no tools of its own. Packages contribute them through the
``chrome_devtools_mcp.tools`` entry-point group; each entry point resolves to
a ToolDefinition or an iterable of them.
"""

from importlib.metadata import entry_points

from .definition import (
    EmptyParams,
    ToolRequest,
    ToolHandler,
    ToolDefinition,
    define_tool,
)

import logging
logger = logging.getLogger(__name__)


ENTRY_POINT_GROUP = "chrome_devtools_mcp.tools"


def load_tools(group: str = ENTRY_POINT_GROUP) -> list[ToolDefinition]:
    """Collect tools from installed plugins. Broken plugins are logged and skipped."""
    tools: list[ToolDefinition] = []
    seen: set[str] = set()
    for ep in entry_points(group=group):
        try:
            loaded = ep.load()
        except Exception:
            logger.exception(f"Failed to load tool plugin {ep.name}")
            continue
        if isinstance(loaded, ToolDefinition):
            candidates = [loaded]
        else:
            try:
                candidates = list(loaded)
            except TypeError:
                logger.warning(f"Plugin {ep.name} provided {loaded!r}, which is not a ToolDefinition")
                continue
        for tool in candidates:
            if not isinstance(tool, ToolDefinition):
                logger.warning(f"Plugin {ep.name} provided {tool!r}, which is not a ToolDefinition")
                continue
            if tool.name in seen:
                logger.warning(f"Duplicate tool {tool.name} from plugin {ep.name} ignored")
                continue
            seen.add(tool.name)
            tools.append(tool)
    return tools


__all__ = [
    "ENTRY_POINT_GROUP",
    "EmptyParams",
    "ToolRequest",
    "ToolHandler",
    "ToolDefinition",
    "define_tool",
    "load_tools",
]
