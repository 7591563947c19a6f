"""
chrome_devtools_mcp brokers one shared Chrome session to MCP tools.

Tools never run concurrently: each call holds the process-wide tool gate
while the session is resolved, the tool runs, and its response is assembled.
The session is launched (or attached) lazily on the first call and again
whenever the previous one has disconnected.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
