"""In-process serialization of tool calls."""
