"""
One gate shared by every tool call in this process.

The browser session is a single shared resource: two tools driving it at the
same time would race on page state. Each tool call therefore holds a lease on
the gate from before the session is resolved until its result is assembled.

    async with await gate.acquire():
        ...

Waiters are granted the gate in arrival order. There is no timeout: a lease
that is never released blocks every later tool call.
"""

import asyncio
from typing import Optional

import logging
logger = logging.getLogger(__name__)


class ToolLease:
    """A held slot of a ToolInvocationGate. Releasing twice is a no-op."""

    def __init__(self, gate: "ToolInvocationGate"):
        self._gate = gate
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._gate._release()

    async def __aenter__(self) -> "ToolLease":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.release()


class ToolInvocationGate:
    """Mutual exclusion for tool calls, backed by a FIFO ``asyncio.Lock``."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._lease: Optional[ToolLease] = None

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    async def acquire(self) -> ToolLease:
        """Wait until the gate is free and return the lease for it."""
        await self._lock.acquire()
        self._lease = ToolLease(self)
        return self._lease

    def _release(self) -> None:
        self._lease = None
        self._lock.release()

    async def __aenter__(self) -> ToolLease:
        return await self.acquire()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._lease is not None:
            self._lease.release()


_TOOL_GATE: Optional[ToolInvocationGate] = None


def get_tool_gate() -> ToolInvocationGate:
    """Get or create the process-wide gate."""
    global _TOOL_GATE
    if _TOOL_GATE is None:
        _TOOL_GATE = ToolInvocationGate()
    return _TOOL_GATE


def reset_tool_gate() -> None:
    """Drop the process-wide gate. Only for tests."""
    global _TOOL_GATE
    _TOOL_GATE = None


__all__ = [
    "ToolLease",
    "ToolInvocationGate",
    "get_tool_gate",
    "reset_tool_gate",
]
