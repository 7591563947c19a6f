import asyncio
import pytest

from chrome_devtools_mcp.locking.tool_gate import reset_tool_gate

## We DO NOT want to use pytest-asyncio.
## Instead, use event_loop.run_until_complete()!


@pytest.fixture(scope="function")
def event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


@pytest.fixture(autouse=True)
def _fresh_tool_gate():
    reset_tool_gate()
    yield
    reset_tool_gate()
