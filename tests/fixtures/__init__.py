"""Test fixtures for the Gemini collaboration server tests."""

from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

from gemini_collab.core.context import ToolContext
from gemini_collab.core.registry import ToolRegistry
from gemini_collab.models.manager import ConnectionManager, ConnectionState, ModelVariant
from gemini_collab.tools.base import MCPTool, ToolOutput


def create_mock_connection(response: str = "Test response") -> MagicMock:
    """Create a mock connection manager for testing."""
    connection = MagicMock(spec=ConnectionManager)
    connection.state = ConnectionState.READY
    connection.is_ready = True
    connection.pro_model_name = "test-pro-model"
    connection.flash_model_name = "test-flash-model"
    connection.model_name.side_effect = lambda variant: (
        "test-pro-model" if variant is ModelVariant.PRO else "test-flash-model"
    )
    connection.generate = AsyncMock(return_value=response)
    connection.generate_chat = AsyncMock(return_value=response)
    connection.get_status.return_value = {
        "state": "ready",
        "pro": {"name": "test-pro-model", "available": True},
        "flash": {"name": "test-flash-model", "available": True},
        "attempt_timeout_seconds": 10.0,
        "connect_attempts": 1,
    }
    connection.get_stats.return_value = {
        "total_calls": 3,
        "pro_success_rate": 1.0,
        "flash_success_rate": 1.0,
        "raw_stats": {},
    }
    return connection


def create_tool_context(connection: Any, registry: ToolRegistry = None) -> ToolContext:
    """Create a tool context around the given connection."""
    return ToolContext(
        connection=connection, registry=registry or ToolRegistry(), version="0.0.test"
    )


def make_response(text: str) -> MagicMock:
    """Fake google-generativeai response object."""
    response = MagicMock()
    response.text = text
    return response


class MockTool(MCPTool):
    """Mock tool for testing."""

    def __init__(self, name: str = "mock-tool", should_fail: bool = False):
        self._name = name
        self.should_fail = should_fail
        self.execute_count = 0
        self.last_context = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return f"Test tool {self._name}"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {"type": "object", "properties": {}}

    async def execute(self, parameters: Dict[str, Any], context: ToolContext) -> ToolOutput:
        self.execute_count += 1
        self.last_context = context
        if self.should_fail:
            raise Exception("Mock tool failed")
        return ToolOutput(success=True, result=f"Mock result for {parameters}")
