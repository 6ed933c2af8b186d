"""
Tests for the server info tool.
"""

import json

import pytest

from gemini_collab.core.executor import ToolExecutor
from gemini_collab.core.registry import ToolRegistry
from gemini_collab.tools.server_info import ServerInfoTool
from tests.fixtures import MockTool, create_tool_context


def _payload(result: str) -> dict:
    header, body = result.split("\n\n", 1)
    assert header == "Gemini Collaboration MCP Server v0.0.test"
    return json.loads(body)


@pytest.mark.asyncio
async def test_reports_connection_and_tools(mock_connection):
    registry = ToolRegistry()
    registry.register_tool(ServerInfoTool())
    registry.register_tool(MockTool())
    context = create_tool_context(mock_connection, registry)

    output = await ServerInfoTool().execute({}, context)

    assert output.success is True
    info = _payload(output.result)
    assert info["version"] == "0.0.test"
    assert info["available_tools"] == ["gemini-server-info", "mock-tool"]
    assert info["connection"]["state"] == "ready"
    assert info["connection"]["pro"]["name"] == "test-pro-model"
    assert info["usage"]["total_calls"] == 3
    assert info["uptime_seconds"] >= 0
    assert "execution_stats" not in info


@pytest.mark.asyncio
async def test_includes_execution_stats(mock_connection):
    registry = ToolRegistry()
    registry.register_tool(ServerInfoTool())
    context = create_tool_context(mock_connection, registry)
    context.executor = ToolExecutor(registry, context)

    await context.executor.execute_tool("gemini-server-info")
    output = await context.executor.execute_tool("gemini-server-info")

    info = _payload(output.result)
    assert info["execution_stats"]["total_executions"] == 1
    assert info["execution_stats"]["successful"] == 1
