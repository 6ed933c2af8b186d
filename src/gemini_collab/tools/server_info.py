"""Server information tool for checking status and configuration."""

import json
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict

from .base import MCPTool, ToolOutput

if TYPE_CHECKING:
    from ..core.context import ToolContext


class ServerInfoTool(MCPTool):
    """Tool for getting server information and status."""

    @property
    def name(self) -> str:
        return "gemini-server-info"

    @property
    def description(self) -> str:
        return "Get server version, available tools and Gemini connection status"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {"type": "object", "properties": {}, "required": []}

    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        connection = context.connection
        info = {
            "version": context.version,
            "uptime_seconds": round((datetime.now() - context.started_at).total_seconds()),
            "available_tools": context.registry.list_tools(),
            "connection": connection.get_status(),
            "usage": connection.get_stats(),
        }
        if context.executor is not None:
            info["execution_stats"] = context.executor.get_execution_stats()

        result = f"Gemini Collaboration MCP Server v{context.version}\n\n{json.dumps(info, indent=2)}"
        return ToolOutput(success=True, result=result, tool_name=self.name)
