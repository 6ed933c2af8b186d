"""Executes tool calls and keeps execution statistics."""

import logging
import time
from typing import Any, Dict, List, Optional

from ..models.base import ToolOutput
from .context import ToolContext
from .registry import ToolRegistry

logger = logging.getLogger(__name__)

MAX_HISTORY = 200


class ToolExecutor:
    """Runs one tool call at a time per request; never raises to the transport."""

    def __init__(self, tool_registry: ToolRegistry, context: ToolContext):
        self.tool_registry = tool_registry
        self.context = context
        self.execution_history: List[ToolOutput] = []

    async def execute_tool(
        self, tool_name: str, parameters: Optional[Dict[str, Any]] = None
    ) -> ToolOutput:
        """Execute a single tool with the shared context injected."""
        tool = self.tool_registry.get_tool(tool_name)
        if not tool:
            return ToolOutput(success=False, error=f"Unknown tool: {tool_name}", tool_name=tool_name)

        if parameters is None:
            parameters = {}
        if not isinstance(parameters, dict):
            return ToolOutput(
                success=False, error="Tool arguments must be an object", tool_name=tool_name
            )

        logger.info(f"Executing tool: {tool_name}")
        start_time = time.time()

        try:
            output = await tool.execute(parameters, self.context)
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {e}", exc_info=True)
            output = ToolOutput(success=False, error=str(e), tool_name=tool_name)

        output.tool_name = tool_name
        output.execution_time_ms = (time.time() - start_time) * 1000
        self._record(output)

        if not output.success:
            logger.warning(f"Tool {tool_name} returned an error: {output.error}")
        return output

    def _record(self, output: ToolOutput) -> None:
        self.execution_history.append(output)
        if len(self.execution_history) > MAX_HISTORY:
            del self.execution_history[0]

    def get_execution_stats(self) -> Dict[str, Any]:
        """Get statistics about recent tool executions."""
        total = len(self.execution_history)
        successful = sum(1 for output in self.execution_history if output.success)

        times = [o.execution_time_ms for o in self.execution_history if o.execution_time_ms]
        avg_time = sum(times) / len(times) if times else 0

        return {
            "total_executions": total,
            "successful": successful,
            "failed": total - successful,
            "success_rate": successful / total if total > 0 else 0,
            "average_execution_time_ms": avg_time,
        }
