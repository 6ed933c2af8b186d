"""Base models for tool results."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class ToolOutput:
    """Result of a single tool execution.

    ``result`` holds the text returned to the host on success; ``error`` holds
    the human-readable message when ``success`` is False.
    """

    success: bool
    result: Optional[str] = None
    error: Optional[str] = None
    tool_name: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    execution_time_ms: Optional[float] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_mcp_content(self) -> Dict[str, Any]:
        """Render as an MCP ``tools/call`` result payload."""
        if self.success:
            return {"content": [{"type": "text", "text": self.result or ""}], "isError": False}
        return {
            "content": [{"type": "text", "text": f"Error: {self.error or 'Unknown error'}"}],
            "isError": True,
        }
