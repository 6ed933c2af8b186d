"""Base class for all tools."""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict

from ..errors import ConnectionNotReadyError, GenerationError
from ..models.base import ToolOutput

if TYPE_CHECKING:
    from ..core.context import ToolContext

logger = logging.getLogger(__name__)

__all__ = ["MCPTool", "ToolOutput"]


class MCPTool(ABC):
    """Abstract base class for all tools using simplified property-based approach."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Return the tool description."""
        pass

    @property
    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        """Return the JSON schema for tool inputs."""
        pass

    @abstractmethod
    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        pass

    def get_mcp_definition(self) -> Dict[str, Any]:
        """Get the MCP tool definition."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    def invalid_input(self, message: str) -> ToolOutput:
        return ToolOutput(success=False, error=message, tool_name=self.name)

    def upstream_failure(self, error: GenerationError) -> ToolOutput:
        """Turn a generation failure into a tool error the host can show."""
        logger.error(f"Gemini API error in {self.name}: {error}")
        if isinstance(error, ConnectionNotReadyError):
            message = f"Gemini service unavailable: {error}"
        else:
            message = f"Gemini request failed: {error}"
        return ToolOutput(success=False, error=message, tool_name=self.name)
