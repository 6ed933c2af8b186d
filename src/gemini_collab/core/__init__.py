"""Core components for tool discovery and execution."""

from .context import ToolContext
from .executor import ToolExecutor
from .registry import ToolRegistry

__all__ = ["ToolContext", "ToolExecutor", "ToolRegistry"]
