"""Tool registry for dynamic tool discovery and management."""

import importlib
import inspect
import logging
from pathlib import Path
from typing import Dict, List, Optional, Type

from ..tools.base import MCPTool

logger = logging.getLogger(__name__)

TOOLS_PACKAGE = "gemini_collab.tools"


class ToolRegistry:
    """Registry for discovering and managing tools."""

    def __init__(self):
        self._tools: Dict[str, MCPTool] = {}

    def discover_tools(self, tools_path: Optional[Path] = None) -> None:
        """Discover and register all tools in the tools directory."""
        if tools_path is None:
            tools_path = Path(__file__).parent.parent / "tools"

        logger.info(f"Discovering tools in {tools_path}")

        tool_files = sorted(tools_path.glob("*.py"))
        logger.debug(f"Found {len(tool_files)} Python files in {tools_path}")

        for tool_file in tool_files:
            if tool_file.name.startswith("_") or tool_file.name == "base.py":
                continue

            module_name = f"{TOOLS_PACKAGE}.{tool_file.stem}"
            try:
                logger.debug(f"Importing {module_name}")
                module = importlib.import_module(module_name)
            except ImportError as e:
                logger.error(f"Failed to import tool from {tool_file}: {e}")
                continue

            for name, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, MCPTool)
                    and not inspect.isabstract(obj)
                    and obj.__module__ == module.__name__
                ):
                    logger.debug(f"Found tool class: {name}")
                    self._register_tool_class(obj)

    def _register_tool_class(self, tool_class: Type[MCPTool]) -> None:
        """Register a tool class."""
        try:
            tool_instance = tool_class()
        except Exception as e:
            logger.error(f"Failed to register tool {tool_class.__name__}: {e}")
            return

        self.register_tool(tool_instance)

    def register_tool(self, tool: MCPTool) -> bool:
        """Register a tool instance. Returns False if the name is taken."""
        if tool.name in self._tools:
            logger.warning(f"Tool {tool.name} already registered, skipping")
            return False

        self._tools[tool.name] = tool
        logger.info(f"Registered tool: {tool.name}")
        return True

    def get_tool(self, name: str) -> Optional[MCPTool]:
        """Get a tool instance by name."""
        return self._tools.get(name)

    def list_tools(self) -> List[str]:
        """List all registered tool names."""
        return list(self._tools.keys())

    def get_mcp_tool_definitions(self) -> List[Dict]:
        """Get MCP tool definitions for all registered tools."""
        definitions = []
        for tool in self._tools.values():
            try:
                definitions.append(tool.get_mcp_definition())
            except Exception as e:
                logger.error(f"Failed to get MCP definition for {tool.name}: {e}")
        return definitions
