"""Tools for the Gemini collaboration server."""

from .analyze import AnalyzeTool
from .base import MCPTool, ToolOutput
from .brainstorm import BrainstormSynthesisTool, BrainstormTool
from .image_gen import ImageGenTool
from .query import QueryTool
from .server_info import ServerInfoTool
from .summarize import SummarizeTool

__all__ = [
    "MCPTool",
    "ToolOutput",
    "AnalyzeTool",
    "BrainstormTool",
    "BrainstormSynthesisTool",
    "ImageGenTool",
    "QueryTool",
    "ServerInfoTool",
    "SummarizeTool",
]
