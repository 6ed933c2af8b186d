"""Summarization tool."""

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..errors import GenerationError
from ..models.manager import ModelVariant
from .base import MCPTool, ToolOutput

if TYPE_CHECKING:
    from ..core.context import ToolContext

logger = logging.getLogger(__name__)

LENGTHS = {
    "brief": "Keep it brief: a few sentences capturing only the essentials.",
    "detailed": "Be thorough: cover every main point and the important supporting details.",
}
FORMATS = {
    "paragraph": "Write the summary as prose paragraphs.",
    "bullets": "Write the summary as a bulleted list.",
}


class SummarizeTool(MCPTool):
    """Tool for Gemini summaries. Uses the Flash model."""

    @property
    def name(self) -> str:
        return "gemini-summarize"

    @property
    def description(self) -> str:
        return "Summarize content with Gemini"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "The content to summarize"},
                "length": {
                    "type": "string",
                    "enum": list(LENGTHS),
                    "default": "brief",
                    "description": "How long the summary should be",
                },
                "format": {
                    "type": "string",
                    "enum": list(FORMATS),
                    "default": "paragraph",
                    "description": "How the summary should be laid out",
                },
            },
            "required": ["content"],
        }

    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        content = parameters.get("content")
        if not content:
            return self.invalid_input("Content is required for summarization")

        length = parameters.get("length") or "brief"
        layout = parameters.get("format") or "paragraph"
        if length not in LENGTHS:
            return self.invalid_input(f"Length must be one of: {', '.join(LENGTHS)}")
        if layout not in FORMATS:
            return self.invalid_input(f"Format must be one of: {', '.join(FORMATS)}")

        prompt = f"""Please summarize the following content.

{LENGTHS[length]}
{FORMATS[layout]}

---
{content}
---"""

        try:
            response = await context.connection.generate(ModelVariant.FLASH, prompt)
        except GenerationError as e:
            return self.upstream_failure(e)

        return ToolOutput(success=True, result=response, tool_name=self.name)
