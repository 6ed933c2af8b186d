"""Analysis tool for code, text and data."""

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..errors import GenerationError
from ..models.manager import ModelVariant
from .base import MCPTool, ToolOutput

if TYPE_CHECKING:
    from ..core.context import ToolContext

logger = logging.getLogger(__name__)

ANALYSIS_FOCUS = {
    "code": (
        "Examine structure, correctness, potential bugs, security concerns, "
        "performance and maintainability."
    ),
    "text": "Examine the main arguments, structure, tone, clarity and any gaps in reasoning.",
    "data": "Examine patterns, trends, outliers, data quality issues and notable correlations.",
}


class AnalyzeTool(MCPTool):
    """Tool for Gemini analysis."""

    @property
    def name(self) -> str:
        return "gemini-analyze"

    @property
    def description(self) -> str:
        return "Have Gemini analyze code, text or data"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "The content to analyze"},
                "type": {
                    "type": "string",
                    "enum": list(ANALYSIS_FOCUS),
                    "default": "text",
                    "description": "What kind of content this is",
                },
                "question": {
                    "type": "string",
                    "description": "Optional specific question to focus the analysis on",
                },
            },
            "required": ["content"],
        }

    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        content = parameters.get("content")
        if not content:
            return self.invalid_input("Content is required for analysis")

        content_type = parameters.get("type") or "text"
        if content_type not in ANALYSIS_FOCUS:
            return self.invalid_input(
                f"Type must be one of: {', '.join(ANALYSIS_FOCUS)}"
            )

        prompt = self._build_prompt(content, content_type, parameters.get("question", ""))

        try:
            response = await context.connection.generate(ModelVariant.PRO, prompt)
        except GenerationError as e:
            return self.upstream_failure(e)

        return ToolOutput(success=True, result=response, tool_name=self.name)

    def _build_prompt(self, content: str, content_type: str, question: str) -> str:
        """Build the analysis prompt."""
        question_text = f"\nSpecifically, answer this question:\n{question}\n" if question else ""

        return f"""Please analyze the following {content_type}:

---
{content}
---

{ANALYSIS_FOCUS[content_type]}
{question_text}
Provide:
1. A short overview
2. Key observations
3. Problems or risks found (if any)
4. Concrete recommendations"""
