"""Tool for asking Gemini a direct question."""

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..errors import GenerationError, InvalidInputError
from ..models.manager import ModelVariant
from .base import MCPTool, ToolOutput

if TYPE_CHECKING:
    from ..core.context import ToolContext

logger = logging.getLogger(__name__)


class QueryTool(MCPTool):
    """Tool for Gemini queries."""

    @property
    def name(self) -> str:
        return "gemini-query"

    @property
    def description(self) -> str:
        return "Ask Gemini a question, optionally continuing an earlier exchange"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "The question or prompt to send to Gemini",
                },
                "model": {
                    "type": "string",
                    "enum": [variant.value for variant in ModelVariant],
                    "default": ModelVariant.PRO.value,
                    "description": "Which Gemini model to use",
                },
                "history": {
                    "type": "array",
                    "description": "Optional earlier turns of this exchange, oldest first",
                    "items": {
                        "type": "object",
                        "properties": {
                            "role": {"type": "string", "enum": ["user", "model"]},
                            "content": {"type": "string"},
                        },
                        "required": ["role", "content"],
                    },
                },
            },
            "required": ["prompt"],
        }

    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        prompt = parameters.get("prompt")
        if not prompt:
            return self.invalid_input("Prompt is required")

        try:
            variant = ModelVariant(parameters.get("model") or ModelVariant.PRO.value)
        except ValueError:
            return self.invalid_input("Model must be 'pro' or 'flash'")

        history = parameters.get("history") or []
        if not isinstance(history, list):
            return self.invalid_input("History must be a list of chat turns")

        try:
            if history:
                messages = [*history, {"role": "user", "content": prompt}]
                response = await context.connection.generate_chat(messages, variant)
            else:
                response = await context.connection.generate(variant, prompt)
        except InvalidInputError as e:
            return self.invalid_input(str(e))
        except GenerationError as e:
            return self.upstream_failure(e)

        return ToolOutput(
            success=True,
            result=response,
            tool_name=self.name,
            metadata={"model": context.connection.model_name(variant)},
        )
