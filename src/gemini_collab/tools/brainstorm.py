"""Collaborative brainstorming tools: per-round discussion and final synthesis."""

import logging
from typing import TYPE_CHECKING, Any, Dict

from ..errors import InvalidInputError
from ..models.session import ErrorKind, SessionResult, parse_history
from ..services.brainstorm import BrainstormOrchestrator
from .base import MCPTool, ToolOutput

if TYPE_CHECKING:
    from ..core.context import ToolContext

logger = logging.getLogger(__name__)

HISTORY_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "round": {"type": "integer"},
            "claudeInput": {"type": "string"},
            "geminiResponse": {"type": "string"},
        },
        "required": ["round", "claudeInput", "geminiResponse"],
    },
}


def _to_output(tool: MCPTool, outcome: SessionResult) -> ToolOutput:
    if outcome.ok:
        return ToolOutput(success=True, result=outcome.text, tool_name=tool.name)

    error = outcome.error
    if error.kind is ErrorKind.INVALID_INPUT:
        return tool.invalid_input(error.message)

    if error.cause is not None:
        output = tool.upstream_failure(error.cause)
    else:
        output = ToolOutput(
            success=False, error=f"Gemini request failed: {error.message}", tool_name=tool.name
        )
    output.metadata["error_kind"] = error.kind.value
    return output


class BrainstormTool(MCPTool):
    """One round of a multi-round brainstorming session with Gemini."""

    @property
    def name(self) -> str:
        return "gemini-brainstorm"

    @property
    def description(self) -> str:
        return (
            "Brainstorm a plan together with Gemini over several rounds. Start with round 1, "
            "then pass your own perspective as claudeInput and every previous round as history."
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "The problem statement or query to brainstorm about",
                },
                "round": {
                    "type": "integer",
                    "minimum": 1,
                    "default": 1,
                    "description": "The current round of brainstorming",
                },
                "claudeInput": {
                    "type": "string",
                    "description": "Claude's latest perspective (required for round > 1)",
                },
                "history": {
                    **HISTORY_SCHEMA,
                    "default": [],
                    "description": "The history of previous brainstorming rounds",
                },
            },
            "required": ["prompt"],
        }

    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        prompt = parameters.get("prompt")
        if not prompt:
            return self.invalid_input("Prompt is required for brainstorming")

        round_number = parameters.get("round")
        if round_number is None:
            round_number = 1
        caller_input = parameters.get("claudeInput")

        try:
            history = parse_history(parameters.get("history") or [])
        except InvalidInputError as e:
            return self.invalid_input(str(e))

        orchestrator = BrainstormOrchestrator(context.connection)
        outcome = await orchestrator.run_round(prompt, round_number, caller_input, history)
        return _to_output(self, outcome)


class BrainstormSynthesisTool(MCPTool):
    """Final synthesis over a completed brainstorming session."""

    @property
    def name(self) -> str:
        return "gemini-brainstorm-synthesis"

    @property
    def description(self) -> str:
        return (
            "Turn a finished brainstorming session into a unified final plan: best ideas, "
            "step-by-step plan, resources, risks and a conclusion"
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "The original problem statement or query",
                },
                "history": {
                    **HISTORY_SCHEMA,
                    "minItems": 1,
                    "description": "The complete history of brainstorming rounds",
                },
            },
            "required": ["prompt", "history"],
        }

    async def execute(self, parameters: Dict[str, Any], context: "ToolContext") -> ToolOutput:
        """Execute the tool."""
        prompt = parameters.get("prompt")
        if not prompt:
            return self.invalid_input("Prompt is required for synthesis")

        try:
            history = parse_history(parameters.get("history"))
        except InvalidInputError as e:
            return self.invalid_input(str(e))

        orchestrator = BrainstormOrchestrator(context.connection)
        outcome = await orchestrator.run_synthesis(prompt, history)
        return _to_output(self, outcome)
