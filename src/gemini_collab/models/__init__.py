"""Data models for the Gemini collaboration server."""

from .base import ToolOutput
from .manager import ConnectionManager, ConnectionState, ModelVariant
from .session import (
    BrainstormRound,
    ErrorKind,
    OrchestratorError,
    PromptContext,
    SessionResult,
    parse_history,
)

__all__ = [
    "BrainstormRound",
    "ConnectionManager",
    "ConnectionState",
    "ErrorKind",
    "ModelVariant",
    "OrchestratorError",
    "PromptContext",
    "SessionResult",
    "ToolOutput",
    "parse_history",
]
