"""Data models for collaborative brainstorming rounds."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from ..errors import GenerationError, InvalidInputError


@dataclass(frozen=True)
class BrainstormRound:
    """One caller-input / model-response exchange.

    The host owns the ordered list of rounds and replays it on every call.
    """

    round_number: int
    caller_input: str
    model_response: str

    @classmethod
    def from_dict(cls, data: Any) -> "BrainstormRound":
        """Parse the wire shape ``{round, claudeInput, geminiResponse}``."""
        if not isinstance(data, dict):
            raise InvalidInputError("Each history entry must be an object")

        round_number = data.get("round")
        if isinstance(round_number, bool) or not isinstance(round_number, int):
            raise InvalidInputError("History entry 'round' must be an integer")

        caller_input = data.get("claudeInput")
        model_response = data.get("geminiResponse")
        if not isinstance(caller_input, str) or not isinstance(model_response, str):
            raise InvalidInputError(
                f"History entry for round {round_number} needs string "
                "'claudeInput' and 'geminiResponse' fields"
            )

        return cls(
            round_number=round_number,
            caller_input=caller_input,
            model_response=model_response,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round_number,
            "claudeInput": self.caller_input,
            "geminiResponse": self.model_response,
        }


def parse_history(entries: Optional[Iterable[Any]]) -> Tuple[BrainstormRound, ...]:
    """Parse a caller-supplied history list, preserving order."""
    if entries is None:
        return ()
    if not isinstance(entries, (list, tuple)):
        raise InvalidInputError("History must be a list of rounds")
    return tuple(BrainstormRound.from_dict(entry) for entry in entries)


@dataclass(frozen=True)
class PromptContext:
    """Everything one brainstorm prompt is built from. Never stored."""

    problem: str
    round_number: int
    caller_input: Optional[str] = None
    history: Tuple[BrainstormRound, ...] = ()


class ErrorKind(Enum):
    INVALID_INPUT = "invalid_input"
    UPSTREAM = "upstream"


@dataclass(frozen=True)
class OrchestratorError:
    kind: ErrorKind
    message: str
    cause: Optional[GenerationError] = field(default=None, compare=False)


@dataclass(frozen=True)
class SessionResult:
    """Outcome of one orchestrator call: either text or a structured error."""

    text: Optional[str] = None
    error: Optional[OrchestratorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> "SessionResult":
        return cls(text=text)

    @classmethod
    def invalid_input(cls, message: str) -> "SessionResult":
        return cls(error=OrchestratorError(ErrorKind.INVALID_INPUT, message))

    @classmethod
    def upstream(
        cls, message: str, cause: Optional[GenerationError] = None
    ) -> "SessionResult":
        return cls(error=OrchestratorError(ErrorKind.UPSTREAM, message, cause))
