"""Exception hierarchy for the Gemini collaboration server."""

from typing import Optional


class GeminiCollabError(Exception):
    """Base exception for all server errors."""


class GeminiConnectionError(GeminiCollabError):
    """Raised when the upstream connection cannot be established at startup."""


class MissingCredentialError(GeminiConnectionError):
    """Raised when GEMINI_API_KEY is not set."""

    def __init__(self, message: str = "GEMINI_API_KEY environment variable is required"):
        super().__init__(message)


class ConnectionExhaustedError(GeminiConnectionError):
    """Raised when every validation attempt failed."""

    def __init__(self, attempts: int, last_error: str):
        super().__init__(
            f"Failed to connect to Gemini API after {attempts} attempts: {last_error}"
        )
        self.attempts = attempts
        self.last_error = last_error


class GenerationError(GeminiCollabError):
    """Base exception for per-call generation failures."""

    def __init__(self, message: str, model: str = ""):
        super().__init__(message)
        self.model = model


class ConnectionNotReadyError(GenerationError):
    """Raised when a generation call arrives before initialization completed."""


class UpstreamError(GenerationError):
    """Raised when the Gemini API call itself fails."""

    def __init__(self, message: str, model: str = "", cause: Optional[BaseException] = None):
        super().__init__(message, model)
        self.cause = cause


class InvalidInputError(GeminiCollabError):
    """Raised when a caller supplies malformed parameters."""


class MissingInputError(InvalidInputError):
    """Raised when a required caller input is absent."""
