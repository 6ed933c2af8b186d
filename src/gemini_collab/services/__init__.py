"""Service components for the Gemini collaboration server."""

from .brainstorm import BrainstormOrchestrator

__all__ = ["BrainstormOrchestrator"]
