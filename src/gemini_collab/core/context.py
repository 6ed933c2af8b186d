"""Shared context handed to every tool call."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from ..models.manager import ConnectionManager

if TYPE_CHECKING:
    from .executor import ToolExecutor
    from .registry import ToolRegistry


@dataclass
class ToolContext:
    """Created once at startup and passed by reference into each tool.

    Tools only read from it; the connection manager's handles are read-only
    once it is ready.
    """

    connection: ConnectionManager
    registry: "ToolRegistry"
    version: str
    started_at: datetime = field(default_factory=datetime.now)
    executor: Optional["ToolExecutor"] = None
