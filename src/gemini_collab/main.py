"""
Main MCP server implementation that wires the connection manager, tools and transport.
"""

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from . import __version__
from .core.context import ToolContext
from .core.executor import ToolExecutor
from .core.registry import ToolRegistry
from .errors import GeminiConnectionError
from .json_rpc import JsonRpcServer, create_result_response
from .models.base import ToolOutput
from .models.manager import DEFAULT_FLASH_MODEL, DEFAULT_PRO_MODEL, ConnectionManager

logger = logging.getLogger(__name__)

SERVER_NAME = "gemini-collab-mcp"
PROTOCOL_VERSION = "2024-11-05"
DEFAULT_LOG_DIR = "~/.claude-mcp-servers/gemini-collab/logs"

ENV_HELP = f"""
Environment Variables:
  GEMINI_API_KEY          (required) Your Google Gemini API key
  GEMINI_PRO_MODEL        (optional) Pro model variant, default {DEFAULT_PRO_MODEL}
  GEMINI_FLASH_MODEL      (optional) Flash model variant, default {DEFAULT_FLASH_MODEL}
  GEMINI_CONNECT_TIMEOUT  (optional) Per-attempt connection timeout in ms, default 10000
  VERBOSE                 (optional) Set to "true" to enable verbose logging
  QUIET                   (optional) Set to "true" to enable quiet mode
  GEMINI_COLLAB_LOG_DIR   (optional) Log directory, default {DEFAULT_LOG_DIR}
"""


class GeminiCollabServer:
    """Main MCP Server that integrates all modular components."""

    def __init__(self, connection: Optional[ConnectionManager] = None):
        self.connection = connection or ConnectionManager()
        self.tool_registry = ToolRegistry()
        self.context = ToolContext(
            connection=self.connection, registry=self.tool_registry, version=__version__
        )
        self.executor = ToolExecutor(self.tool_registry, self.context)
        self.context.executor = self.executor

        self.server = JsonRpcServer(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up JSON-RPC handlers."""
        self.server.register_handler("initialize", self.handle_initialize)
        self.server.register_handler("notifications/initialized", self.handle_initialized)
        self.server.register_handler("ping", self.handle_ping)
        self.server.register_handler("tools/list", self.handle_tools_list)
        self.server.register_handler("tools/call", self.handle_tool_call)

    def handle_initialize(self, request_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle initialization request."""
        client = params.get("clientInfo", {}) if isinstance(params, dict) else {}
        logger.info(f"Host connected: {client.get('name', 'unknown')} {client.get('version', '')}")

        return create_result_response(
            request_id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}},
            },
        )

    def handle_initialized(self, request_id: Any, params: Dict[str, Any]) -> None:
        logger.info("Host finished initialization")

    def handle_ping(self, request_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        return create_result_response(request_id, {})

    def handle_tools_list(self, request_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle tool list request."""
        tools = [
            {
                "name": tool_def["name"],
                "description": tool_def["description"],
                "inputSchema": tool_def["inputSchema"],
            }
            for tool_def in self.tool_registry.get_mcp_tool_definitions()
        ]
        return create_result_response(request_id, {"tools": tools})

    async def handle_tool_call(self, request_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle tool execution request."""
        tool_name = params.get("name", "") if isinstance(params, dict) else ""
        if not tool_name:
            output = ToolOutput(success=False, error="Tool name is required")
        else:
            output = await self.executor.execute_tool(tool_name, params.get("arguments"))

        return create_result_response(request_id, output.to_mcp_content())

    async def start(self) -> None:
        """Validate the Gemini connection, register tools, then serve stdio.

        Raises:
            GeminiConnectionError: If the connection could not be established.
                Nothing is read from stdin in that case.
        """
        logger.info(f"Starting Gemini Collaboration MCP Server v{__version__}")
        await self.connection.initialize()

        self.tool_registry.discover_tools()
        logger.info(f"Registered {len(self.tool_registry.list_tools())} tools")

        await self.server.serve()


def load_env_file() -> Optional[str]:
    """Load the first .env file found; returns its path, if any."""
    # Directory of the entry point, its parent, the cwd, then this package
    main_dir = os.path.dirname(os.path.abspath(sys.argv[0]))
    env_locations = [
        os.path.join(main_dir, ".env"),
        os.path.join(os.path.dirname(main_dir), ".env"),
        os.path.join(os.getcwd(), ".env"),
        os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"),
    ]

    for env_path in env_locations:
        if os.path.exists(env_path):
            load_dotenv(env_path)
            return env_path
    return None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gemini-collab-mcp",
        description="Gemini Collaboration MCP Server - lets Claude query and brainstorm with Gemini",
        epilog=ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (shows all prompts and responses)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Run in quiet mode (minimal logging)"
    )
    return parser.parse_args(argv)


def resolve_log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Flags win over environment; verbose wins over quiet."""
    if verbose or os.getenv("VERBOSE", "").lower() == "true":
        return logging.DEBUG
    if quiet or os.getenv("QUIET", "").lower() == "true":
        return logging.WARNING
    return logging.INFO


def configure_logging(level: int) -> str:
    """Log to stderr and a rotating file. Returns the log file path."""
    log_dir = os.path.expanduser(os.getenv("GEMINI_COLLAB_LOG_DIR", DEFAULT_LOG_DIR))
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "gemini-collab-mcp.log")

    # stdout carries JSON-RPC only
    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stderr),
        RotatingFileHandler(
            log_file,
            mode="a",
            encoding="utf-8",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        ),
    ]

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    return log_file


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_args(argv)
    env_path = load_env_file()

    level = resolve_log_level(args.verbose, args.quiet)
    log_file = configure_logging(level)
    logger.info(f"Logging to file: {log_file} (level: {logging.getLevelName(level)})")
    if env_path:
        logger.info(f"Loaded .env from {env_path}")

    try:
        server = GeminiCollabServer()
        asyncio.run(server.start())
    except GeminiConnectionError as e:
        logger.error(f"Failed to start Gemini Collaboration MCP Server: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
