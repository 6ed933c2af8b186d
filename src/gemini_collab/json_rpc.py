"""
Standalone JSON-RPC 2.0 implementation for MCP servers.
Newline-delimited messages over stdio, one asyncio task per request.
"""

import asyncio
import inspect
import json
import logging
import sys
from typing import IO, Any, Callable, Dict, Optional, Set

logger = logging.getLogger(__name__)

# JSON-RPC 2.0 constants
JSONRPC_VERSION = "2.0"
ERROR_PARSE = -32700
ERROR_INVALID_REQUEST = -32600
ERROR_METHOD_NOT_FOUND = -32601
ERROR_INTERNAL = -32603


class JsonRpcRequest:
    """JSON-RPC 2.0 Request"""

    def __init__(self, data: Any):
        if not isinstance(data, dict):
            raise ValueError("Request must be a JSON object")

        self.jsonrpc = data.get("jsonrpc", JSONRPC_VERSION)
        self.method = data.get("method")
        self.params = data.get("params") or {}
        self.id = data.get("id")
        # A request without an id member is a notification and gets no reply
        self.is_notification = "id" not in data

        # Validate
        if self.jsonrpc != JSONRPC_VERSION:
            raise ValueError(f"Invalid JSON-RPC version: {self.jsonrpc}")
        if not self.method or not isinstance(self.method, str):
            raise ValueError("Missing method")
        if not isinstance(self.params, (dict, list)):
            raise ValueError("Params must be an object or array")


class JsonRpcResponse:
    """JSON-RPC 2.0 Response"""

    def __init__(self, result: Any = None, error: Optional[Dict[str, Any]] = None, id: Any = None):
        self.jsonrpc = JSONRPC_VERSION
        self.id = id
        self.result = result
        self.error = error

    def to_dict(self) -> dict:
        d = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return d


class JsonRpcError:
    """JSON-RPC 2.0 Error"""

    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict:
        d = {"code": self.code, "message": self.message}
        if self.data is not None:
            d["data"] = self.data
        return d


class JsonRpcServer:
    """
    An asynchronous JSON-RPC 2.0 server over stdio.

    Handlers receive ``(request_id, params)`` and return a complete response
    dict; they may be plain functions or coroutines. Each incoming line is
    handled in its own task so a slow tool call does not hold up the next
    request.
    """

    def __init__(
        self,
        server_name: str,
        reader: Optional[IO[str]] = None,
        writer: Optional[IO[str]] = None,
    ):
        self.server_name = server_name
        self._handlers: Dict[str, Callable] = {}
        self._running = False
        self._tasks: Set[asyncio.Task] = set()
        self._reader = reader
        self._writer = writer

    def register_handler(self, method: str, handler: Callable):
        """Register a handler for a JSON-RPC method."""
        logger.info(f"Registering handler for method: {method}")
        self._handlers[method] = handler

    async def _read_message(self) -> Optional[str]:
        """Read a single line from the input stream without blocking the loop."""
        reader = self._reader or sys.stdin
        loop = asyncio.get_running_loop()
        try:
            line = await loop.run_in_executor(None, reader.readline)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading from stdin: {e}")
            return None
        if not line:
            return None
        return line.strip()

    def _write_message(self, message: dict):
        """Write a JSON message to the output stream."""
        writer = self._writer or sys.stdout
        try:
            writer.write(json.dumps(message) + "\n")
            writer.flush()
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error writing to stdout: {e}")

    async def _process_request(self, request_str: str) -> Optional[dict]:
        """Process a single JSON-RPC message. Returns None for notifications."""
        try:
            request_data = json.loads(request_str)
        except json.JSONDecodeError as e:
            return JsonRpcResponse(
                error=JsonRpcError(ERROR_PARSE, f"Parse error: {e}").to_dict()
            ).to_dict()

        request_id = request_data.get("id") if isinstance(request_data, dict) else None
        try:
            request = JsonRpcRequest(request_data)
        except ValueError as e:
            return JsonRpcResponse(
                error=JsonRpcError(ERROR_INVALID_REQUEST, str(e)).to_dict(), id=request_id
            ).to_dict()

        handler = self._handlers.get(request.method)
        if not handler:
            if request.is_notification:
                logger.debug(f"Ignoring notification without handler: {request.method}")
                return None
            return JsonRpcResponse(
                error=JsonRpcError(
                    ERROR_METHOD_NOT_FOUND, f"Method not found: {request.method}"
                ).to_dict(),
                id=request_id,
            ).to_dict()

        try:
            result = handler(request_id, request.params)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"Handler error for {request.method}: {e}", exc_info=True)
            if request.is_notification:
                return None
            return JsonRpcResponse(
                error=JsonRpcError(ERROR_INTERNAL, f"Internal error: {str(e)}").to_dict(),
                id=request_id,
            ).to_dict()

        if request.is_notification:
            return None
        return result

    async def _dispatch(self, line: str) -> None:
        response = await self._process_request(line)
        if response is not None:
            self._write_message(response)

    async def serve(self) -> None:
        """Read requests until EOF, then wait for in-flight requests to finish."""
        logger.info(f"Starting JSON-RPC server '{self.server_name}'...")
        self._running = True

        while self._running:
            line = await self._read_message()
            if line is None:
                logger.info("EOF reached, shutting down")
                break
            if not line:
                continue

            task = asyncio.create_task(self._dispatch(line))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        if self._tasks:
            logger.info(f"Waiting for {len(self._tasks)} in-flight request(s)")
            await asyncio.gather(*self._tasks, return_exceptions=True)

        self._running = False
        logger.info("Server stopped")


def create_result_response(request_id: Any, result: Any) -> dict:
    """Create a result response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}
