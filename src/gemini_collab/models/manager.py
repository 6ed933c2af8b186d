"""Connection manager for the Gemini Pro and Flash model handles."""

import asyncio
import logging
import os
from enum import Enum
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from ..errors import (
    ConnectionExhaustedError,
    ConnectionNotReadyError,
    GeminiConnectionError,
    InvalidInputError,
    MissingCredentialError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

DEFAULT_PRO_MODEL = "gemini-2.5-pro-preview-03-25"
DEFAULT_FLASH_MODEL = "gemini-2.5-flash-preview-04-17"

VALIDATION_PROMPT = "Test connection"
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_ATTEMPT_TIMEOUT = 10.0
DEFAULT_RETRY_DELAY = 2.0

CHAT_ROLES = ("user", "model")


class ModelVariant(str, Enum):
    """The two configured model handles."""

    PRO = "pro"
    FLASH = "flash"


class ConnectionState(Enum):
    """Lifecycle of the upstream connection."""

    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


def _timeout_from_env() -> float:
    """Read the per-attempt validation timeout (milliseconds) from the environment."""
    try:
        return int(os.getenv("GEMINI_CONNECT_TIMEOUT", "10000")) / 1000
    except ValueError:
        logger.warning("Invalid GEMINI_CONNECT_TIMEOUT, using default 10 seconds")
        return DEFAULT_ATTEMPT_TIMEOUT


class ConnectionManager:
    """Owns the Gemini model handles and validates reachability at startup.

    The handles are created once by :meth:`initialize` and are read-only
    afterwards, so concurrent tool calls can share one manager without locking.
    Only the initialization transition is serialized.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        pro_model: Optional[str] = None,
        flash_model: Optional[str] = None,
        attempt_timeout: Optional[float] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ):
        """Configure the manager.

        Args:
            api_key: Gemini API key. If None, reads from GEMINI_API_KEY.
            pro_model: Pro model id. If None, reads from GEMINI_PRO_MODEL.
            flash_model: Flash model id. If None, reads from GEMINI_FLASH_MODEL.
            attempt_timeout: Seconds allowed per validation attempt. If None,
                reads GEMINI_CONNECT_TIMEOUT (milliseconds), default 10 seconds.
            max_attempts: Validation attempts before giving up.
            retry_delay: Seconds to wait after a failed attempt.
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        self.pro_model_name = pro_model or os.getenv("GEMINI_PRO_MODEL") or DEFAULT_PRO_MODEL
        self.flash_model_name = (
            flash_model or os.getenv("GEMINI_FLASH_MODEL") or DEFAULT_FLASH_MODEL
        )
        self.attempt_timeout = (
            attempt_timeout if attempt_timeout is not None else _timeout_from_env()
        )
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

        self._models: Dict[ModelVariant, Any] = {}
        self._state = ConnectionState.UNINITIALIZED
        self._init_lock = asyncio.Lock()

        self.connect_attempts = 0
        self.call_stats = {
            "pro_success": 0,
            "pro_failure": 0,
            "flash_success": 0,
            "flash_failure": 0,
            "total_calls": 0,
        }

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ConnectionState.READY

    def model_name(self, variant: ModelVariant) -> str:
        if variant is ModelVariant.PRO:
            return self.pro_model_name
        return self.flash_model_name

    def _set_state(self, state: ConnectionState) -> None:
        logger.info(f"Connection state: {self._state.value} -> {state.value}")
        self._state = state

    async def initialize(self) -> None:
        """Create the model handles and validate the connection.

        Raises:
            MissingCredentialError: If no API key is configured.
            ConnectionExhaustedError: If every validation attempt failed.
            GeminiConnectionError: If the model handles could not be created.
        """
        async with self._init_lock:
            if self._state is ConnectionState.READY:
                logger.debug("Connection already initialized")
                return

            self._set_state(ConnectionState.CONNECTING)

            if not self.api_key:
                logger.error("No GEMINI_API_KEY found in environment")
                self._set_state(ConnectionState.FAILED)
                raise MissingCredentialError()

            try:
                self._models = self._create_models()
                await self._validate_with_retry()
            except GeminiConnectionError:
                self._models = {}
                self._set_state(ConnectionState.FAILED)
                raise

            self._set_state(ConnectionState.READY)

    def _create_models(self) -> Dict[ModelVariant, Any]:
        """Configure the SDK and build both model handles."""
        try:
            genai.configure(api_key=self.api_key)
            models = {
                ModelVariant.PRO: genai.GenerativeModel(self.pro_model_name),
                ModelVariant.FLASH: genai.GenerativeModel(self.flash_model_name),
            }
        except Exception as e:
            logger.error(f"Failed to initialize Gemini models: {e}")
            raise GeminiConnectionError(f"Failed to initialize Gemini models: {e}") from e

        logger.info(f"Pro model initialized: {self.pro_model_name}")
        logger.info(f"Flash model initialized: {self.flash_model_name}")
        return models

    async def _validate_with_retry(self) -> None:
        flash = self._models[ModelVariant.FLASH]
        last_error = "unknown error"

        for attempt in range(1, self.max_attempts + 1):
            self.connect_attempts = attempt
            logger.info(f"Connecting to Gemini API (attempt {attempt}/{self.max_attempts})...")

            try:
                await self._validate_once(flash)
            except asyncio.TimeoutError:
                last_error = f"Connection timeout after {self.attempt_timeout}s"
            except Exception as e:
                last_error = str(e) or type(e).__name__
            else:
                logger.info("Successfully connected to Gemini API")
                return

            logger.warning(f"Connection attempt {attempt} failed: {last_error}")
            if attempt < self.max_attempts:
                await asyncio.sleep(self.retry_delay)

        logger.error(f"Giving up on Gemini API after {self.max_attempts} attempts")
        raise ConnectionExhaustedError(self.max_attempts, last_error)

    async def _validate_once(self, model: Any) -> None:
        # wait_for cancels the pending call on timeout, so a late reply is dropped
        response = await asyncio.wait_for(
            model.generate_content_async(VALIDATION_PROMPT), timeout=self.attempt_timeout
        )
        if not response:
            raise UpstreamError(
                "Failed to connect to Gemini API: empty response", model=self.flash_model_name
            )

    def _require_model(self, variant: ModelVariant) -> Any:
        if self._state is not ConnectionState.READY:
            raise ConnectionNotReadyError(
                f"Gemini connection is not ready (state: {self._state.value})",
                model=self.model_name(variant),
            )
        return self._models[variant]

    def _upstream_failure(self, variant: ModelVariant, error: Exception) -> UpstreamError:
        model_name = self.model_name(variant)
        self.call_stats[f"{variant.value}_failure"] += 1

        error_type = type(error).__name__
        logger.error(f"Error generating content with {model_name}: {error_type}: {error}")
        if isinstance(error, google_exceptions.GoogleAPICallError):
            logger.error(f"Error code: {error.code}")

        return UpstreamError(f"{error_type}: {error}", model=model_name, cause=error)

    async def generate(self, variant: ModelVariant, prompt: str) -> str:
        """Send a single prompt to the selected model and return its text.

        No retry is attempted; the caller decides what to do with a failure.

        Raises:
            ConnectionNotReadyError: If initialize() has not completed.
            UpstreamError: If the API call fails or the response has no text.
        """
        model = self._require_model(variant)
        self.call_stats["total_calls"] += 1
        logger.debug(f"Prompt to {self.model_name(variant)}:\n{prompt}")

        try:
            response = await model.generate_content_async(prompt)
            text = response.text
        except Exception as e:
            raise self._upstream_failure(variant, e) from e

        self.call_stats[f"{variant.value}_success"] += 1
        logger.debug(f"Response from {self.model_name(variant)}:\n{text}")
        return text

    async def generate_chat(
        self, messages: List[Dict[str, str]], variant: ModelVariant = ModelVariant.PRO
    ) -> str:
        """Continue a structured chat and return the model's reply.

        Args:
            messages: Alternating ``{"role": "user"|"model", "content": str}``
                turns. Everything but the last turn is replayed as chat history;
                the last turn must come from the user and is the one answered.

        Raises:
            InvalidInputError: If the message list is empty or malformed.
            ConnectionNotReadyError: If initialize() has not completed.
            UpstreamError: If the API call fails.
        """
        if not messages:
            raise InvalidInputError("At least one chat message is required")
        for message in messages:
            if (
                not isinstance(message, dict)
                or message.get("role") not in CHAT_ROLES
                or not isinstance(message.get("content"), str)
            ):
                raise InvalidInputError(
                    "Each chat message needs a role of 'user' or 'model' and text content"
                )
        if messages[-1]["role"] != "user":
            raise InvalidInputError("The last chat message must come from the user")

        model = self._require_model(variant)
        self.call_stats["total_calls"] += 1

        history = [{"role": m["role"], "parts": [m["content"]]} for m in messages[:-1]]
        logger.debug(f"Chat with {self.model_name(variant)} ({len(history)} prior turns)")
        logger.debug(f"Prompt to {self.model_name(variant)}:\n{messages[-1]['content']}")

        try:
            chat = model.start_chat(history=history)
            response = await chat.send_message_async(messages[-1]["content"])
            text = response.text
        except Exception as e:
            raise self._upstream_failure(variant, e) from e

        self.call_stats[f"{variant.value}_success"] += 1
        logger.debug(f"Response from {self.model_name(variant)}:\n{text}")
        return text

    def get_status(self) -> Dict[str, Any]:
        """Get current connection status."""
        return {
            "state": self._state.value,
            "pro": {"name": self.pro_model_name, "available": ModelVariant.PRO in self._models},
            "flash": {
                "name": self.flash_model_name,
                "available": ModelVariant.FLASH in self._models,
            },
            "attempt_timeout_seconds": self.attempt_timeout,
            "connect_attempts": self.connect_attempts,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get usage statistics."""
        total_pro = self.call_stats["pro_success"] + self.call_stats["pro_failure"]
        total_flash = self.call_stats["flash_success"] + self.call_stats["flash_failure"]

        return {
            "total_calls": self.call_stats["total_calls"],
            "pro_success_rate": self.call_stats["pro_success"] / max(1, total_pro),
            "flash_success_rate": self.call_stats["flash_success"] / max(1, total_flash),
            "raw_stats": dict(self.call_stats),
        }
