# =============================================================================
# Google Gemini API client
# =============================================================================
# Sends prompts to Gemini and returns the raw completion text.
#
# Features:
#   - text generation (generate_text)
#   - multi-turn chat flattened into a transcript (chat)
#   - retries with exponential backoff (tenacity)
#   - health check
#
# Settings (Django settings, falling back to environment variables):
#   - GEMINI_API_KEY: API key from Google AI Studio
#   - AI_DEFAULT_MODEL: model name (default gemini-2.5-flash)
#   - AI_DISABLE_LLM / AI_DISABLE_EXTERNAL: disable all calls when true
#
# Usage:
#   client = GeminiClient()
#   if client.available():
#       text = client.generate_text("Return JSON only: ...")
#
# Failures are raised, never swallowed: the caller maps them to responses.
# =============================================================================

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from google import genai
from google.genai import types as genai_types
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from roadmap_ai.ai_core.common.errors import LLMNotConfiguredError, LLMRequestError

# =============================================================================
# Logger
# =============================================================================
logger = logging.getLogger(__name__)


# =============================================================================
# Enums
# =============================================================================

class GeminiModel(str, Enum):
    """
    Supported Gemini models.

    Example:
        >>> client = GeminiClient(model=GeminiModel.PRO_25)
    """

    FLASH_25 = "gemini-2.5-flash"
    """Gemini 2.5 Flash - fast, general purpose (default)."""

    PRO_25 = "gemini-2.5-pro"
    """Gemini 2.5 Pro - higher quality reasoning."""

    FLASH_20 = "gemini-2.0-flash"
    """Gemini 2.0 Flash - stable fast responses."""

    FLASH_15 = "gemini-1.5-flash"
    """Gemini 1.5 Flash - legacy."""


# =============================================================================
# Configuration dataclass
# =============================================================================

@dataclass
class GenerationConfig:
    """
    Text generation parameters.

    Attributes:
        temperature (float):
            Randomness of the output (0.0~2.0).
        top_p (float):
            Nucleus sampling threshold (0.0~1.0).
        top_k (int):
            Sample from the top k tokens only. 0 disables it.
        max_output_tokens (int):
            Upper bound on generated tokens.
        response_mime_type (Optional[str]):
            "application/json" asks the model for JSON-only output.
        stop_sequences (List[str]):
            Strings that stop generation.

    Example:
        >>> config = GenerationConfig(temperature=0.3, max_output_tokens=2000)
        >>> text = client.generate_text(prompt, config=config)
    """

    temperature: float = 0.7
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 2048
    response_mime_type: Optional[str] = None
    stop_sequences: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to GenerateContentConfig keyword arguments."""
        config: Dict[str, Any] = {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_output_tokens": self.max_output_tokens,
        }
        if self.top_k > 0:
            config["top_k"] = self.top_k
        if self.response_mime_type:
            config["response_mime_type"] = self.response_mime_type
        if self.stop_sequences:
            config["stop_sequences"] = self.stop_sequences
        return config


JSON_GENERATION_CONFIG = GenerationConfig(response_mime_type="application/json")
"""Default config for prompts that must answer with a JSON object."""


# =============================================================================
# Retry decorator
# =============================================================================

def create_retry_decorator(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
) -> Callable:
    """
    Build a tenacity retry decorator for transient transport failures.

    Args:
        max_attempts: Maximum number of attempts.
        min_wait: Minimum backoff in seconds.
        max_wait: Maximum backoff in seconds.

    Returns:
        Callable: Decorator retrying ConnectionError/TimeoutError.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type((ConnectionError, TimeoutError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def _setting(name: str, default: Any = None) -> Any:
    """Read a Django setting, falling back to the environment."""
    from django.conf import settings

    if settings.configured and hasattr(settings, name):
        return getattr(settings, name)
    return os.getenv(name, default)


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").lower() == "true"


# =============================================================================
# Gemini client
# =============================================================================

class GeminiClient:
    """
    Google Gemini API client.

    Attributes:
        model_name (str): Model in use.
        is_available (bool): Whether calls can be made.

    Example:
        >>> client = GeminiClient()
        >>> client.generate_text("Hello!")
        'Hello! How can I help you today?'
    """

    DEFAULT_MODEL = GeminiModel.FLASH_25
    DEFAULT_TIMEOUT = 30
    DEFAULT_MAX_RETRIES = 3

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Union[str, GeminiModel, None] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
    ) -> None:
        """
        Args:
            api_key:
                Gemini API key. Defaults to the GEMINI_API_KEY setting.
            model:
                Model name (GeminiModel or str). Defaults to AI_DEFAULT_MODEL.
            timeout:
                Request timeout in seconds.
            max_retries:
                Attempts for transient failures.
        """
        self._api_key = api_key or _setting("GEMINI_API_KEY", "") or ""

        model = model or _setting("AI_DEFAULT_MODEL") or self.DEFAULT_MODEL
        self._model = model.value if isinstance(model, GeminiModel) else str(model)

        self._timeout = int(timeout or _setting("AI_TIMEOUT") or self.DEFAULT_TIMEOUT)
        self._max_retries = int(max_retries or _setting("AI_MAX_RETRIES") or self.DEFAULT_MAX_RETRIES)

        self._disabled = _flag(_setting("AI_DISABLE_LLM", "")) or _flag(_setting("AI_DISABLE_EXTERNAL", ""))

        self._client: Optional[Any] = None
        if self._api_key and not self._disabled:
            try:
                self._client = genai.Client(
                    api_key=self._api_key,
                    http_options=genai_types.HttpOptions(timeout=self._timeout * 1000),
                )
                logger.info("Gemini client initialized", extra={"model": self._model})
            except Exception as e:
                logger.error("Gemini client initialization failed", extra={"error": str(e)})
                self._client = None
        elif self._disabled:
            logger.info("Gemini client disabled by settings")
        else:
            logger.warning("GEMINI_API_KEY is not set; AI features are unavailable")

        self._execute_with_retry = create_retry_decorator(
            max_attempts=self._max_retries,
        )(self._execute_generation)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def is_available(self) -> bool:
        """True when an SDK client exists and calls are not disabled."""
        return self._client is not None and not self._disabled

    def available(self) -> bool:
        """Method form of is_available."""
        return self.is_available

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_text(
        self,
        contents: str,
        config: Optional[GenerationConfig] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        """
        Generate a completion for a prompt.

        Args:
            contents:
                Prompt text.
            config:
                Generation parameters. None uses the model defaults.
            system_instruction:
                Persona/role instruction.

        Returns:
            str: Raw completion text (may be empty).

        Raises:
            LLMNotConfiguredError: No API key, or calls are disabled.
            LLMRequestError: The API call failed after retries.
        """
        if not self.is_available:
            raise LLMNotConfiguredError("GEMINI_API_KEY is not configured")

        start_time = time.time()
        try:
            result = self._execute_with_retry(
                contents=contents,
                config=config,
                system_instruction=system_instruction,
            )
        except Exception as e:
            logger.error(
                "Gemini generation failed",
                extra={"error": str(e), "model": self._model},
                exc_info=True,
            )
            raise LLMRequestError(f"Gemini request failed: {e}") from e

        logger.debug(
            "Gemini generation finished",
            extra={
                "model": self._model,
                "elapsed_seconds": round(time.time() - start_time, 2),
                "response_length": len(result),
            },
        )
        return result

    def _execute_generation(
        self,
        contents: str,
        config: Optional[GenerationConfig] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        """Single SDK call; wrapped by the retry decorator."""
        generation_config = config.to_dict() if config else None

        response = self._client.models.generate_content(
            model=self._model,
            contents=contents,
            config=genai_types.GenerateContentConfig(
                system_instruction=system_instruction,
                **(generation_config or {}),
            ) if (system_instruction or generation_config) else None,
        )
        return getattr(response, "text", "") or ""

    def chat(
        self,
        messages: List[Dict[str, str]],
        config: Optional[GenerationConfig] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        """
        Answer a conversation.

        Args:
            messages:
                History as [{"role": "user"|"assistant", "content": "..."}].
            config:
                Generation parameters.
            system_instruction:
                Persona/role instruction.

        Returns:
            str: Assistant reply.
        """
        conversation = []
        for msg in messages:
            prefix = "User: " if msg.get("role", "user") == "user" else "Assistant: "
            conversation.append(f"{prefix}{msg.get('content', '')}")

        full_prompt = "\n\n".join(conversation) + "\n\nAssistant: "

        return self.generate_text(
            contents=full_prompt,
            config=config,
            system_instruction=system_instruction,
        )

    # -------------------------------------------------------------------------
    # Utilities
    # -------------------------------------------------------------------------

    def health_check(self) -> Dict[str, Any]:
        """
        Returns:
            Dict[str, Any]: Availability, model and configuration flags.
        """
        return {
            "available": self.is_available,
            "model": self._model,
            "api_key_set": bool(self._api_key),
            "disabled": self._disabled,
            "timeout": self._timeout,
            "max_retries": self._max_retries,
        }

    def __repr__(self) -> str:
        return f"GeminiClient(model={self._model!r}, available={self.is_available})"
