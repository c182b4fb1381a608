from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from roadmap_ai.ai_core.client import GeminiClient
from roadmap_ai.ai_core.common.errors import InvalidRequestError
from roadmap_ai.ai_core.service.roadmap.prompts import CHAT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

_ROLES = {"user", "assistant"}


class ChatService:
    """Roadmap assistant conversation."""

    def __init__(self, llm_client: Optional[GeminiClient] = None) -> None:
        """
        @param llm_client Text generation client (defaults to GeminiClient()).
        @returns None
        """
        self._llm_client = llm_client or GeminiClient()

    def reply(self, messages: Any) -> str:
        """
        @param {Any} messages - Conversation as [{"role", "content"}], oldest first.
        @returns {str} Assistant reply.
        """
        history = _validate_messages(messages)
        content = self._llm_client.chat(history, system_instruction=CHAT_SYSTEM_PROMPT)
        logger.info("Chat reply generated", extra={"turns": len(history), "reply_length": len(content)})
        return content


def _validate_messages(messages: Any) -> List[Dict[str, str]]:
    if not isinstance(messages, list) or not messages:
        raise InvalidRequestError("Messages array required")

    history = []
    for message in messages:
        if not isinstance(message, dict):
            raise InvalidRequestError("Each message must be an object")
        role = message.get("role")
        content = message.get("content")
        if role not in _ROLES or not isinstance(content, str):
            raise InvalidRequestError("Each message needs a user/assistant role and text content")
        history.append({"role": role, "content": content})
    return history
