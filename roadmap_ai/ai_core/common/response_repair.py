# =============================================================================
# LLM response repair
# =============================================================================
# Extracts a JSON object from a raw model completion.
#
# Two tiers only:
#   1. strict parse of the whole text
#   2. first "{" .. last "}" span (code fences, leading/trailing prose)
#
# Trailing commas, single quotes, truncated output and nesting deeper than
# the interpreter recursion limit are not repaired and raise
# MalformedResponseError.
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from roadmap_ai.ai_core.common.errors import MalformedResponseError

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 300
"""Characters of the raw completion kept in errors and logs."""


def preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """
    @param text Raw completion text.
    @param limit Maximum characters to keep.
    @returns Text truncated for logging.
    """
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def repair(raw_text: str) -> Dict[str, Any]:
    """
    Parse a model completion into a JSON object.

    Args:
        raw_text: Text returned by the generation call.

    Returns:
        Dict[str, Any]: The parsed object.

    Raises:
        MalformedResponseError: No parseable JSON object in the text.

    Example:
        >>> repair('```json\\n{"title": "A", "steps": []}\\n```')
        {'title': 'A', 'steps': []}
    """
    text = raw_text or ""

    try:
        result = json.loads(text)
        if isinstance(result, dict):
            return result
    except (json.JSONDecodeError, RecursionError):
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        logger.warning("No JSON object in model response", extra={"text_preview": preview(text)})
        raise MalformedResponseError("No JSON object found in AI response", raw_preview=preview(text))

    try:
        result = json.loads(text[start:end + 1])
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.warning(
            "JSON object in model response failed to parse",
            extra={"text_preview": preview(text), "error": str(exc)},
        )
        raise MalformedResponseError(
            f"AI response contained invalid JSON: {getattr(exc, 'msg', 'nesting too deep')}",
            raw_preview=preview(text),
        ) from exc

    return result
