# =============================================================================
# External AI clients
# =============================================================================
# Usage:
#   from roadmap_ai.ai_core.client import GeminiClient
#
#   gemini = GeminiClient()
#   text = gemini.generate_text("Hello!")
# =============================================================================

from __future__ import annotations

from roadmap_ai.ai_core.client.gemini_client import (
    GeminiClient,
    GeminiModel,
    GenerationConfig,
    JSON_GENERATION_CONFIG,
)

__all__ = [
    "GeminiClient",
    "GeminiModel",
    "GenerationConfig",
    "JSON_GENERATION_CONFIG",
]
