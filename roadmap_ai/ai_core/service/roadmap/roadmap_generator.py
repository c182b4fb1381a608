from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from django.conf import settings

from roadmap_ai.ai_core.client import JSON_GENERATION_CONFIG, GeminiClient
from roadmap_ai.ai_core.common.errors import EmptyRoadmapError, InvalidRequestError
from roadmap_ai.ai_core.common.response_repair import preview, repair
from roadmap_ai.ai_core.domain.refined_roadmap import RefinedRoadmap
from roadmap_ai.ai_core.domain.roadmap import Roadmap
from roadmap_ai.ai_core.domain.roadmap_suggestions import RoadmapSuggestion, RoadmapSuggestions
from roadmap_ai.ai_core.service.roadmap.prompts import (
    build_refine_prompt,
    build_roadmap_prompt,
    build_suggestion_prompt,
)
from roadmap_ai.ai_core.service.roadmap.roadmap_normalizer import normalize

logger = logging.getLogger(__name__)


class RoadmapGeneratorService:
    """Roadmap generation, refinement and review backed by Gemini."""

    def __init__(self, llm_client: Optional[GeminiClient] = None) -> None:
        """
        @param llm_client Text generation client (defaults to GeminiClient()).
        @returns None
        """
        self._llm_client = llm_client or GeminiClient()

    def generate(self, goal: str, max_steps: Optional[int] = None) -> Roadmap:
        """
        @param {str} goal - User goal.
        @param {Optional[int]} max_steps - Requested step count (clamped).
        @returns {Roadmap} Canonical, unsaved roadmap.
        """
        if not isinstance(goal, str) or not goal.strip():
            raise InvalidRequestError("Goal is required")

        steps = clamp_max_steps(max_steps)
        raw_text = self._llm_client.generate_text(
            build_roadmap_prompt(goal.strip(), steps),
            config=JSON_GENERATION_CONFIG,
        )
        logger.info("Roadmap generation raw output", extra={"text_preview": preview(raw_text)})

        roadmap = _to_roadmap(raw_text)
        logger.info(
            "Roadmap generated",
            extra={"node_count": len(roadmap.nodes), "edge_count": len(roadmap.edges)},
        )
        return roadmap

    def refine(self, original: Mapping[str, Any], feedback: str) -> RefinedRoadmap:
        """
        @param {Mapping[str, Any]} original - Roadmap to improve (wire form, needs `nodes`).
        @param {str} feedback - User feedback.
        @returns {RefinedRoadmap} Canonical roadmap plus a change summary.
        """
        if not isinstance(original, Mapping) or not isinstance(original.get("nodes"), list):
            raise InvalidRequestError("Original roadmap is required")
        if not isinstance(feedback, str) or not feedback.strip():
            raise InvalidRequestError("Feedback is required")

        current = normalize(original).to_dict()
        raw_text = self._llm_client.generate_text(
            build_refine_prompt(current, feedback.strip()),
            config=JSON_GENERATION_CONFIG,
        )
        logger.info("Roadmap refinement raw output", extra={"text_preview": preview(raw_text)})

        parsed = repair(raw_text)
        roadmap = normalize(parsed)
        if not roadmap.nodes:
            raise EmptyRoadmapError("AI returned no usable steps")
        changes = parsed.get("changes")
        return RefinedRoadmap(roadmap=roadmap, changes=changes if isinstance(changes, str) else "")

    def suggest(self, roadmap: Mapping[str, Any]) -> RoadmapSuggestions:
        """
        @param {Mapping[str, Any]} roadmap - Roadmap to review (wire form, needs `nodes`).
        @returns {RoadmapSuggestions} Suggestions with defaults filled in.
        """
        if not isinstance(roadmap, Mapping) or not isinstance(roadmap.get("nodes"), list):
            raise InvalidRequestError("Roadmap is required")

        raw_text = self._llm_client.generate_text(
            build_suggestion_prompt(normalize(roadmap).to_dict()),
            config=JSON_GENERATION_CONFIG,
        )
        return _to_suggestions(repair(raw_text))


def clamp_max_steps(max_steps: Optional[int]) -> int:
    """
    @param max_steps Requested step count (None uses ROADMAP_DEFAULT_MAX_STEPS).
    @returns Step count within 1..ROADMAP_MAX_STEPS_LIMIT.
    """
    default = getattr(settings, "ROADMAP_DEFAULT_MAX_STEPS", 10)
    limit = getattr(settings, "ROADMAP_MAX_STEPS_LIMIT", 20)
    if not isinstance(max_steps, int) or isinstance(max_steps, bool) or max_steps <= 0:
        return default
    return min(max_steps, limit)


def _to_roadmap(raw_text: str) -> Roadmap:
    roadmap = normalize(repair(raw_text))
    if not roadmap.nodes:
        raise EmptyRoadmapError("AI returned no usable steps")
    return roadmap


def _to_suggestions(parsed: Dict[str, Any]) -> RoadmapSuggestions:
    items = parsed.get("suggestions")
    suggestions = [
        RoadmapSuggestion(
            type=_text(item.get("type"), "enhancement"),
            title=_text(item.get("title"), ""),
            description=_text(item.get("description"), ""),
            priority=_text(item.get("priority"), "medium"),
            reasoning=_text(item.get("reasoning"), ""),
        )
        for item in (items if isinstance(items, list) else [])
        if isinstance(item, Mapping)
    ]
    return RoadmapSuggestions(
        suggestions=suggestions,
        overall_assessment=_text(parsed.get("overallAssessment"), ""),
        strengths=_strings(parsed.get("strengths")),
        improvements=_strings(parsed.get("improvements")),
    )


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value.strip() else default


def _strings(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
