from __future__ import annotations

from dataclasses import dataclass

from roadmap_ai.ai_core.domain.roadmap import Roadmap


@dataclass
class RefinedRoadmap:
    """Roadmap rewritten from user feedback."""

    roadmap: Roadmap
    changes: str = ""
