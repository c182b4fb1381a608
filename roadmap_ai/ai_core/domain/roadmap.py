from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from roadmap_ai.ai_core.domain.roadmap_link import RoadmapLink
from roadmap_ai.ai_core.domain.roadmap_step import RoadmapStep

DEFAULT_TITLE = "AI Generated Roadmap"
DEFAULT_DIFFICULTY = "beginner"
DEFAULT_CATEGORY = "general"


@dataclass
class Roadmap:
    """
    Canonical roadmap document.

    `id`, `created_at` and `updated_at` are assigned by the storage layer and
    stay None for roadmaps that were never saved.
    """

    title: str = DEFAULT_TITLE
    description: str = ""
    nodes: List[RoadmapStep] = field(default_factory=list)
    edges: List[RoadmapLink] = field(default_factory=list)
    estimated_total_duration: str = ""
    difficulty: str = DEFAULT_DIFFICULTY
    category: str = DEFAULT_CATEGORY
    id: Optional[str] = None
    is_public: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def step_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def to_dict(self) -> Dict[str, Any]:
        """
        @returns Wire representation with camelCase keys.
        """
        payload: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "estimatedTotalDuration": self.estimated_total_duration,
            "difficulty": self.difficulty,
            "category": self.category,
        }
        if self.id is not None:
            payload["id"] = self.id
            payload["isPublic"] = self.is_public
        if self.created_at is not None:
            payload["createdAt"] = self.created_at.isoformat()
        if self.updated_at is not None:
            payload["updatedAt"] = self.updated_at.isoformat()
        return payload
