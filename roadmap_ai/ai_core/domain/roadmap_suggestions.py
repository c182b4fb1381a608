from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class RoadmapSuggestion:
    """Single improvement proposal for a roadmap."""

    type: str = "enhancement"  # addition | removal | modification | enhancement
    title: str = ""
    description: str = ""
    priority: str = "medium"  # high | medium | low
    reasoning: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "reasoning": self.reasoning,
        }


@dataclass
class RoadmapSuggestions:
    """AI review of an existing roadmap."""

    suggestions: List[RoadmapSuggestion] = field(default_factory=list)
    overall_assessment: str = ""
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestions": [item.to_dict() for item in self.suggestions],
            "assessment": self.overall_assessment,
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
        }
