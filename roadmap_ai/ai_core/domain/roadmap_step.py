from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class StepType(str, Enum):
    """Kind of a roadmap step."""

    MILESTONE = "milestone"
    TASK = "task"
    RESOURCE = "resource"


@dataclass
class RoadmapStep:
    """One node of a roadmap."""

    id: str
    title: str = ""
    description: str = ""
    duration: str = ""
    type: StepType = StepType.TASK
    resources: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "type": self.type.value,
            "resources": list(self.resources),
        }
