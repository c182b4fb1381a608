from roadmap_ai.ai_core.domain.auth_context import AuthContext
from roadmap_ai.ai_core.domain.refined_roadmap import RefinedRoadmap
from roadmap_ai.ai_core.domain.roadmap import Roadmap
from roadmap_ai.ai_core.domain.roadmap_link import RoadmapLink
from roadmap_ai.ai_core.domain.roadmap_step import RoadmapStep, StepType
from roadmap_ai.ai_core.domain.roadmap_suggestions import RoadmapSuggestion, RoadmapSuggestions

__all__ = [
    "AuthContext",
    "RefinedRoadmap",
    "Roadmap",
    "RoadmapLink",
    "RoadmapStep",
    "RoadmapSuggestion",
    "RoadmapSuggestions",
    "StepType",
]
