from roadmap_ai.ai_core.repository.roadmap_store import DjangoRoadmapStore, RoadmapStore

__all__ = [
    "DjangoRoadmapStore",
    "RoadmapStore",
]
