from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from roadmap_ai.ai_core.domain.roadmap import Roadmap
from roadmap_ai.ai_core.models import RoadmapDocument
from roadmap_ai.ai_core.service.roadmap.roadmap_normalizer import normalize

logger = logging.getLogger(__name__)


class RoadmapStore(ABC):
    """Storage interface for user-owned roadmaps. Every call is scoped to an owner."""

    @abstractmethod
    def create(self, owner_uid: str, roadmap: Roadmap) -> Roadmap:
        """
        @param owner_uid Owner uid.
        @param roadmap Canonical roadmap (id is ignored).
        @returns Stored roadmap with id and timestamps.
        """
        raise NotImplementedError

    @abstractmethod
    def list_for_owner(self, owner_uid: str) -> List[Roadmap]:
        """
        @param owner_uid Owner uid.
        @returns Roadmaps ordered by updatedAt, newest first.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, owner_uid: str, roadmap_id: str) -> Optional[Roadmap]:
        """
        @param owner_uid Owner uid.
        @param roadmap_id Roadmap id.
        @returns Roadmap or None.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, owner_uid: str, roadmap_id: str, roadmap: Roadmap) -> Optional[Roadmap]:
        """
        @param owner_uid Owner uid.
        @param roadmap_id Roadmap id.
        @param roadmap New content for the document.
        @returns Updated roadmap or None when it does not exist.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, owner_uid: str, roadmap_id: str) -> bool:
        """
        @param owner_uid Owner uid.
        @param roadmap_id Roadmap id.
        @returns True when a document was deleted.
        """
        raise NotImplementedError


class DjangoRoadmapStore(RoadmapStore):
    """RoadmapStore on the Django ORM (RoadmapDocument)."""

    def create(self, owner_uid: str, roadmap: Roadmap) -> Roadmap:
        document = RoadmapDocument(owner_uid=owner_uid)
        _apply(document, roadmap)
        document.save()
        logger.info("Roadmap created", extra={"roadmap_id": document.roadmap_id, "owner_uid": owner_uid})
        return to_domain(document)

    def list_for_owner(self, owner_uid: str) -> List[Roadmap]:
        documents = RoadmapDocument.objects.filter(owner_uid=owner_uid).order_by("-updated_at", "-created_at")
        return [to_domain(document) for document in documents]

    def get(self, owner_uid: str, roadmap_id: str) -> Optional[Roadmap]:
        document = self._find(owner_uid, roadmap_id)
        return to_domain(document) if document else None

    def update(self, owner_uid: str, roadmap_id: str, roadmap: Roadmap) -> Optional[Roadmap]:
        document = self._find(owner_uid, roadmap_id)
        if document is None:
            return None
        _apply(document, roadmap)
        document.save()
        logger.info("Roadmap updated", extra={"roadmap_id": roadmap_id, "owner_uid": owner_uid})
        return to_domain(document)

    def delete(self, owner_uid: str, roadmap_id: str) -> bool:
        deleted, _ = RoadmapDocument.objects.filter(owner_uid=owner_uid, roadmap_id=roadmap_id).delete()
        if deleted:
            logger.info("Roadmap deleted", extra={"roadmap_id": roadmap_id, "owner_uid": owner_uid})
        return bool(deleted)

    @staticmethod
    def _find(owner_uid: str, roadmap_id: str) -> Optional[RoadmapDocument]:
        try:
            return RoadmapDocument.objects.get(owner_uid=owner_uid, roadmap_id=roadmap_id)
        except RoadmapDocument.DoesNotExist:
            return None


def to_domain(document: RoadmapDocument) -> Roadmap:
    """
    @param document Stored row.
    @returns Canonical roadmap carrying the row id and timestamps.
    """
    roadmap = normalize({
        "title": document.title,
        "description": document.description,
        "nodes": document.nodes,
        "edges": document.edges,
        "estimatedTotalDuration": document.estimated_total_duration,
        "difficulty": document.difficulty,
        "category": document.category,
    })
    roadmap.id = document.roadmap_id
    roadmap.is_public = document.is_public
    roadmap.created_at = document.created_at
    roadmap.updated_at = document.updated_at
    return roadmap


def _apply(document: RoadmapDocument, roadmap: Roadmap) -> None:
    document.title = roadmap.title
    document.description = roadmap.description
    document.nodes = [node.to_dict() for node in roadmap.nodes]
    document.edges = [edge.to_dict() for edge in roadmap.edges]
    document.estimated_total_duration = roadmap.estimated_total_duration
    document.difficulty = roadmap.difficulty
    document.category = roadmap.category
    document.is_public = roadmap.is_public
