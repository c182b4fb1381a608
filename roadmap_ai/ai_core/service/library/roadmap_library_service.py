from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from roadmap_ai.ai_core.common.errors import InvalidRequestError, RoadmapNotFoundError
from roadmap_ai.ai_core.domain.auth_context import AuthContext
from roadmap_ai.ai_core.domain.roadmap import Roadmap
from roadmap_ai.ai_core.domain.roadmap_link import RoadmapLink
from roadmap_ai.ai_core.domain.roadmap_step import RoadmapStep, StepType
from roadmap_ai.ai_core.repository.roadmap_store import DjangoRoadmapStore, RoadmapStore
from roadmap_ai.ai_core.service.roadmap.roadmap_normalizer import normalize

UNTITLED_TITLE = "Untitled Roadmap"

# wire keys a client may change on an existing roadmap
EDITABLE_FIELDS = (
    "title",
    "description",
    "nodes",
    "edges",
    "estimatedTotalDuration",
    "difficulty",
    "category",
)

_STEP_ID_RE = re.compile(r"^step_(\d+)$")


class RoadmapLibraryService:
    """Per-user roadmap collection."""

    def __init__(self, store: Optional[RoadmapStore] = None) -> None:
        """
        @param store Storage implementation (defaults to DjangoRoadmapStore()).
        @returns None
        """
        self._store = store or DjangoRoadmapStore()

    def create(self, auth: AuthContext, payload: Mapping[str, Any]) -> Roadmap:
        """
        Store a user-authored roadmap. Drafts without steps are allowed.

        @param {AuthContext} auth - Caller.
        @param {Mapping[str, Any]} payload - Roadmap in wire form.
        @returns {Roadmap} Stored roadmap.
        """
        data = dict(payload)
        if not _has_text(data.get("title")):
            data["title"] = UNTITLED_TITLE
        roadmap = normalize(data)
        roadmap.is_public = bool(payload.get("isPublic", False))
        return self._store.create(auth.uid, roadmap)

    def save_generated(self, auth: AuthContext, roadmap: Roadmap) -> Roadmap:
        """
        @param {AuthContext} auth - Caller.
        @param {Roadmap} roadmap - Canonical roadmap from the generator.
        @returns {Roadmap} Stored private copy.
        """
        return self._store.create(auth.uid, replace(roadmap, id=None, is_public=False))

    def list_roadmaps(self, auth: AuthContext) -> List[Roadmap]:
        return self._store.list_for_owner(auth.uid)

    def get(self, auth: AuthContext, roadmap_id: str) -> Roadmap:
        roadmap = self._store.get(auth.uid, roadmap_id)
        if roadmap is None:
            raise RoadmapNotFoundError(roadmap_id)
        return roadmap

    def update(self, auth: AuthContext, roadmap_id: str, payload: Mapping[str, Any]) -> Roadmap:
        """
        Partial update; keys outside EDITABLE_FIELDS and isPublic are ignored.

        @param {AuthContext} auth - Caller.
        @param {str} roadmap_id - Roadmap id.
        @param {Mapping[str, Any]} payload - Changed fields in wire form.
        @returns {Roadmap} Updated roadmap.
        """
        current = self.get(auth, roadmap_id)
        merged: Dict[str, Any] = current.to_dict()
        for key in EDITABLE_FIELDS:
            if key in payload:
                merged[key] = payload[key]
        if "title" in payload and not _has_text(payload["title"]):
            merged["title"] = UNTITLED_TITLE
        if "nodes" in payload and "edges" not in payload:
            # old links may point at removed steps
            merged["edges"] = []

        roadmap = normalize(merged)
        roadmap.is_public = bool(payload.get("isPublic", current.is_public))
        return self._saved(auth, roadmap_id, roadmap)

    def delete(self, auth: AuthContext, roadmap_id: str) -> None:
        if not self._store.delete(auth.uid, roadmap_id):
            raise RoadmapNotFoundError(roadmap_id)

    def duplicate(self, auth: AuthContext, roadmap_id: str) -> Roadmap:
        """
        @param {AuthContext} auth - Caller.
        @param {str} roadmap_id - Roadmap to copy.
        @returns {Roadmap} Private copy titled "<title> (Copy)".
        """
        original = self.get(auth, roadmap_id)
        copy = replace(
            original,
            title=f"{original.title} (Copy)",
            nodes=list(original.nodes),
            edges=list(original.edges),
            id=None,
            is_public=False,
            created_at=None,
            updated_at=None,
        )
        return self._store.create(auth.uid, copy)

    def add_step(
        self,
        auth: AuthContext,
        roadmap_id: str,
        title: str,
        description: str = "",
        duration: str = "",
    ) -> Roadmap:
        """
        Append a task step and link it after the current last step.

        @param {AuthContext} auth - Caller.
        @param {str} roadmap_id - Roadmap id.
        @param {str} title - Step title (required).
        @param {str} description - Step description.
        @param {str} duration - Step duration.
        @returns {Roadmap} Updated roadmap.
        """
        if not _has_text(title):
            raise InvalidRequestError("Step title is required")

        roadmap = self.get(auth, roadmap_id)
        step = RoadmapStep(
            id=next_step_id(roadmap.step_ids),
            title=title,
            description=description or "",
            duration=duration or "",
            type=StepType.TASK,
        )
        if roadmap.nodes:
            roadmap.edges.append(RoadmapLink(source=roadmap.nodes[-1].id, target=step.id))
        roadmap.nodes.append(step)
        return self._saved(auth, roadmap_id, roadmap)

    def _saved(self, auth: AuthContext, roadmap_id: str, roadmap: Roadmap) -> Roadmap:
        updated = self._store.update(auth.uid, roadmap_id, roadmap)
        if updated is None:
            raise RoadmapNotFoundError(roadmap_id)
        return updated


def next_step_id(existing: List[str]) -> str:
    """
    @param existing Step ids already in the roadmap.
    @returns First `step_<n>` id above every numbered step id.
    """
    highest = 0
    for step_id in existing:
        match = _STEP_ID_RE.match(step_id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"step_{highest + 1}"


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
