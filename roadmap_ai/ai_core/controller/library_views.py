from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from roadmap_ai.ai_core.controller.helpers import serialize, validated
from roadmap_ai.ai_core.controller.serializers import (
    AddStepRequestSerializer,
    ErrorSerializer,
    RoadmapListSerializer,
    RoadmapSerializer,
    RoadmapWriteSerializer,
)
from roadmap_ai.ai_core.service.library.roadmap_library_service import RoadmapLibraryService

_NOT_FOUND = {401: ErrorSerializer, 404: ErrorSerializer}


def _library_service() -> RoadmapLibraryService:
    return RoadmapLibraryService()


class RoadmapCollectionAPIView(APIView):
    """The caller's saved roadmaps."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List roadmaps", responses={200: RoadmapListSerializer, 401: ErrorSerializer})
    def get(self, request) -> Response:
        """
        @param request DRF request.
        @returns {roadmaps: [...]} newest update first.
        """
        roadmaps = _library_service().list_roadmaps(request.user)
        return serialize(RoadmapListSerializer, {"roadmaps": [roadmap.to_dict() for roadmap in roadmaps]})

    @extend_schema(
        summary="Create roadmap",
        request=RoadmapWriteSerializer,
        responses={201: RoadmapSerializer, 400: ErrorSerializer, 401: ErrorSerializer},
    )
    def post(self, request) -> Response:
        """
        @param request DRF request (roadmap in wire form).
        @returns Stored roadmap (201).
        """
        body = validated(RoadmapWriteSerializer, request.data)
        roadmap = _library_service().create(request.user, body)
        return serialize(RoadmapSerializer, roadmap.to_dict(), status=status.HTTP_201_CREATED)


class RoadmapDetailAPIView(APIView):
    """Single saved roadmap."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get roadmap", responses={200: RoadmapSerializer, **_NOT_FOUND})
    def get(self, request, roadmap_id: str) -> Response:
        roadmap = _library_service().get(request.user, roadmap_id)
        return serialize(RoadmapSerializer, roadmap.to_dict())

    @extend_schema(
        summary="Update roadmap",
        request=RoadmapWriteSerializer,
        responses={200: RoadmapSerializer, 400: ErrorSerializer, **_NOT_FOUND},
    )
    def patch(self, request, roadmap_id: str) -> Response:
        """
        @param request DRF request (changed fields only).
        @param roadmap_id Roadmap id.
        @returns Updated roadmap.
        """
        body = validated(RoadmapWriteSerializer, request.data, partial=True)
        roadmap = _library_service().update(request.user, roadmap_id, body)
        return serialize(RoadmapSerializer, roadmap.to_dict())

    @extend_schema(summary="Delete roadmap", responses={204: None, **_NOT_FOUND})
    def delete(self, request, roadmap_id: str) -> Response:
        _library_service().delete(request.user, roadmap_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RoadmapDuplicateAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Duplicate roadmap", request=None, responses={201: RoadmapSerializer, **_NOT_FOUND})
    def post(self, request, roadmap_id: str) -> Response:
        roadmap = _library_service().duplicate(request.user, roadmap_id)
        return serialize(RoadmapSerializer, roadmap.to_dict(), status=status.HTTP_201_CREATED)


class RoadmapStepAPIView(APIView):
    """Append a step to a saved roadmap."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Add roadmap step",
        request=AddStepRequestSerializer,
        responses={200: RoadmapSerializer, 400: ErrorSerializer, **_NOT_FOUND},
    )
    def post(self, request, roadmap_id: str) -> Response:
        """
        @param request DRF request ({title, description, duration}).
        @param roadmap_id Roadmap id.
        @returns Updated roadmap.
        """
        body = validated(AddStepRequestSerializer, request.data)
        roadmap = _library_service().add_step(
            request.user,
            roadmap_id,
            title=body["title"],
            description=body.get("description", ""),
            duration=body.get("duration", ""),
        )
        return serialize(RoadmapSerializer, roadmap.to_dict())
