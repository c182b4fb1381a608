from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from roadmap_ai.ai_core.controller.helpers import serialize, validated
from roadmap_ai.ai_core.controller.serializers import (
    ChatRequestSerializer,
    ChatResponseSerializer,
    ErrorSerializer,
    GenerateRoadmapRequestSerializer,
    GenerateRoadmapResponseSerializer,
    RefineRoadmapRequestSerializer,
    RefineRoadmapResponseSerializer,
    SuggestRoadmapRequestSerializer,
    SuggestRoadmapResponseSerializer,
)
from roadmap_ai.ai_core.service.chat.chat_service import ChatService
from roadmap_ai.ai_core.service.library.roadmap_library_service import RoadmapLibraryService
from roadmap_ai.ai_core.service.roadmap.roadmap_generator import RoadmapGeneratorService

logger = logging.getLogger(__name__)

_AI_ERRORS = {400: ErrorSerializer, 401: ErrorSerializer, 502: ErrorSerializer, 503: ErrorSerializer}


def _generator_service() -> RoadmapGeneratorService:
    return RoadmapGeneratorService()


def _chat_service() -> ChatService:
    return ChatService()


def _library_service() -> RoadmapLibraryService:
    return RoadmapLibraryService()


class GenerateRoadmapAPIView(APIView):
    """Goal to roadmap through Gemini, optionally saved to the caller's library."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Generate roadmap",
        request=GenerateRoadmapRequestSerializer,
        responses={200: GenerateRoadmapResponseSerializer, **_AI_ERRORS},
        examples=[
            OpenApiExample(
                "generate",
                value={"goal": "Learn Go", "settings": {"maxSteps": 8}, "save": False},
                request_only=True,
            )
        ],
    )
    def post(self, request) -> Response:
        """
        @param request DRF request ({goal, settings:{maxSteps}, save}).
        @returns {success, roadmap, message}.
        """
        body = validated(GenerateRoadmapRequestSerializer, request.data)
        max_steps = (body.get("settings") or {}).get("maxSteps")

        roadmap = _generator_service().generate(body["goal"], max_steps)
        if body.get("save"):
            roadmap = _library_service().save_generated(request.user, roadmap)

        logger.info(
            "Generate roadmap request served",
            extra={"uid": request.user.uid, "node_count": len(roadmap.nodes), "saved": bool(roadmap.id)},
        )
        payload = {
            "success": True,
            "roadmap": roadmap.to_dict(),
            "message": f"Created roadmap with {len(roadmap.nodes)} steps",
        }
        return serialize(GenerateRoadmapResponseSerializer, payload)


class RefineRoadmapAPIView(APIView):
    """Roadmap plus feedback to an improved roadmap."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Refine roadmap",
        request=RefineRoadmapRequestSerializer,
        responses={200: RefineRoadmapResponseSerializer, **_AI_ERRORS},
    )
    def post(self, request) -> Response:
        """
        @param request DRF request ({originalRoadmap, feedback}).
        @returns {success, roadmap, changes}.
        """
        body = validated(RefineRoadmapRequestSerializer, request.data)
        refined = _generator_service().refine(body.get("originalRoadmap"), body.get("feedback"))
        payload = {"success": True, "roadmap": refined.roadmap.to_dict(), "changes": refined.changes}
        return serialize(RefineRoadmapResponseSerializer, payload)


class SuggestRoadmapAPIView(APIView):
    """Improvement suggestions for a roadmap."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Suggest roadmap improvements",
        request=SuggestRoadmapRequestSerializer,
        responses={200: SuggestRoadmapResponseSerializer, **_AI_ERRORS},
    )
    def post(self, request) -> Response:
        """
        @param request DRF request ({roadmap}).
        @returns {success, suggestions, assessment, strengths, improvements}.
        """
        body = validated(SuggestRoadmapRequestSerializer, request.data)
        suggestions = _generator_service().suggest(body.get("roadmap"))
        payload = {"success": True, **suggestions.to_dict()}
        return serialize(SuggestRoadmapResponseSerializer, payload)


class ChatAPIView(APIView):
    """Roadmap assistant chat (Gemini proxy)."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Chat",
        request=ChatRequestSerializer,
        responses={200: ChatResponseSerializer, **_AI_ERRORS},
        examples=[
            OpenApiExample(
                "chat",
                value={"messages": [{"role": "user", "content": "Help me plan a marathon"}]},
                request_only=True,
            )
        ],
    )
    def post(self, request) -> Response:
        """
        @param request DRF request ({messages:[{role, content}]}).
        @returns {content}.
        """
        body = validated(ChatRequestSerializer, request.data)
        content = _chat_service().reply(body.get("messages"))
        return serialize(ChatResponseSerializer, {"content": content})

