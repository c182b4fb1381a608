from __future__ import annotations

from datetime import datetime, timezone

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from roadmap_ai.ai_core.client import GeminiClient
from roadmap_ai.ai_core.controller.helpers import serialize
from roadmap_ai.ai_core.controller.serializers import HealthCheckSerializer

API_VERSION = "1.0.0"


class HealthCheckAPIView(APIView):
    """
    API health check.

    Reports whether Gemini and Firebase are configured. Used by container
    health checks and monitoring.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Health check",
        description="Server status and availability of the external services.",
        responses={200: HealthCheckSerializer},
    )
    def get(self, request) -> Response:
        """
        @param {Request} request - DRF request.
        @returns {Response} Service status.
        """
        payload = {
            "status": "ok",
            "version": API_VERSION,
            "services": {
                "gemini": GeminiClient().health_check()["available"],
                "firebase": bool(getattr(settings, "FIREBASE_PROJECT_ID", "")),
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        return serialize(HealthCheckSerializer, payload)
