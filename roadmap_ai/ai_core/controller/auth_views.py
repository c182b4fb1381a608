from __future__ import annotations

import logging

from django.conf import settings
from django.middleware.csrf import get_token
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from roadmap_ai.ai_core.controller.authentication import SESSION_KEY
from roadmap_ai.ai_core.controller.helpers import serialize, validated
from roadmap_ai.ai_core.controller.serializers import (
    AuthStatusSerializer,
    ErrorSerializer,
    FirebaseConfigSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    SuccessSerializer,
)
from roadmap_ai.ai_core.domain.auth_context import AuthContext
from roadmap_ai.ai_core.service.auth.profile_service import ProfileService
from roadmap_ai.ai_core.service.auth.token_verifier import get_token_verifier

logger = logging.getLogger(__name__)


class LoginAPIView(APIView):
    """
    Firebase ID token login.

    Verifies the token, starts a fresh server session holding the caller's
    AuthContext and mirrors the profile into UserProfile.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Login",
        request=LoginRequestSerializer,
        responses={200: LoginResponseSerializer, 401: ErrorSerializer, 503: ErrorSerializer},
    )
    def post(self, request) -> Response:
        """
        @param {Request} request - DRF request ({idToken}).
        @returns {Response} {success, message, user}.
        """
        body = validated(LoginRequestSerializer, request.data)
        auth = get_token_verifier().verify(body["idToken"])

        request.session.cycle_key()
        request.session[SESSION_KEY] = auth.to_session()
        get_token(request)
        ProfileService().sync(auth)

        logger.info("User logged in", extra={"uid": auth.uid})
        payload = {"success": True, "message": "Login successful", "user": auth.public_dict()}
        return serialize(LoginResponseSerializer, payload)


class LogoutAPIView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(summary="Logout", request=None, responses={200: SuccessSerializer})
    def post(self, request) -> Response:
        """
        @param {Request} request - DRF request.
        @returns {Response} {success}; the session is flushed.
        """
        if isinstance(request.user, AuthContext):
            logger.info("User logged out", extra={"uid": request.user.uid})
        request.session.flush()
        return serialize(SuccessSerializer, {"success": True})


class AuthStatusAPIView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(summary="Auth status", responses={200: AuthStatusSerializer})
    def get(self, request) -> Response:
        user = request.user
        get_token(request)
        if isinstance(user, AuthContext) and user.is_authenticated:
            payload = {"authenticated": True, "user": user.public_dict()}
        else:
            payload = {"authenticated": False, "user": None}
        return serialize(AuthStatusSerializer, payload)


class FirebaseConfigAPIView(APIView):
    """Public Firebase web configuration for the browser SDK."""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(summary="Firebase config", responses={200: FirebaseConfigSerializer})
    def get(self, request) -> Response:
        payload = {
            "apiKey": settings.FIREBASE_API_KEY,
            "authDomain": settings.FIREBASE_AUTH_DOMAIN,
            "projectId": settings.FIREBASE_PROJECT_ID,
            "storageBucket": settings.FIREBASE_STORAGE_BUCKET,
            "messagingSenderId": settings.FIREBASE_MESSAGING_SENDER_ID,
            "appId": settings.FIREBASE_APP_ID,
        }
        return serialize(FirebaseConfigSerializer, payload)
