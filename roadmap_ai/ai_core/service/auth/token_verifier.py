from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from django.conf import settings
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from roadmap_ai.ai_core.common.errors import AuthenticationFailedError, AuthNotConfiguredError
from roadmap_ai.ai_core.domain.auth_context import AuthContext

logger = logging.getLogger(__name__)


class FirebaseTokenVerifier:
    """Verifies Firebase Authentication ID tokens against Google's public keys."""

    def __init__(self, project_id: Optional[str] = None) -> None:
        """
        @param project_id Firebase project id (defaults to the FIREBASE_PROJECT_ID setting).
        @returns None
        """
        self._project_id = project_id or getattr(settings, "FIREBASE_PROJECT_ID", "")
        self._request = google_requests.Request()

    def verify(self, token: str) -> AuthContext:
        """
        @param {str} token - Firebase ID token (JWT).
        @returns {AuthContext} Caller identity from the token claims.
        """
        if not self._project_id:
            raise AuthNotConfiguredError("FIREBASE_PROJECT_ID is not configured")
        if not isinstance(token, str) or not token.strip():
            raise AuthenticationFailedError("No token provided")

        try:
            claims = id_token.verify_firebase_token(token.strip(), self._request, audience=self._project_id)
        except (ValueError, google_auth_exceptions.GoogleAuthError) as exc:
            logger.info("ID token rejected", extra={"error": str(exc)})
            raise AuthenticationFailedError("Invalid token") from exc

        if not claims:
            raise AuthenticationFailedError("Invalid token")
        return context_from_claims(claims)


def context_from_claims(claims: Dict[str, Any]) -> AuthContext:
    """
    @param claims Decoded ID token claims.
    @returns AuthContext (uid from `user_id`, falling back to `sub`).
    """
    uid = claims.get("user_id") or claims.get("sub") or ""
    if not uid:
        raise AuthenticationFailedError("Token has no subject")
    return AuthContext(
        uid=str(uid),
        email=str(claims.get("email") or ""),
        display_name=str(claims.get("name") or ""),
        photo_url=str(claims.get("picture") or ""),
    )


def get_token_verifier() -> FirebaseTokenVerifier:
    """
    @returns Shared verifier for the configured project; its HTTP session is reused across requests.
    """
    return _verifier_for(getattr(settings, "FIREBASE_PROJECT_ID", ""))


@lru_cache(maxsize=4)
def _verifier_for(project_id: str) -> FirebaseTokenVerifier:
    return FirebaseTokenVerifier(project_id=project_id)
