from __future__ import annotations

from typing import Optional, Tuple

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, SessionAuthentication, get_authorization_header

from roadmap_ai.ai_core.common.errors import AuthenticationFailedError
from roadmap_ai.ai_core.domain.auth_context import AuthContext
from roadmap_ai.ai_core.service.auth.token_verifier import get_token_verifier

SESSION_KEY = "auth"


class FirebaseBearerAuthentication(BaseAuthentication):
    """
    `Authorization: Bearer <Firebase ID token>`.

    Requests without the header fall through to the next class.
    """

    keyword = "Bearer"

    def authenticate(self, request) -> Optional[Tuple[AuthContext, str]]:
        """
        @param request DRF request.
        @returns (AuthContext, token) or None when no bearer token is sent.
        """
        header = get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None
        if len(header) != 2:
            raise exceptions.AuthenticationFailed("Invalid Authorization header")

        token = header[1].decode("utf-8", errors="ignore")
        try:
            auth = get_token_verifier().verify(token)
        except AuthenticationFailedError as exc:
            raise exceptions.AuthenticationFailed(exc.message) from exc
        return auth, token

    def authenticate_header(self, request) -> str:
        return f'{self.keyword} realm="api"'


class SessionAuthContextAuthentication(SessionAuthentication):
    """
    AuthContext stored in the Django session by the login endpoint.

    Unsafe methods must carry the csrftoken cookie value in X-CSRFToken.
    """

    def authenticate(self, request) -> Optional[Tuple[AuthContext, None]]:
        """
        @param request DRF request.
        @returns (AuthContext, None) or None when the session has no login.
        """
        session = getattr(request._request, "session", None)
        data = session.get(SESSION_KEY) if session is not None else None
        if not isinstance(data, dict):
            return None
        auth = AuthContext.from_session(data)
        if not auth.is_authenticated:
            return None
        self.enforce_csrf(request)
        return auth, None
