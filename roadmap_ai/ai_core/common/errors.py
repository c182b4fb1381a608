from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    """Error categories assigned where an error is raised."""

    INVALID_REQUEST = "invalid_request"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_ROADMAP = "empty_roadmap"
    LLM_REQUEST_FAILED = "llm_request_failed"
    LLM_NOT_CONFIGURED = "llm_not_configured"
    AUTH_NOT_CONFIGURED = "auth_not_configured"
    INTERNAL = "internal"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.MALFORMED_RESPONSE: 502,
    ErrorKind.EMPTY_ROADMAP: 502,
    ErrorKind.LLM_REQUEST_FAILED: 502,
    ErrorKind.LLM_NOT_CONFIGURED: 503,
    ErrorKind.AUTH_NOT_CONFIGURED: 503,
    ErrorKind.INTERNAL: 500,
}


def status_for(kind: ErrorKind) -> int:
    """
    @param kind Error kind.
    @returns HTTP status code for the kind.
    """
    return STATUS_BY_KIND.get(kind, 500)


class RoadmapServiceError(Exception):
    """Base class for errors that carry an ErrorKind."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    @property
    def status_code(self) -> int:
        return status_for(self.kind)


class InvalidRequestError(RoadmapServiceError):
    """Request payload failed validation."""

    kind = ErrorKind.INVALID_REQUEST


class AuthenticationFailedError(RoadmapServiceError):
    """ID token missing, expired or rejected."""

    kind = ErrorKind.UNAUTHENTICATED


class AuthNotConfiguredError(RoadmapServiceError):
    """Token verification requested without a Firebase project id."""

    kind = ErrorKind.AUTH_NOT_CONFIGURED


class RoadmapNotFoundError(RoadmapServiceError):
    """Roadmap does not exist for the requesting owner."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, roadmap_id: str) -> None:
        super().__init__(f"Roadmap not found: {roadmap_id}")
        self.roadmap_id = roadmap_id


class MalformedResponseError(RoadmapServiceError):
    """No JSON object could be extracted from a model completion."""

    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(self, message: str, raw_preview: str = "") -> None:
        super().__init__(message)
        self.raw_preview = raw_preview


class EmptyRoadmapError(RoadmapServiceError):
    """A normalized roadmap came back without any steps."""

    kind = ErrorKind.EMPTY_ROADMAP


class LLMNotConfiguredError(RoadmapServiceError):
    """The Gemini client has no API key or is disabled."""

    kind = ErrorKind.LLM_NOT_CONFIGURED


class LLMRequestError(RoadmapServiceError):
    """The Gemini API call failed."""

    kind = ErrorKind.LLM_REQUEST_FAILED
