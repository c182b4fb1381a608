from __future__ import annotations

from rest_framework.response import Response


def validated(serializer_class, data, partial: bool = False) -> dict:
    """
    @param serializer_class Request serializer.
    @param data Request body.
    @param partial Allow missing required fields (PATCH).
    @returns validated_data (raises ValidationError -> 400).
    """
    serializer = serializer_class(data=data, partial=partial)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


def serialize(serializer_class, payload, status: int = 200, many: bool = False) -> Response:
    """
    @param serializer_class Response serializer.
    @param payload Response data.
    @param status HTTP status.
    @param many List payload.
    @returns Serialized DRF Response.
    """
    serializer = serializer_class(payload, many=many)
    return Response(serializer.data, status=status)
