"""Translate domain errors into HTTP responses with a stable error body."""

from fastapi import HTTPException, status

from blogpress.domain.entities import CmsErrorKind
from blogpress.domain.exceptions import PublicationError

_STATUS_BY_KIND: dict[str, int] = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "auth_error": status.HTTP_401_UNAUTHORIZED,
    "not_found": status.HTTP_404_NOT_FOUND,
    "not_configured": status.HTTP_400_BAD_REQUEST,
    "invalid_transition": status.HTTP_409_CONFLICT,
    CmsErrorKind.INVALID_CREDENTIALS.value: status.HTTP_401_UNAUTHORIZED,
    CmsErrorKind.INSUFFICIENT_PERMISSIONS.value: status.HTTP_403_FORBIDDEN,
    CmsErrorKind.SITE_NOT_FOUND.value: status.HTTP_502_BAD_GATEWAY,
    CmsErrorKind.HOST_UNREACHABLE.value: status.HTTP_502_BAD_GATEWAY,
    CmsErrorKind.REMOTE_ERROR.value: status.HTTP_502_BAD_GATEWAY,
    CmsErrorKind.TIMEOUT.value: status.HTTP_504_GATEWAY_TIMEOUT,
}


def error_body(kind: str, message: str, hint: str = "") -> dict[str, str]:
    return {"kind": kind, "message": message, "hint": hint}


def status_for(exc: PublicationError) -> int:
    return _STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def http_error(exc: PublicationError) -> HTTPException:
    """Build the HTTPException for a domain error; callers ``raise`` it."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == "auth_error" else None
    return HTTPException(
        status_code=status_for(exc),
        detail=error_body(exc.kind, exc.message, exc.hint),
        headers=headers,
    )
