"""CMS-facing value objects and the client's closed result type.

The CMS client never raises past its boundary: every call returns either
``CmsOk`` wrapping the value or ``CmsFailure`` naming one of the
``CmsErrorKind`` members.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CmsCredentials:
    """One set of CMS credentials. Any field may be blank when read from storage."""

    cms_url: str = ""
    username: str = ""
    application_password: str = ""

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("cms_url", "username", "application_password")
            if not getattr(self, name).strip()
        ]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def __repr__(self) -> str:
        # application_password stays out of logs and tracebacks
        return f"CmsCredentials(cms_url={self.cms_url!r}, username={self.username!r})"


@dataclass(frozen=True)
class CmsIdentity:
    """The authenticated CMS user returned by connection verification."""

    id: int
    name: str
    email: str | None = None
    roles: list[str] = field(default_factory=list)


class CmsErrorKind(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    SITE_NOT_FOUND = "site_not_found"
    HOST_UNREACHABLE = "host_unreachable"
    TIMEOUT = "timeout"
    REMOTE_ERROR = "remote_error"


CMS_ERROR_HINTS: dict[CmsErrorKind, str] = {
    CmsErrorKind.INVALID_CREDENTIALS: (
        "Check the WordPress username and the application password "
        "(no stray spaces)."
    ),
    CmsErrorKind.INSUFFICIENT_PERMISSIONS: (
        "Use a WordPress account whose role is allowed to create posts."
    ),
    CmsErrorKind.SITE_NOT_FOUND: (
        "Check the site URL and that the WordPress REST API is enabled."
    ),
    CmsErrorKind.HOST_UNREACHABLE: (
        "Check the site URL includes the scheme, e.g. https://example.com."
    ),
    CmsErrorKind.TIMEOUT: (
        "The site took too long to respond; try again later."
    ),
    CmsErrorKind.REMOTE_ERROR: (
        "WordPress rejected the request; see the message for details."
    ),
}


@dataclass(frozen=True)
class CmsOk(Generic[T]):
    value: T


@dataclass(frozen=True)
class CmsFailure:
    kind: CmsErrorKind
    message: str
    status_code: int | None = None

    @property
    def hint(self) -> str:
        return CMS_ERROR_HINTS[self.kind]
