"""Domain-specific exceptions: framework-independent.

Every publication-facing error carries a machine-readable ``kind`` and a
human-readable remediation ``hint`` so the presentation layer can render a
stable error body without inspecting the exception type.
"""


class PublicationError(Exception):
    """Base class for errors surfaced to callers of the publication core."""

    kind = "error"
    default_hint = ""

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint if hint is not None else self.default_hint
        super().__init__(message)


class ValidationError(PublicationError):
    """Raised when caller input is rejected before anything is persisted."""

    kind = "validation_error"
    default_hint = "Check the request fields and try again."


class AuthenticationError(PublicationError):
    """Raised when the bearer token is missing or invalid."""

    kind = "auth_error"
    default_hint = "Sign in again and retry with a valid bearer token."


class EntityNotFoundError(PublicationError):
    """Raised when a requested entity does not exist for the caller."""

    kind = "not_found"
    default_hint = "Check the identifier; articles are only visible to their owner."

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class NotConfiguredError(PublicationError):
    """Raised when no complete set of CMS credentials can be resolved."""

    kind = "not_configured"
    default_hint = "Add your WordPress URL, username and application password in Settings."

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(
            f"WordPress is not configured: missing {', '.join(missing_fields)}"
        )


class InvalidTransitionError(PublicationError):
    """Raised when a requested status change is not allowed."""

    kind = "invalid_transition"
    default_hint = "Reload the article; its status may have changed."

    def __init__(
        self, article_id: str, current_status: str, requested: str, reason: str | None = None
    ):
        self.article_id = article_id
        self.current_status = current_status
        self.requested = requested
        message = f"Article '{article_id}' cannot move from '{current_status}' to '{requested}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CmsError(PublicationError):
    """Raised by the orchestrator when the CMS client reports a failure.

    ``kind`` is taken from the client's failure so each remote condition keeps
    its own identity (``invalid_credentials``, ``timeout``, ...).
    """

    def __init__(self, kind: str, message: str, hint: str, status_code: int | None = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(message, hint)
