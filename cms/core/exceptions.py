"""
Core Exceptions

Domain exceptions raised by services and repositories.

Each subclass is a distinct error kind so callers can discriminate by type,
and carries the HTTP status the API layer maps it to. Validation and conflict
errors carry enough detail (field, rule) for the admin UI to highlight the
offending input; not-found and unauthorized errors keep generic messages.
"""

from typing import Any


class CMSError(Exception):
    """
    Base class for all domain errors.

    Attributes:
        message: Human-readable message returned to the client
        details: Extra, JSON-serializable context merged into the error body
    """

    status_code: int = 500
    kind: str = "error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the API error body."""
        return {"detail": self.message, "error": self.kind, **self.details}


class NotFoundError(CMSError):
    """Raised when an entity is absent or outside the caller's organization."""

    status_code = 404
    kind = "not_found"


class ConflictError(CMSError):
    """Raised when a title or slug collides with another entity in the organization."""

    status_code = 409
    kind = "conflict"


class ValidationFailedError(CMSError):
    """
    Raised when a form schema (or other payload) breaks a structural rule.

    Usage:
        raise ValidationFailedError(
            "Duplicate field name: email", field="email", rule="duplicate_name"
        )
    """

    status_code = 400
    kind = "validation_failed"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        rule: str | None = None,
        index: int | None = None,
    ):
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if rule is not None:
            details["rule"] = rule
        if index is not None:
            details["index"] = index
        super().__init__(message, details)
        self.field = field
        self.rule = rule
        self.index = index


class PreconditionFailedError(CMSError):
    """Raised when an operation is blocked by dependent records or entity state."""

    status_code = 400
    kind = "precondition_failed"


class UnauthorizedError(CMSError):
    """Raised when the actor or organization context is missing or invalid."""

    status_code = 401
    kind = "unauthorized"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)
