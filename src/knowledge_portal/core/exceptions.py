"""
Custom exception hierarchy for Knowledge Portal.

All exceptions inherit from KnowledgePortalError, allowing callers to catch
all project-specific errors with a single except clause when desired.

Exception hierarchy:
    KnowledgePortalError (base)
    ├── ConfigurationError — Invalid or missing configuration
    ├── ValidationError — Malformed or missing input fields (HTTP 400)
    ├── AuthError — Bad credentials or missing/expired session (HTTP 401)
    └── StorageError — Backing-store read/write failure (HTTP 500)
"""

from typing import Optional


class KnowledgePortalError(Exception):
    """
    Base exception for all Knowledge Portal errors.

    Args:
        message: Human-readable error description.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.details:
            return f"{self.message} — {self.details}"
        return self.message


class ConfigurationError(KnowledgePortalError):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Non-positive session TTL
    """

    pass


class ValidationError(KnowledgePortalError):
    """
    Raised when caller-supplied input is malformed or incomplete.

    Validation always happens before any mutation is attempted, so a
    ValidationError never leaves partially-written state behind.

    Args:
        message: Field-specific, user-correctable description.
        field: Name of the offending field, if there is a single one.
        details: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.field = field
        super().__init__(message, details)


class AuthError(KnowledgePortalError):
    """
    Raised when authentication fails or a session is not valid.

    The message is deliberately generic: it never distinguishes an unknown
    employee ID from a wrong password.

    Examples:
        - Unknown employee ID or wrong password at login
        - Missing, unknown, or expired session token
    """

    pass


class StorageError(KnowledgePortalError):
    """
    Raised when the backing store cannot be read or written.

    The operation that raised it has not mutated the in-memory state.

    Examples:
        - Data directory not writable
        - Malformed JSON in users.json or queries.json
    """

    pass
