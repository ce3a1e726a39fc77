"""Core module — types, exceptions, and logging.

This module provides the foundational components used throughout the package:
    - Data types (Topic, DateFilter, User, Query, Identity, Session)
    - Exception hierarchy (KnowledgePortalError and subclasses)
    - Logging utilities (get_logger, configure_logging)

Usage:
    from knowledge_portal.core import (
        Query,
        Topic,
        StorageError,
        get_logger,
    )
"""

from knowledge_portal.core.exceptions import (
    AuthError,
    ConfigurationError,
    KnowledgePortalError,
    StorageError,
    ValidationError,
)
from knowledge_portal.core.logging import (
    configure_logging,
    get_logger,
    redact_token,
    suppress_third_party_loggers,
)
from knowledge_portal.core.types import (
    DateFilter,
    Identity,
    Query,
    Session,
    Topic,
    User,
    ensure_aware,
)

__all__ = [
    # Types
    "Topic",
    "DateFilter",
    "User",
    "Query",
    "Identity",
    "Session",
    "ensure_aware",
    # Exceptions
    "KnowledgePortalError",
    "ConfigurationError",
    "ValidationError",
    "AuthError",
    "StorageError",
    # Logging
    "get_logger",
    "configure_logging",
    "redact_token",
    "suppress_third_party_loggers",
]
