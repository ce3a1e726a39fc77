"""Knowledge Portal — internal question/answer knowledge base.

This package provides the record store, search engine, and session gate
behind the employee knowledge-base portal, plus the HTTP API and CLI that
expose them.

Usage:
    from knowledge_portal import __version__
    from knowledge_portal.config import get_settings
    from knowledge_portal.search import search_queries
    from knowledge_portal.store import RecordStore
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("knowledge-portal")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Re-export lightweight core types for convenience.
# The API (fastapi) and CLI (typer) are NOT imported here.
from knowledge_portal.core import (
    DateFilter,
    Identity,
    KnowledgePortalError,
    Query,
    Session,
    Topic,
    User,
)

__all__ = [
    "__version__",
    # Core types
    "Topic",
    "DateFilter",
    "User",
    "Query",
    "Identity",
    "Session",
    # Base exception
    "KnowledgePortalError",
]
