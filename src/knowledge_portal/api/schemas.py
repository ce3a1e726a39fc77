"""
Pydantic v2 request and response schemas for the Knowledge Portal API.

Schemas are separate from the core dataclasses in ``knowledge_portal.core``
to provide a stable, explicit API contract. Field names are snake_case in
Python and camelCase on the wire (``employee_id`` <-> ``employeeId``);
FastAPI serialises responses by alias.

Naming convention:
    - Request schemas:  ``<Resource>Request`` (e.g. ``LoginRequest``)
    - Response schemas: ``<Resource>Response`` or ``<Resource>Schema``

All datetimes are ISO 8601 with a UTC offset.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from knowledge_portal.core.types import Query, Topic


class CamelModel(BaseModel):
    """Base model that accepts and emits camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared / error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """
    Structured error body, nested under ``detail`` for all 4xx and 5xx
    responses.
    """

    error: str = Field(..., description="Machine-readable error type")
    message: str = Field(..., description="Human-readable error description")
    details: str | None = Field(None, description="Additional technical context")
    hint: str | None = Field(None, description="Suggested remediation action")


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(CamelModel):
    """Request body for ``POST /api/login``."""

    employee_id: str = Field(..., min_length=1, description="Employee ID, e.g. E2301")
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    """Response for ``POST /api/login``."""

    employee_id: str


class AuthCheckResponse(CamelModel):
    """Response for ``GET /api/auth-check``.

    ``employeeId`` is omitted entirely when not authenticated.
    """

    is_authenticated: bool
    employee_id: str | None = None


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class QuerySchema(CamelModel):
    """A single knowledge-base entry as returned by the API."""

    id: int = Field(..., ge=1)
    title: str
    details: str
    answer: str
    topic: Topic
    employee_id: str
    date: datetime

    @classmethod
    def from_query(cls, query: Query) -> QuerySchema:
        """Convert a core ``Query`` to its API representation."""
        return cls(
            id=query.id,
            title=query.title,
            details=query.details,
            answer=query.answer,
            topic=query.topic,
            employee_id=query.employee_id,
            date=query.date,
        )


class CreateQueryRequest(CamelModel):
    """
    Request body for ``POST /api/queries``.

    The author is always taken from the session; an ``employeeId`` in the
    body is ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: str = Field(..., min_length=1)
    details: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    topic: Topic
