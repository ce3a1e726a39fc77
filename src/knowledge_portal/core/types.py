"""Core data types for Knowledge Portal.

This module defines the domain objects shared by the store, search engine,
session gate, API, and CLI:
    - Topic: Closed category tag on a query
    - DateFilter: Named relative time window for search
    - User: Employee account
    - Query: Stored question/answer entry
    - Identity: Who a validated session belongs to
    - Session: Server-side record of a successful login

Design notes:
    - Records are frozen dataclasses; the store swaps whole tuples of them
      rather than mutating in place.
    - ``to_record()`` / ``from_record()`` convert to and from the camelCase
      dicts persisted in the JSON files and returned by the API.
    - Timestamps are always timezone-aware once loaded. A naive timestamp on
      disk is read as local time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class Topic(Enum):
    """Knowledge-base query topics.

    Values:
        TECHNICAL: Development, deployment, and tooling questions
        ACCOUNT: Login, profile, and account settings
        HARDWARE: Laptops, peripherals, equipment requests
        SOFTWARE: Licences and installed applications
        HR: Leave, payroll, and policy
        OTHER: Anything else
    """

    TECHNICAL = "technical"
    ACCOUNT = "account"
    HARDWARE = "hardware"
    SOFTWARE = "software"
    HR = "hr"
    OTHER = "other"


class DateFilter(Enum):
    """Relative date windows understood by the search engine."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def ensure_aware(moment: datetime) -> datetime:
    """Attach the local timezone to a naive datetime; pass aware ones through."""
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment


@dataclass(frozen=True)
class User:
    """An employee account.

    Attributes:
        id: Integer primary key, assigned as max existing id + 1
        employee_id: Unique login name (e.g., "E2301")
        password: Plaintext password. Stored and compared as-is; this is a
                  known security gap of the portal, not an oversight.
    """

    id: int
    employee_id: str
    password: str = field(repr=False)

    def to_record(self) -> dict[str, Any]:
        """Convert to the persisted camelCase dict."""
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "password": self.password,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "User":
        """Build a User from a persisted dict.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If ``id`` is not an integer.
        """
        return cls(
            id=int(record["id"]),
            employee_id=str(record["employeeId"]),
            password=str(record["password"]),
        )


@dataclass(frozen=True)
class Query:
    """A stored question/answer knowledge-base entry.

    Queries are append-only: they are never updated or deleted.

    Attributes:
        id: Unique, strictly increasing integer id
        title: Short question summary
        details: Full question text
        answer: Answer text
        topic: Category tag
        employee_id: Author's employee ID (references User.employee_id)
        date: Submission timestamp (timezone-aware)
    """

    id: int
    title: str
    details: str
    answer: str
    topic: Topic
    employee_id: str
    date: datetime

    def to_record(self) -> dict[str, Any]:
        """Convert to the persisted camelCase dict (ISO 8601 date)."""
        return {
            "id": self.id,
            "title": self.title,
            "details": self.details,
            "answer": self.answer,
            "topic": self.topic.value,
            "employeeId": self.employee_id,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Query":
        """Build a Query from a persisted dict.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If the id, topic, or date cannot be parsed.
        """
        return cls(
            id=int(record["id"]),
            title=str(record["title"]),
            details=str(record["details"]),
            answer=str(record["answer"]),
            topic=Topic(record["topic"]),
            employee_id=str(record["employeeId"]),
            date=ensure_aware(datetime.fromisoformat(record["date"])),
        )


@dataclass(frozen=True)
class Identity:
    """The authenticated employee a session is bound to."""

    user_id: int
    employee_id: str


@dataclass(frozen=True)
class Session:
    """Server-side proof of a successful login.

    Attributes:
        token: Opaque URL-safe identifier handed to the client as a cookie
        identity: The employee the session belongs to
        created_at: When the session was issued
        expires_at: When the session stops validating
    """

    token: str = field(repr=False)
    identity: Identity
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Return True once ``now`` has reached ``expires_at``."""
        moment = now if now is not None else datetime.now(self.expires_at.tzinfo)
        return moment >= self.expires_at
