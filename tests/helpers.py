"""
Shared test helper utilities for Knowledge Portal tests.

Plain functions and classes (not pytest fixtures) that can be imported
directly by test modules. Kept separate from conftest.py because
conftest.py is for fixtures only.
"""

from datetime import datetime, timedelta, timezone

from knowledge_portal.core.types import Query, Topic


class MutableClock:
    """Callable clock returning a settable instant."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def make_query(
    *,
    id: int = 1,
    title: str = "VPN keeps disconnecting",
    details: str = "The VPN drops every ten minutes when working from home.",
    answer: str = "Update the VPN client to the latest version.",
    topic: Topic = Topic.TECHNICAL,
    employee_id: str = "E2301",
    date: datetime = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc),
) -> Query:
    """
    Factory for creating Query instances with sensible defaults.

    Not a fixture — accepts parameters so tests can create records with
    different values.
    """
    return Query(
        id=id,
        title=title,
        details=details,
        answer=answer,
        topic=topic,
        employee_id=employee_id,
        date=date,
    )


def query_fields(**overrides: str) -> dict[str, str]:
    """A valid ``append_query`` / ``POST /api/queries`` payload."""
    fields = {
        "title": "Printer on floor 3 offline",
        "details": "The shared printer shows offline for everyone.",
        "answer": "Power-cycle it and re-add it from the print server.",
        "topic": "hardware",
    }
    fields.update(overrides)
    return fields
