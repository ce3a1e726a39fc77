"""
Search engine for the knowledge-base query collection.

This module holds the filter and sort rules shared by the API and the CLI.
It is a pure function over a snapshot of records: no store, no clock
beyond the optional ``now`` argument, no I/O. Callers obtain the snapshot
from ``RecordStore.list_queries()``.

Usage:
    from knowledge_portal.search import search_queries

    results = search_queries(
        store.list_queries(),
        search_term="laptop",
        topic="hardware",
        date_filter="month",
    )
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Union

from knowledge_portal.config.constants import ALL_EMPLOYEES, ALL_TIME, ALL_TOPICS
from knowledge_portal.core.types import DateFilter, Query, Topic, ensure_aware

WEEK_WINDOW = timedelta(days=7)


def parse_date_filter(value: Union[str, DateFilter, None]) -> Optional[DateFilter]:
    """
    Map a raw date-filter value to a ``DateFilter``.

    Anything that is not exactly one of today/week/month/year (including
    ``None``, the empty string, ``"all_time"`` and case or whitespace
    variants such as ``"Week"``) yields ``None``, which disables
    date filtering.
    """
    if isinstance(value, DateFilter):
        return value
    if not value or value == ALL_TIME:
        return None
    try:
        return DateFilter(value)
    except ValueError:
        return None


def _topic_value(topic: Union[str, Topic, None]) -> Optional[str]:
    if isinstance(topic, Topic):
        return topic.value
    if not topic or topic == ALL_TOPICS:
        return None
    return topic


def _employee_value(employee_id: Optional[str]) -> Optional[str]:
    if not employee_id or employee_id == ALL_EMPLOYEES:
        return None
    return employee_id


def _month_bounds(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def _year_bounds(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    return start, start.replace(year=start.year + 1)


def in_date_window(moment: datetime, date_filter: DateFilter, now: datetime) -> bool:
    """
    Return True if ``moment`` falls inside ``date_filter`` relative to ``now``.

    Calendar boundaries (day, month, year) are taken in ``now``'s timezone,
    and ``moment`` is converted to that timezone before comparing.

    Rules:
        today: same calendar year, month, and day as ``now``
        week:  ``now - 7 days <= moment <= now``
        month: ``[first of this month, first of next month)``
        year:  ``[1 January this year, 1 January next year)``
    """
    now = ensure_aware(now)
    local = ensure_aware(moment).astimezone(now.tzinfo)

    if date_filter is DateFilter.TODAY:
        return local.date() == now.date()
    if date_filter is DateFilter.WEEK:
        return now - WEEK_WINDOW <= local <= now
    if date_filter is DateFilter.MONTH:
        start, end = _month_bounds(now)
        return start <= local < end
    if date_filter is DateFilter.YEAR:
        start, end = _year_bounds(now)
        return start <= local < end
    return True


def sort_newest_first(records: Iterable[Query]) -> list[Query]:
    """Sort by date descending; equal dates keep their input order."""
    return sorted(records, key=lambda q: ensure_aware(q.date), reverse=True)


def search_queries(
    records: Iterable[Query],
    search_term: Optional[str] = None,
    topic: Union[str, Topic, None] = None,
    employee_id: Optional[str] = None,
    date_filter: Union[str, DateFilter, None] = None,
    now: Optional[datetime] = None,
) -> list[Query]:
    """
    Filter and sort queries.

    Each filter applies only when it has a non-default value, and active
    filters combine with logical AND, so the order they are applied in
    does not affect the result.

    Args:
        records: Snapshot of queries, in insertion order.
        search_term: Case-insensitive substring matched against title,
                     details, or answer (any one is enough).
        topic: Exact topic match. ``"all_topics"`` disables it.
        employee_id: Exact author match. ``"all_employees"`` disables it.
        date_filter: ``today``, ``week``, ``month`` or ``year``. Any other
                     value disables date filtering.
        now: Reference instant for the date filter. Defaults to the
             current local time.

    Returns:
        Matching queries, newest first, ties in input order.
    """
    term = search_term.lower() if search_term else ""
    topic_filter = _topic_value(topic)
    employee_filter = _employee_value(employee_id)
    window = parse_date_filter(date_filter)
    reference = ensure_aware(now) if now is not None else datetime.now().astimezone()

    def matches(query: Query) -> bool:
        if term and not (
            term in query.title.lower()
            or term in query.details.lower()
            or term in query.answer.lower()
        ):
            return False
        if topic_filter is not None and query.topic.value != topic_filter:
            return False
        if employee_filter is not None and query.employee_id != employee_filter:
            return False
        if window is not None and not in_date_window(query.date, window, reference):
            return False
        return True

    return sort_newest_first(q for q in records if matches(q))
