"""
Shared pytest fixtures for Knowledge Portal tests.

This module provides reusable test data and temporary resources used
across unit, integration, and API tests:

    - fixed_now: A timezone-aware reference instant (2024-05-02 12:00 UTC)
    - sample_queries: The three literal fixture queries used by search tests
    - tmp_data_dir: Isolated data directory for a RecordStore
    - empty_store / store: Unseeded stores, without and with users
    - seeded_store: A store initialised with the demo fixtures
    - gate: A SessionGate over ``store`` with a controllable clock
"""

from datetime import datetime, timedelta, timezone

import pytest

from knowledge_portal.auth import SessionGate
from knowledge_portal.core.types import Query, Topic
from knowledge_portal.store import RecordStore
from tests.helpers import MutableClock, make_query


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_now() -> datetime:
    """Midday on 2024-05-02 in UTC, the reference "now" for date filters."""
    return datetime(2024, 5, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now: datetime) -> MutableClock:
    """A clock starting at ``fixed_now`` that tests can advance."""
    return MutableClock(fixed_now)


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_queries() -> list[Query]:
    """
    Three queries dated 2024-04-25, 2024-04-28 and 2024-05-01.

    Listed oldest first (insertion order) so tests can check the engine
    re-orders them newest first.
    """
    return [
        make_query(
            id=1,
            title="500 internal server error",
            details="Getting 500 error when saving a large document in the CMS",
            answer="The CMS has a 10MB upload limit. Compress or split the file.",
            topic=Topic.TECHNICAL,
            employee_id="E2301",
            date=datetime(2024, 4, 25, 10, 30, tzinfo=timezone.utc),
        ),
        make_query(
            id=2,
            title="How to update profile picture?",
            details="I can't find where to change my profile picture",
            answer="Go to My Account > Settings > Profile Information.",
            topic=Topic.ACCOUNT,
            employee_id="E1856",
            date=datetime(2024, 4, 28, 14, 15, tzinfo=timezone.utc),
        ),
        make_query(
            id=3,
            title="Request for new equipment",
            details="What is the process for requesting a new LAPTOP?",
            answer="Fill out the Equipment Request Form on the IT Portal.",
            topic=Topic.HARDWARE,
            employee_id="E1406",
            date=datetime(2024, 5, 1, 9, 15, tzinfo=timezone.utc),
        ),
    ]


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_data_dir(tmp_path) -> str:
    """
    Isolated data directory inside pytest's tmp directory.

    Each test receives a unique directory, so JSON files never collide
    or persist between runs.
    """
    return str(tmp_path / "data")


@pytest.fixture
def empty_store(tmp_data_dir: str, clock: MutableClock) -> RecordStore:
    """A store with no users, no queries, and seeding disabled."""
    return RecordStore(data_dir=tmp_data_dir, seed=False, clock=clock)


@pytest.fixture
def store(empty_store: RecordStore) -> RecordStore:
    """An unseeded store holding two users and no queries."""
    empty_store.create_user("E2301", "Welcome@5432109")
    empty_store.create_user("E1856", "password")
    return empty_store


@pytest.fixture
def seeded_store(tmp_data_dir: str, clock: MutableClock) -> RecordStore:
    """A store initialised from the demo fixtures."""
    return RecordStore(data_dir=tmp_data_dir, seed=True, clock=clock)


@pytest.fixture
def gate(store: RecordStore, clock: MutableClock) -> SessionGate:
    """A 24-hour session gate sharing the test clock."""
    return SessionGate(store, ttl=timedelta(hours=24), clock=clock)
