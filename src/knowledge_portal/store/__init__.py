"""Store module — durable user and query records.

This module provides the persistence layer of the portal:
    - RecordStore: Write-through JSON file store for users and queries
    - DEMO_USERS / demo_queries: Fixture data seeded into an empty store

Usage:
    from knowledge_portal.store import RecordStore

    store = RecordStore()
    user = store.find_user_by_employee_id("E2301")
    queries = store.list_queries()
"""

from knowledge_portal.store.fixtures import DEMO_USERS, demo_queries
from knowledge_portal.store.records import RecordStore

__all__ = [
    # Main class
    "RecordStore",
    # Seed data
    "DEMO_USERS",
    "demo_queries",
]
