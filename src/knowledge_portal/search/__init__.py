"""Search module — filtering and ordering over the query collection.

This module provides the pure search interface:
    - search_queries: Apply text/topic/employee/date filters, newest first
    - parse_date_filter: Map a raw string to a DateFilter (or None)
    - in_date_window: Single-record date window test

Usage:
    from knowledge_portal.search import search_queries

    results = search_queries(store.list_queries(), search_term="vpn")
"""

from knowledge_portal.search.engine import (
    in_date_window,
    parse_date_filter,
    search_queries,
    sort_newest_first,
)

__all__ = [
    "search_queries",
    "parse_date_filter",
    "in_date_window",
    "sort_newest_first",
]
