"""
Query endpoints — search and submit knowledge-base entries.

Provides:
    - ``GET  /api/queries`` — filtered, newest-first list of queries
    - ``POST /api/queries`` — submit a new query as the logged-in employee

Both require a valid session.
"""

import time

from fastapi import APIRouter, Depends, HTTPException, Query

from knowledge_portal.api.dependencies import get_store, require_identity
from knowledge_portal.api.schemas import CreateQueryRequest, ErrorResponse, QuerySchema
from knowledge_portal.core import Identity, StorageError, ValidationError, get_logger
from knowledge_portal.search import search_queries
from knowledge_portal.store import RecordStore

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[QuerySchema],
    responses={401: {"model": ErrorResponse}},
    summary="Search queries",
)
async def list_queries(
    identity: Identity = Depends(require_identity),
    store: RecordStore = Depends(get_store),
    search: str = Query("", description="Substring matched against title, details, answer"),
    topic: str | None = Query(None, description="Topic, or 'all_topics'"),
    employee: str | None = Query(None, description="Author employee ID, or 'all_employees'"),
    date: str | None = Query(None, description="today, week, month, year, or 'all_time'"),
) -> list[QuerySchema]:
    """
    Return queries matching every supplied filter, newest first.

    Omitted filters and the ``all_*`` sentinel values match everything.
    An unrecognised ``date`` value disables date filtering.
    """
    start = time.perf_counter()

    results = search_queries(
        store.list_queries(),
        search_term=search,
        topic=topic,
        employee_id=employee,
        date_filter=date,
    )

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "Search by %s (search=%r, topic=%s, employee=%s, date=%s) returned %d in %.1f ms",
        identity.employee_id,
        search[:80],
        topic or "any",
        employee or "any",
        date or "any",
        len(results),
        elapsed_ms,
    )

    return [QuerySchema.from_query(q) for q in results]


@router.post(
    "",
    response_model=QuerySchema,
    status_code=201,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Submit a query",
)
async def create_query(
    body: CreateQueryRequest,
    identity: Identity = Depends(require_identity),
    store: RecordStore = Depends(get_store),
) -> QuerySchema:
    """
    Append a new query authored by the logged-in employee.

    The id and date are assigned by the store; ``employeeId`` comes from
    the session.
    """
    try:
        query = store.append_query(
            body.model_dump(),
            author_employee_id=identity.employee_id,
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.details,
            },
        ) from exc
    except StorageError as exc:
        logger.error("Failed to append query: %s", exc)
        raise HTTPException(
            status_code=500,
            detail={
                "error": "storage_error",
                "message": "Failed to create query",
                "details": exc.details,
                "hint": "Check that the data directory is writable.",
            },
        ) from exc

    return QuerySchema.from_query(query)
