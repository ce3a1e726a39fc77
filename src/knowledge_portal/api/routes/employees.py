"""
Employee listing endpoint.

Provides ``GET /api/employees`` returning the unique employee IDs that have
authored queries, for the author filter dropdown.
"""

from fastapi import APIRouter, Depends

from knowledge_portal.api.dependencies import get_store, require_identity
from knowledge_portal.api.schemas import ErrorResponse
from knowledge_portal.core import Identity
from knowledge_portal.store import RecordStore

router = APIRouter()


@router.get(
    "",
    response_model=list[str],
    responses={401: {"model": ErrorResponse}},
    summary="List query authors",
)
async def list_employees(
    _identity: Identity = Depends(require_identity),
    store: RecordStore = Depends(get_store),
) -> list[str]:
    """Unique author employee IDs, newest author first."""
    return store.list_employee_ids()
