"""
FastAPI dependency providers for Knowledge Portal.

The store and session gate are created once in the lifespan startup
(``app.py``) and stored on ``request.app.state``; these functions hand
them to route handlers. Tests swap them out through
``app.dependency_overrides``.

Usage in route modules::

    from fastapi import Depends
    from knowledge_portal.api.dependencies import get_store, require_identity

    @router.get("")
    async def list_queries(
        identity: Identity = Depends(require_identity),
        store: RecordStore = Depends(get_store),
    ):
        ...
"""

from fastapi import Depends, HTTPException, Request

from knowledge_portal.auth import SessionGate
from knowledge_portal.config import Settings, get_settings
from knowledge_portal.core import AuthError, Identity
from knowledge_portal.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Provide the RecordStore singleton."""
    store: RecordStore = request.app.state.store
    return store


def get_session_gate(request: Request) -> SessionGate:
    """Provide the SessionGate singleton."""
    gate: SessionGate = request.app.state.session_gate
    return gate


def get_app_settings() -> Settings:
    """Provide the Settings singleton."""
    return get_settings()


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> str | None:
    """Read the session token from the configured cookie, if present."""
    return request.cookies.get(settings.session.cookie_name)


def require_identity(
    token: str | None = Depends(get_session_token),
    gate: SessionGate = Depends(get_session_gate),
) -> Identity:
    """
    Resolve the caller's identity or reject the request with 401.

    Used by every endpoint that needs a logged-in employee.
    """
    try:
        return gate.validate(token)
    except AuthError as exc:
        raise HTTPException(
            status_code=401,
            detail={
                "error": "unauthorized",
                "message": exc.message,
                "hint": "Log in via POST /api/login.",
            },
        ) from exc
