"""
FastAPI application factory for Knowledge Portal.

The public symbol is ``app`` — the ASGI application object used by
uvicorn and by the test client.

Architecture:
    - The RecordStore and SessionGate are created once in the lifespan
      context manager and stored on ``app.state``.
    - Route modules access them through dependency functions in
      ``dependencies.py`` (which read from ``request.app.state``).
    - Request validation failures are reported as 400 with a
      field-specific message instead of FastAPI's default 422.
    - No business logic lives here — this is pure wiring.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from knowledge_portal import __version__
from knowledge_portal.config import get_settings
from knowledge_portal.core import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: initialise singletons, store on app.state
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Initialise and clean up application-level singletons.

    Startup order:
        1. RecordStore (loads or seeds the JSON files)
        2. SessionGate (empty in-memory session table)
    """
    from knowledge_portal.auth import SessionGate
    from knowledge_portal.store import RecordStore

    logger.info("Knowledge Portal API starting up (v%s)", __version__)

    settings = get_settings()

    store = RecordStore()
    session_gate = SessionGate(store)

    app.state.store = store
    app.state.session_gate = session_gate
    app.state.settings = settings

    logger.info(
        "Store ready at %s (%d users, %d queries). API ready.",
        store.data_dir,
        len(store.list_users()),
        len(store.list_queries()),
    )
    yield
    logger.info("Knowledge Portal API shutting down.")


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


def _validation_message(error: dict[str, Any]) -> str:
    """Turn one pydantic error into a short field-specific sentence."""
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = loc[-1] if loc else "body"
    if error.get("type") in ("missing", "string_too_short"):
        return f"{field} is required"
    return f"{field}: {error.get('msg', 'invalid value')}"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as 400 with the first field error."""
    errors = exc.errors()
    message = _validation_message(errors[0]) if errors else "Invalid request"
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "error": "validation_error",
                "message": message,
                "details": "; ".join(_validation_message(e) for e in errors[1:]) or None,
            }
        },
    )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fully configured ASGI application with CORS middleware,
    lifespan management, the 400 validation handler, all routers, and a
    health-check endpoint.
    """
    settings = get_settings()

    application = FastAPI(
        title="Knowledge Portal API",
        description=(
            "Internal knowledge base: employee login, query search and "
            "filtering, and query submission."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -- CORS ---------------------------------------------------------------
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Errors -------------------------------------------------------------
    application.add_exception_handler(
        RequestValidationError,
        validation_exception_handler,  # type: ignore[arg-type]
    )

    # -- Routers ------------------------------------------------------------
    from knowledge_portal.api.routes.auth import router as auth_router
    from knowledge_portal.api.routes.employees import router as employees_router
    from knowledge_portal.api.routes.queries import router as queries_router

    application.include_router(auth_router, prefix="/api", tags=["auth"])
    application.include_router(queries_router, prefix="/api/queries", tags=["queries"])
    application.include_router(
        employees_router, prefix="/api/employees", tags=["employees"]
    )

    # -- Health check -------------------------------------------------------
    @application.get("/api/health", tags=["meta"], summary="Health check")
    async def health() -> dict[str, str]:
        """Return API liveness status."""
        return {"status": "ok", "version": __version__}

    return application


app = create_app()
