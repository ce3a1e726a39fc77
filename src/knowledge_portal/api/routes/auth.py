"""
Authentication endpoints — login, logout, and session check.

Provides:
    - ``POST /api/login``      — check credentials, set the session cookie
    - ``POST /api/logout``     — drop the session, clear the cookie
    - ``GET  /api/auth-check`` — report whether the cookie holds a live session

The session token travels only in an HttpOnly cookie; it never appears in
a response body.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from knowledge_portal.api.dependencies import (
    get_app_settings,
    get_session_gate,
    get_session_token,
)
from knowledge_portal.api.schemas import (
    AuthCheckResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from knowledge_portal.auth import SessionGate
from knowledge_portal.config import Settings
from knowledge_portal.core import AuthError, get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Log in with employee ID and password",
)
async def login(
    body: LoginRequest,
    response: Response,
    gate: SessionGate = Depends(get_session_gate),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    """
    Authenticate an employee and start a session.

    On success the session token is set as a cookie that expires together
    with the session. Wrong employee ID and wrong password produce the
    same 401 response.
    """
    try:
        session = gate.login(body.employee_id, body.password)
    except AuthError as exc:
        raise HTTPException(
            status_code=401,
            detail={"error": "invalid_credentials", "message": exc.message},
        ) from exc

    response.set_cookie(
        key=settings.session.cookie_name,
        value=session.token,
        max_age=int(gate.ttl.total_seconds()),
        httponly=True,
        secure=settings.session.cookie_secure,
        samesite=settings.session.cookie_samesite,
    )
    return LoginResponse(employee_id=session.identity.employee_id)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
)
async def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    gate: SessionGate = Depends(get_session_gate),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    """End the current session. Succeeds even without a valid session."""
    gate.logout(token)
    response.delete_cookie(
        key=settings.session.cookie_name,
        httponly=True,
        secure=settings.session.cookie_secure,
        samesite=settings.session.cookie_samesite,
    )
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/auth-check",
    response_model=AuthCheckResponse,
    response_model_exclude_none=True,
    summary="Check authentication status",
)
async def auth_check(
    token: str | None = Depends(get_session_token),
    gate: SessionGate = Depends(get_session_gate),
) -> AuthCheckResponse:
    """Always 200; ``isAuthenticated`` tells whether the session is live."""
    try:
        identity = gate.validate(token)
    except AuthError:
        return AuthCheckResponse(is_authenticated=False)
    return AuthCheckResponse(is_authenticated=True, employee_id=identity.employee_id)
