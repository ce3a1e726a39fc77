"""
In-memory session gate.

Issues opaque session tokens on successful login and resolves them back to
an ``Identity`` on later requests. Sessions live in process memory and
expire a fixed TTL after creation (24 hours by default). Expiry is checked
lazily whenever a token is validated; there is no background sweeper.

Security note: passwords are compared as plaintext with ``==``. The portal
stores them unhashed. Changing that is a deliberate design decision that
also requires migrating users.json, not something to patch in here.
"""

import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from knowledge_portal.config import (
    INVALID_CREDENTIALS_MESSAGE,
    SESSION_TOKEN_BYTES,
    UNAUTHENTICATED_MESSAGE,
    get_settings,
)
from knowledge_portal.core import (
    AuthError,
    ConfigurationError,
    Identity,
    Session,
    get_logger,
    redact_token,
)
from knowledge_portal.store import RecordStore

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionGate:
    """
    Login, logout, and session validation over a ``RecordStore``.

    Example:
        >>> gate = SessionGate(store)
        >>> session = gate.login("E2301", "Welcome@5432109")
        >>> gate.validate(session.token).employee_id
        'E2301'
        >>> gate.logout(session.token)
    """

    def __init__(
        self,
        store: RecordStore,
        ttl: Optional[timedelta] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Args:
            store: Source of user accounts.
            ttl: Session lifetime. If None, uses ``settings.session.ttl_hours``.
            clock: Returns the current timezone-aware time (tests inject a
                   fixed clock).

        Raises:
            ConfigurationError: If the TTL is not positive.
        """
        if ttl is None:
            ttl = timedelta(hours=get_settings().session.ttl_hours)
        if ttl <= timedelta(0):
            raise ConfigurationError(
                "Session TTL must be positive",
                details=f"got {ttl}",
            )

        self._store = store
        self._ttl = ttl
        self._clock = clock or _utc_now
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def active_sessions(self) -> int:
        """Number of stored sessions, including expired ones not yet purged."""
        return len(self._sessions)

    def login(self, employee_id: str, password: str) -> Session:
        """
        Authenticate an employee and open a new session.

        Raises:
            AuthError: With the same message whether the employee ID is
                       unknown or the password is wrong.
        """
        user = self._store.find_user_by_employee_id(employee_id)
        # Plaintext comparison; see module docstring.
        if user is None or user.password != password:
            logger.info("Rejected login for employee ID %r", employee_id)
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        now = self._clock()
        session = Session(
            token=secrets.token_urlsafe(SESSION_TOKEN_BYTES),
            identity=Identity(user_id=user.id, employee_id=user.employee_id),
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._sessions[session.token] = session

        logger.info("Login succeeded for %s", user.employee_id)
        logger.debug("Issued session %s", redact_token(session.token))
        return session

    def logout(self, token: Optional[str]) -> None:
        """Invalidate a session. Unknown, expired, or empty tokens are ignored."""
        if not token:
            return
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None:
            logger.info("Logout for %s", session.identity.employee_id)

    def validate(self, token: Optional[str]) -> Identity:
        """
        Resolve a session token to the identity it is bound to.

        An expired session is removed as a side effect.

        Raises:
            AuthError: If the token is empty, unknown, or expired.
        """
        if not token:
            raise AuthError(UNAUTHENTICATED_MESSAGE)

        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is not None and session.is_expired(now):
                del self._sessions[token]
                logger.debug("Session %s expired", redact_token(token))
                session = None

        if session is None:
            raise AuthError(UNAUTHENTICATED_MESSAGE)
        return session.identity

    def purge_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.debug("Purged %d expired session(s)", len(expired))
        return len(expired)
