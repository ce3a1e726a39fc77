"""Auth module — session-based authentication gate.

Usage:
    from knowledge_portal.auth import SessionGate

    gate = SessionGate(store)
    session = gate.login("E2301", "Welcome@5432109")
    identity = gate.validate(session.token)
"""

from knowledge_portal.auth.sessions import SessionGate

__all__ = [
    "SessionGate",
]
