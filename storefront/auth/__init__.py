"""Authentication package."""
from .store import SessionState, SessionStore, SessionUser
from .session import (
    VisitorSession,
    create_web_session,
    end_web_session,
    verify_web_session_token,
)
from .dependencies import get_session_store, get_visitor_session, parse_bearer, require_staff

__all__ = [
    "SessionState",
    "SessionStore",
    "SessionUser",
    "VisitorSession",
    "create_web_session",
    "end_web_session",
    "verify_web_session_token",
    "get_session_store",
    "get_visitor_session",
    "parse_bearer",
    "require_staff",
]
