"""Web session utilities (in-memory visitor sessions)."""
import os
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone, timedelta
from typing import Dict, Optional

from storefront.cart import get_cart_manager
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.repositories import UserRepository
from .store import SessionStore

logger = get_logger(__name__)

WEB_SESSION_TTL_DAYS = int(os.environ.get("WEB_SESSION_TTL_DAYS", "7"))
MAX_WEB_SESSIONS = int(os.environ.get("MAX_WEB_SESSIONS", "10000"))


@dataclass
class VisitorSession:
    """One browser's session: its auth state; the cart lives in CartManager under the same token."""
    token: str
    store: SessionStore
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc) + timedelta(days=WEB_SESSION_TTL_DAYS)
    )


_web_sessions: Dict[str, VisitorSession] = {}


def purge_expired_sessions(now: Optional[datetime] = None) -> int:
    """End every expired visitor session; returns how many were ended."""
    now = now or datetime.now(timezone.utc)
    expired = [token for token, session in _web_sessions.items() if now > session.expires_at]
    for token in expired:
        end_web_session(token)
    return len(expired)


def create_web_session(users: UserRepository) -> VisitorSession:
    """
    Open a new anonymous visitor session and return it.

    Expired sessions are swept first. Past MAX_WEB_SESSIONS the oldest
    session is ended to make room.
    """
    purge_expired_sessions()
    while len(_web_sessions) >= MAX_WEB_SESSIONS:
        oldest = next(iter(_web_sessions))
        logger.warning(f"Visitor session limit reached, ending {sanitize_id_for_logging(oldest)}")
        end_web_session(oldest)

    token = secrets.token_urlsafe(32)
    session = VisitorSession(token=token, store=SessionStore(users))
    _web_sessions[token] = session
    logger.info(f"Opened visitor session {sanitize_id_for_logging(token)}")
    return session


def verify_web_session_token(token: str) -> Optional[VisitorSession]:
    """Look up a visitor session; expired sessions are ended and yield None."""
    session = _web_sessions.get(token)
    if not session:
        return None

    if datetime.now(timezone.utc) > session.expires_at:
        end_web_session(token)
        return None

    return session


def end_web_session(token: str) -> None:
    """Forget a visitor session, its cart, and its auth stream subscription."""
    session = _web_sessions.pop(token, None)
    get_cart_manager().discard(token)
    if session is not None:
        session.store.close()
        logger.info(f"Ended visitor session {sanitize_id_for_logging(token)}")


def clear_web_sessions() -> None:
    """End every visitor session (application shutdown)."""
    for token in list(_web_sessions):
        end_web_session(token)
