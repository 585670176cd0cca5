"""FastAPI dependencies for visitor sessions and staff access.

Handlers receive the session store (and, via routers.deps, the cart)
as explicit dependencies instead of reaching into module globals.

Usage:
    @router.get("/admin/thing")
    async def handler(state: SessionState = Depends(require_staff)):
        ...
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from storefront.errors import ERROR_INVALID_SESSION, ERROR_STAFF_ONLY, ERROR_UNAUTHORIZED
from .session import VisitorSession, verify_web_session_token
from .store import SessionState, SessionStore


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Token from an `Authorization: Bearer <token>` value, or None if malformed."""
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None
    return parts[1]


def get_session_token(authorization: str = Header(None, alias="Authorization")) -> str:
    """Extract the visitor session token from `Authorization: Bearer <token>`."""
    if not authorization:
        raise HTTPException(status_code=401, detail="No authorization header")

    token = parse_bearer(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail=ERROR_INVALID_SESSION)
    return token


def get_visitor_session(token: str = Depends(get_session_token)) -> VisitorSession:
    session = verify_web_session_token(token)
    if session is None:
        raise HTTPException(status_code=401, detail=ERROR_INVALID_SESSION)
    return session


def get_session_store(visitor: VisitorSession = Depends(get_visitor_session)) -> SessionStore:
    return visitor.store


def require_staff(store: SessionStore = Depends(get_session_store)) -> SessionState:
    """
    Allow admin, manager and employee roles into the back-office.

    401 when not signed in, 403 when signed in without a staff role.
    """
    state = store.state
    if not state.is_authenticated:
        raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)
    if not state.is_staff:
        raise HTTPException(status_code=403, detail=ERROR_STAFF_ONLY)
    return state
