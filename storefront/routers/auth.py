"""
Session & Auth Router

Visitor sessions (anonymous carts) and staff sign-in/sign-out.
"""
from fastapi import APIRouter, Depends, Header, HTTPException

from storefront.auth import (
    SessionStore,
    VisitorSession,
    create_web_session,
    end_web_session,
    get_session_store,
    get_visitor_session,
    parse_bearer,
    verify_web_session_token,
)
from storefront.errors import AuthenticationError
from storefront.logging import get_logger
from storefront.services.database import Database
from .deps import get_db
from .models import LoginRequest

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/session")
async def open_session(db: Database = Depends(get_db)):
    """Open an anonymous visitor session; the token identifies the cart."""
    session = create_web_session(db.users)
    return {"token": session.token, "expires_at": session.expires_at.isoformat()}


@router.post("/auth/login")
async def login(
    request: LoginRequest,
    authorization: str = Header(None, alias="Authorization"),
    db: Database = Depends(get_db),
):
    """Sign in, reusing the caller's visitor session (and cart) when one is presented."""
    visitor = None
    token = parse_bearer(authorization)
    if token:
        visitor = verify_web_session_token(token)
    opened_here = visitor is None
    if opened_here:
        visitor = create_web_session(db.users)

    try:
        state = await visitor.store.sign_in(request.email, request.password)
    except AuthenticationError as e:
        if opened_here:
            end_web_session(visitor.token)
        raise HTTPException(status_code=401, detail=e.message)

    return {"token": visitor.token, "session": state.to_dict()}


@router.post("/auth/logout")
async def logout(visitor: VisitorSession = Depends(get_visitor_session)):
    """Sign out and end the visitor session."""
    await visitor.store.sign_out()
    end_web_session(visitor.token)
    return {"success": True}


@router.get("/auth/me")
async def current_session(store: SessionStore = Depends(get_session_store)):
    """Current identity and role for the visitor."""
    return store.state.to_dict()
