"""
Session store: observable wrapper around one visitor's Supabase auth session.

Usage:
    store = SessionStore(users_repo)
    unsubscribe = store.subscribe(lambda state: print(state.role))
    await store.sign_in("admin@example.com", "secret")
    ...
    await store.sign_out()
    unsubscribe()
"""
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, List, Optional

from supabase._async.client import AsyncClient

from storefront.db import create_auth_client
from storefront.errors import AuthenticationError
from storefront.logging import get_logger, mask_email_for_logging, sanitize_id_for_logging
from storefront.services.models import Role
from storefront.services.repositories import UserRepository

logger = get_logger(__name__)

# Supabase auth events that carry a changed identity for an existing session
_IDENTITY_EVENTS = ("TOKEN_REFRESHED", "USER_UPDATED")


@dataclass(frozen=True)
class SessionUser:
    """Authenticated identity as reported by Supabase auth."""
    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of who is signed in and with which role."""
    user: Optional[SessionUser] = None
    role: Optional[Role] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_staff(self) -> bool:
        return self.user is not None and self.role is not None

    def to_dict(self) -> dict:
        return {
            "authenticated": self.is_authenticated,
            "user_id": self.user.id if self.user else None,
            "email": self.user.email if self.user else None,
            "role": self.role.value if self.role else None,
        }


ANONYMOUS = SessionState()

SessionListener = Callable[[SessionState], None]


class SessionStore:
    """
    Current sign-in state for one visitor plus sign-in/sign-out delegation.

    The auth client is created lazily on first sign-in; its auth-state stream
    is attached at that point so that remote sign-outs and token refreshes
    are reflected here. Listeners are invoked synchronously on every state
    change.
    """

    def __init__(
        self,
        users: UserRepository,
        client_factory: Callable[[], Awaitable[AsyncClient]] = create_auth_client,
    ):
        self._users = users
        self._client_factory = client_factory
        self._client: Optional[AsyncClient] = None
        self._auth_subscription: Any = None
        self._state: SessionState = ANONYMOUS
        self._listeners: List[SessionListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a state listener.

        Returns:
            Unsubscribe handle; calling it more than once is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, email: str, password: str) -> SessionState:
        """
        Sign in with email and password, then classify the user's role.

        Raises:
            AuthenticationError: the remote service rejected the credentials
                or could not be reached. Not retried.
        """
        try:
            client = await self._get_client()
            response = await client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            reason = "invalid credentials" if "invalid" in str(e).lower() else "auth service error"
            logger.warning(f"Sign-in failed for {mask_email_for_logging(email)}: {reason}")
            raise AuthenticationError() from e

        auth_user = getattr(response, "user", None)
        if auth_user is None:
            logger.warning(f"Sign-in returned no user for {mask_email_for_logging(email)}")
            raise AuthenticationError()

        role = await self._resolve_role(auth_user.id)
        self._set_state(SessionState(user=SessionUser(id=auth_user.id, email=auth_user.email), role=role))
        logger.info(
            f"User {sanitize_id_for_logging(auth_user.id)} signed in "
            f"(role: {role.value if role else 'none'})"
        )
        return self._state

    async def sign_out(self) -> None:
        """Sign out remotely and reset to anonymous; the reset happens even if the remote call fails."""
        if self._client is not None and self._state.is_authenticated:
            try:
                await self._client.auth.sign_out()
            except Exception as e:
                logger.warning(f"Remote sign-out failed, clearing local session anyway: {e}")
        self._set_state(ANONYMOUS)

    def close(self) -> None:
        """Detach from the remote auth stream, release the auth client and drop all listeners."""
        if self._auth_subscription is not None:
            self._auth_subscription.unsubscribe()
            self._auth_subscription = None
        self._client = None
        self._listeners.clear()

    # ==================== INTERNALS ====================

    async def _get_client(self) -> AsyncClient:
        if self._client is None:
            self._client = await self._client_factory()
            self._auth_subscription = self._client.auth.on_auth_state_change(self._on_auth_event)
        return self._client

    async def _resolve_role(self, user_id: str) -> Optional[Role]:
        try:
            return Role.classify(await self._users.get_role(user_id))
        except Exception as e:
            # Authenticated but unclassified: storefront works, back-office stays closed
            logger.error(f"Failed to load role for {sanitize_id_for_logging(user_id)}: {e}", exc_info=True)
            return None

    def _on_auth_event(self, event: str, session: Any) -> None:
        """Callback for the Supabase auth-state stream."""
        if event == "SIGNED_OUT" or session is None:
            self._set_state(ANONYMOUS)
            return

        if event in _IDENTITY_EVENTS and self._state.user is not None:
            auth_user = getattr(session, "user", None)
            if auth_user is not None and auth_user.id == self._state.user.id:
                self._set_state(replace(self._state, user=SessionUser(id=auth_user.id, email=auth_user.email)))

    def _set_state(self, state: SessionState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)
