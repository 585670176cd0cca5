"""Tests for the session store and visitor sessions"""
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock

from storefront.auth import (
    SessionState,
    SessionStore,
    SessionUser,
    create_web_session,
    end_web_session,
    parse_bearer,
    verify_web_session_token,
)
from storefront.auth import session as web_session
from storefront.cart import get_cart_manager
from storefront.errors import AuthenticationError
from storefront.services.models import Role


@pytest.fixture
def users_repo():
    repo = Mock()
    repo.get_role = AsyncMock(return_value="admin")
    return repo


@pytest.fixture
def store(users_repo, mock_auth_client):
    return SessionStore(users_repo, client_factory=AsyncMock(return_value=mock_auth_client))


@pytest.mark.asyncio
async def test_sign_in_sets_user_and_role(store, mock_auth_client):
    """Successful sign-in populates user and classified role"""
    state = await store.sign_in("admin@example.com", "secret")

    assert state.is_authenticated
    assert state.is_staff
    assert state.user == SessionUser(id="user-123", email="admin@example.com")
    assert state.role is Role.ADMIN
    assert store.state is state
    mock_auth_client.auth.sign_in_with_password.assert_awaited_once_with(
        {"email": "admin@example.com", "password": "secret"}
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("raw_role,expected", [
    ("manager", Role.MANAGER),
    ("Employee", Role.EMPLOYEE),
    ("customer", None),
    (None, None),
])
async def test_sign_in_classifies_role(store, users_repo, raw_role, expected):
    users_repo.get_role.return_value = raw_role

    state = await store.sign_in("user@example.com", "secret")

    assert state.is_authenticated
    assert state.role is expected
    assert state.is_staff is (expected is not None)


@pytest.mark.asyncio
async def test_sign_in_role_lookup_failure_leaves_role_empty(store, users_repo):
    users_repo.get_role.side_effect = RuntimeError("network down")

    state = await store.sign_in("admin@example.com", "secret")

    assert state.is_authenticated
    assert state.role is None


@pytest.mark.asyncio
async def test_sign_in_rejected_credentials(store, mock_auth_client):
    """Remote rejection surfaces as AuthenticationError and state stays anonymous"""
    mock_auth_client.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")
    listener = Mock()
    store.subscribe(listener)

    with pytest.raises(AuthenticationError) as exc_info:
        await store.sign_in("admin@example.com", "wrong")

    assert exc_info.value.message
    assert not store.state.is_authenticated
    listener.assert_not_called()


@pytest.mark.asyncio
async def test_sign_in_without_user_fails(store, mock_auth_client):
    mock_auth_client.auth.sign_in_with_password.return_value = Mock(user=None)

    with pytest.raises(AuthenticationError):
        await store.sign_in("admin@example.com", "secret")


@pytest.mark.asyncio
async def test_sign_in_client_unavailable(users_repo):
    store = SessionStore(users_repo, client_factory=AsyncMock(side_effect=ValueError("not configured")))

    with pytest.raises(AuthenticationError):
        await store.sign_in("admin@example.com", "secret")


@pytest.mark.asyncio
async def test_client_created_once_and_stream_attached(users_repo, mock_auth_client):
    factory = AsyncMock(return_value=mock_auth_client)
    store = SessionStore(users_repo, client_factory=factory)

    await store.sign_in("admin@example.com", "secret")
    await store.sign_out()
    await store.sign_in("admin@example.com", "secret")

    factory.assert_awaited_once()
    mock_auth_client.auth.on_auth_state_change.assert_called_once()


@pytest.mark.asyncio
async def test_sign_out_resets_state(store, mock_auth_client):
    await store.sign_in("admin@example.com", "secret")

    await store.sign_out()

    assert store.state == SessionState()
    mock_auth_client.auth.sign_out.assert_awaited_once()


@pytest.mark.asyncio
async def test_sign_out_resets_even_if_remote_fails(store, mock_auth_client):
    await store.sign_in("admin@example.com", "secret")
    mock_auth_client.auth.sign_out.side_effect = Exception("timeout")

    await store.sign_out()

    assert not store.state.is_authenticated


@pytest.mark.asyncio
async def test_sign_out_when_anonymous_skips_remote(store, mock_auth_client):
    await store.sign_out()

    mock_auth_client.auth.sign_out.assert_not_called()
    assert not store.state.is_authenticated


@pytest.mark.asyncio
async def test_subscribers_notified_on_change(store):
    seen = []
    unsubscribe = store.subscribe(lambda state: seen.append(state.is_authenticated))

    await store.sign_in("admin@example.com", "secret")
    await store.sign_out()
    await store.sign_out()
    unsubscribe()
    await store.sign_in("admin@example.com", "secret")

    assert seen == [True, False]


@pytest.mark.asyncio
async def test_remote_sign_out_event_resets_state(store):
    await store.sign_in("admin@example.com", "secret")

    store._on_auth_event("SIGNED_OUT", None)

    assert not store.state.is_authenticated


@pytest.mark.asyncio
async def test_user_updated_event_keeps_role(store):
    await store.sign_in("admin@example.com", "secret")
    session = Mock(user=Mock(id="user-123", email="new@example.com"))

    store._on_auth_event("USER_UPDATED", session)

    assert store.state.user.email == "new@example.com"
    assert store.state.role is Role.ADMIN


@pytest.mark.asyncio
async def test_close_detaches_stream(store, mock_auth_client):
    await store.sign_in("admin@example.com", "secret")
    subscription = mock_auth_client.auth.on_auth_state_change.return_value
    listener = Mock()
    store.subscribe(listener)

    store.close()
    store._on_auth_event("SIGNED_OUT", None)

    subscription.unsubscribe.assert_called_once()
    listener.assert_not_called()


def test_session_state_to_dict():
    state = SessionState(user=SessionUser(id="user-123", email="a@b.c"), role=Role.MANAGER)

    assert state.to_dict() == {
        "authenticated": True,
        "user_id": "user-123",
        "email": "a@b.c",
        "role": "manager",
    }
    assert SessionState().to_dict()["authenticated"] is False


# ==================== VISITOR SESSIONS ====================

@pytest.mark.parametrize("header,expected", [
    ("Bearer abc", "abc"),
    ("bearer abc", "abc"),
    ("abc", None),
    ("Basic abc", None),
    ("Bearer ", None),
    (None, None),
])
def test_parse_bearer(header, expected):
    assert parse_bearer(header) == expected


def test_create_and_verify_web_session():
    session = create_web_session(Mock())

    assert verify_web_session_token(session.token) is session
    assert verify_web_session_token("unknown") is None
    assert not session.store.state.is_authenticated


def test_expired_web_session_is_ended():
    session = create_web_session(Mock())
    get_cart_manager().get_cart(session.token)
    session.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)

    assert verify_web_session_token(session.token) is None
    assert session.token not in web_session._web_sessions
    assert len(get_cart_manager()) == 0


def test_end_web_session_discards_cart(make_product):
    session = create_web_session(Mock())
    get_cart_manager().get_cart(session.token).add_item(make_product(), 1)

    end_web_session(session.token)

    assert verify_web_session_token(session.token) is None
    assert get_cart_manager().get_cart(session.token).is_empty


@pytest.mark.asyncio
async def test_close_releases_auth_client(users_repo, mock_auth_client):
    factory = AsyncMock(return_value=mock_auth_client)
    store = SessionStore(users_repo, client_factory=factory)
    await store.sign_in("admin@example.com", "secret")

    store.close()
    await store.sign_in("admin@example.com", "secret")

    assert factory.await_count == 2


def test_create_web_session_sweeps_expired():
    stale = create_web_session(Mock())
    stale.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
    get_cart_manager().get_cart(stale.token)

    fresh = create_web_session(Mock())

    assert list(web_session._web_sessions) == [fresh.token]
    assert len(get_cart_manager()) == 0


def test_purge_expired_sessions_keeps_live_ones():
    live = create_web_session(Mock())
    stale = create_web_session(Mock())
    stale.expires_at = datetime.now(timezone.utc) - timedelta(minutes=5)

    assert web_session.purge_expired_sessions() == 1
    assert verify_web_session_token(live.token) is live


def test_session_limit_ends_oldest(monkeypatch):
    monkeypatch.setattr(web_session, "MAX_WEB_SESSIONS", 2)
    first = create_web_session(Mock())
    second = create_web_session(Mock())

    third = create_web_session(Mock())

    assert verify_web_session_token(first.token) is None
    assert verify_web_session_token(second.token) is second
    assert verify_web_session_token(third.token) is third
