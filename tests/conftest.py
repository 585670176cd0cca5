"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("SUPABASE_ANON_KEY", "test_anon_key")

from storefront.services.models import Product  # noqa: E402


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client; every builder method chains back to the same table mock"""
    client = Mock()

    # Mock table operations
    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.insert.return_value = table_mock
    table_mock.update.return_value = table_mock
    table_mock.delete.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.neq.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.gte.return_value = table_mock
    table_mock.lte.return_value = table_mock
    table_mock.lt.return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[], count=0))

    client.table.return_value = table_mock

    return client


@pytest.fixture
def mock_database(mock_supabase_client):
    """Database wired to the mock client"""
    from storefront.services.database import Database

    return Database(mock_supabase_client)


@pytest.fixture(autouse=True)
def reset_state():
    """Forget visitor sessions, carts and the database singleton between tests"""
    import storefront.cart.service as cart_service
    from storefront.auth import session as web_session
    from storefront.services.database import set_database

    web_session._web_sessions.clear()
    cart_service._cart_manager = None
    set_database(None)
    yield
    web_session._web_sessions.clear()
    cart_service._cart_manager = None
    set_database(None)


@pytest.fixture
def sample_product():
    """Sample product row"""
    return {
        "id": "product-123",
        "name": "Kursi Jati Minimalis",
        "description": "Solid teak dining chair",
        "price": 10000,
        "stock": 5,
        "image_url": "https://cdn.test/kursi.jpg",
        "category": "Kursi",
        "tags": ["jati", "dining"],
        "is_featured": True,
        "is_limited_stock": False,
        "barcode": "899000000001",
        "created_at": "2025-01-01T00:00:00Z",
        "updated_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def make_product(sample_product):
    """Factory for Product models based on sample_product"""
    def _make(**overrides) -> Product:
        return Product(**{**sample_product, **overrides})
    return _make


@pytest.fixture
def sample_customer():
    """Sample customer row"""
    return {
        "id": "customer-123",
        "name": "Budi Santoso",
        "phone": "081234567890",
        "email": "budi@example.com",
        "address": "Jl. Merdeka 1, Jepara",
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_order():
    """Sample order row with embedded items, as selected with order_items(*)"""
    return {
        "id": "order-123",
        "customer_id": None,
        "customer_name": "Budi Santoso",
        "customer_phone": "081234567890",
        "customer_address": "Jl. Merdeka 1, Jepara",
        "subtotal": 20000,
        "discount": 0,
        "shipping_cost": 0,
        "total": 20000,
        "payment_method": "cod",
        "payment_status": "pending",
        "order_status": "pending",
        "notes": "",
        "voucher_code": "",
        "created_by": None,
        "created_at": "2025-01-02T10:00:00Z",
        "order_items": [
            {
                "id": "item-1",
                "order_id": "order-123",
                "product_id": "product-123",
                "product_name": "Kursi Jati Minimalis",
                "quantity": 2,
                "price": 10000,
                "total": 20000,
            }
        ],
    }


@pytest.fixture
def sample_user():
    """Sample staff profile row"""
    return {
        "id": "user-123",
        "email": "admin@example.com",
        "name": "Admin Toko",
        "role": "admin",
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def mock_auth_client():
    """Mock anon-key client with a working auth API"""
    client = Mock()
    auth_user = Mock(id="user-123", email="admin@example.com")
    client.auth.sign_in_with_password = AsyncMock(return_value=Mock(user=auth_user, session=Mock()))
    client.auth.sign_out = AsyncMock()
    client.auth.on_auth_state_change = Mock(return_value=Mock())
    return client
