"""Tests for repository queries against a mocked Supabase client"""
import pytest
from decimal import Decimal
from unittest.mock import Mock

from storefront.db import Tables
from storefront.services.database import get_database, set_database


@pytest.mark.asyncio
async def test_get_product_by_id(mock_database, mock_supabase_client, sample_product):
    """Test getting product by ID"""
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[sample_product])

    product = await mock_database.products.get_by_id("product-123")

    assert product is not None
    assert product.name == "Kursi Jati Minimalis"
    assert product.price == Decimal("10000")
    mock_supabase_client.table.assert_called_with(Tables.PRODUCTS)
    mock_supabase_client.table.return_value.eq.assert_called_with("id", "product-123")


@pytest.mark.asyncio
async def test_get_product_not_found(mock_database):
    assert await mock_database.products.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_product_null_columns_default(mock_database, mock_supabase_client, sample_product):
    row = {**sample_product, "description": None, "tags": None}
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[row])

    products = await mock_database.products.get_all()

    assert products[0].description == ""
    assert products[0].tags == []
    mock_supabase_client.table.return_value.order.assert_called_with("created_at", desc=True)


@pytest.mark.asyncio
async def test_get_related_excludes_product(mock_database, mock_supabase_client):
    await mock_database.products.get_related("Kursi", "product-123", 4)

    table = mock_supabase_client.table.return_value
    table.eq.assert_called_with("category", "Kursi")
    table.neq.assert_called_with("id", "product-123")
    table.limit.assert_called_with(4)


@pytest.mark.asyncio
async def test_get_stock(mock_database, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[{"stock": 7}])

    assert await mock_database.products.get_stock("product-123") == 7


@pytest.mark.asyncio
async def test_delete_product_reports_missing(mock_database):
    assert await mock_database.products.delete("missing") is False


@pytest.mark.asyncio
async def test_count_low_stock(mock_database, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[], count=3)

    assert await mock_database.products.count_low_stock(10) == 3
    mock_supabase_client.table.return_value.lt.assert_called_with("stock", 10)


@pytest.mark.asyncio
async def test_get_order_folds_items(mock_database, mock_supabase_client, sample_order):
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[sample_order])

    order = await mock_database.orders.get_by_id("order-123")

    assert order.total == Decimal("20000")
    assert order.payment_method.value == "cod"
    assert len(order.items) == 1
    assert order.items[0].product_name == "Kursi Jati Minimalis"
    mock_supabase_client.table.return_value.select.assert_called_with("*, order_items(*)")


@pytest.mark.asyncio
async def test_create_items_skips_empty(mock_database, mock_supabase_client):
    assert await mock_database.orders.create_items([]) == []
    mock_supabase_client.table.assert_not_called()


@pytest.mark.asyncio
async def test_count_orders_by_status(mock_database, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[], count=2)

    assert await mock_database.orders.count(order_status="pending") == 2
    mock_supabase_client.table.return_value.eq.assert_called_with("order_status", "pending")


@pytest.mark.asyncio
async def test_get_role(mock_database, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[{"role": "manager"}])

    assert await mock_database.users.get_role("user-123") == "manager"
    mock_supabase_client.table.assert_called_with(Tables.USERS)


@pytest.mark.asyncio
async def test_get_activity_for_one_user(mock_database, mock_supabase_client):
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[
        {"id": "log-1", "user_id": "user-123", "action": "create_order", "details": {"order_id": "o1"}},
    ])

    logs = await mock_database.users.get_activity(user_id="user-123", limit=20)

    assert logs[0].action == "create_order"
    mock_supabase_client.table.return_value.eq.assert_called_with("user_id", "user-123")
    mock_supabase_client.table.return_value.limit.assert_called_with(20)


def test_get_database_requires_init():
    with pytest.raises(RuntimeError):
        get_database()


def test_set_database(mock_database):
    set_database(mock_database)

    assert get_database() is mock_database


@pytest.mark.asyncio
async def test_activity_entry_without_user(mock_database, mock_supabase_client):
    """System entries carry no user id"""
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[
        {"id": "log-2", "user_id": None, "action": "stock_sync", "details": None},
    ])

    logs = await mock_database.users.get_activity()

    assert logs[0].user_id is None


@pytest.mark.asyncio
async def test_update_profile(mock_database, mock_supabase_client, sample_user):
    mock_supabase_client.table.return_value.execute.return_value = Mock(data=[
        {**sample_user, "email": "kepala@example.com"},
    ])

    user = await mock_database.users.update_profile("user-123", {"email": "kepala@example.com"})

    assert user.email == "kepala@example.com"
    mock_supabase_client.table.return_value.update.assert_called_with({"email": "kepala@example.com"})
