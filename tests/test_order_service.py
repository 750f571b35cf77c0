import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

from factories import make_cart, make_cart_item, make_dish, make_order, make_user
from food_ordering.core.errors import CartNotFound, ConflictError, InternalError, OrderNotFound, UserNotFound
from food_ordering.models import Cart, CartStatus, Order, OrderItem, OrderStatus, User
from food_ordering.services.order_service import list_orders, place_order, update_order_status
from food_ordering.testing.fakes import FakeQuerySet, FakeUnitOfWork


# --- SETUP FIXTURES ---

@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def pending_cart(user):
    """Dish A qty 2 @ 10, Dish B qty 1 @ 5, no discount, 10% VAT."""
    items = [
        make_cart_item(make_dish(price="10.00", name="Dish A"), 2),
        make_cart_item(make_dish(price="5.00", name="Dish B"), 1),
    ]
    return make_cart(user.id, status=CartStatus.PENDING, items=items, vat="10")


def uow_factory(uow):
    return lambda: uow


# --- place_order ---

@pytest.mark.asyncio
async def test_place_order_converts_pending_cart(user, pending_cart):
    uow = FakeUnitOfWork({User: [user], Cart: [pending_cart]})

    order = await place_order(user.id, unit_of_work=uow_factory(uow))

    assert order.total_price == Decimal("27.50")
    assert order.vat_percentage == Decimal("10")
    assert order.discount_amount == Decimal("0")
    assert order.status == OrderStatus.PENDING
    assert order.cart is pending_cart
    assert order.user is user

    assert uow.committed and uow.disposed
    assert uow.created[Order] == [order]
    order_items = uow.created[OrderItem]
    assert len(order_items) == 2
    assert all(oi.order is order for oi in order_items)
    assert [(oi.quantity, oi.price_per_item, oi.total_price) for oi in order_items] == [
        (2, Decimal("10.00"), Decimal("20.00")),
        (1, Decimal("5.00"), Decimal("5.00")),
    ]
    assert pending_cart.status == CartStatus.CONVERTED
    assert pending_cart.total_price == Decimal("27.50")


@pytest.mark.asyncio
async def test_place_order_without_pending_cart(user):
    active_cart = make_cart(user.id, status=CartStatus.ACTIVE)
    uow = FakeUnitOfWork({User: [user], Cart: [active_cart]})

    with pytest.raises(CartNotFound) as excinfo:
        await place_order(user.id, unit_of_work=uow_factory(uow))

    assert excinfo.value.message == "Cart not found"
    assert uow.rolled_back and uow.disposed and not uow.committed
    assert uow.created == {}
    assert active_cart.status == CartStatus.ACTIVE


@pytest.mark.asyncio
async def test_place_order_unknown_user(pending_cart):
    uow = FakeUnitOfWork({User: [], Cart: [pending_cart]})

    with pytest.raises(UserNotFound):
        await place_order(pending_cart.user_id, unit_of_work=uow_factory(uow))

    assert uow.rolled_back
    assert pending_cart.status == CartStatus.PENDING


@pytest.mark.asyncio
async def test_failure_after_order_header_rolls_everything_back(user, pending_cart):
    """A persistence failure while writing order items leaves no trace."""
    uow = FakeUnitOfWork({User: [user], Cart: [pending_cart]}, fail_on_create=OrderItem)

    with pytest.raises(InternalError) as excinfo:
        await place_order(user.id, unit_of_work=uow_factory(uow))

    # generic message, no internals
    assert excinfo.value.message == "Internal server error"
    assert "Simulated" not in excinfo.value.message
    assert uow.rolled_back and uow.disposed and not uow.committed
    assert Order not in uow.created
    assert OrderItem not in uow.created
    assert pending_cart.status == CartStatus.PENDING
    assert pending_cart.total_price == Decimal("0")


@pytest.mark.asyncio
async def test_place_order_with_clamped_discount(user):
    items = [make_cart_item(make_dish(price="4.00"), 1)]
    cart = make_cart(user.id, status=CartStatus.PENDING, items=items, discount="10", vat="10")
    uow = FakeUnitOfWork({User: [user], Cart: [cart]})

    order = await place_order(user.id, unit_of_work=uow_factory(uow), clamp_negative=True)

    assert order.total_price == Decimal("0")


# --- update_order_status ---

@pytest.mark.asyncio
async def test_successful_status_transition(user):
    order = make_order(user.id, status=OrderStatus.PREPARING)
    order.save = AsyncMock()

    with patch.object(Order, "get_or_none", MagicMock(return_value=FakeQuerySet(order))):
        updated = await update_order_status(order.id, OrderStatus.OUT_FOR_DELIVERY)

    assert updated.status == OrderStatus.OUT_FOR_DELIVERY
    order.save.assert_awaited_once()


@pytest.mark.asyncio
async def test_rejection_of_final_state_transition(user):
    order = make_order(user.id, status=OrderStatus.DELIVERED)
    order.save = AsyncMock()

    with patch.object(Order, "get_or_none", MagicMock(return_value=FakeQuerySet(order))):
        with pytest.raises(ConflictError) as excinfo:
            await update_order_status(order.id, OrderStatus.PREPARING)

    assert "final state" in excinfo.value.message
    order.save.assert_not_called()


@pytest.mark.asyncio
async def test_update_status_of_missing_order():
    with patch.object(Order, "get_or_none", MagicMock(return_value=FakeQuerySet(None))):
        with pytest.raises(OrderNotFound):
            await update_order_status(uuid4(), OrderStatus.CONFIRMED)


# --- list_orders ---

@pytest.mark.asyncio
async def test_list_orders_filters_and_paginates(user):
    orders = [make_order(user.id), make_order(user.id)]
    queryset = FakeQuerySet(orders, count=12)

    with patch.object(Order, "filter", MagicMock(return_value=queryset)) as mock_filter:
        result, total = await list_orders(user.id, page=2, limit=5, status=OrderStatus.PENDING)

    assert result == orders
    assert total == 12
    mock_filter.assert_called_once_with(user_id=user.id)
    assert ("filter", (), {"status": OrderStatus.PENDING}) in queryset.calls
    assert ("offset", (5,), {}) in queryset.calls
    assert ("limit", (5,), {}) in queryset.calls
