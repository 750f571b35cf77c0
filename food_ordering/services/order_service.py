import logging
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from food_ordering.core.errors import (
    AppError,
    CartNotFound,
    ConflictError,
    InternalError,
    OrderNotFound,
    UserNotFound,
    ValidationError,
)
from food_ordering.core.messages import OrderMessages
from food_ordering.models.cart import Cart, CartStatus
from food_ordering.models.order import FINAL_ORDER_STATUSES, Order, OrderItem, OrderStatus
from food_ordering.models.user import User
from food_ordering.services.cart_state import transition
from food_ordering.services.pagination import page_window
from food_ordering.services.pricing import compute_total
from food_ordering.services.unit_of_work import TortoiseUnitOfWork, UnitOfWork

log = logging.getLogger(__name__)


async def place_order(
    user_id: UUID,
    unit_of_work: Callable[[], UnitOfWork] = TortoiseUnitOfWork,
    clamp_negative: bool = False,
) -> Order:
    """
    Turns the user's Pending cart into an Order.

    Creates the Order header, one OrderItem per cart item, and marks the cart
    Converted, all inside one unit of work. Either everything is committed or
    nothing is: any failure rolls the unit back. Persistence failures surface
    as InternalError without their details.
    """
    uow = unit_of_work()
    await uow.begin()
    try:
        user = await uow.find_one(User, id=user_id)
        if not user:
            raise UserNotFound()

        cart = await uow.find_one(
            Cart,
            prefetch=("items", "items__dish"),
            user_id=user_id,
            status=CartStatus.PENDING,
        )
        if not cart:
            raise CartNotFound()

        cart_items = list(cart.items)
        # Refresh the derived total before it is copied onto the order
        cart.total_price = compute_total(
            cart_items, cart.discount_amount, cart.vat_percentage, clamp_negative=clamp_negative
        )

        # 1. Create the Order header
        order = await uow.create(
            Order,
            user=user,
            cart=cart,
            status=OrderStatus.PENDING,
            vat_percentage=cart.vat_percentage,
            discount_amount=cart.discount_amount,
            total_price=cart.total_price,
        )

        # 2. Create Order Item lines, mirroring the cart items
        for item in cart_items:
            await uow.create(
                OrderItem,
                order=order,
                dish=item.dish,
                quantity=item.quantity,
                price_per_item=item.price_per_item,
                total_price=item.total_price,
            )

        # 3. Close the source cart
        transition(cart, CartStatus.CONVERTED)
        await uow.save(cart)

        await uow.commit()
    except AppError:
        await uow.rollback()
        raise
    except Exception as e:
        await uow.rollback()
        log.exception(f"Placing order for user {user_id} failed; transaction rolled back.")
        raise InternalError() from e
    finally:
        await uow.dispose()

    log.info(f"Order {order.id} placed for user {user_id} from cart {cart.id} ({len(cart_items)} items).")
    return order


async def get_order_by_id(order_id: UUID) -> Order:
    """Fetches order details with items, including each item's dish."""
    # Pre-fetch related entities to minimize DB queries (N+1 avoidance)
    order = await Order.get_or_none(id=order_id).prefetch_related("items", "items__dish")
    if not order:
        raise OrderNotFound()
    return order


def parse_order_status(status: Optional[str]) -> Optional[OrderStatus]:
    if status is None:
        return None
    try:
        return OrderStatus(status)
    except ValueError:
        raise ValidationError(OrderMessages.INVALID_ORDER_STATUS)


async def list_orders(
    user_id: UUID,
    page: int,
    limit: int,
    status: Optional[OrderStatus] = None,
) -> Tuple[List[Order], int]:
    """Returns one page of the user's orders, newest first, plus the total count."""
    offset, limit = page_window(page, limit, OrderMessages.INVALID_PAGE_AND_LIMIT)
    query = Order.filter(user_id=user_id)
    if status is not None:
        query = query.filter(status=status)
    total = await query.count()
    orders = await (
        query.order_by("-created_at")
        .offset(offset)
        .limit(limit)
        .prefetch_related("items", "items__dish")
    )
    return orders, total


async def update_order_status(order_id: UUID, new_status: OrderStatus) -> Order:
    """Updates the order status. Delivered and cancelled orders are final."""
    order = await Order.get_or_none(id=order_id)
    if not order:
        raise OrderNotFound()

    # Block status updates if the order is in a final, irreversible state.
    if order.status in FINAL_ORDER_STATUSES:
        raise ConflictError(OrderMessages.ORDER_FINAL_STATE.format(status=order.status.value))

    old_status = order.status
    order.status = new_status
    await order.save()
    log.info(f"Order {order.id} moved from {old_status.value} to {new_status.value}.")
    return order
