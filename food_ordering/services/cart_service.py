import logging
from decimal import Decimal
from typing import Tuple
from uuid import UUID

from food_ordering.core.errors import (
    CartAlreadyExists,
    CartItemNotFound,
    CartNotFound,
    CartOrDishNotFound,
    UserNotFound,
)
from food_ordering.models.cart import Cart, CartItem, CartStatus
from food_ordering.models.dish import Dish
from food_ordering.models.user import User
from food_ordering.services.cart_state import transition
from food_ordering.services.pricing import compute_total, line_total

log = logging.getLogger(__name__)


async def create_cart(
    user_id: UUID,
    discount_amount: Decimal = Decimal("0"),
    vat_percentage: Decimal = Decimal("0"),
) -> Cart:
    """
    Opens a new Active cart for the user.

    At most one Active cart may exist per user. The check is read-then-write,
    so two concurrent requests for the same user can both pass it.
    """
    user = await User.get_or_none(id=user_id)
    if not user:
        raise UserNotFound()

    if await Cart.filter(user_id=user_id, status=CartStatus.ACTIVE).exists():
        raise CartAlreadyExists()

    return await Cart.create(
        user=user,
        status=CartStatus.ACTIVE,
        discount_amount=discount_amount,
        vat_percentage=vat_percentage,
    )


async def get_active_cart(user_id: UUID) -> Cart:
    """Fetches the user's Active cart with its items and their dishes."""
    cart = await Cart.get_or_none(user_id=user_id, status=CartStatus.ACTIVE).prefetch_related("items", "items__dish")
    if not cart:
        raise CartNotFound()
    return cart


async def _get_mutable_cart(cart_id: UUID):
    # Only Active carts accept item changes; anything else reads as "not found"
    return await Cart.get_or_none(id=cart_id, status=CartStatus.ACTIVE)


async def add_item(cart_id: UUID, dish_id: UUID, quantity: int) -> Tuple[CartItem, bool]:
    """
    Adds `quantity` of a dish to the cart.
    Returns the cart item and whether it was newly created; a dish already in
    the cart has its quantity increased instead.
    """
    cart = await _get_mutable_cart(cart_id)
    dish = await Dish.get_or_none(id=dish_id)
    if not cart or not dish:
        raise CartOrDishNotFound()

    existing = await CartItem.get_or_none(cart_id=cart_id, dish_id=dish_id)
    if existing:
        existing.quantity += quantity
        existing.price_per_item = dish.price
        existing.total_price = line_total(existing.quantity, dish.price)
        await existing.save()
        return existing, False

    item = await CartItem.create(
        cart=cart,
        dish=dish,
        quantity=quantity,
        price_per_item=dish.price,
        total_price=line_total(quantity, dish.price),
    )
    return item, True


async def update_item(cart_id: UUID, item_id: UUID, quantity: int) -> CartItem:
    cart = await _get_mutable_cart(cart_id)
    if not cart:
        raise CartNotFound()

    item = await CartItem.get_or_none(id=item_id, cart_id=cart_id).prefetch_related("dish")
    if not item:
        raise CartItemNotFound()

    item.quantity = quantity
    item.price_per_item = item.dish.price
    item.total_price = line_total(quantity, item.dish.price)
    await item.save()
    return item


async def remove_item(cart_id: UUID, item_id: UUID) -> None:
    cart = await _get_mutable_cart(cart_id)
    if not cart:
        raise CartNotFound()

    item = await CartItem.get_or_none(id=item_id, cart_id=cart_id)
    if not item:
        raise CartItemNotFound()
    await item.delete()


async def submit_cart(cart_id: UUID, clamp_negative: bool = False) -> Cart:
    """Freezes an Active cart as Pending so an order can be placed from it."""
    cart = await Cart.get_or_none(id=cart_id, status=CartStatus.ACTIVE).prefetch_related("items")
    if not cart:
        raise CartNotFound()

    cart.total_price = compute_total(
        cart.items, cart.discount_amount, cart.vat_percentage, clamp_negative=clamp_negative
    )
    transition(cart, CartStatus.PENDING)
    await cart.save()
    log.info(f"Cart {cart.id} submitted with total {cart.total_price}.")
    return cart


async def checkout(user_id: UUID, clamp_negative: bool = False) -> Cart:
    """
    Direct checkout: prices the user's Active cart and marks it Completed.
    No Order is produced on this path.
    """
    cart = await Cart.get_or_none(user_id=user_id, status=CartStatus.ACTIVE).prefetch_related("items", "items__dish")
    if not cart:
        raise CartNotFound()

    cart.total_price = compute_total(
        cart.items, cart.discount_amount, cart.vat_percentage, clamp_negative=clamp_negative
    )
    transition(cart, CartStatus.COMPLETED)
    await cart.save()
    log.info(f"Cart {cart.id} checked out for user {user_id} with total {cart.total_price}.")
    return cart
