from typing import Dict, FrozenSet

from food_ordering.core.errors import IllegalTransition
from food_ordering.core.messages import CartMessages
from food_ordering.models.cart import CartStatus

# Legal moves for a cart. Completed and Converted are terminal.
CART_TRANSITIONS: Dict[CartStatus, FrozenSet[CartStatus]] = {
    CartStatus.ACTIVE: frozenset({CartStatus.PENDING, CartStatus.COMPLETED, CartStatus.CONVERTED}),
    CartStatus.PENDING: frozenset({CartStatus.CONVERTED}),
    CartStatus.CONVERTED: frozenset(),
    CartStatus.COMPLETED: frozenset(),
}


def can_transition(current: CartStatus, target: CartStatus) -> bool:
    return target in CART_TRANSITIONS.get(CartStatus(current), frozenset())


def transition(cart, target: CartStatus):
    """Moves `cart` to `target` in place, or raises IllegalTransition."""
    current = CartStatus(cart.status)
    if not can_transition(current, target):
        raise IllegalTransition(
            CartMessages.ILLEGAL_TRANSITION.format(current=current.value, target=target.value)
        )
    cart.status = target
    return cart
