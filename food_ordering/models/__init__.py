# food_ordering/models/__init__.py
from .user import User, UserRole
from .dish import Dish, DishCategory
from .cart import Cart, CartItem, CartStatus
from .order import Order, OrderItem, OrderStatus, FINAL_ORDER_STATUSES

# Export all models
__all__ = [
    "User",
    "UserRole",
    "Dish",
    "DishCategory",
    "Cart",
    "CartItem",
    "CartStatus",
    "Order",
    "OrderItem",
    "OrderStatus",
    "FINAL_ORDER_STATUSES",
]
