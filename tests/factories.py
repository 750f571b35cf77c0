import uuid
from decimal import Decimal
from types import SimpleNamespace

from food_ordering.models import CartStatus, DishCategory, OrderStatus, UserRole


# --- Plain attribute stand-ins for ORM rows ---

def make_user(role=UserRole.CUSTOMER, **overrides):
    fields = dict(
        id=uuid.uuid4(),
        name="Jane",
        email="jane@foodmail.com",
        password="hashed",
        role=role,
        created_at=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_dish(price="10.00", **overrides):
    fields = dict(
        id=uuid.uuid4(),
        name="Spaghetti Bolognese",
        description="Pasta with a meat-based sauce.",
        price=Decimal(price),
        image="https://img.example.net/spaghetti.png",
        category=DishCategory.MAIN,
        is_active=True,
        additional_item="meat",
        user_id=uuid.uuid4(),
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_cart_item(dish, quantity, cart_id=None):
    return SimpleNamespace(
        id=uuid.uuid4(),
        cart_id=cart_id,
        dish=dish,
        dish_id=dish.id,
        quantity=quantity,
        price_per_item=dish.price,
        total_price=dish.price * quantity,
    )


def make_cart(user_id, status=CartStatus.ACTIVE, items=(), discount="0", vat="0", **overrides):
    cart_id = uuid.uuid4()
    fields = dict(
        id=cart_id,
        user_id=user_id,
        status=status,
        discount_amount=Decimal(discount),
        vat_percentage=Decimal(vat),
        total_price=Decimal("0"),
        items=list(items),
    )
    fields.update(overrides)
    cart = SimpleNamespace(**fields)
    for item in cart.items:
        item.cart_id = cart.id
    return cart


def make_order(user_id, status=OrderStatus.PENDING, items=(), **overrides):
    fields = dict(
        id=uuid.uuid4(),
        user_id=user_id,
        cart_id=uuid.uuid4(),
        status=status,
        total_price=Decimal("27.50"),
        vat_percentage=Decimal("10"),
        discount_amount=Decimal("0"),
        items=list(items),
        created_at=None,
        updated_at=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)
