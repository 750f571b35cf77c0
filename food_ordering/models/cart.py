from enum import Enum
from tortoise import fields, models
import uuid


class CartStatus(str, Enum):
    ACTIVE = "Active"        # Items may be added, updated and removed
    PENDING = "Pending"      # Submitted, waiting to be turned into an order
    CONVERTED = "Converted"  # An Order was created from this cart
    COMPLETED = "Completed"  # Checked out directly, no Order entity


class Cart(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    user = fields.ForeignKeyField("models.User", related_name="carts")
    status = fields.CharEnumField(CartStatus, default=CartStatus.ACTIVE)
    discount_amount = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    vat_percentage = fields.DecimalField(max_digits=5, decimal_places=2, default=0)
    # Derived from the items by the pricing calculator, not authoritative
    total_price = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "carts"
        indexes = [
            ("user_id", "status"),  # Composite: the user's Active/Pending cart
        ]


class CartItem(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    cart = fields.ForeignKeyField("models.Cart", related_name="items")
    dish = fields.ForeignKeyField("models.Dish", related_name="cart_items")
    quantity = fields.IntField()
    price_per_item = fields.DecimalField(max_digits=12, decimal_places=2)
    total_price = fields.DecimalField(max_digits=12, decimal_places=2)  # quantity * price_per_item
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "cart_items"
        indexes = [
            ("cart_id",),
            ("cart_id", "dish_id"),  # Composite: is this dish already in the cart
        ]
