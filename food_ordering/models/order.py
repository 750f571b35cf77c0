from enum import Enum
from tortoise import fields, models
import uuid


class OrderStatus(str, Enum):
    PENDING = "pending"  # Initial state, created from a cart
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


FINAL_ORDER_STATUSES = (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class Order(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    user = fields.ForeignKeyField("models.User", related_name="orders")
    cart = fields.OneToOneField("models.Cart", related_name="order", null=True)
    status = fields.CharEnumField(OrderStatus, default=OrderStatus.PENDING)
    # Copied from the source cart when the order is created
    total_price = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    vat_percentage = fields.DecimalField(max_digits=5, decimal_places=2, default=0)
    discount_amount = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "orders"
        indexes = [
            ("user_id",),              # User order history
            ("status",),               # Status-based filtering
            ("user_id", "status"),     # Composite: user's orders by status
            ("created_at",),           # Time-based queries
        ]


class OrderItem(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    order = fields.ForeignKeyField("models.Order", related_name="items")
    dish = fields.ForeignKeyField("models.Dish", related_name="order_items")
    quantity = fields.IntField()
    price_per_item = fields.DecimalField(max_digits=12, decimal_places=2)
    total_price = fields.DecimalField(max_digits=12, decimal_places=2)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "order_items"
        indexes = [
            ("order_id",),              # Order line items
            ("dish_id",),               # Dish popularity
        ]
