import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from food_ordering.models.order import OrderStatus
from food_ordering.schemas.dish import DishResponse
from food_ordering.schemas.response import Pagination


class OrderRequest(BaseModel):
    """Schema for placing an order from the user's Pending cart."""
    user_id: uuid.UUID


class OrderStatusUpdate(BaseModel):
    """Schema for updating an order status; unknown values are rejected by the service."""
    status: str


class OrderPlacementResponse(BaseModel):
    """Response schema for a newly placed order (201 Created)."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    cart_id: Optional[uuid.UUID] = None
    status: OrderStatus
    total_price: Decimal
    vat_percentage: Decimal
    discount_amount: Decimal


class OrderItemResponse(BaseModel):
    """Schema for an item inside the detailed order response."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    quantity: int
    price_per_item: Decimal
    total_price: Decimal
    dish: DishResponse


class OrderDetailResponse(OrderPlacementResponse):
    """Schema for fetching detailed order information."""
    items: List[OrderItemResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderPage(BaseModel):
    data: List[OrderDetailResponse]
    pagination: Pagination


def order_detail(order) -> OrderDetailResponse:
    """Builds the detailed view from an order whose items and dishes are prefetched."""
    summary = OrderPlacementResponse.model_validate(order).model_dump()
    items = [OrderItemResponse.model_validate(item) for item in order.items]
    return OrderDetailResponse(
        **summary,
        items=items,
        created_at=getattr(order, "created_at", None),
        updated_at=getattr(order, "updated_at", None),
    )
