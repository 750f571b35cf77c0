import uuid
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from food_ordering.models.cart import CartStatus
from food_ordering.schemas.dish import DishResponse


class CartCreateRequest(BaseModel):
    user_id: uuid.UUID
    discount_amount: Decimal = Field(Decimal("0"), ge=0)
    vat_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)


class CartItemRequest(BaseModel):
    """Schema for adding a dish to a cart."""
    dish_id: uuid.UUID
    quantity: int = Field(..., gt=0)


class CartItemUpdateRequest(BaseModel):
    quantity: int = Field(..., gt=0)


class CheckoutRequest(BaseModel):
    user_id: uuid.UUID


class CartItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    cart_id: Optional[uuid.UUID] = None
    dish_id: Optional[uuid.UUID] = None
    quantity: int
    price_per_item: Decimal
    total_price: Decimal


class CartResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    status: CartStatus
    discount_amount: Decimal
    vat_percentage: Decimal
    total_price: Decimal


class CartItemDetail(CartItemResponse):
    dish: DishResponse


class CartDetailResponse(CartResponse):
    """Cart with its items and each item's dish."""
    items: List[CartItemDetail] = []


class CheckoutResponse(BaseModel):
    message: str
    cart: CartResponse


def cart_detail(cart) -> CartDetailResponse:
    """Builds the detailed view from a cart whose items and dishes are prefetched."""
    summary = CartResponse.model_validate(cart).model_dump()
    items = [CartItemDetail.model_validate(item) for item in cart.items]
    return CartDetailResponse(**summary, items=items)
