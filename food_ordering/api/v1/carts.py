import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from food_ordering.core.config import Settings
from food_ordering.core.dependencies import get_settings, require_token
from food_ordering.core.errors import AppError, InternalError
from food_ordering.core.messages import CartMessages
from food_ordering.schemas.cart import (
    CartCreateRequest,
    CartItemRequest,
    CartItemResponse,
    CartItemUpdateRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    cart_detail,
)
from food_ordering.schemas.response import MessageResponse, SuccessResponse
from food_ordering.services import cart_service

router = APIRouter(dependencies=[Depends(require_token)])
log = logging.getLogger(__name__)


@router.post("/cart", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_cart_endpoint(payload: CartCreateRequest):
    """Creates the user's Active cart. Only one Active cart may exist per user."""
    try:
        cart = await cart_service.create_cart(
            payload.user_id,
            discount_amount=payload.discount_amount,
            vat_percentage=payload.vat_percentage,
        )
        return SuccessResponse(data=CartResponse.model_validate(cart).model_dump())
    except AppError as e:
        log.error(f"Error creating cart for user {payload.user_id}: {e.message}")
        raise
    except Exception:
        log.exception("Error creating cart")
        raise InternalError()


@router.post("/cart/checkout", response_model=SuccessResponse)
async def checkout_endpoint(payload: CheckoutRequest, settings: Settings = Depends(get_settings)):
    """Prices the user's Active cart and marks it Completed. No order is created."""
    try:
        cart = await cart_service.checkout(payload.user_id, clamp_negative=settings.CLAMP_NEGATIVE_TOTAL)
        data = CheckoutResponse(
            message=CartMessages.CHECKOUT_SUCCESS,
            cart=CartResponse.model_validate(cart),
        ).model_dump()
        return SuccessResponse(data=data)
    except AppError as e:
        log.error(f"Error during checkout for user {payload.user_id}: {e.message}")
        raise
    except Exception:
        log.exception("Error during checkout")
        raise InternalError()


@router.get("/cart/{user_id}", response_model=SuccessResponse)
async def get_cart_endpoint(user_id: UUID):
    """Fetches the user's Active cart with items and dishes."""
    try:
        cart = await cart_service.get_active_cart(user_id)
        return SuccessResponse(data=cart_detail(cart).model_dump())
    except AppError:
        raise
    except Exception:
        log.exception(f"Error fetching cart for user {user_id}")
        raise InternalError()


@router.post("/cart/{cart_id}/item", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_item_endpoint(cart_id: UUID, payload: CartItemRequest):
    """
    Adds a dish to the cart. Returns 201 for a new line, or 200 when the
    dish was already in the cart and its quantity was increased.
    """
    try:
        item, created = await cart_service.add_item(cart_id, payload.dish_id, payload.quantity)
        body = SuccessResponse(data=CartItemResponse.model_validate(item).model_dump())
        if created:
            return body
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json"))
    except AppError:
        raise
    except Exception:
        log.exception(f"Error adding item to cart {cart_id}")
        raise InternalError()


@router.put("/cart/{cart_id}/item/{item_id}", response_model=SuccessResponse)
async def update_item_endpoint(cart_id: UUID, item_id: UUID, payload: CartItemUpdateRequest):
    try:
        item = await cart_service.update_item(cart_id, item_id, payload.quantity)
        return SuccessResponse(data=CartItemResponse.model_validate(item).model_dump())
    except AppError:
        raise
    except Exception:
        log.exception(f"Error updating item {item_id} in cart {cart_id}")
        raise InternalError()


@router.delete("/cart/{cart_id}/item/{item_id}", response_model=SuccessResponse)
async def remove_item_endpoint(cart_id: UUID, item_id: UUID):
    try:
        await cart_service.remove_item(cart_id, item_id)
        return SuccessResponse(data=MessageResponse(message=CartMessages.CART_ITEM_REMOVED).model_dump())
    except AppError:
        raise
    except Exception:
        log.exception(f"Error removing item {item_id} from cart {cart_id}")
        raise InternalError()


@router.post("/cart/{cart_id}/submit", response_model=SuccessResponse)
async def submit_cart_endpoint(cart_id: UUID, settings: Settings = Depends(get_settings)):
    """Moves an Active cart to Pending so an order can be placed from it."""
    try:
        cart = await cart_service.submit_cart(cart_id, clamp_negative=settings.CLAMP_NEGATIVE_TOTAL)
        return SuccessResponse(data=CartResponse.model_validate(cart).model_dump())
    except AppError as e:
        log.error(f"Error submitting cart {cart_id}: {e.message}")
        raise
    except Exception:
        log.exception(f"Error submitting cart {cart_id}")
        raise InternalError()
