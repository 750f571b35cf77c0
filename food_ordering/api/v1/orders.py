import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from food_ordering.core.config import Settings
from food_ordering.core.dependencies import get_settings, require_token
from food_ordering.core.errors import AppError, InternalError
from food_ordering.core.messages import OrderMessages
from food_ordering.schemas.order import (
    OrderPage,
    OrderPlacementResponse,
    OrderRequest,
    OrderStatusUpdate,
    order_detail,
)
from food_ordering.schemas.response import MessageResponse, SuccessResponse
from food_ordering.services.order_service import (
    get_order_by_id,
    list_orders,
    parse_order_status,
    place_order,
    update_order_status,
)
from food_ordering.services.pagination import pagination

router = APIRouter(dependencies=[Depends(require_token)])
log = logging.getLogger(__name__)


@router.post("/order", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_order_endpoint(request_data: OrderRequest, settings: Settings = Depends(get_settings)):
    """
    Places an order from the user's Pending cart. The cart becomes Converted.
    """
    try:
        order = await place_order(
            user_id=request_data.user_id,
            clamp_negative=settings.CLAMP_NEGATIVE_TOTAL,
        )
        data = OrderPlacementResponse.model_validate(order).model_dump()
        return SuccessResponse(data=data)
    except AppError as e:
        log.error(f"Error placing order for user {request_data.user_id}: {e.message}")
        raise
    except Exception:
        log.exception("Error placing order")
        raise InternalError()


@router.get("/orders/{user_id}", response_model=SuccessResponse)
async def list_orders_endpoint(
    user_id: UUID,
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    settings: Settings = Depends(get_settings),
):
    """Lists the user's orders, optionally filtered by status."""
    order_status = parse_order_status(status_filter)
    limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
    try:
        orders, total = await list_orders(user_id, page, limit, order_status)
        data = OrderPage(
            data=[order_detail(o) for o in orders],
            pagination=pagination(page, limit, total),
        )
        return SuccessResponse(data=data.model_dump())
    except AppError:
        raise
    except Exception:
        log.exception(f"Error fetching orders for user {user_id}")
        raise InternalError()


@router.get("/order/{order_id}", response_model=SuccessResponse)
async def get_order_endpoint(order_id: UUID):
    """Fetches details for a specific order."""
    try:
        order = await get_order_by_id(order_id)
        return SuccessResponse(data=order_detail(order).model_dump())
    except AppError:
        raise
    except Exception:
        log.exception(f"Error fetching order {order_id}")
        raise InternalError()


@router.put("/order/{order_id}", response_model=SuccessResponse)
async def update_status_endpoint(order_id: UUID, payload: OrderStatusUpdate):
    """
    Updates status (e.g. 'confirmed', 'out_for_delivery', 'delivered').
    """
    try:
        new_status = parse_order_status(payload.status)
        await update_order_status(order_id, new_status)
        return SuccessResponse(data=MessageResponse(message=OrderMessages.ORDER_STATUS_UPDATED).model_dump())
    except AppError as e:
        log.error(f"Error updating order status: {e.message}")
        raise
    except Exception:
        log.exception("Error updating order status")
        raise InternalError()
