import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from food_ordering.core.config import Settings
from food_ordering.core.dependencies import get_settings, require_token
from food_ordering.core.errors import AppError, InternalError
from food_ordering.core.messages import DishMessages
from food_ordering.schemas.dish import DishCreateRequest, DishPage, DishResponse, DishUpdateRequest
from food_ordering.schemas.response import MessageResponse, SuccessResponse
from food_ordering.services import dish_service
from food_ordering.services.pagination import pagination

router = APIRouter(dependencies=[Depends(require_token)])
log = logging.getLogger(__name__)


@router.post("/dish", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_dish_endpoint(payload: DishCreateRequest):
    """Adds a dish to the catalog. Only the admin may create dishes."""
    try:
        fields = payload.model_dump(exclude={"user_id"})
        dish = await dish_service.create_dish(payload.user_id, fields)
        log.info(f"Dish {dish.id} '{dish.name}' created by {payload.user_id}.")
        return SuccessResponse(data=DishResponse.model_validate(dish).model_dump())
    except AppError as e:
        log.error(f"Error creating dish: {e.message}")
        raise
    except Exception:
        log.exception("Error creating dish")
        raise InternalError()


@router.get("/dishes", response_model=SuccessResponse)
async def list_dishes_endpoint(
    category: Optional[str] = Query(None),
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    settings: Settings = Depends(get_settings),
):
    """Lists one page of dishes in a category (default 'Main'), ordered by name descending."""
    dish_category = dish_service.parse_category(category)
    limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
    try:
        dishes, total = await dish_service.list_dishes(dish_category, page, limit)
        data = DishPage(
            data=[DishResponse.model_validate(d) for d in dishes],
            pagination=pagination(page, limit, total),
        )
        return SuccessResponse(data=data.model_dump())
    except AppError:
        raise
    except Exception:
        log.exception("Error fetching dishes")
        raise InternalError()


@router.get("/dish/{dish_id}", response_model=SuccessResponse)
async def get_dish_endpoint(dish_id: UUID):
    try:
        dish = await dish_service.get_dish(dish_id)
        return SuccessResponse(data=DishResponse.model_validate(dish).model_dump())
    except AppError:
        raise
    except Exception:
        log.exception(f"Error fetching dish with id {dish_id}")
        raise InternalError()


@router.put("/dish/{dish_id}", response_model=SuccessResponse)
async def update_dish_endpoint(dish_id: UUID, payload: DishUpdateRequest):
    """Merges the sent fields into the dish. Admin only."""
    try:
        changes = payload.model_dump(exclude={"user_id"}, exclude_unset=True)
        dish = await dish_service.update_dish(dish_id, payload.user_id, changes)
        return SuccessResponse(data=DishResponse.model_validate(dish).model_dump())
    except AppError as e:
        log.error(f"Error updating dish with id {dish_id}: {e.message}")
        raise
    except Exception:
        log.exception(f"Error updating dish with id {dish_id}")
        raise InternalError()


@router.delete("/dish/{dish_id}", response_model=SuccessResponse)
async def delete_dish_endpoint(dish_id: UUID, user_id: UUID = Query(...)):
    try:
        await dish_service.delete_dish(dish_id, user_id)
        return SuccessResponse(data=MessageResponse(message=DishMessages.DISH_DELETED).model_dump())
    except AppError as e:
        log.error(f"Error deleting dish with id {dish_id}: {e.message}")
        raise
    except Exception:
        log.exception(f"Error deleting dish with id {dish_id}")
        raise InternalError()
