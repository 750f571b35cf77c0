from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from food_ordering.core.errors import DishNotFound, ForbiddenError, UserNotFound, ValidationError
from food_ordering.core.messages import DishMessages
from food_ordering.models.dish import Dish, DishCategory
from food_ordering.models.user import User, UserRole
from food_ordering.services.pagination import page_window


async def _require_admin(user_id: UUID) -> User:
    """Loads the acting user and checks that they are the admin."""
    user = await User.get_or_none(id=user_id)
    if not user:
        raise UserNotFound()
    if user.role != UserRole.ADMIN:
        raise ForbiddenError(DishMessages.ADMIN_ONLY)
    return user


def parse_category(category: Optional[str]) -> DishCategory:
    if not category:
        return DishCategory.MAIN
    try:
        return DishCategory(category)
    except ValueError:
        raise ValidationError(DishMessages.INVALID_CATEGORY)


async def create_dish(user_id: UUID, fields: Dict[str, Any]) -> Dish:
    user = await _require_admin(user_id)
    if fields.get("is_active") is None:
        fields["is_active"] = True
    if fields.get("additional_item") is None:
        fields["additional_item"] = "meat"
    return await Dish.create(user=user, **fields)


async def list_dishes(category: DishCategory, page: int, limit: int) -> Tuple[List[Dish], int]:
    """Returns one page of dishes in `category`, ordered by name descending, plus the total count."""
    offset, limit = page_window(page, limit, DishMessages.INVALID_PAGE_AND_LIMIT)
    query = Dish.filter(category=category)
    total = await query.count()
    dishes = await query.order_by("-name").offset(offset).limit(limit)
    return dishes, total


async def get_dish(dish_id: UUID) -> Dish:
    dish = await Dish.get_or_none(id=dish_id)
    if not dish:
        raise DishNotFound()
    return dish


async def update_dish(dish_id: UUID, user_id: UUID, changes: Dict[str, Any]) -> Dish:
    """Merges `changes` into the dish. Admin only."""
    await _require_admin(user_id)
    dish = await get_dish(dish_id)
    dish.update_from_dict(changes)
    await dish.save()
    return dish


async def delete_dish(dish_id: UUID, user_id: UUID) -> None:
    await _require_admin(user_id)
    deleted = await Dish.filter(id=dish_id).delete()
    if deleted == 0:
        raise DishNotFound()
