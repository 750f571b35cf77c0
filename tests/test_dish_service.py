import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

from factories import make_dish, make_user
from food_ordering.core.errors import DishNotFound, ForbiddenError, UserNotFound, ValidationError
from food_ordering.models import Dish, DishCategory, User, UserRole
from food_ordering.services import dish_service
from food_ordering.testing.fakes import FakeQuerySet


def returning(value, **kwargs):
    return MagicMock(return_value=FakeQuerySet(value, **kwargs))


@pytest.fixture
def admin():
    return make_user(role=UserRole.ADMIN)


@pytest.mark.asyncio
async def test_admin_creates_dish_with_defaults(admin):
    fields = {
        "name": "Tiramisu",
        "description": "Coffee-soaked dessert.",
        "price": Decimal("6.50"),
        "image": "https://img.example.net/tiramisu.png",
        "category": DishCategory.DESSERT,
        "is_active": None,
        "additional_item": None,
    }
    with patch.object(User, "get_or_none", returning(admin)), \
            patch.object(Dish, "create", AsyncMock(return_value=make_dish())) as mock_create:
        await dish_service.create_dish(admin.id, fields)

    kwargs = mock_create.call_args.kwargs
    assert kwargs["user"] is admin
    assert kwargs["is_active"] is True
    assert kwargs["additional_item"] == "meat"


@pytest.mark.asyncio
async def test_customer_cannot_create_dish():
    customer = make_user(role=UserRole.CUSTOMER)
    with patch.object(User, "get_or_none", returning(customer)), \
            patch.object(Dish, "create", AsyncMock()) as mock_create:
        with pytest.raises(ForbiddenError) as excinfo:
            await dish_service.create_dish(customer.id, {"name": "x"})

    assert excinfo.value.message == "Only admins can create dishes."
    mock_create.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_user_cannot_create_dish():
    with patch.object(User, "get_or_none", returning(None)):
        with pytest.raises(UserNotFound):
            await dish_service.create_dish(uuid4(), {})


def test_parse_category():
    assert dish_service.parse_category(None) == DishCategory.MAIN
    assert dish_service.parse_category("Dessert") == DishCategory.DESSERT
    with pytest.raises(ValidationError) as excinfo:
        dish_service.parse_category("Soup")
    assert excinfo.value.message == "Invalid category"


@pytest.mark.asyncio
async def test_list_dishes_pages_by_name_descending():
    dishes = [make_dish(name="Ziti"), make_dish(name="Lasagna")]
    queryset = FakeQuerySet(dishes, count=7)

    with patch.object(Dish, "filter", MagicMock(return_value=queryset)) as mock_filter:
        result, total = await dish_service.list_dishes(DishCategory.MAIN, page=3, limit=2)

    assert result == dishes
    assert total == 7
    mock_filter.assert_called_once_with(category=DishCategory.MAIN)
    assert ("order_by", ("-name",), {}) in queryset.calls
    assert ("offset", (4,), {}) in queryset.calls
    assert ("limit", (2,), {}) in queryset.calls


@pytest.mark.asyncio
@pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
async def test_list_dishes_rejects_bad_window(page, limit):
    with pytest.raises(ValidationError) as excinfo:
        await dish_service.list_dishes(DishCategory.MAIN, page, limit)
    assert excinfo.value.message == "Invalid page or limit"


@pytest.mark.asyncio
async def test_update_dish_merges_changes(admin):
    dish = make_dish(price="9.00")
    dish.update_from_dict = MagicMock(side_effect=lambda changes: dish.__dict__.update(changes))
    dish.save = AsyncMock()

    with patch.object(User, "get_or_none", returning(admin)), \
            patch.object(Dish, "get_or_none", returning(dish)):
        updated = await dish_service.update_dish(dish.id, admin.id, {"price": Decimal("11.00")})

    assert updated.price == Decimal("11.00")
    assert updated.name == "Spaghetti Bolognese"
    dish.save.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_missing_dish(admin):
    with patch.object(User, "get_or_none", returning(admin)), \
            patch.object(Dish, "get_or_none", returning(None)):
        with pytest.raises(DishNotFound):
            await dish_service.update_dish(uuid4(), admin.id, {"name": "x"})


@pytest.mark.asyncio
async def test_delete_dish_nothing_deleted(admin):
    with patch.object(User, "get_or_none", returning(admin)), \
            patch.object(Dish, "filter", returning([], deleted=0)):
        with pytest.raises(DishNotFound):
            await dish_service.delete_dish(uuid4(), admin.id)


@pytest.mark.asyncio
async def test_delete_dish(admin):
    dish = make_dish()
    with patch.object(User, "get_or_none", returning(admin)), \
            patch.object(Dish, "filter", returning([dish], deleted=1)) as mock_filter:
        await dish_service.delete_dish(dish.id, admin.id)

    mock_filter.assert_called_once_with(id=dish.id)
