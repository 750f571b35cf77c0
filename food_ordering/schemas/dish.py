import uuid
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from food_ordering.models.dish import DishCategory
from food_ordering.schemas.response import Pagination


NON_NULLABLE_DISH_FIELDS = ("name", "description", "price", "image", "category")


class DishCreateRequest(BaseModel):
    """Schema for creating a dish. Only admins may create dishes."""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, description="Selling price of the dish.")
    image: str = Field(..., min_length=1)
    category: DishCategory
    user_id: uuid.UUID = Field(..., description="The admin creating the dish.")
    is_active: Optional[bool] = True
    additional_item: Optional[str] = "meat"


class DishUpdateRequest(BaseModel):
    """Partial update; only the fields that are sent are merged into the dish."""
    user_id: uuid.UUID
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)
    category: Optional[DishCategory] = None
    is_active: Optional[bool] = None
    additional_item: Optional[str] = None

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        # Omitted fields are left alone; null is only allowed on nullable columns
        for field in NON_NULLABLE_DISH_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class DishResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    price: Decimal
    image: str
    category: DishCategory
    is_active: Optional[bool] = None
    additional_item: Optional[str] = None
    user_id: Optional[uuid.UUID] = None


class DishPage(BaseModel):
    data: List[DishResponse]
    pagination: Pagination
