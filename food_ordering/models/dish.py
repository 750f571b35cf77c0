from enum import Enum
from tortoise import fields, models
import uuid


class DishCategory(str, Enum):
    STARTER = "Starter"
    MAIN = "Main"
    DESSERT = "Dessert"
    DRINK = "Drink"
    SIDE = "Side"


class Dish(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    user = fields.ForeignKeyField("models.User", related_name="dishes")  # creator, always an admin
    name = fields.CharField(max_length=255)
    description = fields.TextField()
    price = fields.DecimalField(max_digits=12, decimal_places=2)
    image = fields.CharField(max_length=1024)
    category = fields.CharEnumField(DishCategory, default=DishCategory.MAIN)
    is_active = fields.BooleanField(default=True, null=True)
    additional_item = fields.CharField(max_length=255, default="meat", null=True)

    class Meta:
        table = "dishes"
        indexes = [
            ("category",),          # Catalog listing by category
            ("category", "name"),   # Composite: category page ordered by name
        ]
