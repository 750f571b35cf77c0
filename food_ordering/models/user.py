from enum import Enum
from tortoise import fields, models
import uuid


class UserRole(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class User(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    email = fields.CharField(max_length=255, unique=True)
    password = fields.CharField(max_length=255)  # passlib hash, never the raw password
    role = fields.CharEnumField(UserRole, default=UserRole.CUSTOMER)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "users"
        indexes = [
            ("role",),  # Admin lookup at sign-up
        ]
