import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from food_ordering.models.user import UserRole


class SignUpRequest(BaseModel):
    """Schema for the sign-up request body."""
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: Optional[UserRole] = Field(None, description="Requested role; the first user becomes admin when omitted.")


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    accessToken: str


class UserResponse(BaseModel):
    """Public view of a user; the password hash is never exposed."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None
