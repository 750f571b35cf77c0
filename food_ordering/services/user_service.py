import logging
from typing import List, Optional
from uuid import UUID

from food_ordering.core.errors import ForbiddenError, UnauthorizedError, UserAlreadyExists, UserNotFound
from food_ordering.core.identity import IdentityClient
from food_ordering.core.messages import AuthMessages, UserMessages
from food_ordering.core.security import get_password_hash
from food_ordering.models.user import User, UserRole

log = logging.getLogger(__name__)


async def sign_up(
    identity: IdentityClient,
    name: str,
    email: str,
    password: str,
    role: Optional[UserRole] = None,
) -> User:
    """
    Registers the user with the identity provider, then stores a local record.

    The first user in the system becomes the admin. Only one admin may exist:
    asking for the admin role when one is already present is rejected.
    Both checks are read-then-write and are not protected against concurrent sign-ups.
    """
    if await User.filter(email=email).exists():
        raise UserAlreadyExists()

    admin_exists = await User.filter(role=UserRole.ADMIN).exists()
    if role == UserRole.ADMIN and admin_exists:
        raise ForbiddenError(UserMessages.ADMIN_ONLY)
    if role is None:
        role = UserRole.CUSTOMER if admin_exists else UserRole.ADMIN

    await identity.sign_up(email=email, password=password, name=name)

    user = await User.create(
        name=name,
        email=email,
        password=get_password_hash(password),
        role=role,
    )
    log.info(f"User {user.id} signed up with role {user.role.value}.")
    return user


async def sign_in(identity: IdentityClient, email: str, password: str) -> str:
    """Exchanges credentials for an id token at the identity provider."""
    tokens = await identity.password_grant(email=email, password=password)
    id_token = tokens.get("id_token")
    if not id_token:
        raise UnauthorizedError(AuthMessages.INVALID_CREDENTIALS)
    return id_token


async def list_users() -> List[User]:
    users = await User.all().order_by("created_at")
    if not users:
        raise UserNotFound()
    return users


async def get_user(user_id: UUID) -> User:
    user = await User.get_or_none(id=user_id)
    if not user:
        raise UserNotFound()
    return user
