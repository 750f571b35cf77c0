from typing import Any, Optional

from food_ordering.core.messages import (
    AuthMessages,
    CartMessages,
    DishMessages,
    GeneralMessages,
    OrderMessages,
    UserMessages,
)


class AppError(Exception):
    """
    Base class for failures that are reported to the client.
    The exception handler turns these into the standard error envelope.
    """
    status_code = 500
    code = "server_error"
    default_message = GeneralMessages.INTERNAL_SERVER_ERROR

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


# ----------- 400 -----------

class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    default_message = GeneralMessages.MISSING_REQUIRED_FIELDS


# ----------- 401 -----------

class UnauthorizedError(AppError):
    status_code = 401
    code = "unauthorized"
    default_message = AuthMessages.UNAUTHORIZED_ACCESS


class InvalidTokenError(UnauthorizedError):
    default_message = AuthMessages.INVALID_TOKEN


class TokenExpiredError(UnauthorizedError):
    default_message = AuthMessages.TOKEN_EXPIRED


# ----------- 403 -----------

class ForbiddenError(AppError):
    status_code = 403
    code = "forbidden"
    default_message = DishMessages.ADMIN_ONLY


# ----------- 404 -----------

class NotFoundError(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class UserNotFound(NotFoundError):
    default_message = UserMessages.USER_NOT_FOUND


class DishNotFound(NotFoundError):
    default_message = DishMessages.DISH_NOT_FOUND


class CartNotFound(NotFoundError):
    default_message = CartMessages.CART_NOT_FOUND


class CartItemNotFound(NotFoundError):
    default_message = CartMessages.CART_ITEM_NOT_FOUND


class CartOrDishNotFound(NotFoundError):
    default_message = CartMessages.CART_OR_DISH_NOT_FOUND


class OrderNotFound(NotFoundError):
    default_message = OrderMessages.ORDER_NOT_FOUND


# ----------- 409 -----------

class ConflictError(AppError):
    status_code = 409
    code = "conflict"
    default_message = "Conflict"


class UserAlreadyExists(ConflictError):
    default_message = AuthMessages.USER_ALREADY_EXISTS


class CartAlreadyExists(ConflictError):
    default_message = CartMessages.CART_ALREADY_EXISTS


class IllegalTransition(ConflictError):
    pass


# ----------- 5xx -----------

class InternalError(AppError):
    status_code = 500
    code = "server_error"


class IdentityProviderError(AppError):
    """The identity provider rejected or failed a request."""
    status_code = 502
    code = "identity_provider_error"
    default_message = AuthMessages.SIGNUP_FAILED
