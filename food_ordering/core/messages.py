# Client-facing message texts, grouped by resource.

class GeneralMessages:
    MISSING_REQUIRED_FIELDS = "Missing required fields"
    INTERNAL_SERVER_ERROR = "Internal server error"


class AuthMessages:
    MISSING_REQUIRED_FIELDS = "Email, password and name are required"
    USER_ALREADY_EXISTS = "User already exists"
    SIGNUP_SUCCESS = "User signed up successfully"
    SIGNUP_FAILED = "Failed to sign up user"
    SIGNIN_FAILED = "Failed to sign in user"
    INVALID_CREDENTIALS = "Invalid email or password"
    UNAUTHORIZED_ACCESS = "Unauthorized access"
    INVALID_TOKEN = "Invalid token"
    TOKEN_EXPIRED = "Token expired"


class UserMessages:
    USER_NOT_FOUND = "User not found"
    ADMIN_ONLY = "Only one admin user can exist. You cannot create another admin."


class DishMessages:
    ADMIN_ONLY = "Only admins can create dishes."
    DISH_NOT_FOUND = "Dish not found"
    DISH_DELETED = "Dish deleted successfully"
    INVALID_CATEGORY = "Invalid category"
    INVALID_PAGE_AND_LIMIT = "Invalid page or limit"


class CartMessages:
    CART_NOT_FOUND = "Cart not found"
    CART_ALREADY_EXISTS = "An active cart already exists for this user"
    CART_ITEM_NOT_FOUND = "Cart item not found"
    CART_OR_DISH_NOT_FOUND = "Cart or dish not found"
    CART_ITEM_REMOVED = "Item removed from cart"
    CHECKOUT_SUCCESS = "Checkout completed successfully"
    ILLEGAL_TRANSITION = "Cart cannot move from {current} to {target}"


class OrderMessages:
    ORDER_NOT_FOUND = "Order not found"
    ORDER_STATUS_UPDATED = "Order status updated"
    ORDER_FINAL_STATE = "Order is already in a final state: {status}. Status cannot be updated."
    INVALID_ORDER_STATUS = "Invalid order status"
    INVALID_PAGE_AND_LIMIT = "Invalid page or limit"
