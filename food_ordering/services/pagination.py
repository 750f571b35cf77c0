import math
from typing import Tuple

from food_ordering.core.errors import ValidationError
from food_ordering.core.messages import GeneralMessages


def page_window(page: int, limit: int, message: str = GeneralMessages.MISSING_REQUIRED_FIELDS) -> Tuple[int, int]:
    """Returns (offset, limit) for a 1-based page, rejecting non-positive values."""
    if page <= 0 or limit <= 0:
        raise ValidationError(message)
    return (page - 1) * limit, limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def pagination(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "totalItems": total,
        "totalPages": total_pages(total, limit),
    }
