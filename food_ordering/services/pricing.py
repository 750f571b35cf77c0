from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


class LineItem(Protocol):
    quantity: int
    price_per_item: Number


def to_decimal(value: Number) -> Decimal:
    # str() first so floats like 0.1 keep their printed value
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def line_total(quantity: int, price_per_item: Number) -> Decimal:
    """Total for a single cart or order line: quantity * price_per_item."""
    return (to_decimal(price_per_item) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_total(
    line_items: Iterable[LineItem],
    discount_amount: Number = 0,
    vat_percentage: Number = 0,
    clamp_negative: bool = False,
) -> Decimal:
    """
    Final price of a set of line items.

    subtotal   = sum(quantity * price_per_item)
    discounted = subtotal - discount_amount   (floored at 0 when clamp_negative)
    total      = discounted + discounted * vat_percentage / 100

    The result is rounded to cents. Without clamping a discount larger than
    the subtotal produces a negative total.
    """
    subtotal = sum(
        (to_decimal(item.price_per_item) * item.quantity for item in line_items),
        Decimal("0"),
    )
    discounted = subtotal - to_decimal(discount_amount)
    if clamp_negative and discounted < 0:
        discounted = Decimal("0")

    vat = discounted * to_decimal(vat_percentage) / Decimal("100")
    return (discounted + vat).quantize(CENT, rounding=ROUND_HALF_UP)
