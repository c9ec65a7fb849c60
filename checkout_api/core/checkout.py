# checkout_api/core/checkout.py

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Any, Iterable

from checkout_api import database
from checkout_api.core.errors import CardDataRequiredError, ProductNotFoundError
from checkout_api.models import CheckoutItem, CheckoutResult
from checkout_api.utils.logging import get_logger


logger = get_logger(__name__)

CREDIT_CARD = "credit_card"
CREDIT_CARD_FACTOR = Decimal("0.95")
CENTS = Decimal("0.01")
EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _as_item(item: CheckoutItem | dict) -> CheckoutItem:
    if isinstance(item, CheckoutItem):
        return item
    return CheckoutItem.model_validate(item)


def calculate_total(items: Iterable[CheckoutItem | dict], freight: float, payment_method: str) -> float:
    """
    Sum of quantity * unit price over all items, plus freight.
    Only the exact string "credit_card" gets the 5% discount.
    The result is rounded half-up to cents.

    Quantities and freight are unbounded, so the sums run in an exact
    decimal context rather than the default 28-digit one.
    """
    with localcontext(EXACT):
        subtotal = Decimal("0")
        for item in map(_as_item, items):
            product = database.get_product(item.product_id)
            if product is None:
                raise ProductNotFoundError()
            subtotal += Decimal(str(product.price)) * item.quantity

        total = subtotal + Decimal(str(freight))
        if payment_method == CREDIT_CARD:
            total *= CREDIT_CARD_FACTOR

        return float(total.quantize(CENTS, rounding=ROUND_HALF_UP))


def checkout(
    user_id: Any,
    items: list[CheckoutItem | dict],
    freight: float,
    payment_method: str,
    card_data: dict | None = None,
) -> CheckoutResult:
    if payment_method == CREDIT_CARD and card_data is None:
        raise CardDataRequiredError()

    items = [_as_item(item) for item in items]
    total = calculate_total(items, freight, payment_method)

    logger.info("Checkout completed", user_id=user_id, payment_method=payment_method, total=total)
    return CheckoutResult(
        user_id=user_id,
        items=items,
        freight=freight,
        payment_method=payment_method,
        total=total,
    )
