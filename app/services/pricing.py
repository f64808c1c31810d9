"""
Quote computation for assigning a plan to a user.

A quote stacks two reductions: a duration tier discount picked from a fixed
table, then at most one additional percentage (a saved Discount or a
manually entered one) applied to the post-tier amount.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from app.models.discount import Discount

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

# duration in months -> tier discount rate
DURATION_TIERS: dict[int, Decimal] = {
    1: Decimal("0"),
    3: Decimal("0.05"),
    6: Decimal("0.10"),
    12: Decimal("0.15"),
}


class InvalidArgument(ValueError):
    """Raised by caller-side validation before a quote is computed."""


@dataclass(frozen=True)
class PriceQuote:
    original_price: Decimal
    final_price: Decimal
    total_discount: Decimal
    discount_percentage: Decimal
    tier_rate: Decimal = ZERO
    duration_discount_amount: Decimal = ZERO
    manual_discount_amount: Decimal = ZERO


@dataclass(frozen=True)
class NoDiscount:
    pass


@dataclass(frozen=True)
class SavedDiscount:
    discount: Discount

    @property
    def percentage(self) -> Decimal:
        return Decimal(str(self.discount.percentage))


@dataclass(frozen=True)
class ManualDiscount:
    percentage: Decimal

    def __post_init__(self):
        object.__setattr__(self, "percentage", validate_discount_percentage(self.percentage))


DiscountSource = Union[NoDiscount, SavedDiscount, ManualDiscount]


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging binary noise along
    return Decimal(str(value))


def tier_rate(duration_months: int) -> Decimal:
    # Durations outside the table get no tier discount
    return DURATION_TIERS.get(duration_months, ZERO)


def _check_cents(value: Decimal, what: str) -> Decimal:
    # Stored as Numeric(_, 2); finer values would round to something else
    if value != value.quantize(CENT):
        raise InvalidArgument(f"{what} can have at most 2 decimal places")
    return value


def validate_base_price(value) -> Decimal:
    price = _as_decimal(value)
    if price <= 0:
        raise InvalidArgument("Price must be greater than 0")
    return _check_cents(price, "Price")


def validate_discount_percentage(value) -> Decimal:
    pct = _as_decimal(value)
    if pct <= 0 or pct > HUNDRED:
        raise InvalidArgument("Discount percentage must be greater than 0 and at most 100")
    return _check_cents(pct, "Discount percentage")


def validate_duration(duration_months: int) -> int:
    if duration_months not in DURATION_TIERS:
        allowed = ", ".join(str(d) for d in DURATION_TIERS)
        raise InvalidArgument(f"Duration must be one of {allowed} months")
    return duration_months


def compute_quote(base_price, duration_months: int, applied_discount_percentage=None) -> PriceQuote:
    base = _as_decimal(base_price)
    months = Decimal(duration_months)
    rate = tier_rate(duration_months)

    original_price = base * months
    duration_discount_amount = base * months * rate
    price_after_tier = original_price - duration_discount_amount

    manual_discount_amount = ZERO
    if applied_discount_percentage is not None:
        pct = _as_decimal(applied_discount_percentage)
        if pct > 0:
            manual_discount_amount = price_after_tier * (pct / HUNDRED)

    final_price = price_after_tier - manual_discount_amount
    total_discount = duration_discount_amount + manual_discount_amount

    if original_price == 0:
        discount_percentage = ZERO
    else:
        discount_percentage = total_discount / original_price * HUNDRED

    return PriceQuote(
        original_price=original_price,
        final_price=final_price,
        total_discount=total_discount,
        discount_percentage=discount_percentage,
        tier_rate=rate,
        duration_discount_amount=duration_discount_amount,
        manual_discount_amount=manual_discount_amount,
    )


def quote_for(base_price, duration_months: int, source: DiscountSource) -> PriceQuote:
    if isinstance(source, (SavedDiscount, ManualDiscount)):
        return compute_quote(base_price, duration_months, source.percentage)
    return compute_quote(base_price, duration_months)
