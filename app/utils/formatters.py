from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567: last three digits, then pairs
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_price(value) -> str:
    """Render a price the way the dashboard shows it: ₹1,00,000 (no paise)."""
    if value is None or value == "":
        return ""
    amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    sign = "-" if amount < 0 else ""
    return f"{sign}{RUPEE}{_group_indian(str(abs(amount)))}"


def parse_price(text) -> Decimal | None:
    if text is None or str(text).strip() == "":
        return None
    try:
        value = Decimal(str(text).strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def format_features(text: str | None) -> list[str]:
    if not text:
        return []
    return [feature.strip() for feature in text.split(",") if feature.strip()]
