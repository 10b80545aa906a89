from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def parse_money(value: str) -> Decimal:
    if value is None:
        raise ValueError("missing money value")

    normalized = str(value).strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("$", "").replace(",", "")

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    return -amount if is_negative else amount


def to_money(value) -> float:
    """Round a float/Decimal to cents (half-up) and return it as a float."""
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def signed_amount(amount, tx_type: str) -> float:
    """Expenses are stored negative, income positive."""
    amount = abs(float(amount))
    return -amount if tx_type == "expense" else amount
