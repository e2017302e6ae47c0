from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(amount) -> Decimal:
    """
    Round an exact amount to currency precision (2 places, half-up).
    """
    if isinstance(amount, float):
        amount = Decimal(str(amount))
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_eur(amount) -> str:
    """
    Format a number as Euro currency.
    """
    return f"€{to_money(amount)}"
