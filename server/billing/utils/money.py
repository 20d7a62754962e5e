from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable


ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def quantize_money(value: Decimal | float | int | str | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def round_currency(value: Decimal | float | int) -> Decimal:
    """Round to whole cents, ties away from zero."""
    return quantize_money(value)


def sum_rounded(values: Iterable[Decimal | float | int]) -> Decimal:
    total = sum((Decimal(str(value)) for value in values), ZERO)
    return round_currency(total)


def calculate_tax_amount(amount: Decimal | float | int, tax_rate: Decimal | float | int) -> Decimal:
    return round_currency(Decimal(str(amount)) * Decimal(str(tax_rate)))
