from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from billing.config import BillingConfig, get_config
from billing.identifiers import generate_id
from billing.models import InvoiceItem, InvoiceStatus, InvoiceTotals
from billing.utils import CENT, calculate_tax_amount, round_currency, sum_rounded
from billing.utils.validation import (
    validate_invoice_amount,
    validate_line_item_amount,
    validate_non_empty_sequence,
    validate_non_empty_string,
    validate_non_negative_number,
    validate_positive_number,
    validate_tax_rate,
)


@dataclass(frozen=True)
class InvoiceItemInput:
    description: str
    quantity: Decimal | float | int
    unit_price: Decimal | float | int


def _item_fields(item: InvoiceItemInput | Mapping[str, Any]) -> Tuple[Any, Any, Any]:
    if isinstance(item, Mapping):
        return item.get("description"), item.get("quantity"), item.get("unit_price")
    return item.description, item.quantity, item.unit_price


def calculate_line_totals(
    quantity: Decimal, unit_price: Decimal, tax_rate: Decimal, config: BillingConfig
) -> Tuple[Decimal, Decimal, Decimal]:
    product = quantity * unit_price
    # products this far past the limit may have too many digits to quantize
    if product > config.max_line_item_amount + CENT:
        validate_line_item_amount(product, config)
    line_subtotal = round_currency(product)
    validate_line_item_amount(line_subtotal, config)
    tax_amount = calculate_tax_amount(line_subtotal, tax_rate)
    line_total = round_currency(line_subtotal + tax_amount)
    return (line_subtotal, tax_amount, line_total)


def calculate_invoice_total(
    items: Sequence[InvoiceItemInput | Mapping[str, Any]],
    tax_rate: Decimal | float | int,
    *,
    config: Optional[BillingConfig] = None,
) -> InvoiceTotals:
    config = config or get_config()
    validate_non_empty_sequence(items, "Invoice items")
    rate = validate_tax_rate(tax_rate)

    priced: List[InvoiceItem] = []
    line_subtotals: List[Decimal] = []
    for item in items:
        description, quantity, unit_price = _item_fields(item)
        validate_non_empty_string(description, "Item description")
        quantity = validate_positive_number(quantity, "Item quantity")
        unit_price = validate_non_negative_number(unit_price, "Item unit price")

        line_subtotal, tax_amount, line_total = calculate_line_totals(quantity, unit_price, rate, config)
        line_subtotals.append(line_subtotal)
        priced.append(
            InvoiceItem(
                id=generate_id(),
                description=description,
                quantity=quantity,
                unit_price=unit_price,
                line_total=line_total,
                tax_rate=rate,
                tax_amount=tax_amount,
            )
        )

    subtotal = sum_rounded(line_subtotals)
    total_tax = sum_rounded(item.tax_amount for item in priced)
    total_amount = round_currency(subtotal + total_tax)
    validate_invoice_amount(total_amount, config)

    return InvoiceTotals(
        subtotal=subtotal,
        total_tax=total_tax,
        total_amount=total_amount,
        items=tuple(priced),
    )


def derive_status(outstanding: Decimal, total: Decimal) -> InvoiceStatus:
    if 0 < outstanding < total:
        return InvoiceStatus.PARTIALLY_PAID
    if outstanding == 0:
        return InvoiceStatus.PAID
    if outstanding < 0:
        return InvoiceStatus.OVERPAID
    return InvoiceStatus.PENDING
