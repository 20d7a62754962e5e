from dataclasses import replace
from datetime import date
import logging
from typing import Any, Mapping, Optional, Sequence

from billing.config import BillingConfig
from billing.identifiers import ReferenceNumberGenerator, generate_id, get_reference_numbers
from billing.invoices.calculations import InvoiceItemInput, calculate_invoice_total, derive_status
from billing.models import Invoice, InvoiceStatus
from billing.utils.validation import validate_date


logger = logging.getLogger(__name__)


def create_invoice(
    items: Sequence[InvoiceItemInput | Mapping[str, Any]],
    tax_rate,
    invoice_date: Optional[date] = None,
    *,
    config: Optional[BillingConfig] = None,
    numbers: Optional[ReferenceNumberGenerator] = None,
) -> Invoice:
    invoice_date = validate_date(invoice_date if invoice_date is not None else date.today(), "Invoice date")
    numbers = numbers or get_reference_numbers()

    totals = calculate_invoice_total(items, tax_rate, config=config)
    invoice = Invoice(
        id=generate_id(),
        invoice_number=numbers.invoice_number(invoice_date),
        invoice_date=invoice_date,
        items=totals.items,
        subtotal=totals.subtotal,
        total_tax=totals.total_tax,
        total_amount=totals.total_amount,
        outstanding_amount=totals.total_amount,
        status=InvoiceStatus.PENDING,
    )
    logger.info("Created invoice %s total=%s items=%s", invoice.invoice_number, invoice.total_amount, len(invoice.items))
    return invoice


def update_invoice_status(invoice: Invoice) -> Invoice:
    if invoice.status == InvoiceStatus.CANCELLED:
        return invoice
    return replace(invoice, status=derive_status(invoice.outstanding_amount, invoice.total_amount))


def cancel_invoice(invoice: Invoice) -> Invoice:
    logger.info("Cancelling invoice %s (was %s)", invoice.invoice_number, invoice.status.value)
    return replace(invoice, status=InvoiceStatus.CANCELLED)


def clone_invoice(invoice: Invoice) -> Invoice:
    return replace(invoice, items=tuple(replace(item) for item in invoice.items))
