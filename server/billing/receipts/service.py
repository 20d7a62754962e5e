import logging
from typing import List, Optional, Tuple

from billing.errors import AllocationMismatchError
from billing.identifiers import ReferenceNumberGenerator, generate_id, get_reference_numbers
from billing.models import Invoice, Payment, Receipt, ReceiptItem
from billing.utils import ZERO, round_currency
from billing.utils.validation import validate_date, validate_non_empty_string, validate_positive_number


logger = logging.getLogger(__name__)


def allocate_payment_to_items(amount, invoice: Invoice) -> Tuple[ReceiptItem, ...]:
    """Spread ``amount`` over the invoice lines in proportion to their totals.

    A payment that covers the whole invoice allocates every line in full, even
    when that sums to less than an overpayment. Otherwise each line but the
    last gets its rounded share and the last line takes whatever remains, so
    the allocations add up to ``amount`` exactly.
    """
    amount = validate_positive_number(amount, "Payment amount")
    items = invoice.items

    if amount >= invoice.total_amount:
        return tuple(ReceiptItem(description=item.description, amount_allocated=item.line_total) for item in items)

    ratio = amount / invoice.total_amount
    allocations: List[ReceiptItem] = []
    allocated_so_far = ZERO
    for index, item in enumerate(items):
        if index == len(items) - 1:
            allocated = round_currency(amount - allocated_so_far)
        else:
            allocated = round_currency(item.line_total * ratio)
            allocated_so_far += allocated
        allocations.append(ReceiptItem(description=item.description, amount_allocated=allocated))

    logger.debug(
        "Allocated %s across %s items of invoice %s (ratio=%s)",
        amount,
        len(allocations),
        invoice.invoice_number,
        ratio,
    )
    return tuple(allocations)


def generate_receipt(
    payment: Payment,
    invoice: Invoice,
    *,
    numbers: Optional[ReferenceNumberGenerator] = None,
) -> Receipt:
    validate_non_empty_string(payment.id, "Payment ID")
    validate_non_empty_string(invoice.id, "Invoice ID")
    receipt_date = validate_date(payment.payment_date, "Payment date")
    if payment.invoice_id != invoice.id:
        raise AllocationMismatchError("Payment invoice ID does not match provided invoice")

    numbers = numbers or get_reference_numbers()
    items = allocate_payment_to_items(payment.amount, invoice)
    receipt = Receipt(
        id=generate_id(),
        payment_id=payment.id,
        invoice_id=invoice.id,
        receipt_number=numbers.receipt_number(receipt_date),
        receipt_date=receipt_date,
        total_paid=payment.amount,
        remaining_balance=invoice.outstanding_amount,
        payment_method=payment.payment_method,
        payment_reference=payment.reference_number,
        items=items,
    )
    logger.info(
        "Generated receipt %s for payment %s (paid=%s remaining=%s)",
        receipt.receipt_number,
        payment.reference_number,
        receipt.total_paid,
        receipt.remaining_balance,
    )
    return receipt
