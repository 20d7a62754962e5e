from dataclasses import replace
from datetime import date
from decimal import Decimal
import logging
from typing import Any, Iterable, Optional

from billing.config import BillingConfig, get_config
from billing.errors import BillingError, PaymentError
from billing.identifiers import ReferenceNumberGenerator, generate_id, get_reference_numbers
from billing.invoices.service import update_invoice_status
from billing.models import (
    Invoice,
    InvoiceStatus,
    Payment,
    PaymentAmountCheck,
    PaymentMethod,
    PaymentResult,
    PaymentStatus,
)
from billing.utils import round_currency, sum_rounded
from billing.utils.validation import (
    as_decimal,
    check_date,
    check_non_empty_string,
    check_payment_amount_limits,
    check_payment_method,
    check_positive_number,
)


logger = logging.getLogger(__name__)


def check_payable(invoice: Invoice) -> Optional[PaymentError]:
    if invoice.status == InvoiceStatus.CANCELLED:
        return PaymentError("Cannot process payment for a cancelled invoice")
    return None


def _payment_problem(
    invoice: Invoice, amount: Any, method: Any, payment_date: Any, config: BillingConfig
) -> Optional[BillingError]:
    checks = (
        lambda: check_positive_number(amount, "Payment amount"),
        lambda: check_payment_amount_limits(amount, config),
        lambda: check_payment_method(method),
        lambda: check_date(payment_date, "Payment date"),
        lambda: check_non_empty_string(invoice.id, "Invoice ID"),
        lambda: check_payable(invoice),
    )
    for check in checks:
        problem = check()
        if problem is not None:
            return problem
    return None


def _recorded_amount(amount: Any) -> Decimal:
    number = as_decimal(amount)
    return number if number is not None else Decimal("NaN")


def _recorded_method(method: Any) -> PaymentMethod | Any:
    if check_payment_method(method) is None:
        return PaymentMethod(method)
    return method


def process_payment(
    invoice: Invoice,
    amount,
    method,
    payment_date: Optional[date] = None,
    *,
    config: Optional[BillingConfig] = None,
    numbers: Optional[ReferenceNumberGenerator] = None,
) -> PaymentResult:
    """Apply ``amount`` to ``invoice`` and report the outcome as a value.

    Never raises for bad input. On success the result carries a COMPLETED
    payment and a new invoice with the reduced outstanding amount and derived
    status. On failure it carries a FAILED payment, the untouched input invoice
    and the error that stopped the payment.
    """
    config = config or get_config()
    numbers = numbers or get_reference_numbers()
    if payment_date is None:
        payment_date = date.today()

    problem = _payment_problem(invoice, amount, method, payment_date, config)
    reference_date = payment_date if check_date(payment_date, "Payment date") is None else date.today()

    if problem is not None:
        failed_payment = Payment(
            id=generate_id(),
            invoice_id=invoice.id,
            payment_method=_recorded_method(method),
            amount=_recorded_amount(amount),
            payment_date=payment_date,
            reference_number=numbers.payment_reference(reference_date),
            status=PaymentStatus.FAILED,
        )
        logger.info(
            "Payment %s failed for invoice %s: %s",
            failed_payment.reference_number,
            invoice.invoice_number,
            problem,
        )
        return PaymentResult.failed(failed_payment, invoice, problem)

    paid = as_decimal(amount)
    payment = Payment(
        id=generate_id(),
        invoice_id=invoice.id,
        payment_method=PaymentMethod(method),
        amount=paid,
        payment_date=payment_date,
        reference_number=numbers.payment_reference(reference_date),
        status=PaymentStatus.COMPLETED,
    )
    updated = update_invoice_status(
        replace(invoice, outstanding_amount=round_currency(invoice.outstanding_amount - paid))
    )
    logger.info(
        "Payment %s of %s applied to invoice %s: outstanding=%s status=%s",
        payment.reference_number,
        paid,
        invoice.invoice_number,
        updated.outstanding_amount,
        updated.status.value,
    )
    return PaymentResult.succeeded(payment, updated)


def validate_payment_amount(
    invoice: Invoice, amount, *, config: Optional[BillingConfig] = None
) -> PaymentAmountCheck:
    config = config or get_config()
    problem = check_positive_number(amount, "Payment amount") or check_payment_amount_limits(amount, config)
    if problem is not None:
        return PaymentAmountCheck(valid=False, message=str(problem))

    paid = as_decimal(amount)
    if paid > invoice.outstanding_amount:
        overpayment = round_currency(paid - invoice.outstanding_amount)
        return PaymentAmountCheck(
            valid=True,
            message=(
                f"Payment amount ({paid}) exceeds outstanding amount ({invoice.outstanding_amount}). "
                f"This will result in an overpayment of {overpayment}."
            ),
        )
    return PaymentAmountCheck(valid=True)


def calculate_total_paid(payments: Iterable[Payment]) -> Decimal:
    return sum_rounded(payment.amount for payment in payments if payment.status == PaymentStatus.COMPLETED)
