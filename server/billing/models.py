from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from billing.errors import BillingError
from billing.utils import round_currency


class InvoiceStatus(str, Enum):
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    OVERPAID = "OVERPAID"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    CHECK = "CHECK"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


@dataclass(frozen=True)
class InvoiceItem:
    id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal
    tax_rate: Decimal
    tax_amount: Decimal

    @property
    def line_subtotal(self) -> Decimal:
        return round_currency(self.quantity * self.unit_price)


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    total_tax: Decimal
    total_amount: Decimal
    items: Tuple[InvoiceItem, ...]


@dataclass(frozen=True)
class Invoice:
    id: str
    invoice_number: str
    invoice_date: date
    items: Tuple[InvoiceItem, ...]
    subtotal: Decimal
    total_tax: Decimal
    total_amount: Decimal
    outstanding_amount: Decimal
    status: InvoiceStatus = InvoiceStatus.PENDING


@dataclass(frozen=True)
class Payment:
    id: str
    invoice_id: str
    # FAILED payments keep whatever method/date they were attempted with.
    payment_method: PaymentMethod | str
    amount: Decimal
    payment_date: date | object
    reference_number: str
    status: PaymentStatus


@dataclass(frozen=True)
class ReceiptItem:
    description: str
    amount_allocated: Decimal


@dataclass(frozen=True)
class Receipt:
    id: str
    payment_id: str
    invoice_id: str
    receipt_number: str
    receipt_date: date
    total_paid: Decimal
    remaining_balance: Decimal
    payment_method: PaymentMethod | str
    payment_reference: str
    items: Tuple[ReceiptItem, ...]


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    payment: Payment
    invoice: Invoice
    error: Optional[str] = None
    exception: Optional[BillingError] = field(default=None, compare=False)

    @classmethod
    def succeeded(cls, payment: Payment, invoice: Invoice) -> PaymentResult:
        return cls(success=True, payment=payment, invoice=invoice)

    @classmethod
    def failed(cls, payment: Payment, invoice: Invoice, exception: BillingError) -> PaymentResult:
        return cls(success=False, payment=payment, invoice=invoice, error=str(exception), exception=exception)


@dataclass(frozen=True)
class PaymentAmountCheck:
    valid: bool
    message: Optional[str] = None
