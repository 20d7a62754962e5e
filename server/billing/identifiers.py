"""
Opaque ids and human-readable reference numbers.

Reference numbers look like ``INV-20240115-0001``: a kind prefix, the date the
number is issued for and a per-kind sequence. The sequence comes from a
``SequenceCounter``; the in-memory counter is process-local and unsynchronized,
so a deployment with several workers should inject a counter backed by a
database sequence instead.
"""
import uuid
from datetime import date
from typing import Dict, Optional, Protocol


INVOICE = "invoice"
RECEIPT = "receipt"
PAYMENT = "payment"

PREFIXES = {
    INVOICE: "INV",
    RECEIPT: "RCP",
    PAYMENT: "PAY",
}


def generate_id() -> str:
    return str(uuid.uuid4())


class SequenceCounter(Protocol):
    def next_value(self, kind: str) -> int:
        ...

    def reset(self) -> None:
        ...


class InMemorySequenceCounter:
    def __init__(self) -> None:
        self._values: Dict[str, int] = {}

    def next_value(self, kind: str) -> int:
        value = self._values.get(kind, 0) + 1
        self._values[kind] = value
        return value

    def reset(self) -> None:
        self._values.clear()


class ReferenceNumberGenerator:
    def __init__(self, counter: Optional[SequenceCounter] = None):
        self.counter = counter if counter is not None else InMemorySequenceCounter()

    def next_number(self, kind: str, on_date: Optional[date] = None) -> str:
        prefix = PREFIXES[kind]
        on_date = on_date or date.today()
        sequence = self.counter.next_value(kind)
        return f"{prefix}-{on_date:%Y%m%d}-{sequence:04d}"

    def invoice_number(self, on_date: Optional[date] = None) -> str:
        return self.next_number(INVOICE, on_date)

    def receipt_number(self, on_date: Optional[date] = None) -> str:
        return self.next_number(RECEIPT, on_date)

    def payment_reference(self, on_date: Optional[date] = None) -> str:
        return self.next_number(PAYMENT, on_date)

    def reset(self) -> None:
        self.counter.reset()


reference_numbers = ReferenceNumberGenerator()


def get_reference_numbers() -> ReferenceNumberGenerator:
    return reference_numbers


def generate_invoice_number(on_date: Optional[date] = None) -> str:
    return reference_numbers.invoice_number(on_date)


def generate_receipt_number(on_date: Optional[date] = None) -> str:
    return reference_numbers.receipt_number(on_date)


def generate_payment_reference(on_date: Optional[date] = None) -> str:
    return reference_numbers.payment_reference(on_date)


def reset_counters() -> None:
    reference_numbers.reset()
