from decimal import Decimal
from typing import List

from billing.models import Invoice, PaymentMethod, Receipt


WIDTH = 50
DESCRIPTION_WIDTH = 35
AMOUNT_WIDTH = 10


def _money(value: Decimal) -> str:
    return f"${value:>{AMOUNT_WIDTH}.2f}"


def _method_label(method: PaymentMethod | str) -> str:
    return method.value if isinstance(method, PaymentMethod) else str(method)


def format_receipt(receipt: Receipt, invoice: Invoice) -> str:
    lines: List[str] = [
        "=" * WIDTH,
        "PAYMENT RECEIPT",
        "=" * WIDTH,
        "",
        f"Receipt Number: {receipt.receipt_number}",
        f"Receipt Date: {receipt.receipt_date:%m/%d/%Y}",
        f"Invoice Number: {invoice.invoice_number}",
        f"Payment Reference: {receipt.payment_reference}",
        f"Payment Method: {_method_label(receipt.payment_method)}",
        "",
        "-" * WIDTH,
        "PAYMENT ALLOCATION",
        "-" * WIDTH,
    ]
    for item in receipt.items:
        lines.append(f"{item.description:<{DESCRIPTION_WIDTH}} {_money(item.amount_allocated)}")
    lines.extend(
        [
            "-" * WIDTH,
            f"Total Paid:{' ' * 28} {_money(receipt.total_paid)}",
            f"Remaining Balance:{' ' * 21} {_money(receipt.remaining_balance)}",
            "=" * WIDTH,
        ]
    )
    return "\n".join(lines)
