from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict

from billing.invoices.schemas import DecimalValue, InvoiceSchema
from billing.payments.schemas import PaymentSchema


class ReceiptCreate(BaseModel):
    payment: PaymentSchema
    invoice: InvoiceSchema


class ReceiptItemResponse(BaseModel):
    description: str
    amount_allocated: DecimalValue

    model_config = ConfigDict(from_attributes=True)


class ReceiptResponse(BaseModel):
    id: str
    payment_id: str
    invoice_id: str
    receipt_number: str
    receipt_date: date
    total_paid: Decimal
    remaining_balance: DecimalValue
    payment_method: str
    payment_reference: str
    items: List[ReceiptItemResponse]

    model_config = ConfigDict(from_attributes=True)
