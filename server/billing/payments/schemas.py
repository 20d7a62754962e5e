from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from billing.invoices.schemas import DecimalValue, InvoiceSchema
from billing.models import Payment, PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    invoice: InvoiceSchema
    amount: Decimal
    payment_method: str
    payment_date: Optional[date] = None


class PaymentSchema(BaseModel):
    id: str
    invoice_id: str
    payment_method: str
    amount: Decimal
    payment_date: date
    reference_number: str
    status: PaymentStatus

    model_config = ConfigDict(from_attributes=True)


class PaymentResultResponse(BaseModel):
    success: bool
    payment: PaymentSchema
    invoice: InvoiceSchema
    error: Optional[str] = None


class PaymentAmountCheckRequest(BaseModel):
    invoice: InvoiceSchema
    amount: Decimal


class PaymentAmountCheckResponse(BaseModel):
    valid: bool
    message: Optional[str] = None


class TotalPaidRequest(BaseModel):
    payments: List[PaymentSchema]


class TotalPaidResponse(BaseModel):
    total_paid: DecimalValue


def payment_from_schema(payload: PaymentSchema) -> Payment:
    method = payload.payment_method
    return Payment(
        id=payload.id,
        invoice_id=payload.invoice_id,
        payment_method=PaymentMethod(method) if method in PaymentMethod.__members__ else method,
        amount=payload.amount,
        payment_date=payload.payment_date,
        reference_number=payload.reference_number,
        status=payload.status,
    )
