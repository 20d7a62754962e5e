from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, condecimal

from billing.models import Invoice, InvoiceItem, InvoiceStatus


DecimalValue = condecimal(max_digits=14, decimal_places=2)
TaxRateValue = condecimal(max_digits=7, decimal_places=6)


class InvoiceLineCreate(BaseModel):
    description: str
    quantity: Decimal
    unit_price: Decimal


class InvoiceCalculate(BaseModel):
    line_items: List[InvoiceLineCreate]
    tax_rate: Optional[TaxRateValue] = None


class InvoiceCreate(InvoiceCalculate):
    invoice_date: Optional[date] = None


class InvoiceItemSchema(BaseModel):
    id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    line_total: DecimalValue
    tax_rate: TaxRateValue = Field(..., ge=0, le=1)
    tax_amount: DecimalValue

    model_config = ConfigDict(from_attributes=True)


class InvoiceTotalsResponse(BaseModel):
    subtotal: DecimalValue
    total_tax: DecimalValue
    total_amount: DecimalValue
    items: List[InvoiceItemSchema]

    model_config = ConfigDict(from_attributes=True)


class InvoiceSchema(BaseModel):
    id: str
    invoice_number: str
    invoice_date: date
    items: List[InvoiceItemSchema]
    subtotal: DecimalValue
    total_tax: DecimalValue
    total_amount: DecimalValue
    outstanding_amount: DecimalValue
    status: InvoiceStatus

    model_config = ConfigDict(from_attributes=True)


def invoice_from_schema(payload: InvoiceSchema) -> Invoice:
    return Invoice(
        id=payload.id,
        invoice_number=payload.invoice_number,
        invoice_date=payload.invoice_date,
        items=tuple(InvoiceItem(**item.model_dump()) for item in payload.items),
        subtotal=payload.subtotal,
        total_tax=payload.total_tax,
        total_amount=payload.total_amount,
        outstanding_amount=payload.outstanding_amount,
        status=payload.status,
    )
