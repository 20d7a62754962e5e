from fastapi import APIRouter, Depends, HTTPException, status

from billing.config import BillingConfig, get_config
from billing.identifiers import ReferenceNumberGenerator, get_reference_numbers
from billing.invoices import schemas
from billing.invoices.calculations import calculate_invoice_total
from billing.invoices.service import cancel_invoice, create_invoice

router = APIRouter(prefix="/api", tags=["invoices"])


@router.post("/invoices/calculate", response_model=schemas.InvoiceTotalsResponse)
def calculate_invoice(payload: schemas.InvoiceCalculate, config: BillingConfig = Depends(get_config)):
    tax_rate = payload.tax_rate if payload.tax_rate is not None else config.tax_rate
    try:
        return calculate_invoice_total(
            [line.model_dump() for line in payload.line_items], tax_rate, config=config
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/invoices", response_model=schemas.InvoiceSchema, status_code=status.HTTP_201_CREATED)
def create_invoice_endpoint(
    payload: schemas.InvoiceCreate,
    config: BillingConfig = Depends(get_config),
    numbers: ReferenceNumberGenerator = Depends(get_reference_numbers),
):
    tax_rate = payload.tax_rate if payload.tax_rate is not None else config.tax_rate
    try:
        return create_invoice(
            [line.model_dump() for line in payload.line_items],
            tax_rate,
            payload.invoice_date,
            config=config,
            numbers=numbers,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/invoices/cancel", response_model=schemas.InvoiceSchema)
def cancel_invoice_endpoint(payload: schemas.InvoiceSchema):
    return cancel_invoice(schemas.invoice_from_schema(payload))
