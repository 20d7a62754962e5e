from dataclasses import asdict

from fastapi import APIRouter, Depends

from billing.config import BillingConfig, get_config
from billing.identifiers import ReferenceNumberGenerator, get_reference_numbers
from billing.invoices.schemas import invoice_from_schema
from billing.payments import schemas
from billing.payments.service import calculate_total_paid, process_payment, validate_payment_amount

router = APIRouter(prefix="/api", tags=["payments"])


@router.post("/payments", response_model=schemas.PaymentResultResponse)
def create_payment(
    payload: schemas.PaymentCreate,
    config: BillingConfig = Depends(get_config),
    numbers: ReferenceNumberGenerator = Depends(get_reference_numbers),
):
    result = process_payment(
        invoice_from_schema(payload.invoice),
        payload.amount,
        payload.payment_method,
        payload.payment_date,
        config=config,
        numbers=numbers,
    )
    return schemas.PaymentResultResponse(
        success=result.success,
        payment=asdict(result.payment),
        invoice=asdict(result.invoice),
        error=result.error,
    )


@router.post("/payments/validate", response_model=schemas.PaymentAmountCheckResponse)
def check_payment_amount(payload: schemas.PaymentAmountCheckRequest, config: BillingConfig = Depends(get_config)):
    return validate_payment_amount(invoice_from_schema(payload.invoice), payload.amount, config=config)


@router.post("/payments/total-paid", response_model=schemas.TotalPaidResponse)
def total_paid(payload: schemas.TotalPaidRequest):
    payments = [schemas.payment_from_schema(payment) for payment in payload.payments]
    return schemas.TotalPaidResponse(total_paid=calculate_total_paid(payments))
