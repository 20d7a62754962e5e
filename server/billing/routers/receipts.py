from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from billing.errors import AllocationMismatchError
from billing.identifiers import ReferenceNumberGenerator, get_reference_numbers
from billing.invoices.schemas import invoice_from_schema
from billing.models import Receipt
from billing.payments.schemas import payment_from_schema
from billing.receipts import schemas
from billing.receipts.formatting import format_receipt
from billing.receipts.service import generate_receipt

router = APIRouter(prefix="/api", tags=["receipts"])


def _generate(payload: schemas.ReceiptCreate, numbers: ReferenceNumberGenerator) -> Receipt:
    try:
        return generate_receipt(
            payment_from_schema(payload.payment), invoice_from_schema(payload.invoice), numbers=numbers
        )
    except AllocationMismatchError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/receipts", response_model=schemas.ReceiptResponse)
def create_receipt(
    payload: schemas.ReceiptCreate,
    numbers: ReferenceNumberGenerator = Depends(get_reference_numbers),
):
    return _generate(payload, numbers)


@router.post("/receipts/text", response_class=PlainTextResponse)
def create_receipt_text(
    payload: schemas.ReceiptCreate,
    numbers: ReferenceNumberGenerator = Depends(get_reference_numbers),
):
    receipt = _generate(payload, numbers)
    return format_receipt(receipt, invoice_from_schema(payload.invoice))
