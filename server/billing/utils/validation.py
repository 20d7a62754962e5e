"""
Field validators.

Each rule comes in two forms: ``check_*`` returns the ``ValidationError``
describing the problem (or ``None``) without raising, and ``validate_*``
raises it. The raising forms return the value coerced to its domain type.
"""
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sized

from billing.config import BillingConfig
from billing.errors import ValidationError
from billing.models import PaymentMethod


def as_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    return None


def _fmt(amount: Decimal) -> str:
    return f"{amount:,}"


def check_number(value: Any, field_name: str) -> Optional[ValidationError]:
    number = as_decimal(value)
    if number is None or number.is_nan():
        return ValidationError(f"{field_name} must be a valid number", field_name)
    return None


def check_positive_number(value: Any, field_name: str) -> Optional[ValidationError]:
    error = check_number(value, field_name)
    if error is not None:
        return error
    number = as_decimal(value)
    if number <= 0:
        return ValidationError(f"{field_name} must be positive", field_name)
    if not number.is_finite():
        return ValidationError(f"{field_name} must be a finite number", field_name)
    return None


def check_non_negative_number(value: Any, field_name: str) -> Optional[ValidationError]:
    error = check_number(value, field_name)
    if error is not None:
        return error
    number = as_decimal(value)
    if number < 0:
        return ValidationError(f"{field_name} cannot be negative", field_name)
    if not number.is_finite():
        return ValidationError(f"{field_name} must be a finite number", field_name)
    return None


def check_non_empty_string(value: Any, field_name: str) -> Optional[ValidationError]:
    if not isinstance(value, str):
        return ValidationError(f"{field_name} must be a string", field_name)
    if not value.strip():
        return ValidationError(f"{field_name} cannot be empty", field_name)
    return None


def check_non_empty_sequence(value: Any, field_name: str) -> Optional[ValidationError]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sized):
        return ValidationError(f"{field_name} must be a list", field_name)
    if len(value) == 0:
        return ValidationError(f"{field_name} cannot be empty", field_name)
    return None


def check_date(value: Any, field_name: str) -> Optional[ValidationError]:
    if not isinstance(value, date):
        return ValidationError(f"{field_name} must be a valid date", field_name)
    return None


def check_payment_method(value: Any) -> Optional[ValidationError]:
    if isinstance(value, PaymentMethod):
        return None
    if isinstance(value, str) and value in PaymentMethod.__members__:
        return None
    valid_methods = ", ".join(method.value for method in PaymentMethod)
    return ValidationError(f"Invalid payment method. Must be one of: {valid_methods}", "payment_method")


def check_tax_rate(value: Any) -> Optional[ValidationError]:
    error = check_non_negative_number(value, "Tax rate")
    if error is not None:
        return error
    if as_decimal(value) > 1:
        return ValidationError("Tax rate must be between 0 and 1 (e.g., 0.07 for 7%)", "Tax rate")
    return None


def check_payment_amount_limits(amount: Any, config: BillingConfig) -> Optional[ValidationError]:
    number = as_decimal(amount)
    if number < config.min_payment_amount:
        return ValidationError(f"Payment amount must be at least ${config.min_payment_amount}", "Payment amount")
    if number > config.max_payment_amount:
        return ValidationError(
            f"Payment amount cannot exceed ${_fmt(config.max_payment_amount)}", "Payment amount"
        )
    return None


def check_invoice_amount(amount: Decimal, config: BillingConfig) -> Optional[ValidationError]:
    if amount > config.max_invoice_amount:
        return ValidationError(
            f"Invoice amount cannot exceed ${_fmt(config.max_invoice_amount)}", "Invoice amount"
        )
    return None


def check_line_item_amount(amount: Decimal, config: BillingConfig) -> Optional[ValidationError]:
    if amount > config.max_line_item_amount:
        return ValidationError(
            f"Line item amount cannot exceed ${_fmt(config.max_line_item_amount)}", "Line item amount"
        )
    return None


def _raise_if(error: Optional[ValidationError]) -> None:
    if error is not None:
        raise error


def validate_positive_number(value: Any, field_name: str) -> Decimal:
    _raise_if(check_positive_number(value, field_name))
    return as_decimal(value)


def validate_non_negative_number(value: Any, field_name: str) -> Decimal:
    _raise_if(check_non_negative_number(value, field_name))
    return as_decimal(value)


def validate_non_empty_string(value: Any, field_name: str) -> str:
    _raise_if(check_non_empty_string(value, field_name))
    return value


def validate_non_empty_sequence(value: Any, field_name: str) -> None:
    _raise_if(check_non_empty_sequence(value, field_name))


def validate_date(value: Any, field_name: str) -> date:
    _raise_if(check_date(value, field_name))
    return value


def validate_tax_rate(value: Any) -> Decimal:
    _raise_if(check_tax_rate(value))
    return as_decimal(value)


def validate_invoice_amount(amount: Decimal, config: BillingConfig) -> None:
    _raise_if(check_invoice_amount(amount, config))


def validate_line_item_amount(amount: Decimal, config: BillingConfig) -> None:
    _raise_if(check_line_item_amount(amount, config))
