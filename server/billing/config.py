"""
Billing configuration.

Values come from the process environment, optionally seeded from an
environment-specific ``.env.<env>`` file in the working directory:

    BILLING_ENV           local | staging | production (default: local)
    TAX_RATE              default tax rate, 0..1 (default: 0.07)
    MAX_INVOICE_AMOUNT    (default: 1000000)
    MIN_INVOICE_AMOUNT    (default: 0.01)
    MAX_PAYMENT_AMOUNT    (default: 1000000)
    MIN_PAYMENT_AMOUNT    (default: 0.01)
    MAX_LINE_ITEM_AMOUNT  (default: 500000)

The configuration is validated once when loaded and treated as constant
afterwards.
"""
import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from billing.errors import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_ENV = "local"


@dataclass(frozen=True)
class BillingConfig:
    env: str = DEFAULT_ENV
    tax_rate: Decimal = Decimal("0.07")
    max_invoice_amount: Decimal = Decimal("1000000")
    min_invoice_amount: Decimal = Decimal("0.01")
    max_payment_amount: Decimal = Decimal("1000000")
    min_payment_amount: Decimal = Decimal("0.01")
    max_line_item_amount: Decimal = Decimal("500000")

    @property
    def tax_percentage(self) -> Decimal:
        return self.tax_rate * Decimal("100")

    def limits(self) -> dict[str, Decimal]:
        return {
            "max_invoice_amount": self.max_invoice_amount,
            "min_invoice_amount": self.min_invoice_amount,
            "max_payment_amount": self.max_payment_amount,
            "min_payment_amount": self.min_payment_amount,
            "max_line_item_amount": self.max_line_item_amount,
        }


def _parse_decimal(environ: Mapping[str, str], name: str, default: Decimal) -> Decimal:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        logger.warning("Environment variable %s not set, using default: %s", name, default)
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ConfigurationError(f"Invalid number for {name}: {raw}")
    if not value.is_finite():
        raise ConfigurationError(f"Invalid number for {name}: {raw}")
    return value


def validate_config(config: BillingConfig) -> BillingConfig:
    if config.tax_rate < 0 or config.tax_rate > 1:
        raise ConfigurationError(f"Invalid TAX_RATE: {config.tax_rate}. Must be between 0 and 1.")
    for key, value in config.limits().items():
        if value <= 0:
            raise ConfigurationError(f"Invalid {key}: {value}. Must be positive.")
    if config.max_invoice_amount < config.min_invoice_amount:
        raise ConfigurationError("MAX_INVOICE_AMOUNT must be greater than MIN_INVOICE_AMOUNT")
    if config.max_payment_amount < config.min_payment_amount:
        raise ConfigurationError("MAX_PAYMENT_AMOUNT must be greater than MIN_PAYMENT_AMOUNT")
    return config


def load_config(environ: Optional[Mapping[str, str]] = None) -> BillingConfig:
    if environ is None:
        env_name = os.getenv("BILLING_ENV", DEFAULT_ENV).lower()
        env_file = Path.cwd() / f".env.{env_name}"
        if env_file.is_file():
            load_dotenv(env_file, override=False)
        environ = os.environ
    else:
        env_name = environ.get("BILLING_ENV", DEFAULT_ENV).lower()

    defaults = BillingConfig()
    config = validate_config(
        BillingConfig(
            env=env_name,
            tax_rate=_parse_decimal(environ, "TAX_RATE", defaults.tax_rate),
            max_invoice_amount=_parse_decimal(environ, "MAX_INVOICE_AMOUNT", defaults.max_invoice_amount),
            min_invoice_amount=_parse_decimal(environ, "MIN_INVOICE_AMOUNT", defaults.min_invoice_amount),
            max_payment_amount=_parse_decimal(environ, "MAX_PAYMENT_AMOUNT", defaults.max_payment_amount),
            min_payment_amount=_parse_decimal(environ, "MIN_PAYMENT_AMOUNT", defaults.min_payment_amount),
            max_line_item_amount=_parse_decimal(environ, "MAX_LINE_ITEM_AMOUNT", defaults.max_line_item_amount),
        )
    )

    logger.info("Environment: %s", config.env)
    logger.info("Tax Rate: %s (%s%%)", config.tax_rate, config.tax_percentage)
    logger.info("Max Invoice Amount: $%s", f"{config.max_invoice_amount:,}")
    logger.info("Max Payment Amount: $%s", f"{config.max_payment_amount:,}")
    return config


@lru_cache
def get_config() -> BillingConfig:
    return load_config()
