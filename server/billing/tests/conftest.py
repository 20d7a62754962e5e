import pytest

from billing.config import get_config
from billing.identifiers import reset_counters

CONFIG_VARIABLES = (
    "BILLING_ENV",
    "TAX_RATE",
    "MAX_INVOICE_AMOUNT",
    "MIN_INVOICE_AMOUNT",
    "MAX_PAYMENT_AMOUNT",
    "MIN_PAYMENT_AMOUNT",
    "MAX_LINE_ITEM_AMOUNT",
)


@pytest.fixture(autouse=True)
def isolated_billing_state(monkeypatch, tmp_path):
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_config.cache_clear()
    reset_counters()
    yield
    get_config.cache_clear()
    reset_counters()
