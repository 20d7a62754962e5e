from datetime import date
from decimal import Decimal

import pytest

from billing.config import BillingConfig
from billing.errors import ValidationError
from billing.invoices.calculations import InvoiceItemInput, calculate_invoice_total, derive_status
from billing.invoices.service import cancel_invoice, clone_invoice, create_invoice, update_invoice_status
from billing.models import InvoiceStatus


BASIC_ITEMS = [
    InvoiceItemInput(description="Monthly Fee", quantity=1, unit_price=Decimal("500.00")),
    InvoiceItemInput(description="Activity Fee", quantity=2, unit_price=Decimal("25.50")),
]


def test_calculate_invoice_total_basic_scenario():
    totals = calculate_invoice_total(BASIC_ITEMS, Decimal("0.07"))

    assert totals.subtotal == Decimal("551.00")
    assert totals.total_tax == Decimal("38.57")
    assert totals.total_amount == Decimal("589.57")
    assert [item.line_total for item in totals.items] == [Decimal("535.00"), Decimal("54.57")]
    assert [item.tax_amount for item in totals.items] == [Decimal("35.00"), Decimal("3.57")]
    assert [item.line_subtotal for item in totals.items] == [Decimal("500.00"), Decimal("51.00")]
    assert all(item.line_subtotal + item.tax_amount == item.line_total for item in totals.items)
    assert all(item.tax_rate == Decimal("0.07") for item in totals.items)


def test_calculate_invoice_total_accepts_mappings_and_floats():
    totals = calculate_invoice_total(
        [
            {"description": "Monthly Fee", "quantity": 1, "unit_price": 500.0},
            {"description": "Activity Fee", "quantity": 2, "unit_price": 25.5},
        ],
        0.07,
    )
    assert totals.total_amount == Decimal("589.57")


def test_calculate_invoice_total_is_repeatable():
    first = calculate_invoice_total(BASIC_ITEMS, Decimal("0.07"))
    second = calculate_invoice_total(BASIC_ITEMS, Decimal("0.07"))

    assert (first.subtotal, first.total_tax, first.total_amount) == (
        second.subtotal,
        second.total_tax,
        second.total_amount,
    )


@pytest.mark.parametrize(
    "items, tax_rate",
    [
        ([InvoiceItemInput("Consulting", Decimal("3"), Decimal("33.33"))], Decimal("0.0825")),
        ([InvoiceItemInput("Lessons", Decimal("7"), Decimal("14.29"))], Decimal("0.07")),
        (
            [
                InvoiceItemInput("Widget", Decimal("1.5"), Decimal("19.99")),
                InvoiceItemInput("Gadget", Decimal("0.333"), Decimal("12.01")),
                InvoiceItemInput("Service", Decimal("11"), Decimal("0.07")),
            ],
            Decimal("0.13"),
        ),
    ],
)
def test_subtotal_plus_tax_equals_total(items, tax_rate):
    totals = calculate_invoice_total(items, tax_rate)
    assert totals.subtotal + totals.total_tax == totals.total_amount


def test_zero_unit_price_yields_zero_line():
    totals = calculate_invoice_total([InvoiceItemInput("Free sample", 1, 0)], Decimal("0.07"))

    item = totals.items[0]
    assert item.line_total == Decimal("0.00")
    assert item.tax_amount == Decimal("0.00")
    assert totals.total_amount == Decimal("0.00")


def test_zero_quantity_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        calculate_invoice_total([InvoiceItemInput("Nothing", 0, Decimal("10.00"))], Decimal("0.07"))
    assert exc_info.value.field == "Item quantity"
    assert "must be positive" in str(exc_info.value)


@pytest.mark.parametrize(
    "item, field",
    [
        (InvoiceItemInput("   ", 1, Decimal("10.00")), "Item description"),
        (InvoiceItemInput("Fee", -1, Decimal("10.00")), "Item quantity"),
        (InvoiceItemInput("Fee", float("inf"), Decimal("10.00")), "Item quantity"),
        (InvoiceItemInput("Fee", float("nan"), Decimal("10.00")), "Item quantity"),
        (InvoiceItemInput("Fee", 1, Decimal("-0.01")), "Item unit price"),
        (InvoiceItemInput("Fee", 1, float("inf")), "Item unit price"),
        (InvoiceItemInput("Fee", 1, "ten"), "Item unit price"),
    ],
)
def test_invalid_items_name_the_field(item, field):
    with pytest.raises(ValidationError) as exc_info:
        calculate_invoice_total([item], Decimal("0.07"))
    assert exc_info.value.field == field


def test_empty_items_rejected():
    with pytest.raises(ValidationError, match="Invoice items cannot be empty"):
        calculate_invoice_total([], Decimal("0.07"))


@pytest.mark.parametrize("tax_rate", [Decimal("-0.01"), Decimal("1.01"), float("nan")])
def test_tax_rate_out_of_range_rejected(tax_rate):
    with pytest.raises(ValidationError):
        calculate_invoice_total(BASIC_ITEMS, tax_rate)


def test_tax_rate_bounds_accepted():
    assert calculate_invoice_total(BASIC_ITEMS, 0).total_tax == Decimal("0.00")
    assert calculate_invoice_total(BASIC_ITEMS, 1).total_amount == Decimal("1102.00")


def test_line_item_limit_enforced():
    config = BillingConfig(max_line_item_amount=Decimal("1000"))
    with pytest.raises(ValidationError, match="Line item amount cannot exceed \\$1,000"):
        calculate_invoice_total([InvoiceItemInput("Big", 1, Decimal("1000.01"))], 0, config=config)


def test_line_item_limit_rejects_products_too_large_to_round():
    with pytest.raises(ValidationError, match="Line item amount cannot exceed \\$500,000"):
        calculate_invoice_total([{"description": "Bulk", "quantity": 1e30, "unit_price": 1}], 0)


def test_line_item_limit_applies_to_rounded_subtotal():
    config = BillingConfig(max_line_item_amount=Decimal("1000"))
    totals = calculate_invoice_total([InvoiceItemInput("Edge", 1, Decimal("1000.004"))], 0, config=config)
    assert totals.subtotal == Decimal("1000.00")


def test_line_item_limit_checked_before_tax():
    config = BillingConfig(max_line_item_amount=Decimal("1000"))
    totals = calculate_invoice_total([InvoiceItemInput("Edge", 1, Decimal("1000"))], Decimal("0.07"), config=config)
    assert totals.total_amount == Decimal("1070.00")


def test_invoice_limit_enforced():
    items = [InvoiceItemInput("Half", 1, Decimal("500000")), InvoiceItemInput("Half", 1, Decimal("500000"))]
    with pytest.raises(ValidationError, match="Invoice amount cannot exceed \\$1,000,000"):
        calculate_invoice_total(items, Decimal("0.07"))


def test_create_invoice_sets_initial_state():
    invoice = create_invoice(BASIC_ITEMS, Decimal("0.07"), date(2024, 1, 15))

    assert invoice.id
    assert invoice.invoice_number == "INV-20240115-0001"
    assert invoice.invoice_date == date(2024, 1, 15)
    assert invoice.outstanding_amount == invoice.total_amount == Decimal("589.57")
    assert invoice.status == InvoiceStatus.PENDING
    assert [item.description for item in invoice.items] == ["Monthly Fee", "Activity Fee"]


def test_create_invoice_numbers_are_sequential():
    first = create_invoice(BASIC_ITEMS, 0, date(2024, 1, 15))
    second = create_invoice(BASIC_ITEMS, 0, date(2024, 1, 16))

    assert first.invoice_number == "INV-20240115-0001"
    assert second.invoice_number == "INV-20240116-0002"
    assert first.id != second.id


def test_create_invoice_rejects_invalid_date():
    with pytest.raises(ValidationError, match="Invoice date must be a valid date"):
        create_invoice(BASIC_ITEMS, 0, "2024-01-15")


@pytest.mark.parametrize(
    "outstanding, total, expected",
    [
        (Decimal("100.00"), Decimal("100.00"), InvoiceStatus.PENDING),
        (Decimal("40.00"), Decimal("100.00"), InvoiceStatus.PARTIALLY_PAID),
        (Decimal("0.00"), Decimal("100.00"), InvoiceStatus.PAID),
        (Decimal("-0.01"), Decimal("100.00"), InvoiceStatus.OVERPAID),
        (Decimal("120.00"), Decimal("100.00"), InvoiceStatus.PENDING),
    ],
)
def test_derive_status(outstanding, total, expected):
    assert derive_status(outstanding, total) == expected


def test_update_invoice_status_keeps_cancelled():
    invoice = cancel_invoice(create_invoice(BASIC_ITEMS, 0, date(2024, 1, 15)))

    assert update_invoice_status(invoice).status == InvoiceStatus.CANCELLED


def test_cancel_invoice_returns_new_value():
    invoice = create_invoice(BASIC_ITEMS, 0, date(2024, 1, 15))
    cancelled = cancel_invoice(invoice)

    assert cancelled is not invoice
    assert invoice.status == InvoiceStatus.PENDING
    assert cancelled.status == InvoiceStatus.CANCELLED


def test_clone_invoice_is_equal_but_distinct():
    invoice = create_invoice(BASIC_ITEMS, Decimal("0.07"), date(2024, 1, 15))
    cloned = clone_invoice(invoice)

    assert cloned == invoice
    assert cloned is not invoice
    assert cloned.items[0] is not invoice.items[0]
