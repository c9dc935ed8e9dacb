from decimal import Decimal

import pytest

from invoices.validation import InvoiceFormSchema

VALID = {"customerId": "cust-1", "amount": "12.34", "status": "pending"}


class TestInvoiceFormSchema:
    def test_valid_form(self):
        result = InvoiceFormSchema.safe_parse(VALID)
        assert result.success
        assert result.errors == {}
        assert result.data.customer_id == "cust-1"
        assert result.data.amount == Decimal("12.34")
        assert result.data.status == "pending"

    @pytest.mark.parametrize("amount", ["0", "-5", "", "abc", "NaN", "Infinity", None])
    def test_rejects_non_positive_or_non_numeric_amount(self, amount):
        result = InvoiceFormSchema.safe_parse({**VALID, "amount": amount})
        assert not result.success
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    @pytest.mark.parametrize("status", ["overdue", "PAID", "", None])
    def test_rejects_unknown_status(self, status):
        result = InvoiceFormSchema.safe_parse({**VALID, "status": status})
        assert not result.success
        assert result.errors == {"status": ["Please select an invoice status"]}

    def test_empty_customer_reports_only_customer_error(self):
        result = InvoiceFormSchema.safe_parse({**VALID, "customerId": ""})
        assert not result.success
        assert result.errors == {"customerId": ["Please select a customer."]}

    def test_missing_customer(self):
        data = {k: v for k, v in VALID.items() if k != "customerId"}
        result = InvoiceFormSchema.safe_parse(data)
        assert result.errors == {"customerId": ["Please select a customer."]}

    def test_reports_every_failing_field_together(self):
        result = InvoiceFormSchema.safe_parse({})
        assert not result.success
        assert set(result.errors) == {"customerId", "amount", "status"}
        assert all(len(messages) == 1 for messages in result.errors.values())

    def test_amount_is_trimmed_before_coercion(self):
        result = InvoiceFormSchema.safe_parse({**VALID, "amount": " 5 "})
        assert result.success
        assert result.data.amount == Decimal("5")

    @pytest.mark.parametrize("amount", ["0.001", "0.004", "0x10", "-1e30"])
    def test_rejects_amount_that_is_not_a_positive_number_of_cents(self, amount):
        result = InvoiceFormSchema.safe_parse({**VALID, "amount": amount})
        assert not result.success
        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}

    @pytest.mark.parametrize("amount", ["21474836.48", "1e20", "1e30"])
    def test_rejects_amount_above_largest_storable(self, amount):
        result = InvoiceFormSchema.safe_parse({**VALID, "amount": amount})
        assert not result.success
        assert result.errors == {"amount": ["Please enter an amount no greater than $21,474,836.47."]}

    @pytest.mark.parametrize("amount,expected", [
        ("0.005", Decimal("0.005")),
        ("1e2", Decimal("100")),
        ("21474836.47", Decimal("21474836.47")),
    ])
    def test_accepts_amount_at_the_boundaries(self, amount, expected):
        result = InvoiceFormSchema.safe_parse({**VALID, "amount": amount})
        assert result.success
        assert result.data.amount == expected
