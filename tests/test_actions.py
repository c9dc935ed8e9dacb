from unittest.mock import MagicMock, call, patch

import pytest
from django.db import DatabaseError, OperationalError

from invoices import actions
from invoices.actions import ActionState, create_invoice, delete_invoice, update_invoice
from invoices.cache import INVOICES_PATH
from invoices.data import InvoiceStore
from invoices.results import Redirect
from tests.factories import CustomerFactory, InvoiceFactory

# Completion signalling writes path versions to the database cache
pytestmark = pytest.mark.django_db

VALID = {"customerId": "cust-1", "amount": "12.34", "status": "paid"}


@pytest.fixture
def fake_store():
    return MagicMock(spec=InvoiceStore)


class TestCreateInvoice:
    def test_invalid_form_never_writes(self, fake_store):
        result = create_invoice(None, {**VALID, "amount": "0"}, store=fake_store)

        assert result == ActionState(
            message="Missing Fields. Failed to Create Invoice.",
            errors={"amount": ["Please enter an amount greater than $0."]},
        )
        fake_store.insert_invoice.assert_not_called()

    @pytest.mark.parametrize("amount", ["1e20", "1e30", "21474836.48"])
    def test_amount_above_column_range_never_writes(self, fake_store, amount):
        result = create_invoice(None, {**VALID, "amount": amount}, store=fake_store)

        assert result == ActionState(
            message="Missing Fields. Failed to Create Invoice.",
            errors={"amount": ["Please enter an amount no greater than $21,474,836.47."]},
        )
        fake_store.insert_invoice.assert_not_called()

    @pytest.mark.parametrize("amount", ["0.001", "0.004"])
    def test_amount_rounding_to_zero_cents_never_writes(self, fake_store, amount):
        result = create_invoice(None, {**VALID, "amount": amount}, store=fake_store)

        assert result.errors == {"amount": ["Please enter an amount greater than $0."]}
        fake_store.insert_invoice.assert_not_called()

    def test_largest_amount_fits_in_cents(self, fake_store):
        create_invoice(None, {**VALID, "amount": "21474836.47"}, store=fake_store)
        assert fake_store.insert_invoice.call_args.args[2] == 2147483647

    def test_amount_stored_in_cents(self, fake_store):
        result = create_invoice(None, VALID, store=fake_store)

        assert result == Redirect(INVOICES_PATH)
        invoice_id, customer_id, amount, status, date = fake_store.insert_invoice.call_args.args
        assert customer_id == "cust-1"
        assert amount == 1234
        assert status == "paid"
        assert len(date) == 10

    def test_amount_rounds_half_up(self, fake_store):
        create_invoice(None, {**VALID, "amount": "12.345"}, store=fake_store)
        assert fake_store.insert_invoice.call_args.args[2] == 1235

    def test_each_invoice_gets_a_fresh_id(self, fake_store):
        create_invoice(None, VALID, store=fake_store)
        create_invoice(None, VALID, store=fake_store)
        first, second = (c.args[0] for c in fake_store.insert_invoice.call_args_list)
        assert first != second

    def test_database_error_returns_message(self, fake_store):
        fake_store.insert_invoice.side_effect = OperationalError("connection refused")

        with patch("invoices.actions.signal_completion") as completion:
            result = create_invoice(None, VALID, store=fake_store)

        assert result == ActionState(message="Database Error: Failed to Create Invoice.")
        completion.assert_not_called()

    def test_invalidates_before_redirect(self, fake_store):
        events = MagicMock()
        fake_store.insert_invoice.side_effect = lambda *args: events.insert()

        with patch("invoices.cache.revalidate_path", side_effect=lambda path: events.revalidate(path)):
            result = create_invoice(None, VALID, store=fake_store)

        assert result == Redirect(INVOICES_PATH)
        assert events.mock_calls == [call.insert(), call.revalidate(INVOICES_PATH)]


class TestUpdateInvoice:
    def test_invalid_form_never_writes(self, fake_store):
        result = update_invoice("inv-1", None, {**VALID, "status": "overdue"}, store=fake_store)

        assert result.message == "Missing fields. Failed to update invoice"
        assert result.errors == {"status": ["Please select an invoice status"]}
        fake_store.update_invoice.assert_not_called()

    @pytest.mark.parametrize("amount,message", [
        ("0.001", "Please enter an amount greater than $0."),
        ("1e30", "Please enter an amount no greater than $21,474,836.47."),
    ])
    def test_out_of_range_amount_never_writes(self, fake_store, amount, message):
        result = update_invoice("inv-1", None, {**VALID, "amount": amount}, store=fake_store)

        assert result.message == "Missing fields. Failed to update invoice"
        assert result.errors == {"amount": [message]}
        fake_store.update_invoice.assert_not_called()

    def test_updates_in_cents_and_redirects(self, fake_store):
        with patch("invoices.actions.signal_completion", return_value=Redirect(INVOICES_PATH)) as completion:
            result = update_invoice("inv-1", None, VALID, store=fake_store)

        fake_store.update_invoice.assert_called_once_with("inv-1", "cust-1", 1234, "paid")
        completion.assert_called_once_with(INVOICES_PATH, redirect=True)
        assert result == Redirect(INVOICES_PATH)

    def test_database_error_returns_message(self, fake_store):
        fake_store.update_invoice.side_effect = DatabaseError("boom")

        result = update_invoice("inv-1", None, VALID, store=fake_store)

        assert result == ActionState(message="Database Error: Failed to Update Invoice.")


class TestDeleteInvoice:
    def test_deletes_and_invalidates_without_redirect(self, fake_store):
        fake_store.delete_invoice.return_value = 1

        with patch("invoices.actions.signal_completion") as completion:
            result = delete_invoice("inv-1", store=fake_store)

        fake_store.delete_invoice.assert_called_once_with("inv-1")
        completion.assert_called_once_with(INVOICES_PATH)
        assert result == ActionState(message="Deleted Invoice.", ok=True)

    def test_missing_invoice_is_a_no_op(self, fake_store):
        fake_store.delete_invoice.return_value = 0

        result = delete_invoice("does-not-exist", store=fake_store)

        assert result == ActionState(message="Deleted Invoice.", ok=True)

    def test_database_error_returns_message(self, fake_store):
        fake_store.delete_invoice.side_effect = DatabaseError("boom")

        result = delete_invoice("inv-1", store=fake_store)

        assert result == ActionState(message="Database Error: Failed to Delete Invoice")


@pytest.mark.django_db
class TestAgainstDatabase:
    def test_fresh_listing_reflects_created_invoice(self):
        customer = CustomerFactory(name="Delba de Oliveira")
        store = InvoiceStore()
        assert store.fetch_filtered_invoices("", 1) == []

        result = create_invoice(None, {"customerId": customer.id, "amount": "99.99", "status": "pending"})

        assert result == Redirect(INVOICES_PATH)
        rows = store.fetch_filtered_invoices("", 1)
        assert [(row.name, row.amount) for row in rows] == [("Delba de Oliveira", 9999)]

    def test_update_then_listing_shows_new_values(self):
        invoice = InvoiceFactory(amount=1000, status="pending")
        store = InvoiceStore()
        assert store.fetch_filtered_invoices("", 1)[0].amount == 1000

        update_invoice(invoice.id, None, {"customerId": invoice.customer_id, "amount": "20", "status": "paid"})

        row = store.fetch_filtered_invoices("", 1)[0]
        assert (row.amount, row.status) == (2000, "paid")

    def test_delete_missing_invoice(self):
        assert delete_invoice("does-not-exist") == ActionState(message="Deleted Invoice.", ok=True)

    @pytest.mark.parametrize("amount", ["0.001", "1e30"])
    def test_out_of_range_amount_leaves_table_untouched(self, amount):
        customer = CustomerFactory()

        result = create_invoice(None, {"customerId": customer.id, "amount": amount, "status": "paid"})

        assert isinstance(result, ActionState)
        assert not result.message.startswith("Database Error")
        assert InvoiceStore().fetch_invoices_pages("") == 0


def test_default_store_is_used(monkeypatch):
    fake = MagicMock(spec=InvoiceStore)
    fake.delete_invoice.return_value = 1
    monkeypatch.setattr(actions.data, "store", fake)

    with patch("invoices.actions.signal_completion"):
        delete_invoice("inv-1")

    fake.delete_invoice.assert_called_once_with("inv-1")
