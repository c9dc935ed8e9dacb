"""
Form mutation handlers.

Each handler validates the posted form, performs one write through the
invoice store and signals completion (cache invalidation, then the redirect
to follow). Expected failures come back as an ActionState for the form to
render; only unexpected exceptions escape.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Union

from django.db import DatabaseError
from django.utils import timezone

from . import data
from .auth import AuthError, sign_in
from .cache import INVOICES_PATH, signal_completion
from .results import Redirect
from .utils import to_cents
from .validation import InvoiceFormSchema

logger = logging.getLogger(__name__)


@dataclass
class ActionState:
    message: Optional[str] = None
    errors: Optional[Dict[str, List[str]]] = None
    ok: bool = False


def _store(store):
    return data.store if store is None else store


def create_invoice(
    prev_state: Optional[ActionState],
    form_data: Mapping,
    *,
    store=None,
) -> Union[ActionState, Redirect]:
    parsed = InvoiceFormSchema.safe_parse(form_data)
    if not parsed.success:
        return ActionState(
            errors=parsed.errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    invoice = parsed.data
    amount_in_cents = to_cents(invoice.amount)
    date = timezone.localdate().isoformat()

    try:
        _store(store).insert_invoice(
            str(uuid.uuid4()),
            invoice.customer_id,
            amount_in_cents,
            invoice.status,
            date,
        )
    except DatabaseError:
        logger.exception("Failed to create invoice")
        return ActionState(message="Database Error: Failed to Create Invoice.")

    return signal_completion(INVOICES_PATH, redirect=True)


def update_invoice(
    invoice_id: str,
    prev_state: Optional[ActionState],
    form_data: Mapping,
    *,
    store=None,
) -> Union[ActionState, Redirect]:
    parsed = InvoiceFormSchema.safe_parse(form_data)
    if not parsed.success:
        return ActionState(
            errors=parsed.errors,
            message="Missing fields. Failed to update invoice",
        )

    invoice = parsed.data
    amount_in_cents = to_cents(invoice.amount)

    try:
        _store(store).update_invoice(
            invoice_id,
            invoice.customer_id,
            amount_in_cents,
            invoice.status,
        )
    except DatabaseError:
        logger.exception(f"Failed to update invoice {invoice_id}")
        return ActionState(message="Database Error: Failed to Update Invoice.")

    return signal_completion(INVOICES_PATH, redirect=True)


def delete_invoice(invoice_id: str, *, store=None) -> ActionState:
    try:
        deleted = _store(store).delete_invoice(invoice_id)
    except DatabaseError:
        logger.exception(f"Failed to delete invoice {invoice_id}")
        return ActionState(message="Database Error: Failed to Delete Invoice")

    if not deleted:
        logger.info(f"Delete requested for missing invoice {invoice_id}")

    signal_completion(INVOICES_PATH)
    return ActionState(message="Deleted Invoice.", ok=True)


def authenticate(request, prev_state: Optional[str], form_data: Mapping) -> Union[str, Redirect]:
    """Sign in with posted credentials; known auth failures become a message."""
    try:
        return sign_in(request, "credentials", form_data)
    except AuthError as error:
        if error.type == "CredentialsSignin":
            return "Invalid credentials."
        return "Something went wrong."
