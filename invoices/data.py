"""
Invoice and customer storage.

Every read and write is a single parameterized SQL statement issued through
Django's database connection. Mutations run inside their own atomic block so a
failed statement rolls back cleanly without affecting the caller's transaction.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from math import ceil
from typing import List

from django.db import DatabaseError, connections, transaction

from .cache import INVOICES_PATH, cached_for_path
from .results import Failed, Found, Lookup, NotFound
from .utils import format_currency, from_cents

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


@dataclass(frozen=True)
class CustomerField:
    id: str
    name: str


@dataclass(frozen=True)
class InvoiceForm:
    id: str
    customer_id: str
    amount: Decimal
    status: str


@dataclass(frozen=True)
class InvoicesTableRow:
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: date
    amount: int
    status: str


@dataclass(frozen=True)
class LatestInvoice:
    id: str
    name: str
    image_url: str
    email: str
    amount: str


@dataclass(frozen=True)
class CardData:
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str


@dataclass(frozen=True)
class CustomersTableRow:
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


def _search_pattern(query: str) -> str:
    return f"%{(query or '').strip().lower()}%"


class InvoiceStore:
    """SQL access for the invoices and customers tables."""

    INVOICE_SEARCH = """
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        WHERE
            LOWER(customers.name) LIKE %s OR
            LOWER(customers.email) LIKE %s OR
            CAST(invoices.amount AS TEXT) LIKE %s OR
            CAST(invoices.date AS TEXT) LIKE %s OR
            LOWER(invoices.status) LIKE %s
    """

    def __init__(self, using: str = "default"):
        self.using = using

    def _cursor(self):
        return connections[self.using].cursor()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert_invoice(self, invoice_id: str, customer_id: str, amount: int, status: str, invoice_date: str) -> None:
        with transaction.atomic(using=self.using), self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO invoices (id, customer_id, amount, status, date)
                VALUES (%s, %s, %s, %s, %s)
                """,
                [invoice_id, customer_id, amount, status, invoice_date],
            )

    def update_invoice(self, invoice_id: str, customer_id: str, amount: int, status: str) -> int:
        with transaction.atomic(using=self.using), self._cursor() as cursor:
            cursor.execute(
                """
                UPDATE invoices
                SET customer_id = %s, amount = %s, status = %s
                WHERE id = %s
                """,
                [customer_id, amount, status, invoice_id],
            )
            return cursor.rowcount

    def delete_invoice(self, invoice_id: str) -> int:
        with transaction.atomic(using=self.using), self._cursor() as cursor:
            cursor.execute("DELETE FROM invoices WHERE id = %s", [invoice_id])
            return cursor.rowcount

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def fetch_invoice_by_id(self, invoice_id: str) -> Lookup[InvoiceForm]:
        try:
            with self._cursor() as cursor:
                cursor.execute(
                    """
                    SELECT id, customer_id, amount, status
                    FROM invoices
                    WHERE id = %s
                    """,
                    [invoice_id],
                )
                row = cursor.fetchone()
        except DatabaseError as e:
            logger.exception(f"Failed to fetch invoice {invoice_id}")
            return Failed(kind="database", error=e)

        if row is None:
            return NotFound(resource="invoice", resource_id=invoice_id)

        return Found(InvoiceForm(
            id=row[0],
            customer_id=row[1],
            amount=from_cents(row[2]),
            status=row[3],
        ))

    def fetch_customers(self) -> List[CustomerField]:
        with self._cursor() as cursor:
            cursor.execute("SELECT id, name FROM customers ORDER BY name ASC")
            return [CustomerField(id=row[0], name=row[1]) for row in cursor.fetchall()]

    @cached_for_path(INVOICES_PATH)
    def fetch_filtered_invoices(self, query: str, current_page: int) -> List[InvoicesTableRow]:
        offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE
        pattern = _search_pattern(query)

        with self._cursor() as cursor:
            cursor.execute(
                f"""
                SELECT
                    invoices.id,
                    invoices.customer_id,
                    customers.name,
                    customers.email,
                    customers.image_url,
                    invoices.date,
                    invoices.amount,
                    invoices.status
                {self.INVOICE_SEARCH}
                ORDER BY invoices.date DESC, invoices.id ASC
                LIMIT %s OFFSET %s
                """,
                [pattern] * 5 + [ITEMS_PER_PAGE, offset],
            )
            return [InvoicesTableRow(*row) for row in cursor.fetchall()]

    @cached_for_path(INVOICES_PATH)
    def fetch_invoices_pages(self, query: str) -> int:
        with self._cursor() as cursor:
            cursor.execute(
                f"SELECT COUNT(*) {self.INVOICE_SEARCH}",
                [_search_pattern(query)] * 5,
            )
            count = cursor.fetchone()[0]
        return ceil(count / ITEMS_PER_PAGE)

    def fetch_latest_invoices(self) -> List[LatestInvoice]:
        with self._cursor() as cursor:
            cursor.execute(
                """
                SELECT invoices.id, customers.name, customers.image_url, customers.email, invoices.amount
                FROM invoices
                JOIN customers ON invoices.customer_id = customers.id
                ORDER BY invoices.date DESC, invoices.id ASC
                LIMIT %s
                """,
                [LATEST_INVOICES_LIMIT],
            )
            return [
                LatestInvoice(
                    id=row[0],
                    name=row[1],
                    image_url=row[2],
                    email=row[3],
                    amount=format_currency(row[4]),
                )
                for row in cursor.fetchall()
            ]

    def fetch_card_data(self) -> CardData:
        with self._cursor() as cursor:
            cursor.execute("SELECT COUNT(*) FROM invoices")
            number_of_invoices = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM customers")
            number_of_customers = cursor.fetchone()[0]

            cursor.execute(
                """
                SELECT
                    COALESCE(SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END), 0),
                    COALESCE(SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END), 0)
                FROM invoices
                """
            )
            paid, pending = cursor.fetchone()

        return CardData(
            number_of_customers=number_of_customers,
            number_of_invoices=number_of_invoices,
            total_paid_invoices=format_currency(paid),
            total_pending_invoices=format_currency(pending),
        )

    def fetch_filtered_customers(self, query: str) -> List[CustomersTableRow]:
        pattern = _search_pattern(query)
        with self._cursor() as cursor:
            cursor.execute(
                """
                SELECT
                    customers.id,
                    customers.name,
                    customers.email,
                    customers.image_url,
                    COUNT(invoices.id),
                    COALESCE(SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END), 0),
                    COALESCE(SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END), 0)
                FROM customers
                LEFT JOIN invoices ON customers.id = invoices.customer_id
                WHERE
                    LOWER(customers.name) LIKE %s OR
                    LOWER(customers.email) LIKE %s
                GROUP BY customers.id, customers.name, customers.email, customers.image_url
                ORDER BY customers.name ASC
                """,
                [pattern, pattern],
            )
            return [
                CustomersTableRow(
                    id=row[0],
                    name=row[1],
                    email=row[2],
                    image_url=row[3],
                    total_invoices=row[4],
                    total_pending=format_currency(row[5]),
                    total_paid=format_currency(row[6]),
                )
                for row in cursor.fetchall()
            ]


store = InvoiceStore()
