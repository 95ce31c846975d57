"""
repositories/invoice_repo.py
-----------------------------
Data access layer for invoices.
All SQL queries related to the `invoices` table live here.
"""

import re
from datetime import date
from typing import Optional

import psycopg2

from db.errors import DataAccessError, NotFoundError
from models.invoice import Invoice, validate_amount, validate_status
from models.views import InvoiceTableRow
from repositories.base import BaseRepository, escape_like, is_uuid
from utils.formatting import format_date
from utils.logger import get_logger

logger = get_logger(__name__)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")

_JOINED_COLUMNS = """
    invoices.id, invoices.customer_id, customers.name, customers.email,
    customers.image_url, invoices.date, invoices.amount, invoices.status
"""


def parse_amount_query(query: str) -> Optional[int]:
    """
    Return `query` as an integer if it is one, else None.
    Used to decide whether the exact-amount clause joins the search.
    A numeric prefix such as "12abc" is not read as 12; only a whole
    integer adds the amount clause.
    """
    text = query.strip()
    if not _INTEGER_RE.match(text):
        return None
    return int(text)


def build_search_filter(query: str) -> tuple[str, list]:
    """
    Build the WHERE clause shared by the invoice search and its page count.

    Matches customer name, customer e-mail or status containing `query`
    (case-insensitive), or an amount exactly equal to `query` when it
    parses as an integer.

    Returns:
        (sql_fragment, params)
    """
    pattern = f"%{escape_like(query)}%"
    clauses = [
        "customers.name ILIKE %s",
        "customers.email ILIKE %s",
        "invoices.status ILIKE %s",
    ]
    params: list = [pattern, pattern, pattern]

    amount = parse_amount_query(query)
    if amount is not None:
        clauses.append("invoices.amount = %s")
        params.append(amount)

    return "(" + " OR ".join(clauses) + ")", params


class InvoiceRepository(BaseRepository):
    """Repository for CRUD operations on the invoices table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, customer_id: str, amount: int, status: str, invoice_date: date) -> Invoice:
        """
        Insert a new invoice. The id is generated by the store.

        Args:
            customer_id: Owning customer UUID.
            amount: Amount in cents.
            status: 'pending' or 'paid'.
            invoice_date: Invoice date.

        Returns:
            The persisted Invoice.
        """
        invoice = Invoice(customer_id=customer_id, amount=amount, status=status, date=invoice_date)
        sql = """
            INSERT INTO invoices (customer_id, amount, status, date)
            VALUES (%s, %s, %s, %s)
            RETURNING id;
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (invoice.customer_id, invoice.amount, invoice.status, invoice.date))
                invoice.id = str(cur.fetchone()[0])
            conn.commit()
            logger.info(f"Added invoice {invoice.id} for customer {customer_id}")
            return invoice
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add invoice: {e}")
            raise DataAccessError("Failed to create invoice.") from e
        finally:
            self.db.release_connection(conn)

    def insert_if_empty(self, cur, invoices: list[Invoice]) -> tuple[int, int]:
        """
        Insert `invoices` only when the table holds no rows at all.
        Runs on the caller's cursor, the caller commits.

        Returns:
            (inserted, existing): rows inserted and rows found beforehand.
        """
        cur.execute("SELECT COUNT(*) FROM invoices;")
        existing = cur.fetchone()[0]
        if existing > 0:
            return 0, existing

        sql = """
            INSERT INTO invoices (customer_id, amount, status, date)
            VALUES (%s, %s, %s, %s);
        """
        inserted = 0
        for inv in invoices:
            cur.execute(sql, (inv.customer_id, inv.amount, inv.status, inv.date))
            inserted += cur.rowcount
        return inserted, 0

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, invoice_id: str) -> Invoice:
        """
        Fetch a single invoice.

        Raises:
            NotFoundError: If no invoice has this id.
        """
        if not is_uuid(invoice_id):
            raise NotFoundError(f"Invoice {invoice_id} not found.")
        sql = "SELECT id, customer_id, amount, status, date FROM invoices WHERE id = %s;"
        invoice = self._fetch_one(sql, (invoice_id,), self._row_to_invoice, "Failed to fetch invoice.")
        if invoice is None:
            raise NotFoundError(f"Invoice {invoice_id} not found.")
        return invoice

    def get_latest(self, limit: int) -> list[InvoiceTableRow]:
        """Most recent invoices by date, joined with their customer."""
        sql = f"""
            SELECT {_JOINED_COLUMNS}
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            ORDER BY invoices.date DESC, invoices.id DESC
            LIMIT %s;
        """
        return self._fetch_all(
            sql, (limit,), self._row_to_table_row, "Failed to fetch the latest invoices."
        )

    def search(self, query: str, limit: int, offset: int) -> list[InvoiceTableRow]:
        """
        One page of invoices matching `query`, newest first.

        Args:
            query: Free-text search.
            limit: Page size.
            offset: Rows to skip.
        """
        where, params = build_search_filter(query)
        sql = f"""
            SELECT {_JOINED_COLUMNS}
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {where}
            ORDER BY invoices.date DESC, invoices.id DESC
            LIMIT %s OFFSET %s;
        """
        return self._fetch_all(
            sql, params + [limit, offset], self._row_to_table_row, "Failed to fetch invoices."
        )

    def count_matching(self, query: str) -> int:
        """Number of invoices matching `query`."""
        where, params = build_search_filter(query)
        sql = f"""
            SELECT COUNT(*)
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {where};
        """
        return self._fetch_scalar(sql, params, "Failed to fetch total number of invoices.")

    def get_by_customer_ids(self, customer_ids: list[str]) -> list[Invoice]:
        """All invoices owned by any of `customer_ids`, in a single query."""
        if not customer_ids:
            return []
        sql = """
            SELECT id, customer_id, amount, status, date
            FROM invoices
            WHERE customer_id = ANY(%s::uuid[]);
        """
        return self._fetch_all(
            sql, (list(customer_ids),), self._row_to_invoice, "Failed to fetch customer invoices."
        )

    def count(self) -> int:
        return self._fetch_scalar("SELECT COUNT(*) FROM invoices;", (), "Failed to count invoices.")

    def sum_by_status(self, status: str) -> int:
        """Sum of amounts (cents) for one status; 0 when there are none."""
        validate_status(status)
        sql = "SELECT COALESCE(SUM(amount), 0) FROM invoices WHERE status = %s;"
        total = self._fetch_scalar(sql, (status,), f"Failed to sum {status} invoices.")
        return int(total or 0)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
        """
        Update customer, amount (cents) and status of an invoice.

        Raises:
            NotFoundError: If no invoice has this id.
        """
        validate_amount(amount)
        validate_status(status)
        if not is_uuid(invoice_id):
            raise NotFoundError(f"Invoice {invoice_id} not found.")
        sql = """
            UPDATE invoices
            SET customer_id = %s, amount = %s, status = %s
            WHERE id = %s;
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (customer_id, amount, status, invoice_id))
                updated = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update invoice {invoice_id}: {e}")
            raise DataAccessError("Failed to update invoice.") from e
        finally:
            self.db.release_connection(conn)
        if not updated:
            raise NotFoundError(f"Invoice {invoice_id} not found.")
        logger.info(f"Updated invoice {invoice_id}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, invoice_id: str) -> bool:
        """
        Delete an invoice by id.

        Returns:
            True if a row was deleted, False otherwise.
        """
        if not is_uuid(invoice_id):
            return False
        sql = "DELETE FROM invoices WHERE id = %s;"
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (invoice_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted invoice {invoice_id}")
            return deleted
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete invoice {invoice_id}: {e}")
            raise DataAccessError("Failed to delete invoice.") from e
        finally:
            self.db.release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_invoice(row: tuple) -> Invoice:
        """Convert a database row tuple to an Invoice domain object."""
        return Invoice(
            id=str(row[0]),
            customer_id=str(row[1]),
            amount=row[2],
            status=row[3],
            date=row[4],
        )

    @staticmethod
    def _row_to_table_row(row: tuple) -> InvoiceTableRow:
        """Convert a joined invoice/customer row to a table row."""
        return InvoiceTableRow(
            id=str(row[0]),
            customer_id=str(row[1]),
            name=row[2],
            email=row[3],
            image_url=row[4],
            date=format_date(row[5]),
            amount=validate_amount(row[6]),
            status=validate_status(row[7]),
        )
