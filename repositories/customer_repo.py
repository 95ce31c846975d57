"""
repositories/customer_repo.py
-----------------------------
Data access layer for customers.
All SQL queries related to the `customers` table live here.
"""

from typing import Optional

import psycopg2

from config import CUSTOMER_DELETE_POLICY
from db.errors import DataAccessError, NotFoundError
from models.customer import Customer
from models.views import CustomerField
from repositories.base import BaseRepository, escape_like, is_uuid
from utils.logger import get_logger

logger = get_logger(__name__)

POLICY_RESTRICT = "restrict"
POLICY_CASCADE = "cascade"
DELETE_POLICIES = (POLICY_RESTRICT, POLICY_CASCADE)

_COLUMNS = "id, name, email, image_url, created_at"


class CustomerRepository(BaseRepository):
    """Repository for CRUD operations on the customers table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, customer: Customer) -> Customer:
        """
        Insert a new customer. The id is generated by the store.

        Returns:
            The same Customer with `id` and `created_at` populated.
        """
        sql = """
            INSERT INTO customers (name, email, image_url)
            VALUES (%s, %s, %s)
            RETURNING id, created_at;
        """
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (customer.name, customer.email, customer.image_url))
                row = cur.fetchone()
                customer.id = str(row[0])
                customer.created_at = row[1]
            conn.commit()
            logger.info(f"Added customer {customer.id} ({customer.name})")
            return customer
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add customer: {e}")
            raise DataAccessError("Failed to create customer.") from e
        finally:
            self.db.release_connection(conn)

    def upsert(self, cur, customers: list[Customer]) -> int:
        """
        Insert customers keyed by id; existing ids are left untouched.
        Runs on the caller's cursor, the caller commits.

        Returns:
            Number of rows actually inserted.
        """
        sql = """
            INSERT INTO customers (id, name, email, image_url)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (id) DO NOTHING;
        """
        inserted = 0
        for c in customers:
            cur.execute(sql, (c.id, c.name, c.email, c.image_url))
            inserted += cur.rowcount
        return inserted

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, customer_id: str) -> Customer:
        """
        Fetch a single customer.

        Raises:
            NotFoundError: If no customer has this id.
        """
        if not is_uuid(customer_id):
            raise NotFoundError(f"Customer {customer_id} not found.")
        sql = f"SELECT {_COLUMNS} FROM customers WHERE id = %s;"
        customer = self._fetch_one(
            sql, (customer_id,), self._row_to_customer, "Failed to fetch customer."
        )
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found.")
        return customer

    def get_all_fields(self) -> list[CustomerField]:
        """Return id and name of every customer, ordered by name."""
        sql = "SELECT id, name FROM customers ORDER BY name ASC;"
        return self._fetch_all(
            sql, (),
            lambda r: CustomerField(id=str(r[0]), name=r[1]),
            "Failed to fetch all customers.",
        )

    def search(self, query: str) -> list[Customer]:
        """
        Customers whose name or e-mail contains `query` (case-insensitive),
        ordered by name.
        """
        pattern = f"%{escape_like(query)}%"
        sql = f"""
            SELECT {_COLUMNS} FROM customers
            WHERE name ILIKE %s OR email ILIKE %s
            ORDER BY name ASC;
        """
        return self._fetch_all(
            sql, (pattern, pattern), self._row_to_customer, "Failed to fetch customer table."
        )

    def count(self) -> int:
        return self._fetch_scalar(
            "SELECT COUNT(*) FROM customers;", (), "Failed to count customers."
        )

    # ── DELETE ────────────────────────────────────────────

    def delete(self, customer_id: str, policy: Optional[str] = None) -> bool:
        """
        Delete a customer according to the invoice policy.

        Args:
            customer_id: Customer UUID.
            policy: 'restrict' refuses when invoices exist,
                    'cascade' deletes the invoices in the same transaction.
                    Defaults to CUSTOMER_DELETE_POLICY from config.

        Returns:
            True if the customer row was deleted, False if it did not exist.

        Raises:
            ValueError: On an unknown policy.
            DataAccessError: When restricted by existing invoices, or on store failure.
        """
        policy = policy or CUSTOMER_DELETE_POLICY
        if policy not in DELETE_POLICIES:
            raise ValueError(f"Unknown customer delete policy: {policy!r}")
        if not is_uuid(customer_id):
            return False

        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM invoices WHERE customer_id = %s;", (customer_id,))
                owned = cur.fetchone()[0]
                if owned and policy == POLICY_RESTRICT:
                    conn.rollback()
                    logger.warning(
                        f"Refused to delete customer {customer_id}: {owned} invoice(s) reference it"
                    )
                    raise DataAccessError(
                        f"Customer {customer_id} still has {owned} invoice(s)."
                    )
                if owned:
                    cur.execute("DELETE FROM invoices WHERE customer_id = %s;", (customer_id,))
                cur.execute("DELETE FROM customers WHERE id = %s;", (customer_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted customer {customer_id} and {owned} invoice(s)")
            return deleted
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete customer {customer_id}: {e}")
            raise DataAccessError("Failed to delete customer.") from e
        finally:
            self.db.release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_customer(row: tuple) -> Customer:
        """Convert a database row tuple to a Customer domain object."""
        return Customer(
            id=str(row[0]),
            name=row[1],
            email=row[2],
            image_url=row[3],
            created_at=row[4],
        )
