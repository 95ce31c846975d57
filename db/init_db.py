"""
db/init_db.py
-------------
Creates (or drops) the dashboard schema.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2

from db.connection import Database
from db.errors import DataAccessError
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
CREATE EXTENSION IF NOT EXISTS "uuid-ossp";

-- Users table: login accounts, passwords are stored as bcrypt hashes
CREATE TABLE IF NOT EXISTS users (
    id              UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
    name            VARCHAR(255) NOT NULL,
    email           TEXT NOT NULL,
    password        TEXT NOT NULL,
    CONSTRAINT users_email_key UNIQUE (email)
);

-- Customers table: owners of invoices
CREATE TABLE IF NOT EXISTS customers (
    id              UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
    name            VARCHAR(255) NOT NULL,
    email           VARCHAR(255) NOT NULL,
    image_url       VARCHAR(255) NOT NULL,
    created_at      TIMESTAMP NOT NULL DEFAULT NOW()
);

-- Invoices table: amounts are non-negative integer cents
CREATE TABLE IF NOT EXISTS invoices (
    id              UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
    customer_id     UUID NOT NULL REFERENCES customers(id),
    amount          INTEGER NOT NULL CHECK (amount >= 0),
    status          VARCHAR(255) NOT NULL CHECK (status IN ('pending', 'paid')),
    date            DATE NOT NULL
);

-- Revenue table: one row per month code ('Jan', 'Feb', ...)
CREATE TABLE IF NOT EXISTS revenue (
    month           VARCHAR(4) NOT NULL,
    revenue         INTEGER NOT NULL,
    CONSTRAINT revenue_month_key UNIQUE (month)
);

-- Indexes for the invoice listings and per-customer grouping
CREATE INDEX IF NOT EXISTS idx_invoices_customer ON invoices(customer_id);
CREATE INDEX IF NOT EXISTS idx_invoices_date ON invoices(date DESC);
"""

DROP_SQL = """
DROP TABLE IF EXISTS invoices;
DROP TABLE IF EXISTS customers;
DROP TABLE IF EXISTS revenue;
DROP TABLE IF EXISTS users;
"""


def _run_script(db: Database, sql: str, verb: str, action: str) -> None:
    conn = db.get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
        logger.info(f"Database schema {action} successfully.")
    except psycopg2.Error as e:
        conn.rollback()
        logger.error(f"Failed to {verb} schema: {e}")
        raise DataAccessError(f"Failed to {verb} the database schema.") from e
    finally:
        db.release_connection(conn)


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run_script(db, SCHEMA_SQL, "create", "created")


def drop_tables(db: Database) -> None:
    """Drop every dashboard table. Invoices go first because of the foreign key."""
    _run_script(db, DROP_SQL, "drop", "dropped")


if __name__ == "__main__":
    from config import require_database_url

    with Database(require_database_url()) as database:
        create_tables(database)
    print("✅ Database schema created successfully.")
