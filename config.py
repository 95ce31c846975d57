"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DATABASE_URL: str = os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL", "")

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Data policy ───────────────────────────────────────────
# 'restrict' refuses to delete a customer that still owns invoices,
# 'cascade' removes the invoices together with the customer.
CUSTOMER_DELETE_POLICY: str = os.getenv("CUSTOMER_DELETE_POLICY", "restrict").lower()

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Dashboard ─────────────────────────────────────────────
ITEMS_PER_PAGE: int = 6
LATEST_INVOICES_LIMIT: int = 5
CURRENCY_SYMBOL: str = "$"


def require_database_url() -> str:
    """
    Return the configured connection string.

    Raises:
        RuntimeError: If neither POSTGRES_URL nor DATABASE_URL is set.
    """
    if not DATABASE_URL:
        raise RuntimeError(
            "POSTGRES_URL (or DATABASE_URL) is not set. Add it to your .env file."
        )
    return DATABASE_URL
