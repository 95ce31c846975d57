"""
repositories/base.py
--------------------
Shared plumbing for the repositories: borrow a connection, run one
read statement, map the rows, translate driver errors.
"""

import uuid
from typing import Any, Callable, Optional, Sequence

import psycopg2

from db.connection import Database
from db.errors import DataAccessError
from utils.logger import get_logger

logger = get_logger(__name__)


def is_uuid(value) -> bool:
    """True if `value` is a well-formed UUID string."""
    try:
        uuid.UUID(str(value))
        return True
    except ValueError:
        return False


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text is matched literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BaseRepository:
    """Base class holding the injected `Database` handle."""

    def __init__(self, db: Database):
        self.db = db

    def _fetch_all(
        self,
        sql: str,
        params: Sequence[Any],
        mapper: Callable[[tuple], Any],
        error_message: str,
    ) -> list:
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return [mapper(r) for r in cur.fetchall()]
        except (psycopg2.Error, ValueError) as e:
            logger.error(f"{error_message} {e}")
            raise DataAccessError(error_message) from e
        finally:
            self.db.release_connection(conn)

    def _fetch_one(
        self,
        sql: str,
        params: Sequence[Any],
        mapper: Callable[[tuple], Any],
        error_message: str,
    ) -> Optional[Any]:
        rows = self._fetch_all(sql, params, mapper, error_message)
        return rows[0] if rows else None

    def _fetch_scalar(self, sql: str, params: Sequence[Any], error_message: str) -> Any:
        return self._fetch_one(sql, params, lambda r: r[0], error_message)
