"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so that independent queries
(e.g. the dashboard card aggregates) can run on separate threads.

The pool is owned by a `Database` instance created by the caller
(usually `main.py`) and passed to every repository. It is opened on
first use and reused until `close_pool()` is called.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool

from config import DB_POOL_MAX, DB_POOL_MIN
from db.errors import DataAccessError
from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """Connection pool handle shared by all repositories."""

    def __init__(self, dsn: str, min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def init_pool(self) -> None:
        """
        Initialize the database connection pool.
        Safe to call multiple times; only the first call opens connections.

        Raises:
            DataAccessError: If the database is unreachable.
        """
        with self._lock:
            if self._pool is not None:
                return
            try:
                self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
                logger.info("Database connection pool initialized successfully.")
            except psycopg2.Error as e:
                logger.error(f"Failed to initialize database pool: {e}")
                raise DataAccessError("Failed to connect to the database.") from e

    def get_connection(self):
        """
        Get a connection from the pool, opening the pool if needed.

        Returns:
            A psycopg2 connection object.

        Raises:
            DataAccessError: If no connection can be obtained.
        """
        if self._pool is None:
            self.init_pool()
        try:
            return self._pool.getconn()
        except psycopg2.Error as e:
            logger.error(f"Failed to get a connection from the pool: {e}")
            raise DataAccessError("Failed to connect to the database.") from e

    def release_connection(self, conn) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
        """
        if self._pool is not None:
            self._pool.putconn(conn)

    @contextmanager
    def connection(self) -> Iterator:
        """Borrow a connection for the duration of a `with` block."""
        conn = self.get_connection()
        try:
            yield conn
        finally:
            self.release_connection(conn)

    def close_pool(self) -> None:
        """Close all connections in the pool."""
        with self._lock:
            if self._pool is not None:
                self._pool.closeall()
                self._pool = None
                logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        self.init_pool()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close_pool()
