"""
repositories/revenue_repo.py
----------------------------
Data access layer for the monthly revenue table.
"""

from models.revenue import Revenue
from repositories.base import BaseRepository


class RevenueRepository(BaseRepository):
    """Repository for the revenue table."""

    def get_all(self) -> list[Revenue]:
        """Return every revenue row, in store order."""
        sql = "SELECT month, revenue FROM revenue;"
        return self._fetch_all(sql, (), self._row_to_revenue, "Failed to fetch revenue data.")

    def upsert(self, cur, rows: list[Revenue]) -> int:
        """
        Insert revenue rows keyed by month; existing months are left untouched.
        Runs on the caller's cursor, the caller commits.

        Returns:
            Number of rows actually inserted.
        """
        sql = """
            INSERT INTO revenue (month, revenue)
            VALUES (%s, %s)
            ON CONFLICT (month) DO NOTHING;
        """
        inserted = 0
        for rev in rows:
            cur.execute(sql, (rev.month, rev.revenue))
            inserted += cur.rowcount
        return inserted

    @staticmethod
    def _row_to_revenue(row: tuple) -> Revenue:
        return Revenue(month=row[0], revenue=row[1])
