"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from models.user import User
from repositories.base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for the users table."""

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by e-mail.

        Returns:
            User (with hashed password) or None.
        """
        sql = "SELECT id, name, email, password FROM users WHERE email = %s;"
        return self._fetch_one(sql, (email,), self._row_to_user, "Failed to fetch user.")

    def upsert(self, cur, users: list[User]) -> int:
        """
        Insert users keyed by id; existing ids are left untouched.
        Passwords must already be hashed. Runs on the caller's cursor.

        Returns:
            Number of rows actually inserted.
        """
        sql = """
            INSERT INTO users (id, name, email, password)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (id) DO NOTHING;
        """
        inserted = 0
        for user in users:
            cur.execute(sql, (user.id, user.name, user.email, user.password))
            inserted += cur.rowcount
        return inserted

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        return User(id=str(row[0]), name=row[1], email=row[2], password=row[3])
