"""
models/user.py
--------------
Domain model for dashboard login accounts.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Represents a login account.

    Attributes:
        name: Display name.
        email: Unique login e-mail.
        password: bcrypt hash (never the plaintext once stored).
        id: UUID generated by the store (None for new records).
    """
    name: str
    email: str
    password: str
    id: Optional[str] = None

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, email={self.email!r})"
