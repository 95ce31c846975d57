"""
models/customer.py
------------------
Domain model for customers (invoice owners).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Customer:
    """
    Represents a customer.

    Attributes:
        name: Customer display name.
        email: Contact e-mail.
        image_url: Path or URL of the avatar image.
        id: UUID generated by the store (None for new records).
        created_at: Timestamp when the record was created.
    """
    name: str
    email: str
    image_url: str
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
