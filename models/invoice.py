"""
models/invoice.py
-----------------
Domain model for invoices.
Amounts are always integer cents at this level.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

STATUS_PENDING = "pending"
STATUS_PAID = "paid"
INVOICE_STATUSES = (STATUS_PENDING, STATUS_PAID)


def validate_status(status: str) -> str:
    if status not in INVOICE_STATUSES:
        raise ValueError(f"Invalid invoice status: {status!r}")
    return status


def validate_amount(amount) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Invoice amount must be integer cents, got {amount!r}")
    if amount < 0:
        raise ValueError(f"Invoice amount must not be negative, got {amount}")
    return amount


@dataclass
class Invoice:
    """
    Represents a single invoice.

    Attributes:
        customer_id: UUID of the owning customer.
        amount: Amount in cents.
        status: Either 'pending' or 'paid'.
        date: Invoice date.
        id: UUID generated by the store (None for new records).
    """
    customer_id: str
    amount: int
    status: str  # 'pending' | 'paid'
    date: date
    id: Optional[str] = None

    def __post_init__(self) -> None:
        validate_amount(self.amount)
        validate_status(self.status)

    def is_paid(self) -> bool:
        return self.status == STATUS_PAID

    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING
