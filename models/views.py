"""
models/views.py
---------------
Read models returned by the dashboard query layer.
Each one is the shape a single page or widget consumes.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class LatestInvoice:
    """A row of the 'latest invoices' widget. `amount` is already formatted."""
    id: str
    name: str
    email: str
    image_url: str
    amount: str


@dataclass
class InvoiceTableRow:
    """A row of the paginated invoices table. `amount` stays in cents."""
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: str  # YYYY-MM-DD
    amount: int
    status: str


@dataclass
class InvoiceForm:
    """Invoice as loaded into the edit form. `amount` is in major units."""
    id: str
    customer_id: str
    amount: float
    status: str


@dataclass
class CustomerField:
    """Customer option for select lists."""
    id: str
    name: str


@dataclass
class CustomerTableRow:
    """
    A row of the customers table with per-customer invoice totals.
    The totals are formatted currency strings; the raw cents are kept
    alongside for callers that need to compute with them.
    """
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str
    total_pending_cents: int = 0
    total_paid_cents: int = 0


@dataclass
class CardData:
    """Headline numbers for the dashboard cards."""
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str


@dataclass
class SeedReport:
    """Rows inserted by one seeding run, per table."""
    users: int = 0
    customers: int = 0
    revenue: int = 0
    invoices: int = 0
    invoices_skipped: Optional[int] = None

    def __str__(self) -> str:
        line = (
            f"users={self.users} customers={self.customers} "
            f"revenue={self.revenue} invoices={self.invoices}"
        )
        if self.invoices_skipped is not None:
            line += f" (invoice seeding skipped, {self.invoices_skipped} already present)"
        return line
