"""
services/dashboard_service.py
-----------------------------
Read operations behind the dashboard pages.
Orchestrates the repositories and turns raw rows into view records.

This is the whole contract consumed by the presentation layer:
    fetch_revenue, fetch_latest_invoices, fetch_card_data,
    fetch_filtered_invoices, fetch_invoices_pages, fetch_invoice_by_id,
    fetch_customers, fetch_filtered_customers
(seeding lives in services/seed_service.py).
"""

import math
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, TimeoutError, wait
from typing import Optional

from config import ITEMS_PER_PAGE, LATEST_INVOICES_LIMIT
from db.connection import Database
from models.invoice import STATUS_PAID, STATUS_PENDING
from models.revenue import Revenue
from models.views import (
    CardData,
    CustomerField,
    CustomerTableRow,
    InvoiceForm,
    InvoiceTableRow,
    LatestInvoice,
)
from repositories.customer_repo import CustomerRepository
from repositories.invoice_repo import InvoiceRepository
from repositories.revenue_repo import RevenueRepository
from utils.formatting import format_currency


def page_offset(page: int, page_size: int = ITEMS_PER_PAGE) -> int:
    """Row offset of a 1-based page. Pages below 1 are treated as page 1."""
    return (max(page, 1) - 1) * page_size


def total_pages(count: int, page_size: int = ITEMS_PER_PAGE) -> int:
    """Ceiling division of a row count into pages."""
    return math.ceil(count / page_size)


class DashboardService:
    """
    Query layer over customers, invoices and revenue.

    The repositories share one injected `Database`. Explicit repository
    arguments replace the defaults; without a `Database` all three are required.
    """

    def __init__(
        self,
        db: Optional[Database] = None,
        revenue_repo: Optional[RevenueRepository] = None,
        customer_repo: Optional[CustomerRepository] = None,
        invoice_repo: Optional[InvoiceRepository] = None,
    ):
        if db is None and None in (revenue_repo, customer_repo, invoice_repo):
            raise ValueError("DashboardService needs a Database or all three repositories.")
        self.revenue_repo = revenue_repo or RevenueRepository(db)
        self.customer_repo = customer_repo or CustomerRepository(db)
        self.invoice_repo = invoice_repo or InvoiceRepository(db)

    # ── Overview page ─────────────────────────────────────

    def fetch_revenue(self) -> list[Revenue]:
        """All revenue rows, unordered."""
        return self.revenue_repo.get_all()

    def fetch_latest_invoices(self) -> list[LatestInvoice]:
        """The five most recent invoices with customer details and formatted amount."""
        rows = self.invoice_repo.get_latest(LATEST_INVOICES_LIMIT)
        return [
            LatestInvoice(
                id=r.id,
                name=r.name,
                email=r.email,
                image_url=r.image_url,
                amount=format_currency(r.amount),
            )
            for r in rows
        ]

    def fetch_card_data(self, timeout: Optional[float] = None) -> CardData:
        """
        Invoice count, customer count and paid/pending totals.

        The four queries are submitted together and joined afterwards;
        each one runs on its own pooled connection.

        Args:
            timeout: Seconds to wait for all four results together.
                None waits indefinitely.

        Raises:
            TimeoutError: If the results are not all ready within `timeout`.
        """
        executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="card-data")
        try:
            invoice_count = executor.submit(self.invoice_repo.count)
            customer_count = executor.submit(self.customer_repo.count)
            paid_total = executor.submit(self.invoice_repo.sum_by_status, STATUS_PAID)
            pending_total = executor.submit(self.invoice_repo.sum_by_status, STATUS_PENDING)

            _, not_done = wait(
                [invoice_count, customer_count, paid_total, pending_total], timeout
            )
            if not_done:
                raise TimeoutError(f"Card data not ready after {timeout} seconds.")

            return CardData(
                number_of_invoices=invoice_count.result(),
                number_of_customers=customer_count.result(),
                total_paid_invoices=format_currency(paid_total.result()),
                total_pending_invoices=format_currency(pending_total.result()),
            )
        finally:
            # Slow queries finish on their own threads; the caller does not wait for them
            executor.shutdown(wait=False, cancel_futures=True)

    # ── Invoices page ─────────────────────────────────────

    def fetch_filtered_invoices(self, query: str, page: int) -> list[InvoiceTableRow]:
        """
        One page (at most ITEMS_PER_PAGE rows) of invoices matching `query`,
        newest first. Amounts stay in cents; dates are YYYY-MM-DD.
        """
        return self.invoice_repo.search(query, ITEMS_PER_PAGE, page_offset(page))

    def fetch_invoices_pages(self, query: str) -> int:
        """Number of pages needed to list every invoice matching `query`."""
        return total_pages(self.invoice_repo.count_matching(query))

    def fetch_invoice_by_id(self, invoice_id: str) -> InvoiceForm:
        """
        Load an invoice for editing.

        The amount is converted from cents to major units here and only here;
        list and aggregate views keep cents.

        Raises:
            NotFoundError: If no invoice has this id.
        """
        invoice = self.invoice_repo.get_by_id(invoice_id)
        return InvoiceForm(
            id=invoice.id,
            customer_id=invoice.customer_id,
            amount=invoice.amount / 100,
            status=invoice.status,
        )

    # ── Customers page ────────────────────────────────────

    def fetch_customers(self) -> list[CustomerField]:
        """Id and name of every customer, by name."""
        return self.customer_repo.get_all_fields()

    def fetch_filtered_customers(self, query: str) -> list[CustomerTableRow]:
        """
        Customers matching `query` with their invoice count and
        pending/paid totals.

        Invoices for all matched customers are fetched in one batch and
        grouped here by customer id.
        """
        customers = self.customer_repo.search(query)
        invoices = self.invoice_repo.get_by_customer_ids([c.id for c in customers])

        grouped = defaultdict(list)
        for inv in invoices:
            grouped[inv.customer_id].append(inv)

        rows = []
        for c in customers:
            owned = grouped.get(c.id, [])
            pending = sum(i.amount for i in owned if i.is_pending())
            paid = sum(i.amount for i in owned if i.is_paid())
            rows.append(
                CustomerTableRow(
                    id=c.id,
                    name=c.name,
                    email=c.email,
                    image_url=c.image_url,
                    total_invoices=len(owned),
                    total_pending=format_currency(pending),
                    total_paid=format_currency(paid),
                    total_pending_cents=pending,
                    total_paid_cents=paid,
                )
            )
        return rows
