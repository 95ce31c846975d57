"""
services/seed_service.py
------------------------
Populates a database with the placeholder dashboard data.

Stage order is fixed: users, customers, revenue, invoices.
Users, customers and revenue are upserted by key, so re-running is a
no-op for them. Invoices are only inserted into an empty table.
"""

from typing import Optional

import psycopg2

from db import placeholder_data
from db.connection import Database
from db.errors import DataAccessError
from models.customer import Customer
from models.invoice import Invoice
from models.revenue import Revenue
from models.user import User
from models.views import SeedReport
from repositories.customer_repo import CustomerRepository
from repositories.invoice_repo import InvoiceRepository
from repositories.revenue_repo import RevenueRepository
from repositories.user_repo import UserRepository
from utils.logger import get_logger
from utils.passwords import get_password_hash

logger = get_logger(__name__)


class SeedService:
    """
    Seeds the four dashboard tables.

    By default all stages share one transaction: a failure in any stage
    rolls back the whole run. With `single_transaction=False` every stage
    commits on its own and a failure leaves earlier stages in place.
    """

    def __init__(
        self,
        db: Database,
        users: Optional[list[User]] = None,
        customers: Optional[list[Customer]] = None,
        revenue: Optional[list[Revenue]] = None,
        invoices: Optional[list[Invoice]] = None,
    ):
        self.db = db
        self.users = placeholder_data.USERS if users is None else users
        self.customers = placeholder_data.CUSTOMERS if customers is None else customers
        self.revenue = placeholder_data.REVENUE if revenue is None else revenue
        self.invoices = placeholder_data.INVOICES if invoices is None else invoices

        self.user_repo = UserRepository(db)
        self.customer_repo = CustomerRepository(db)
        self.revenue_repo = RevenueRepository(db)
        self.invoice_repo = InvoiceRepository(db)

    # ── Stages ────────────────────────────────────────────

    def seed_users(self, cur, report: SeedReport) -> None:
        logger.info("🌱 Seeding users...")
        hashed = [
            User(id=u.id, name=u.name, email=u.email, password=get_password_hash(u.password))
            for u in self.users
        ]
        report.users = self.user_repo.upsert(cur, hashed)
        logger.info(f"✅ Seeded {report.users} users")

    def seed_customers(self, cur, report: SeedReport) -> None:
        logger.info("🌱 Seeding customers...")
        report.customers = self.customer_repo.upsert(cur, self.customers)
        logger.info(f"✅ Seeded {report.customers} customers")

    def seed_revenue(self, cur, report: SeedReport) -> None:
        logger.info("🌱 Seeding revenue...")
        report.revenue = self.revenue_repo.upsert(cur, self.revenue)
        logger.info(f"✅ Seeded {report.revenue} revenue records")

    def seed_invoices(self, cur, report: SeedReport) -> None:
        logger.info("🌱 Seeding invoices...")
        inserted, existing = self.invoice_repo.insert_if_empty(cur, self.invoices)
        report.invoices = inserted
        if existing:
            report.invoices_skipped = existing
            logger.info(f"ℹ️  Found {existing} existing invoices, skipping seeding")
        else:
            logger.info(f"✅ Seeded {inserted} invoices")

    # ── Orchestration ─────────────────────────────────────

    def seed_database(self, single_transaction: bool = True) -> SeedReport:
        """
        Run every stage in order, stopping at the first failure.

        Returns:
            SeedReport with the rows inserted per table.

        Raises:
            DataAccessError: If any stage fails.
        """
        logger.info("🚀 Starting database seeding...")
        report = SeedReport()
        stages = [self.seed_users, self.seed_customers, self.seed_revenue, self.seed_invoices]

        if single_transaction:
            self._run_in_transaction(stages, report)
        else:
            for stage in stages:
                self._run_in_transaction([stage], report)

        logger.info(f"🎉 Database seeding completed successfully: {report}")
        return report

    def _run_in_transaction(self, stages: list, report: SeedReport) -> None:
        conn = self.db.get_connection()
        try:
            with conn.cursor() as cur:
                for stage in stages:
                    stage(cur, report)
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"❌ Error during seeding: {e}")
            raise DataAccessError("Failed to seed database.") from e
        except Exception as e:
            conn.rollback()
            logger.error(f"❌ Error during seeding: {e}")
            raise
        finally:
            self.db.release_connection(conn)
