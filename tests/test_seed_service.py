from datetime import date

import psycopg2
import pytest

from db.errors import DataAccessError
from models.customer import Customer
from models.invoice import Invoice
from models.revenue import Revenue
from models.user import User
from services.seed_service import SeedService
from utils.passwords import verify_password

USER_ID = "410544b2-4001-4271-9855-fec4b6a6442a"
CUSTOMER_ID = "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"


def _seeder(db):
    return SeedService(
        db,
        users=[User(id=USER_ID, name="User", email="user@nextmail.com", password="123456")],
        customers=[Customer(id=CUSTOMER_ID, name="Evil Rabbit", email="evil@rabbit.com",
                            image_url="/customers/evil-rabbit.png")],
        revenue=[Revenue(month="Jan", revenue=2000), Revenue(month="Feb", revenue=1800)],
        invoices=[
            Invoice(customer_id=CUSTOMER_ID, amount=1000, status="paid", date=date(2023, 6, 1)),
            Invoice(customer_id=CUSTOMER_ID, amount=500, status="pending", date=date(2023, 6, 2)),
        ],
    )


def test_first_run_inserts_everything_in_order(fake_db):
    # users, customers, revenue x2, invoice count, invoice inserts x2
    fake_db.conn.results = [1, 1, 1, 1, [(0,)], 1, 1]
    report = _seeder(fake_db).seed_database()

    assert (report.users, report.customers, report.revenue, report.invoices) == (1, 1, 2, 2)
    assert report.invoices_skipped is None

    tables = [s.split()[2] for s in fake_db.conn.statements if s.startswith("INSERT")]
    assert tables == ["users", "customers", "revenue", "revenue", "invoices", "invoices"]
    assert fake_db.conn.commits == 1


def test_upserts_are_keyed(fake_db):
    fake_db.conn.results = [1, 1, 1, 1, [(0,)], 1, 1]
    _seeder(fake_db).seed_database()
    statements = fake_db.conn.statements
    assert "ON CONFLICT (id) DO NOTHING" in statements[0]
    assert "ON CONFLICT (id) DO NOTHING" in statements[1]
    assert "ON CONFLICT (month) DO NOTHING" in statements[2]


def test_passwords_are_hashed_before_storing(fake_db):
    fake_db.conn.results = [1, 1, 1, 1, [(0,)], 1, 1]
    _seeder(fake_db).seed_database()
    stored = fake_db.conn.executed[0][1][3]
    assert stored != "123456"
    assert verify_password("123456", stored)


def test_second_run_inserts_nothing(fake_db):
    # conflicts everywhere, and two invoices already present
    fake_db.conn.results = [0, 0, 0, 0, [(2,)]]
    report = _seeder(fake_db).seed_database()

    assert (report.users, report.customers, report.revenue, report.invoices) == (0, 0, 0, 0)
    assert report.invoices_skipped == 2
    assert not any(
        s.startswith("INSERT INTO invoices") for s in fake_db.conn.statements
    )


def test_failure_aborts_remaining_stages_and_rolls_back(fake_db):
    fake_db.conn.results = [1]
    fake_db.conn.fail_when("INSERT INTO customers", psycopg2.IntegrityError("duplicate"))

    with pytest.raises(DataAccessError):
        _seeder(fake_db).seed_database()

    assert fake_db.conn.rollbacks == 1
    assert fake_db.conn.commits == 0
    assert not any("revenue" in s or "invoices" in s for s in fake_db.conn.statements)
    assert fake_db.released == 1


def test_per_stage_commit_keeps_earlier_stages(fake_db):
    fake_db.conn.results = [1, 1]
    fake_db.conn.fail_when("INSERT INTO revenue", psycopg2.OperationalError("connection lost"))

    with pytest.raises(DataAccessError):
        _seeder(fake_db).seed_database(single_transaction=False)

    assert fake_db.conn.commits == 2
    assert fake_db.conn.rollbacks == 1
