from datetime import date

import psycopg2
import pytest

from db.errors import DataAccessError, NotFoundError
from db.init_db import SCHEMA_SQL
from models.invoice import Invoice
from repositories.invoice_repo import InvoiceRepository, build_search_filter, parse_amount_query

INVOICE_ID = "2f4b3a52-8f3b-4d5e-9c3a-0a1b2c3d4e5f"
CUSTOMER_ID = "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"


def test_parse_amount_query():
    assert parse_amount_query("1000") == 1000
    assert parse_amount_query(" 42 ") == 42
    assert parse_amount_query("12abc") is None
    assert parse_amount_query("") is None
    assert parse_amount_query("paid") is None


def test_search_filter_skips_amount_clause_for_text():
    where, params = build_search_filter("lee")
    assert "invoices.amount" not in where
    assert params == ["%lee%", "%lee%", "%lee%"]


def test_search_filter_adds_amount_clause_for_integer():
    where, params = build_search_filter("666")
    assert "invoices.amount = %s" in where
    assert params[-1] == 666


def test_search_filter_escapes_wildcards():
    _, params = build_search_filter("50%_off")
    assert params[0] == "%50\\%\\_off%"


def test_search_uses_limit_and_offset(fake_db):
    fake_db.conn.results = [[
        (INVOICE_ID, CUSTOMER_ID, "Evil Rabbit", "evil@rabbit.com",
         "/customers/evil-rabbit.png", date(2023, 6, 27), 666, "pending"),
    ]]
    rows = InvoiceRepository(fake_db).search("evil", 6, 12)

    sql, params = fake_db.conn.executed[0]
    assert "ORDER BY invoices.date DESC" in sql
    assert "LIMIT %s OFFSET %s" in sql
    assert params[-2:] == [6, 12]
    assert rows[0].date == "2023-06-27"
    assert rows[0].amount == 666
    assert fake_db.released == 1


def test_get_by_id_not_found(fake_db):
    fake_db.conn.results = [[]]
    with pytest.raises(NotFoundError):
        InvoiceRepository(fake_db).get_by_id(INVOICE_ID)


def test_get_by_id_malformed_id_is_not_found_without_query(fake_db):
    with pytest.raises(NotFoundError):
        InvoiceRepository(fake_db).get_by_id("not-a-uuid")
    assert fake_db.conn.executed == []


def test_store_failure_becomes_data_access_error(fake_db):
    fake_db.conn.fail_when("SELECT", psycopg2.OperationalError("server closed the connection"))
    with pytest.raises(DataAccessError) as exc:
        InvoiceRepository(fake_db).count()
    assert isinstance(exc.value.__cause__, psycopg2.OperationalError)
    assert not isinstance(exc.value, NotFoundError)
    assert fake_db.released == 1


def test_bad_row_becomes_data_access_error(fake_db):
    fake_db.conn.results = [[(INVOICE_ID, CUSTOMER_ID, 100, "overdue", date(2023, 1, 1))]]
    with pytest.raises(DataAccessError):
        InvoiceRepository(fake_db).get_by_id(INVOICE_ID)


def test_sum_by_status_defaults_to_zero(fake_db):
    fake_db.conn.results = [[(0,)]]
    assert InvoiceRepository(fake_db).sum_by_status("paid") == 0
    sql, params = fake_db.conn.executed[0]
    assert "COALESCE(SUM(amount), 0)" in sql
    assert params == ("paid",)


def test_get_by_customer_ids_is_one_batch(fake_db):
    fake_db.conn.results = [[
        (INVOICE_ID, CUSTOMER_ID, 100, "paid", date(2023, 1, 1)),
    ]]
    invoices = InvoiceRepository(fake_db).get_by_customer_ids([CUSTOMER_ID, "other"])
    assert len(fake_db.conn.executed) == 1
    assert "ANY(%s::uuid[])" in fake_db.conn.executed[0][0]
    assert invoices[0].customer_id == CUSTOMER_ID


def test_get_by_customer_ids_empty_skips_query(fake_db):
    assert InvoiceRepository(fake_db).get_by_customer_ids([]) == []
    assert fake_db.borrowed == 0


def test_update_missing_row_raises_not_found(fake_db):
    fake_db.conn.results = [0]
    with pytest.raises(NotFoundError):
        InvoiceRepository(fake_db).update(INVOICE_ID, CUSTOMER_ID, 500, "paid")


def test_update_rejects_bad_status_before_query(fake_db):
    with pytest.raises(ValueError):
        InvoiceRepository(fake_db).update(INVOICE_ID, CUSTOMER_ID, 500, "void")
    assert fake_db.borrowed == 0


def test_add_rejects_negative_amount_before_query(fake_db):
    with pytest.raises(ValueError):
        InvoiceRepository(fake_db).add(CUSTOMER_ID, -500, "pending", date(2023, 1, 1))
    assert fake_db.borrowed == 0


def test_schema_keeps_stored_amounts_readable():
    # Rows the store accepts must also pass the Invoice checks on read.
    assert "amount          INTEGER NOT NULL CHECK (amount >= 0)" in SCHEMA_SQL
    assert "CHECK (status IN ('pending', 'paid'))" in SCHEMA_SQL


def test_add_rolls_back_on_constraint_violation(fake_db):
    fake_db.conn.fail_when("INSERT", psycopg2.IntegrityError("violates foreign key constraint"))
    with pytest.raises(DataAccessError):
        InvoiceRepository(fake_db).add(CUSTOMER_ID, 100, "pending", date(2023, 1, 1))
    assert fake_db.conn.rollbacks == 1
    assert fake_db.conn.commits == 0


def test_insert_if_empty_skips_when_rows_exist(fake_db):
    fake_db.conn.results = [[(13,)]]
    cur = fake_db.conn.cursor()
    inv = Invoice(customer_id=CUSTOMER_ID, amount=1, status="paid", date=date(2023, 1, 1))
    assert InvoiceRepository(fake_db).insert_if_empty(cur, [inv]) == (0, 13)
    assert len(fake_db.conn.executed) == 1


def test_insert_if_empty_inserts_into_empty_table(fake_db):
    fake_db.conn.results = [[(0,)], 1, 1]
    cur = fake_db.conn.cursor()
    invs = [
        Invoice(customer_id=CUSTOMER_ID, amount=1, status="paid", date=date(2023, 1, 1)),
        Invoice(customer_id=CUSTOMER_ID, amount=2, status="pending", date=date(2023, 1, 2)),
    ]
    assert InvoiceRepository(fake_db).insert_if_empty(cur, invs) == (2, 0)
