from datetime import date, datetime

from utils.formatting import format_currency, format_date


def test_format_currency_groups_thousands():
    assert format_currency(150000) == "$1,500.00"


def test_format_currency_small_amounts():
    assert format_currency(0) == "$0.00"
    assert format_currency(5) == "$0.05"
    assert format_currency(1000) == "$10.00"
    assert format_currency(123456789) == "$1,234,567.89"


def test_format_currency_negative():
    assert format_currency(-500) == "-$5.00"


def test_format_currency_nan_passes_through():
    # NaN is not coerced to zero
    assert format_currency(float("nan")) == "$NaN"


def test_format_date_variants():
    assert format_date(date(2023, 6, 9)) == "2023-06-09"
    assert format_date(datetime(2023, 6, 9, 23, 59)) == "2023-06-09"
    assert format_date("2023-06-09T00:00:00.000Z") == "2023-06-09"
