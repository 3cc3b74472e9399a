import math

from ui.formatting import (
    format_currency,
    format_grouped,
    format_percent,
    format_plain,
    format_upper,
    join_address,
)


def test_grouped_numbers():
    assert format_grouped(1234567) == "1,234,567"
    assert format_grouped(1234.5) == "1,234.5"
    assert format_grouped(0.1236) == "0.124"
    assert format_grouped(0.0) == "0"
    assert format_grouped(None) is None


def test_plain_values():
    assert format_plain(105.0) == "105"
    assert format_plain(2.3) == "2.3"
    assert format_plain(0) == "0"
    assert format_plain(None) is None
    assert format_plain(math.nan) is None


def test_currency():
    assert format_currency(250.5) == "$250.5"
    assert format_currency(800000000000, grouped=True) == "$800,000,000,000"
    assert format_currency(None, grouped=True) is None


def test_percent_is_guarded():
    assert format_percent(0.1312) == "13.12%"
    assert format_percent(0) == "0.00%"
    assert format_percent(None) is None
    assert format_percent("n/a") is None


def test_upper():
    assert format_upper("strong_buy") == "STRONG_BUY"
    assert format_upper(None) is None


def test_address_skips_missing_parts():
    assert join_address("1 Tesla Road", "Austin", "TX", "78725", "United States") == (
        "1 Tesla Road, Austin, TX 78725, United States"
    )
    assert join_address(None, "Austin", None, "78725", None) == "Austin, 78725"
    assert join_address(None, None, None, None, None) is None
