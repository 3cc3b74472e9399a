"""Chart data mapping from forecast records."""

from conftest import make_payload

from core.report import PriceRecord, StockReport
from core.series import INVALID_DATE_LABEL, format_date_label, map_records, map_series


def test_tsla_scenario_has_one_point_per_series(tsla_report):
    series = map_series(tsla_report)
    assert series.labels == ("1/1/2025",)
    assert [line.label for line in series.lines] == ["Low", "High", "Close"]
    assert [line.values for line in series.lines] == [(100,), (110,), (105,)]


def test_empty_future_gives_defined_empty_series():
    series = map_series(StockReport.from_payload(make_payload(future=[])))
    assert series is not None
    assert series.is_empty
    assert series.labels == ()
    assert [line.values for line in series.lines] == [(), (), ()]


def test_missing_future_gives_none():
    payload = make_payload()
    del payload["future"]
    assert map_series(StockReport.from_payload(payload)) is None
    assert map_series(None) is None


def test_order_is_preserved_not_sorted():
    records = [
        PriceRecord("2025-03-01", 3, 4, 3.5),
        PriceRecord("2025-01-01", 1, 2, 1.5),
        PriceRecord("2025-02-01", 2, 3, 2.5),
    ]
    series = map_records(records)
    assert series.labels == ("3/1/2025", "1/1/2025", "2/1/2025")
    assert series.lines[2].values == (3.5, 1.5, 2.5)


def test_missing_values_pass_through():
    series = map_records([PriceRecord("2025-01-01", None, 110, None)])
    assert series.lines[0].values == (None,)
    assert series.lines[1].values == (110,)


def test_date_label_formats():
    assert format_date_label("2025-12-31") == "12/31/2025"
    assert format_date_label("2025-01-05T00:00:00") == "1/5/2025"
    assert format_date_label("not a date") == INVALID_DATE_LABEL
    assert format_date_label(None) == INVALID_DATE_LABEL


def test_to_dict_shape(tsla_report):
    data = map_series(tsla_report).to_dict()
    assert data["labels"] == ["1/1/2025"]
    assert data["datasets"][0] == {"label": "Low", "data": [100], "borderColor": "#f44336"}


def test_epoch_millisecond_dates_are_labelled():
    assert format_date_label(1735689600000) == "1/1/2025"
    assert format_date_label(1767139200000.0) == "12/31/2025"


def test_numeric_dates_survive_parsing():
    report = StockReport.from_payload(
        make_payload(future=[{"Date": 1735689600000, "Low": 1, "High": 2, "Close": 3}])
    )
    assert report.future[0].date == 1735689600000
    assert map_series(report).labels == ("1/1/2025",)
