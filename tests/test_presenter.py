"""View-model building for officers, metric cards, news and the page."""

from conftest import make_payload

from core.report import CompanyOfficer, StockReport
from core.state import ViewState
from ui.presenter import (
    PLACEHOLDER_THUMBNAIL_URL,
    build_metric_cards,
    build_news_views,
    build_officer_view,
    build_officer_views,
    build_page,
)


def _labels(rows):
    return [row.label for row in rows]


def _card(cards, title):
    return next(card for card in cards if card.title == title)


def test_officer_without_age_has_no_age_line():
    view = build_officer_view(CompanyOfficer(name="A", title="CFO", total_pay=278000))
    assert "Age" not in _labels(view.rows)
    assert _labels(view.rows) == ["Total Pay"]
    assert view.rows[0].value == "$278,000"


def test_zero_values_are_present_for_every_officer_field():
    view = build_officer_view(
        CompanyOfficer(name="A", title="CEO", age=0, total_pay=0, exercised_value=0, unexercised_value=0)
    )
    assert _labels(view.rows) == ["Age", "Total Pay", "Exercised Value", "Unexercised Value"]
    assert [row.value for row in view.rows] == ["0", "$0", "$0", "$0"]


def test_officer_placeholder_when_absent_or_empty():
    payload = make_payload()
    payload["info"]["companyOfficers"] = []
    assert build_officer_views(StockReport.from_payload(payload).info) == []
    del payload["info"]["companyOfficers"]
    assert build_officer_views(StockReport.from_payload(payload).info) == []
    assert build_officer_views(None) == []


def test_officers_keep_received_order(tsla_report):
    names = [view.name for view in build_officer_views(tsla_report.info)]
    assert names == ["Mr. Elon R. Musk", "Mr. Vaibhav Taneja"]


def test_card_order_and_general_heading(tsla_report):
    cards = build_metric_cards(tsla_report.info)
    assert [card.title for card in cards] == [
        "General Information",
        "Stock Information",
        "Financial Metrics",
        "Insider & Institutional",
        "Analyst Ratings",
        "Risk Metrics",
    ]
    general = cards[0]
    assert general.heading == "Tesla, Inc."
    website = next(row for row in general.rows if row.label == "Website")
    assert website.href == "https://www.tesla.com"


def test_formatted_card_values(tsla_report):
    cards = build_metric_cards(tsla_report.info)
    financial = {row.label: row.value for row in _card(cards, "Financial Metrics").rows}
    assert financial["Market Cap"] == "$800,000,000,000"
    assert financial["Profit Margins"] == "13.12%"
    assert financial["Revenue Growth"] == "7.84%"
    holdings = {row.label: row.value for row in _card(cards, "Insider & Institutional").rows}
    assert holdings["Insider Holdings"] == "12.93%"
    assert holdings["Shares Short"] == "80,123,456"
    ratings = {row.label: row.value for row in _card(cards, "Analyst Ratings").rows}
    assert ratings["Recommendation"] == "HOLD"
    stock = {row.label: row.value for row in _card(cards, "Stock Information").rows}
    assert stock["Current Price"] == "$250.5"
    assert stock["Volume"] == "98,765,432"


def test_absent_fields_drop_rows_instead_of_crashing():
    report = StockReport.from_payload({"info": {"longName": "Bare Corp"}})
    cards = build_metric_cards(report.info)
    assert cards[0].heading == "Bare Corp"
    assert all(card.rows == [] for card in cards)


def test_news_thumbnail_fallback(tsla_report):
    views = build_news_views(tsla_report.news)
    assert views[0].image_url == "https://example.com/thumb.jpg"
    assert views[1].image_url == PLACEHOLDER_THUMBNAIL_URL
    assert build_news_views(None) == []


def test_idle_page_has_no_main_content():
    page = build_page(ViewState(query="TS"))
    assert page.has_report is False
    assert page.query == "TS"
    assert page.cards == [] and page.news == [] and page.officers == []
    assert page.chart is None


def test_loaded_page_renders_chart(tsla_report):
    rendered = []

    def renderer(series):
        rendered.append(series)
        return "<div>chart</div>"

    page = build_page(ViewState(query="TSLA", report=tsla_report), chart_renderer=renderer)
    assert page.has_report is True
    assert page.chart_html == "<div>chart</div>"
    assert rendered[0].labels == ("1/1/2025",)


def test_loaded_page_without_future_has_no_chart():
    payload = make_payload()
    del payload["future"]
    page = build_page(ViewState(report=StockReport.from_payload(payload)), chart_renderer=lambda s: "x")
    assert page.has_report is True
    assert page.chart is None
    assert page.chart_html is None
