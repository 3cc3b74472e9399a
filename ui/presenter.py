"""Map view state onto the page view model rendered by the index template."""

from __future__ import annotations

from typing import Callable

from core.report import CompanyInfo, CompanyOfficer, NewsItem
from core.series import ChartSeries, map_series
from core.state import ViewState
from ui.formatting import (
    format_currency,
    format_grouped,
    format_percent,
    format_plain,
    format_upper,
    join_address,
)
from ui.models import MetricCard, MetricRow, NewsView, OfficerView, PageViewModel

PLACEHOLDER_THUMBNAIL_URL = "https://via.placeholder.com/200"


def _rows(*pairs: tuple[str, str | None]) -> list[MetricRow]:
    """Keep only rows whose formatted value is present."""
    return [MetricRow(label=label, value=value) for label, value in pairs if value is not None]


def build_officer_view(officer: CompanyOfficer) -> OfficerView:
    # One presence rule for all four numeric fields: shown unless None, so 0 renders.
    rows = _rows(
        ("Age", format_plain(officer.age)),
        ("Total Pay", format_currency(officer.total_pay, grouped=True)),
        ("Exercised Value", format_currency(officer.exercised_value, grouped=True)),
        ("Unexercised Value", format_currency(officer.unexercised_value, grouped=True)),
    )
    return OfficerView(name=officer.name, title=officer.title, rows=rows)


def build_officer_views(info: CompanyInfo | None) -> list[OfficerView]:
    """Officer blocks in received order; empty when the list is absent or empty."""
    if info is None or not info.company_officers:
        return []
    return [build_officer_view(officer) for officer in info.company_officers]


def build_metric_cards(info: CompanyInfo) -> list[MetricCard]:
    general_rows = _rows(
        ("Sector", info.sector),
        ("Industry", info.industry),
        ("Address", join_address(info.address1, info.city, info.state, info.zip, info.country)),
    )
    if info.website is not None:
        general_rows.append(MetricRow(label="Website", value=info.website, href=info.website))
    general_rows.extend(_rows(("Currency", info.currency)))

    return [
        MetricCard(
            title="General Information",
            header_class="bg-primary",
            heading=info.long_name,
            rows=general_rows,
        ),
        MetricCard(
            title="Stock Information",
            header_class="bg-info",
            rows=_rows(
                ("Current Price", format_currency(info.current_price)),
                ("Previous Close", format_currency(info.previous_close)),
                ("Open", format_currency(info.open)),
                ("Day High", format_currency(info.day_high)),
                ("Day Low", format_currency(info.day_low)),
                ("Volume", format_grouped(info.volume)),
                ("Avg Volume (10d)", format_grouped(info.average_daily_volume_10_day)),
            ),
        ),
        MetricCard(
            title="Financial Metrics",
            header_class="bg-success",
            rows=_rows(
                ("Market Cap", format_currency(info.market_cap, grouped=True)),
                ("Beta", format_plain(info.beta)),
                ("Book Value", format_currency(info.book_value)),
                ("Trailing PE", format_plain(info.trailing_pe)),
                ("Forward PE", format_plain(info.forward_pe)),
                ("Profit Margins", format_percent(info.profit_margins)),
                ("Revenue Growth", format_percent(info.revenue_growth)),
                ("Total Revenue", format_currency(info.total_revenue, grouped=True)),
                ("EBITDA", format_currency(info.ebitda, grouped=True)),
            ),
        ),
        MetricCard(
            title="Insider & Institutional",
            header_class="bg-warning",
            rows=_rows(
                ("Insider Holdings", format_percent(info.held_percent_insiders)),
                ("Institutional Holdings", format_percent(info.held_percent_institutions)),
                ("Short Ratio", format_plain(info.short_ratio)),
                ("Shares Short", format_grouped(info.shares_short)),
            ),
        ),
        MetricCard(
            title="Analyst Ratings",
            header_class="bg-danger",
            rows=_rows(
                ("Recommendation", format_upper(info.recommendation_key)),
                ("Target High", format_currency(info.target_high_price)),
                ("Target Low", format_currency(info.target_low_price)),
                ("Target Mean", format_currency(info.target_mean_price)),
            ),
        ),
        MetricCard(
            title="Risk Metrics",
            header_class="bg-secondary",
            rows=_rows(
                ("Audit Risk", format_plain(info.audit_risk)),
                ("Board Risk", format_plain(info.board_risk)),
                ("Shareholder Rights Risk", format_plain(info.share_holder_rights_risk)),
                ("Overall Risk", format_plain(info.overall_risk)),
            ),
        ),
    ]


def build_news_view(item: NewsItem) -> NewsView:
    return NewsView(
        title=item.title,
        publisher=item.publisher,
        link=item.link,
        image_url=item.thumbnail_url or PLACEHOLDER_THUMBNAIL_URL,
    )


def build_news_views(news: tuple[NewsItem, ...] | None) -> list[NewsView]:
    return [build_news_view(item) for item in news or ()]


def build_page(
    state: ViewState,
    chart_renderer: Callable[[ChartSeries], str] | None = None,
) -> PageViewModel:
    """Derive the full page from one state snapshot; recomputed on every render."""
    report = state.report
    if report is None:
        return PageViewModel(
            query=state.query,
            status=state.status,
            has_report=False,
            officers=[],
            cards=[],
            news=[],
            last_error=state.last_error,
        )

    chart = map_series(report)
    chart_html = chart_renderer(chart) if chart is not None and chart_renderer is not None else None
    return PageViewModel(
        query=state.query,
        report_symbol=state.report_symbol,
        status=state.status,
        has_report=True,
        officers=build_officer_views(report.info),
        cards=build_metric_cards(report.info),
        news=build_news_views(report.news),
        chart=chart,
        chart_html=chart_html,
        last_error=state.last_error,
    )
