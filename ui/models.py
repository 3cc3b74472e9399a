"""UI view models for the report page."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.series import ChartSeries


@dataclass
class MetricRow:
    """One labelled line inside a card; ``href`` renders the value as a link."""

    label: str
    value: str
    href: str | None = None


@dataclass
class MetricCard:
    title: str
    header_class: str
    rows: list[MetricRow]
    heading: str | None = None


@dataclass
class OfficerView:
    name: str | None
    title: str | None
    rows: list[MetricRow] = field(default_factory=list)


@dataclass
class NewsView:
    title: str | None
    publisher: str | None
    link: str | None
    image_url: str


@dataclass
class PageViewModel:
    """Everything the index template needs for one render."""

    query: str
    status: str
    has_report: bool
    officers: list[OfficerView]
    cards: list[MetricCard]
    news: list[NewsView]
    report_symbol: str | None = None
    chart: ChartSeries | None = None
    chart_html: str | None = None
    last_error: str | None = None
