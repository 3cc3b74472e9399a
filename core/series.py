"""Map forecast price records into chart-ready series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd

from core.report import Number, PriceRecord, StockReport

INVALID_DATE_LABEL = "Invalid Date"

# (label, record attribute, line colour)
SERIES_SPEC = (
    ("Low", "low", "#f44336"),
    ("High", "high", "#4caf50"),
    ("Close", "close", "#2196f3"),
)


@dataclass(frozen=True)
class SeriesLine:
    """One named line plotted against the shared labels."""

    label: str
    values: tuple[Number | None, ...]
    color: str


@dataclass(frozen=True)
class ChartSeries:
    """Shared date labels plus the Low/High/Close lines, in input order."""

    labels: tuple[str, ...]
    lines: tuple[SeriesLine, ...]

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [
                {"label": line.label, "data": list(line.values), "borderColor": line.color}
                for line in self.lines
            ],
        }


def format_date_label(raw_date: str | Number | None) -> str:
    """Render a record date as M/D/YYYY; unparseable input gives 'Invalid Date'.

    Numbers are epoch milliseconds, strings are parsed as date text.
    """
    if raw_date is None:
        return INVALID_DATE_LABEL
    if isinstance(raw_date, (int, float)):
        stamp = pd.to_datetime(raw_date, unit="ms", errors="coerce")
    else:
        stamp = pd.to_datetime(raw_date, errors="coerce")
    if pd.isna(stamp):
        return INVALID_DATE_LABEL
    return f"{stamp.month}/{stamp.day}/{stamp.year}"


def map_records(records: tuple[PriceRecord, ...] | list[PriceRecord]) -> ChartSeries:
    """Build series from records without sorting, validating or gap-filling."""
    labels = tuple(format_date_label(record.date) for record in records)
    lines = tuple(
        SeriesLine(label=label, values=tuple(getattr(record, attr) for record in records), color=color)
        for label, attr, color in SERIES_SPEC
    )
    return ChartSeries(labels=labels, lines=lines)


def map_series(report: StockReport | None) -> ChartSeries | None:
    """Return chart series for the report, or None when it has no ``future``."""
    if report is None or report.future is None:
        return None
    return map_records(report.future)
