"""Typed view of the prediction API response with explicit optional fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

Number = int | float


def _number(value: Any) -> Number | None:
    """Return value when it is a real JSON number, otherwise None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


def _text(value: Any) -> str | None:
    """Return value as text when present; numbers are stringified."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _date_value(value: Any) -> str | Number | None:
    """Dates arrive as strings or as epoch milliseconds; numbers are kept as numbers."""
    number = _number(value)
    return number if number is not None else _text(value)


def _mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None


def _sequence(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) else None


@dataclass(frozen=True)
class CompanyOfficer:
    """One executive record from ``info.companyOfficers``."""

    name: str | None = None
    title: str | None = None
    age: Number | None = None
    total_pay: Number | None = None
    exercised_value: Number | None = None
    unexercised_value: Number | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CompanyOfficer":
        data = _mapping(payload) or {}
        return cls(
            name=_text(data.get("name")),
            title=_text(data.get("title")),
            age=_number(data.get("age")),
            total_pay=_number(data.get("totalPay")),
            exercised_value=_number(data.get("exercisedValue")),
            unexercised_value=_number(data.get("unexercisedValue")),
        )


# attribute name -> (payload key, coercion)
_INFO_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "long_name": ("longName", _text),
    "sector": ("sector", _text),
    "industry": ("industry", _text),
    "address1": ("address1", _text),
    "city": ("city", _text),
    "state": ("state", _text),
    "zip": ("zip", _text),
    "country": ("country", _text),
    "website": ("website", _text),
    "currency": ("currency", _text),
    "current_price": ("currentPrice", _number),
    "previous_close": ("previousClose", _number),
    "open": ("open", _number),
    "day_high": ("dayHigh", _number),
    "day_low": ("dayLow", _number),
    "volume": ("volume", _number),
    "average_daily_volume_10_day": ("averageDailyVolume10Day", _number),
    "market_cap": ("marketCap", _number),
    "beta": ("beta", _number),
    "book_value": ("bookValue", _number),
    "trailing_pe": ("trailingPE", _number),
    "forward_pe": ("forwardPE", _number),
    "profit_margins": ("profitMargins", _number),
    "revenue_growth": ("revenueGrowth", _number),
    "total_revenue": ("totalRevenue", _number),
    "ebitda": ("ebitda", _number),
    "held_percent_insiders": ("heldPercentInsiders", _number),
    "held_percent_institutions": ("heldPercentInstitutions", _number),
    "short_ratio": ("shortRatio", _number),
    "shares_short": ("sharesShort", _number),
    "recommendation_key": ("recommendationKey", _text),
    "target_high_price": ("targetHighPrice", _number),
    "target_low_price": ("targetLowPrice", _number),
    "target_mean_price": ("targetMeanPrice", _number),
    "audit_risk": ("auditRisk", _number),
    "board_risk": ("boardRisk", _number),
    "share_holder_rights_risk": ("shareHolderRightsRisk", _number),
    "overall_risk": ("overallRisk", _number),
}


@dataclass(frozen=True)
class CompanyInfo:
    """Company and financial attributes under ``info``.

    Every attribute is optional; ``company_officers`` is None when the key is
    missing and an empty tuple when the API sent an empty list.
    """

    long_name: str | None = None
    sector: str | None = None
    industry: str | None = None
    address1: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    website: str | None = None
    currency: str | None = None
    current_price: Number | None = None
    previous_close: Number | None = None
    open: Number | None = None
    day_high: Number | None = None
    day_low: Number | None = None
    volume: Number | None = None
    average_daily_volume_10_day: Number | None = None
    market_cap: Number | None = None
    beta: Number | None = None
    book_value: Number | None = None
    trailing_pe: Number | None = None
    forward_pe: Number | None = None
    profit_margins: Number | None = None
    revenue_growth: Number | None = None
    total_revenue: Number | None = None
    ebitda: Number | None = None
    held_percent_insiders: Number | None = None
    held_percent_institutions: Number | None = None
    short_ratio: Number | None = None
    shares_short: Number | None = None
    recommendation_key: str | None = None
    target_high_price: Number | None = None
    target_low_price: Number | None = None
    target_mean_price: Number | None = None
    audit_risk: Number | None = None
    board_risk: Number | None = None
    share_holder_rights_risk: Number | None = None
    overall_risk: Number | None = None
    company_officers: tuple[CompanyOfficer, ...] | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CompanyInfo":
        data = _mapping(payload) or {}
        values = {attr: coerce(data.get(key)) for attr, (key, coerce) in _INFO_FIELDS.items()}
        officers = _sequence(data.get("companyOfficers"))
        if officers is not None:
            values["company_officers"] = tuple(CompanyOfficer.from_payload(item) for item in officers)
        return cls(**values)


@dataclass(frozen=True)
class PriceRecord:
    """One forecast row from ``future``; numeric values pass through untouched."""

    date: str | Number | None
    low: Number | None
    high: Number | None
    close: Number | None

    @classmethod
    def from_payload(cls, payload: Any) -> "PriceRecord":
        data = _mapping(payload) or {}
        return cls(
            date=_date_value(data.get("Date")),
            low=_number(data.get("Low")),
            high=_number(data.get("High")),
            close=_number(data.get("Close")),
        )


@dataclass(frozen=True)
class NewsItem:
    """One news entry; ``thumbnail_url`` is the first thumbnail resolution."""

    title: str | None = None
    publisher: str | None = None
    link: str | None = None
    thumbnail_url: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "NewsItem":
        data = _mapping(payload) or {}
        thumbnail_url = None
        thumbnail = _mapping(data.get("thumbnail"))
        resolutions = _sequence(thumbnail.get("resolutions")) if thumbnail else None
        if resolutions:
            first = _mapping(resolutions[0])
            if first is not None:
                thumbnail_url = _text(first.get("url")) or None
        return cls(
            title=_text(data.get("title")),
            publisher=_text(data.get("publisher")),
            link=_text(data.get("link")),
            thumbnail_url=thumbnail_url,
        )


@dataclass(frozen=True)
class StockReport:
    """Full prediction API response for one ticker.

    ``future`` and ``news`` are None when the key is absent, which is distinct
    from an empty sequence. ``raw`` keeps the decoded payload as received.
    """

    info: CompanyInfo
    future: tuple[PriceRecord, ...] | None = None
    news: tuple[NewsItem, ...] | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StockReport":
        future = _sequence(payload.get("future"))
        news = _sequence(payload.get("news"))
        return cls(
            info=CompanyInfo.from_payload(payload.get("info")),
            future=tuple(PriceRecord.from_payload(item) for item in future) if future is not None else None,
            news=tuple(NewsItem.from_payload(item) for item in news) if news is not None else None,
            raw=payload,
        )
