import os
import sys
import threading

import pytest

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from core.errors import NonSuccessStatus
from core.report import StockReport
from core.state import ViewStateRegistry


def make_payload(**overrides):
    """TSLA-shaped prediction API response."""
    payload = {
        "info": {
            "longName": "Tesla, Inc.",
            "sector": "Consumer Cyclical",
            "industry": "Auto Manufacturers",
            "address1": "1 Tesla Road",
            "city": "Austin",
            "state": "TX",
            "zip": "78725",
            "country": "United States",
            "website": "https://www.tesla.com",
            "currency": "USD",
            "currentPrice": 250.5,
            "previousClose": 248.0,
            "open": 249,
            "dayHigh": 255.25,
            "dayLow": 247.1,
            "volume": 98765432,
            "averageDailyVolume10Day": 101234567,
            "marketCap": 800000000000,
            "beta": 2.3,
            "bookValue": 20.5,
            "trailingPE": 60.1,
            "forwardPE": 80.2,
            "profitMargins": 0.1312,
            "revenueGrowth": 0.0784,
            "totalRevenue": 96773001216,
            "ebitda": 13558000128,
            "heldPercentInsiders": 0.12934,
            "heldPercentInstitutions": 0.4521,
            "shortRatio": 0.8,
            "sharesShort": 80123456,
            "recommendationKey": "hold",
            "targetHighPrice": 350,
            "targetLowPrice": 85,
            "targetMeanPrice": 220.4,
            "auditRisk": 4,
            "boardRisk": 9,
            "shareHolderRightsRisk": 9,
            "overallRisk": 10,
            "companyOfficers": [
                {
                    "name": "Mr. Elon R. Musk",
                    "title": "Co-Founder, Technoking of Tesla, CEO & Director",
                    "age": 52,
                    "totalPay": 0,
                    "exercisedValue": 0,
                    "unexercisedValue": 0,
                },
                {
                    "name": "Mr. Vaibhav Taneja",
                    "title": "Chief Financial Officer",
                    "totalPay": 278000,
                    "exercisedValue": 8517957,
                },
            ],
        },
        "future": [{"Date": "2025-01-01", "Low": 100, "High": 110, "Close": 105}],
        "news": [
            {
                "title": "Tesla deliveries beat estimates",
                "publisher": "Reuters",
                "link": "https://example.com/tesla-deliveries",
                "thumbnail": {"resolutions": [{"url": "https://example.com/thumb.jpg", "width": 140}]},
            },
            {
                "title": "EV market update",
                "publisher": "Bloomberg",
                "link": "https://example.com/ev-market",
            },
        ],
    }
    payload.update(overrides)
    return payload


class StubSource:
    """Report source returning queued outcomes and recording submitted symbols."""

    def __init__(self, *outcomes):
        self.endpoint = "http://prediction.test/predict"
        self.outcomes = list(outcomes)
        self.symbols = []

    def submit(self, symbol):
        self.symbols.append(symbol)
        outcome = self.outcomes.pop(0) if self.outcomes else StockReport.from_payload(make_payload())
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class GatedSource:
    """Report source whose calls block until released, to order resolutions."""

    def __init__(self, reports):
        self.endpoint = "http://prediction.test/predict"
        self.reports = list(reports)
        self.started = [threading.Event() for _ in reports]
        self.gates = [threading.Event() for _ in reports]
        self._lock = threading.Lock()
        self._calls = 0

    def submit(self, symbol):
        with self._lock:
            index = self._calls
            self._calls += 1
        self.started[index].set()
        if not self.gates[index].wait(timeout=5):
            raise TimeoutError("gate was never released")
        return self.reports[index]


@pytest.fixture
def tsla_payload():
    return make_payload()


@pytest.fixture
def tsla_report(tsla_payload):
    return StockReport.from_payload(tsla_payload)


@pytest.fixture
def server_error():
    return NonSuccessStatus("TSLA", 500)


@pytest.fixture
def make_client_app():
    """Build a test app around a given report source and registry."""
    from ui.app import create_app

    def _build(source, registry=None):
        app = create_app(
            client=source,
            registry=registry if registry is not None else ViewStateRegistry(),
            config={"TESTING": True, "SECRET_KEY": "test-secret"},
        )
        return app.test_client()

    return _build
