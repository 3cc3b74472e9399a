"""Per-visitor view state: the form input and the last successful report."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, replace
import logging
import threading
from typing import Protocol

from core.errors import ConfigurationError, PredictionRequestError
from core.report import StockReport

LOGGER = logging.getLogger("stockview.state")

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_LOADED = "loaded"


class ReportSource(Protocol):
    def submit(self, symbol: str) -> StockReport: ...


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot handed to the renderer.

    ``query`` follows the form input; ``report_symbol`` is the symbol that
    produced ``report`` and only changes when a report is applied.
    """

    query: str = ""
    report: StockReport | None = None
    report_symbol: str | None = None
    in_flight: int = 0
    last_error: str | None = None

    @property
    def status(self) -> str:
        if self.in_flight:
            return STATUS_LOADING
        if self.report is not None:
            return STATUS_LOADED
        return STATUS_IDLE


class ViewStateStore:
    """Single state cell for one visitor.

    Writers are request-completion handlers; readers take snapshots. By default
    the response that resolves last wins. With ``discard_stale`` a response is
    dropped when a newer submission has already been applied.
    """

    def __init__(self, discard_stale: bool = False, surface_errors: bool = False) -> None:
        self._lock = threading.Lock()
        self._state = ViewState()
        self._issued = 0
        self._applied = 0
        self._pending: dict[int, str] = {}
        self.discard_stale = discard_stale
        self.surface_errors = surface_errors

    def snapshot(self) -> ViewState:
        with self._lock:
            return self._state

    def set_query(self, symbol: str) -> None:
        with self._lock:
            self._state = replace(self._state, query=symbol)

    def begin_submission(self, symbol: str) -> int:
        """Record the submitted symbol and return a ticket for the completion."""
        with self._lock:
            self._issued += 1
            self._pending[self._issued] = symbol
            self._state = replace(self._state, query=symbol, in_flight=self._state.in_flight + 1)
            return self._issued

    def complete(self, ticket: int, report: StockReport) -> bool:
        """Replace the report wholesale. Returns False when the response was discarded."""
        with self._lock:
            symbol = self._pending.pop(ticket, None)
            in_flight = max(0, self._state.in_flight - 1)
            if self.discard_stale and ticket < self._applied:
                self._state = replace(self._state, in_flight=in_flight)
                LOGGER.info("Discarded stale response for ticket %d (applied %d)", ticket, self._applied)
                return False
            self._applied = max(self._applied, ticket)
            self._state = replace(
                self._state,
                report=report,
                report_symbol=symbol,
                in_flight=in_flight,
                last_error=None,
            )
            return True

    def fail(self, ticket: int, error: Exception) -> None:
        """Leave the report untouched; optionally remember the message for display."""
        with self._lock:
            self._pending.pop(ticket, None)
            in_flight = max(0, self._state.in_flight - 1)
            last_error = self._state.last_error
            if self.surface_errors and not (self.discard_stale and ticket < self._applied):
                last_error = str(error)
            self._state = replace(self._state, in_flight=in_flight, last_error=last_error)

    def dismiss_error(self) -> None:
        with self._lock:
            self._state = replace(self._state, last_error=None)


class ViewStateRegistry:
    """Owns one ``ViewStateStore`` per visitor id.

    Only ``get`` creates stores. The registry keeps at most ``max_visitors``
    of them and evicts the least recently used one beyond that.
    """

    def __init__(
        self,
        discard_stale: bool = False,
        surface_errors: bool = False,
        max_visitors: int = 1000,
    ) -> None:
        self._lock = threading.Lock()
        self._stores: OrderedDict[str, ViewStateStore] = OrderedDict()
        self.discard_stale = discard_stale
        self.surface_errors = surface_errors
        self.max_visitors = max(1, max_visitors)

    def get(self, visitor_id: str) -> ViewStateStore:
        with self._lock:
            store = self._stores.get(visitor_id)
            if store is None:
                store = ViewStateStore(discard_stale=self.discard_stale, surface_errors=self.surface_errors)
                self._stores[visitor_id] = store
                while len(self._stores) > self.max_visitors:
                    evicted, _ = self._stores.popitem(last=False)
                    LOGGER.info("Evicted view state for visitor %s", evicted)
            else:
                self._stores.move_to_end(visitor_id)
            return store

    def find(self, visitor_id: str | None) -> ViewStateStore | None:
        """Return the visitor's store if one exists, without creating it."""
        if not visitor_id:
            return None
        with self._lock:
            store = self._stores.get(visitor_id)
            if store is not None:
                self._stores.move_to_end(visitor_id)
            return store

    def __len__(self) -> int:
        with self._lock:
            return len(self._stores)


def submit_query(store: ViewStateStore, source: ReportSource, symbol: str) -> bool:
    """Run one submission against ``source`` and apply the outcome to ``store``.

    Failures are logged once and leave the report unchanged. Returns True when
    a new report was applied.
    """
    ticket = store.begin_submission(symbol)
    try:
        report = source.submit(symbol)
    except (PredictionRequestError, ConfigurationError) as error:
        LOGGER.error("Error fetching stock data for %r: %s", symbol, error)
        store.fail(ticket, error)
        return False
    except BaseException:
        store.fail(ticket, RuntimeError("Unexpected error while fetching stock data."))
        raise
    return store.complete(ticket, report)
