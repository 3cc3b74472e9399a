"""Local Flask UI for the AI/ML stock information viewer."""

from __future__ import annotations

from io import BytesIO
import logging
import os
from pathlib import Path
import sys
import tempfile
from typing import Any
import uuid

MPL_CONFIG_DIR = os.path.join(tempfile.gettempdir(), "matplotlib")
os.environ.setdefault("MPLCONFIGDIR", MPL_CONFIG_DIR)
os.makedirs(MPL_CONFIG_DIR, exist_ok=True)

import matplotlib

matplotlib.use("Agg")

from flask import (
    Flask,
    abort,
    got_request_exception,
    jsonify,
    redirect,
    render_template,
    request,
    send_file,
    session,
    url_for,
)
from plotly.offline import get_plotlyjs

# Make `python ui/app.py` work without external PYTHONPATH setup.
THIS_DIR = Path(__file__).resolve().parent
PROJECT_DIR = THIS_DIR.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from config import settings
from core.client import PredictionClient
from core.state import ReportSource, ViewState, ViewStateRegistry, ViewStateStore, submit_query
from ui.charts import build_line_chart, plot_static_chart
from ui.presenter import build_page
from ui.utils.pdf_exporter import build_report_pdf, report_filename


BASE_PATH = Path(settings.BASE_DIR)
UI_DIR = BASE_PATH / "ui"
STATIC_DIR = UI_DIR / "static"

PLOTLY_VENDOR_RELATIVE_PATH = "vendor/plotly.min.js"
PLOTLY_VENDOR_PATH = STATIC_DIR / PLOTLY_VENDOR_RELATIVE_PATH

VISITOR_SESSION_KEY = "visitor_id"


def _configure_ui_logger() -> logging.Logger:
    """Configure file logger for the UI app and its request handlers."""
    logs_dir = Path(settings.LOGS_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "ui.log"

    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    logger = logging.getLogger("stockview")
    logger.setLevel(logging.INFO)

    existing = None
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            existing = handler
            break

    if existing is None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    ui_logger = logging.getLogger("stockview.ui")
    return ui_logger


def _configured_worker_count() -> int:
    """Largest process count requested through the usual server env vars."""
    counts = []
    for name in ("WEB_CONCURRENCY", "GUNICORN_WORKERS"):
        raw_value = (os.getenv(name) or "").strip()
        if raw_value.isdigit():
            counts.append(int(raw_value))
    return max(counts, default=1)


def _check_single_process(logger: logging.Logger) -> None:
    """View state lives in this process; a second worker would not see it."""
    workers = _configured_worker_count()
    if workers > 1:
        logger.warning(
            "%d worker processes configured; per-visitor reports are kept in memory "
            "and will appear to vanish when requests land on another worker.",
            workers,
        )


def create_app(
    client: ReportSource | None = None,
    registry: ViewStateRegistry | None = None,
    config: dict[str, Any] | None = None,
) -> Flask:
    """Create and configure the Flask application.

    ``client`` and ``registry`` are injected so the single state owner is
    explicit; defaults come from ``config.settings``.
    """
    app = Flask(
        __name__,
        template_folder=str(UI_DIR / "templates"),
        static_folder=str(STATIC_DIR),
    )
    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["TEMPLATES_AUTO_RELOAD"] = True
    app.config["SEND_FILE_MAX_AGE_DEFAULT"] = 86400
    if config:
        app.config.update(config)

    logger = _configure_ui_logger()
    _check_single_process(logger)

    PLOTLY_VENDOR_PATH.parent.mkdir(parents=True, exist_ok=True)
    if not PLOTLY_VENDOR_PATH.exists():
        try:
            PLOTLY_VENDOR_PATH.write_text(get_plotlyjs(), encoding="utf-8")
            logger.info("Wrote local Plotly bundle: %s", PLOTLY_VENDOR_PATH)
        except OSError as exc:
            logger.warning("Failed to write local Plotly bundle: %s", exc)

    report_source: ReportSource = client if client is not None else PredictionClient()
    states = registry if registry is not None else ViewStateRegistry(
        discard_stale=settings.DISCARD_STALE_RESPONSES,
        surface_errors=settings.SURFACE_REQUEST_ERRORS,
        max_visitors=settings.MAX_VISITORS,
    )
    app.extensions["stockview.registry"] = states
    app.extensions["stockview.client"] = report_source

    if not getattr(report_source, "endpoint", True):
        logger.warning("PREDICTION_API_URL is not set; searches will fail until it is configured.")
    logger.info("UI app initialized")

    def _snapshot() -> ViewState:
        """Current visitor's state; visitors without a store see the idle state."""
        store = states.find(session.get(VISITOR_SESSION_KEY))
        return store.snapshot() if store is not None else ViewState()

    def _owned_store() -> ViewStateStore:
        """Store for the current visitor, minting a visitor id on first use."""
        visitor_id = session.get(VISITOR_SESSION_KEY)
        if not visitor_id:
            visitor_id = uuid.uuid4().hex
            session[VISITOR_SESSION_KEY] = visitor_id
        return states.get(visitor_id)

    @app.route("/", methods=["GET"])
    def index() -> str:
        """Render the sidebar, search form and, once loaded, the report."""
        page = build_page(_snapshot(), chart_renderer=build_line_chart)
        return render_template(
            "index.html",
            page=page,
            plotly_script_url=url_for("static", filename=PLOTLY_VENDOR_RELATIVE_PATH),
        )

    @app.route("/", methods=["POST"])
    def search():
        """Submit the ticker exactly as typed, then redirect back to the page."""
        symbol = request.form.get("stock", "")
        applied = submit_query(_owned_store(), report_source, symbol)
        logger.info("Search for %r finished (applied=%s)", symbol, applied)
        return redirect(url_for("index"))

    @app.route("/dismiss-error", methods=["POST"])
    def dismiss_error():
        store = states.find(session.get(VISITOR_SESSION_KEY))
        if store is not None:
            store.dismiss_error()
        return redirect(url_for("index"))

    @app.route("/api/state")
    def state_api():
        """Expose the visitor's view state for lightweight polling."""
        snapshot = _snapshot()
        page = build_page(snapshot)
        return jsonify(
            {
                "query": snapshot.query,
                "status": snapshot.status,
                "report": dict(snapshot.report.raw) if snapshot.report is not None else None,
                "chart": page.chart.to_dict() if page.chart is not None else None,
                "last_error": snapshot.last_error,
            }
        )

    @app.route("/export/pdf")
    def export_pdf():
        """Export the visitor's current report as a PDF download."""
        snapshot = _snapshot()
        if snapshot.report is None:
            logger.warning("PDF export requested before any report was loaded")
            abort(404)

        page = build_page(snapshot)
        with tempfile.TemporaryDirectory(prefix="stockview-") as work_dir:
            chart_path = None
            if page.chart is not None and not page.chart.is_empty:
                title = page.cards[0].heading or page.report_symbol or "Forecast"
                chart_path = plot_static_chart(page.chart, f"{title} Forecast", Path(work_dir) / "chart.png")
            pdf_bytes = build_report_pdf(page, chart_path=chart_path)

        return send_file(
            BytesIO(pdf_bytes),
            as_attachment=True,
            download_name=report_filename(page),
            mimetype="application/pdf",
        )

    def _log_unhandled_exception(sender: Flask, exception: Exception, **_: Any) -> None:
        logger.exception("Unhandled UI exception: %s", exception)

    got_request_exception.connect(_log_unhandled_exception, app)

    return app


app = create_app()


if __name__ == "__main__":
    app.run(host=settings.HOST, port=settings.PORT, debug=False)
