import argparse
import logging
import os
import sys

from config import settings


def _configure_logging():
    """Configure console + file logging for local runs."""
    os.makedirs(settings.LOGS_DIR, exist_ok=True)

    log_file = os.path.join(settings.LOGS_DIR, "stockview.log")
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.handlers.clear()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.WARNING)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    # Werkzeug logs every request at INFO.
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def main(argv=None):
    """
    Stock viewer entry point.
    Serves the Flask UI against the configured prediction API.
    """
    parser = argparse.ArgumentParser(description="Run the AI/ML stock information viewer")
    parser.add_argument("--host", default=settings.HOST, help=f"Bind address (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Bind port (default: {settings.PORT})")
    parser.add_argument(
        "--api-url",
        default=None,
        help="Prediction endpoint; overrides PREDICTION_API_URL",
    )
    args = parser.parse_args(argv)

    _configure_logging()
    logger = logging.getLogger("stockview.runner")

    from core.client import PredictionClient
    from ui.app import create_app

    client = PredictionClient(endpoint=args.api_url)
    if not client.endpoint:
        print("WARNING: PREDICTION_API_URL is not set; searches will be logged as failures.")

    print("📈 AI/ML Stock Information Viewer starting...")
    print(f"🔗 Prediction API: {client.endpoint or '(not configured)'}")
    print(f"🌐 Serving on http://{args.host}:{args.port}")
    logger.info("Serving on %s:%s against %s", args.host, args.port, client.endpoint)

    app = create_app(client=client)
    app.run(host=args.host, port=args.port, debug=False, threaded=True)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n🛑 Server stopped by user.")
        sys.exit(0)
    except Exception as e:
        print(f"\n🔥 Fatal Error: {e}")
        sys.exit(1)
