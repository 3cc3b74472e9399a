#!/usr/bin/env python3
"""Stock viewer health check: configuration, prediction API reachability, logs."""

import os
import sys
import urllib.parse

# Add project to path
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from config import settings
from core.client import PredictionClient
from core.errors import NetworkFailure, NonSuccessStatus, PredictionRequestError

PROBE_SYMBOL = os.getenv("HEALTH_CHECK_SYMBOL", "TSLA")
PROBE_TIMEOUT_SECONDS = 30.0


def check_configuration():
    """Report on the prediction endpoint setting."""
    print("\n⚙ Configuration")
    print("=" * 70)

    endpoint = settings.PREDICTION_API_URL
    if not endpoint:
        print("  ✗ PREDICTION_API_URL is not set.")
        return False

    parsed = urllib.parse.urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        print(f"  ✗ PREDICTION_API_URL is not an http(s) URL: {endpoint}")
        return False

    print(f"  ✓ Endpoint:            {endpoint}")
    timeout = settings.PREDICTION_API_TIMEOUT
    print(f"  ✓ Timeout:             {'none' if timeout is None else f'{timeout:g}s'}")
    print(f"  ✓ Discard stale:       {settings.DISCARD_STALE_RESPONSES}")
    print(f"  ✓ Surface errors:      {settings.SURFACE_REQUEST_ERRORS}")
    return True


def check_prediction_api():
    """Submit one probe symbol and summarise the returned report."""
    print(f"\n🔌 Prediction API probe ({PROBE_SYMBOL})")
    print("=" * 70)

    if not settings.PREDICTION_API_URL:
        print("  Skipped: no endpoint configured.")
        return False

    timeout = settings.PREDICTION_API_TIMEOUT or PROBE_TIMEOUT_SECONDS
    client = PredictionClient(timeout=timeout)
    try:
        report = client.submit(PROBE_SYMBOL)
    except NonSuccessStatus as e:
        print(f"  ✗ Endpoint answered HTTP {e.status}")
        return False
    except NetworkFailure as e:
        print(f"  ✗ Endpoint unreachable: {e}")
        return False
    except PredictionRequestError as e:
        print(f"  ✗ {e}")
        return False

    future_count = "absent" if report.future is None else len(report.future)
    news_count = "absent" if report.news is None else len(report.news)
    officers = report.info.company_officers
    print(f"  ✓ Company:             {report.info.long_name or '(no longName)'}")
    print(f"  ✓ Forecast records:    {future_count}")
    print(f"  ✓ News items:          {news_count}")
    print(f"  ✓ Officers:            {'absent' if officers is None else len(officers)}")
    return True


def check_logs():
    """Check recent log entries for errors."""
    print("\n📋 Recent Log Entries (last 10)")
    print("=" * 70)

    log_file = os.path.join(settings.LOGS_DIR, "ui.log")
    if not os.path.exists(log_file):
        print("  No log file found yet.")
        return True

    try:
        with open(log_file, "r", encoding="utf-8") as f:
            lines = f.readlines()[-10:]
        for line in lines:
            print(f"  {line.rstrip()}")
    except OSError as e:
        print(f"  Error reading logs: {e}")
        return False

    errors = [line for line in lines if "| ERROR |" in line]
    if errors:
        print(f"\n  ⚠ {len(errors)} error entries in the last 10 lines.")
    return True


def main():
    """Run all checks."""
    print("\n" + "=" * 70)
    print("  Stock Viewer Health Check")
    print("=" * 70)

    checks = [
        ("Configuration", check_configuration),
        ("Prediction API", check_prediction_api),
        ("Log Health", check_logs),
    ]

    all_pass = True
    for name, check_func in checks:
        try:
            if not check_func():
                all_pass = False
        except Exception as e:
            print(f"\n❌ {name} check failed: {e}")
            all_pass = False

    print("\n" + "=" * 70)
    if all_pass:
        print("✓ All checks passed. The viewer is ready to serve.")
    else:
        print("⚠ Some checks failed. Review above for details.")
    print("=" * 70 + "\n")

    return 0 if all_pass else 1


if __name__ == "__main__":
    sys.exit(main())
