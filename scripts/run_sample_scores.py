#!/usr/bin/env python3
"""Sample scoring harness for end-to-end validation.

Replays a fixed set of scoring scenarios against the service and compares the
responses with the expected results. It can operate in two modes:

1. In-process (default): builds the app and calls it through FastAPI's TestClient
2. Live endpoint: POSTs to a running instance with requests

Usage:
    # In-process, no server needed
    python scripts/run_sample_scores.py

    # Against a running instance
    python scripts/run_sample_scores.py --url http://127.0.0.1:7071/api/ScoreWorker

    # With a function key
    FUNCTION_KEY=secret python scripts/run_sample_scores.py --url https://example.net/api/ScoreWorker
"""

import argparse
import json
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import requests

from worker_scoring.api import SCORE_ROUTE, create_app
from worker_scoring.config import AppConfig, EnvironmentConfig


def _payload(worker_jurisdictions="CA,NV", selectors=None):
    return {
        "job": {"certificationId": "RN", "JurisdictionId": "CA"},
        "worker": {
            "Id": "worker-1",
            "certificationIds": "RN,LPN",
            "JurisdictionIds": worker_jurisdictions,
        },
        "selectors": selectors or [],
    }


# (name, body, expected status, expected text)
SCENARIOS = [
    ("no selectors, full match", json.dumps(_payload()), 200, "0"),
    ("no selectors, jurisdiction mismatch", json.dumps(_payload("NV")), 200, "100"),
    (
        "licensure equals at threshold",
        json.dumps(_payload(selectors=[{"key": "licensure", "operator": "equals", "value": 5}])),
        200,
        "100",
    ),
    (
        "jurisdiction notequals, no match",
        json.dumps(
            _payload("NV", selectors=[{"key": "jurisdiction", "operator": "notequals", "value": 10}])
        ),
        200,
        "100",
    ),
    (
        "zero-value unknown selector",
        json.dumps(_payload(selectors=[{"key": "unknown", "operator": "x", "value": 0}])),
        200,
        "100",
    ),
    ("malformed body", "not json", 400, "Invalid JSON payload"),
    ("missing worker", json.dumps({"job": {"certificationId": "RN"}}), 400, "Payload must include job + worker"),
]


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def build_sender(url, function_key):
    """Return a callable that posts a body and yields (status, text)."""
    headers = {"Content-Type": "application/json"}
    if function_key:
        headers["x-functions-key"] = function_key

    if url:
        def send(body):
            response = requests.post(url, data=body.encode("utf-8"), headers=headers, timeout=10)
            return response.status_code, response.text

        return send

    from fastapi.testclient import TestClient

    client = TestClient(create_app(AppConfig(), EnvironmentConfig(function_key=function_key)))

    def send(body):
        response = client.post(SCORE_ROUTE, content=body, headers=headers)
        return response.status_code, response.text

    return send


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay sample scoring scenarios")
    parser.add_argument("--url", default=None, help="Score endpoint of a running instance")
    args = parser.parse_args()

    send = build_sender(args.url, os.getenv("FUNCTION_KEY"))

    print_header(f"Scoring scenarios ({args.url or 'in-process'})")

    failures = 0
    for name, body, expected_status, expected_text in SCENARIOS:
        status, text = send(body)
        ok = status == expected_status and text == expected_text
        failures += 0 if ok else 1
        mark = "✓" if ok else "✗"
        print(f"{mark} {name:<40} {status} {text!r} (expected {expected_status} {expected_text!r})")

    print_header("Summary")
    print(f"{len(SCENARIOS) - failures}/{len(SCENARIOS)} scenarios passed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
