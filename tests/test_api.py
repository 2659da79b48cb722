"""Tests for the HTTP surface.

Covers the score route's contract (plain-text 0/100, plain-text 400s), the
function key check and request context propagation.
"""

import json
import logging
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from tests.helpers import build_payload_dict, selector
from worker_scoring.api import SCORE_ROUTE, create_app
from worker_scoring.config import AppConfig, EnvironmentConfig, LoggingConfig


@pytest.fixture
def client():
    """Client for an app without a function key."""
    return TestClient(create_app(AppConfig(), EnvironmentConfig()))


@pytest.fixture
def keyed_client():
    """Client for an app that requires the function key 'secret-key'."""
    return TestClient(create_app(AppConfig(), EnvironmentConfig(function_key="secret-key")))


def post_json(client, data, **kwargs):
    return client.post(SCORE_ROUTE, content=json.dumps(data), **kwargs)


class TestScoreRoute:
    """Tests for POST /api/ScoreWorker."""

    def test_no_selectors_full_match(self, client):
        """Scenario: licensure and jurisdiction both match, no selectors → 0."""
        response = post_json(client, build_payload_dict())

        assert response.status_code == 200
        assert response.text == "0"
        assert response.headers["content-type"].startswith("text/plain")

    def test_no_selectors_jurisdiction_mismatch(self, client):
        """Scenario: jurisdiction mismatch without selectors → 100."""
        response = post_json(client, build_payload_dict(worker_jurisdictions="NV"))

        assert response.status_code == 200
        assert response.text == "100"

    def test_licensure_equals_threshold(self, client):
        """Scenario: licensure equals 5 with shared certification → 100."""
        data = build_payload_dict(selectors=[selector("licensure", "equals", 5)])

        response = post_json(client, data)

        assert response.text == "100"

    def test_jurisdiction_notequals(self, client):
        """Scenario: jurisdiction notequals 10, CA vs NV → 100."""
        data = build_payload_dict(
            worker_jurisdictions="NV",
            selectors=[selector("jurisdiction", "notequals", 10)],
        )

        response = post_json(client, data)

        assert response.text == "100"

    def test_zero_value_unknown_selector(self, client):
        """Scenario: only a zero-value unknown selector → 100."""
        data = build_payload_dict(selectors=[selector("unknown", "x", 0)])

        response = post_json(client, data)

        assert response.text == "100"

    def test_malformed_body(self, client):
        """Scenario: body 'not json' → 400 Invalid JSON payload."""
        response = client.post(SCORE_ROUTE, content="not json")

        assert response.status_code == 400
        assert response.text == "Invalid JSON payload"
        assert response.headers["content-type"].startswith("text/plain")

    def test_wrong_shape(self, client):
        """A selector value that is not an integer is a shape failure."""
        data = build_payload_dict(selectors=[{"key": "licensure", "operator": "equals", "value": "five"}])

        response = post_json(client, data)

        assert response.status_code == 400
        assert response.text == "Invalid JSON payload"

    @pytest.mark.parametrize(
        "data",
        [
            {"job": {"certificationId": "RN"}},
            {"worker": {"Id": "w-1"}},
            {"job": None, "worker": None},
            None,
        ],
    )
    def test_missing_job_or_worker(self, client, data):
        response = post_json(client, data)

        assert response.status_code == 400
        assert response.text == "Payload must include job + worker"

    def test_unknown_fields_and_casing_tolerated(self, client):
        """Extra properties are ignored and property names match case-insensitively."""
        data = {
            "JOB": {"CERTIFICATIONID": "RN", "jurisdictionid": "CA", "shift": "night"},
            "Worker": {"id": "w-1", "CertificationIds": "RN", "jurisdictionIds": "NV"},
            "Selectors": [],
            "requestedBy": "scheduler",
        }

        response = post_json(client, data)

        assert response.status_code == 200
        assert response.text == "100"

    def test_get_not_allowed(self, client):
        assert client.get(SCORE_ROUTE).status_code == 405

    def test_no_other_routes(self, client):
        assert client.get("/health").status_code == 404
        assert client.post("/api/ScoreWorkers", content="{}").status_code == 404

    @pytest.mark.parametrize("worker_id", [42, 4.5, {"value": "w-1"}, ["w-1"], True])
    def test_worker_id_of_any_type_scored(self, client, worker_id):
        """The worker id plays no part in scoring, so its type does not matter."""
        data = build_payload_dict(worker_jurisdictions="NV")
        data["worker"]["Id"] = worker_id

        response = post_json(client, data)

        assert response.status_code == 200
        assert response.text == "100"

    def test_byte_order_mark_accepted(self, client):
        body = b"\xef\xbb\xbf" + json.dumps(build_payload_dict(worker_jurisdictions="NV")).encode("utf-8")

        response = client.post(SCORE_ROUTE, content=body)

        assert response.status_code == 200
        assert response.text == "100"

    @pytest.mark.parametrize("value", [2**31, -(2**31) - 1, 2**40])
    def test_selector_value_outside_32_bits_rejected(self, client, value):
        data = build_payload_dict(selectors=[selector("licensure", "equals", value)])

        response = post_json(client, data)

        assert response.status_code == 400
        assert response.text == "Invalid JSON payload"

    def test_identical_requests_identical_results(self, client):
        data = build_payload_dict(selectors=[selector("licensure", "greaterthanequal", 2)])

        first = post_json(client, data)
        second = post_json(client, data)

        assert first.text == second.text == "100"


class TestFunctionKey:
    """Tests for the function key check."""

    def test_missing_key_rejected(self, keyed_client):
        response = post_json(keyed_client, build_payload_dict())

        assert response.status_code == 401
        assert response.text == "Unauthorized"

    def test_wrong_key_rejected(self, keyed_client):
        response = post_json(
            keyed_client, build_payload_dict(), headers={"x-functions-key": "nope"}
        )

        assert response.status_code == 401

    def test_header_key_accepted(self, keyed_client):
        response = post_json(
            keyed_client, build_payload_dict(), headers={"x-functions-key": "secret-key"}
        )

        assert response.status_code == 200
        assert response.text == "0"

    def test_query_key_accepted(self, keyed_client):
        response = keyed_client.post(
            SCORE_ROUTE,
            params={"code": "secret-key"},
            content=json.dumps(build_payload_dict(worker_jurisdictions="NV")),
        )

        assert response.status_code == 200
        assert response.text == "100"

    def test_key_checked_before_body(self, keyed_client):
        """An unauthenticated malformed body gets 401, not 400."""
        response = keyed_client.post(SCORE_ROUTE, content="not json")

        assert response.status_code == 401


class TestRequestContext:
    """Tests for request id propagation and diagnostic logging."""

    def test_request_id_generated(self, client):
        response = post_json(client, build_payload_dict())

        assert response.headers.get("x-request-id")

    def test_request_id_echoed(self, client):
        response = post_json(
            client, build_payload_dict(), headers={"x-request-id": "req-123"}
        )

        assert response.headers["x-request-id"] == "req-123"

    def test_score_logged_with_rationale(self, client, caplog):
        caplog.set_level(logging.INFO, logger="worker_scoring.api.app")

        post_json(client, build_payload_dict(worker_jurisdictions="NV"))

        computed = [r for r in caplog.records if getattr(r, "event", None) == "score.computed"]
        assert len(computed) == 1
        record = computed[0]
        assert record.result == 100
        assert record.score == 2
        assert record.score_required == 2
        assert record.worker_id == "worker-1"
        assert record.component == "api"

    def test_payload_logging_can_be_disabled(self, caplog):
        app_config = AppConfig(logging=LoggingConfig(log_payloads=False))
        client = TestClient(create_app(app_config, EnvironmentConfig()))
        caplog.set_level(logging.INFO, logger="worker_scoring.api.app")

        post_json(client, build_payload_dict())

        events = [getattr(r, "event", None) for r in caplog.records]
        assert "score.request.received" not in events
        assert "score.payload.parsed" not in events
        assert "score.computed" in events

    def test_raw_body_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="worker_scoring.api.app")

        client.post(SCORE_ROUTE, content="not json")

        received = [r for r in caplog.records if getattr(r, "event", None) == "score.request.received"]
        assert received[0].body == "not json"
        rejected = [r for r in caplog.records if getattr(r, "event", None) == "score.request.rejected"]
        assert rejected[0].error_type == "InvalidPayloadError"

    def test_logging_failure_does_not_affect_response(self, client):
        with patch("worker_scoring.api.app.logger.log", side_effect=RuntimeError("log sink down")):
            response = post_json(client, build_payload_dict(worker_jurisdictions="NV"))

        assert response.status_code == 200
        assert response.text == "100"

