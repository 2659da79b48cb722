"""Tests for logging context propagation."""

import pytest

from worker_scoring.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    new_request_id,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


def test_empty_context():
    assert get_log_context() == {}


def test_push_and_pop():
    token = push_log_context(request_id="abc123", path="/api/ScoreWorker")
    assert get_log_context() == {"request_id": "abc123", "path": "/api/ScoreWorker"}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    token1 = push_log_context(request_id="abc123")
    token2 = push_log_context(worker_id="w-1")
    assert get_log_context() == {"request_id": "abc123", "worker_id": "w-1"}

    pop_log_context(token2)
    assert get_log_context() == {"request_id": "abc123"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_context_override():
    """Pushing the same key overwrites until popped."""
    token1 = push_log_context(request_id="abc123")
    token2 = push_log_context(request_id="xyz789")
    assert get_log_context() == {"request_id": "xyz789"}

    pop_log_context(token2)
    assert get_log_context() == {"request_id": "abc123"}
    pop_log_context(token1)


def test_context_manager_nested():
    with log_context(request_id="abc123"):
        with log_context(method="POST"):
            assert get_log_context() == {"request_id": "abc123", "method": "POST"}
        assert get_log_context() == {"request_id": "abc123"}

    assert get_log_context() == {}


def test_context_manager_exception():
    """Context is restored even when the block raises."""
    with pytest.raises(ValueError):
        with log_context(request_id="abc123"):
            raise ValueError("boom")

    assert get_log_context() == {}


def test_context_isolation():
    """get_log_context returns a copy."""
    token = push_log_context(request_id="abc123")

    context = get_log_context()
    context["path"] = "modified"

    assert get_log_context() == {"request_id": "abc123"}
    pop_log_context(token)


def test_new_request_id():
    first = new_request_id()
    second = new_request_id()

    assert len(first) == 16
    assert first != second
