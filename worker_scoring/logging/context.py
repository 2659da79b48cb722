"""Request-scoped context for structured logging.

Fields pushed here (request_id, client, path, ...) are attached to every log
record emitted while they are active. Storage is a ContextVar, so concurrent
requests served by the same event loop never see each other's fields.
"""

import uuid
from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Args:
        **kwargs: Fields to add; they override existing fields of the same name

    Returns:
        Token for pop_log_context()

    Example:
        >>> token = push_log_context(request_id="3f2a9c")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context captured by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Intended for tests."""
    LogContextVar.set({})


def new_request_id() -> str:
    """Generate a short random request identifier."""
    return uuid.uuid4().hex[:16]


class log_context:
    """Context manager that scopes logging fields to a block.

    Example:
        >>> with log_context(request_id="3f2a9c", path="/api/ScoreWorker"):
        ...     logger.info("Scoring request")  # includes request_id and path
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
