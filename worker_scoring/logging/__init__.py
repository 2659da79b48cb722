"""Structured logging for the Worker Scoring Service."""

import logging
from typing import Optional, Union

from .config import configure_logging
from .context import get_log_context, log_context

__all__ = [
    "ComponentLoggerAdapter",
    "configure_logging",
    "get_log_context",
    "get_logger",
    "log_context",
]


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges a fixed component field with per-call extra."""

    def process(self, msg, kwargs):
        """Merge adapter extra with call extra; call extra wins."""
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Get a logger with an optional default component field.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier to inject into all logs

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="api")
        >>> logger.info("Score computed", extra={"event": "score.computed"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
