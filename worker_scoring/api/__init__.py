"""HTTP surface of the Worker Scoring Service."""

from .app import SCORE_ROUTE, create_app

__all__ = ["create_app", "SCORE_ROUTE"]
