"""Domain models for the Worker Scoring Service."""

from .exceptions import IncompletePayloadError, InvalidPayloadError, PayloadError
from .models import BestWorkerPayload, Job, Selector, Worker
from .parsing import parse_payload

__all__ = [
    "Job",
    "Worker",
    "Selector",
    "BestWorkerPayload",
    "parse_payload",
    "PayloadError",
    "InvalidPayloadError",
    "IncompletePayloadError",
]
