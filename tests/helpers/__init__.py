"""Test helper utilities for Worker Scoring Service tests."""

from .payloads import build_payload_dict, make_payload, selector

__all__ = ["build_payload_dict", "make_payload", "selector"]
