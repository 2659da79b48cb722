"""Utility functions for parsing licensure and jurisdiction code lists."""

from .codes import join_codes, split_codes

__all__ = [
    "split_codes",
    "join_codes",
]
