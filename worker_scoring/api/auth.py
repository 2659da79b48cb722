"""Function key check for the scoring route.

Callers present the key either in the ``x-functions-key`` header or in the
``code`` query parameter. When no key is configured every request passes.
"""

import hmac
from typing import Optional

from fastapi import Header, Query, Request

FUNCTION_KEY_HEADER = "x-functions-key"
FUNCTION_KEY_QUERY_PARAM = "code"


class FunctionKeyError(Exception):
    """Request did not carry the configured function key."""


def key_matches(supplied: Optional[str], expected: str) -> bool:
    """Compare keys in constant time."""
    if not supplied:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def require_function_key(
    request: Request,
    header_key: Optional[str] = Header(None, alias=FUNCTION_KEY_HEADER),
    query_key: Optional[str] = Query(None, alias=FUNCTION_KEY_QUERY_PARAM),
) -> None:
    """FastAPI dependency that rejects requests without the configured key.

    Raises:
        FunctionKeyError: If a key is configured and neither location carries it
    """
    expected = request.app.state.function_key
    if not expected:
        return

    if key_matches(header_key, expected) or key_matches(query_key, expected):
        return

    raise FunctionKeyError("Missing or invalid function key")
