"""Conversion of raw request bodies into scoring payloads."""

import json
from typing import Union

from pydantic import ValidationError

from .exceptions import IncompletePayloadError, InvalidPayloadError
from .models import BestWorkerPayload


def parse_payload(body: Union[str, bytes]) -> BestWorkerPayload:
    """Parse a raw JSON body into a complete BestWorkerPayload.

    Args:
        body: Raw request body (UTF-8 bytes, optionally BOM-prefixed, or text)

    Returns:
        Payload with both job and worker present

    Raises:
        InvalidPayloadError: If the body is not UTF-8 JSON or does not fit the payload shape
        IncompletePayloadError: If the body is JSON ``null`` or job/worker is absent
    """
    if isinstance(body, bytes):
        try:
            # A leading byte order mark is skipped
            body = body.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidPayloadError(f"Body is not valid UTF-8: {e}") from e

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise InvalidPayloadError(f"Body is not valid JSON: {e}") from e

    # A literal null deserializes to "no payload", which is reported as missing parties
    if data is None:
        raise IncompletePayloadError("Body is JSON null")

    if not isinstance(data, dict):
        raise InvalidPayloadError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        payload = BestWorkerPayload.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append(f"{field_path}: {error['msg']}")
        raise InvalidPayloadError("; ".join(errors)) from e

    if not payload.is_complete:
        missing = [name for name in ("job", "worker") if getattr(payload, name) is None]
        raise IncompletePayloadError(f"Missing: {', '.join(missing)}")

    return payload
