from __future__ import annotations

import json
import logging
import threading
from typing import Any, Iterable

from pydantic import ValidationError

from .errors import DecodeFailedError, FetchCancelledError
from .models import Record

logger = logging.getLogger(__name__)


def _parse_payload(payload: bytes, source_id: str) -> list[Any]:
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as exc:
        raise DecodeFailedError(
            source_id=source_id,
            message=f"Payload is not valid JSON: {exc}",
            cause=exc,
        ) from exc

    if not isinstance(data, list):
        raise DecodeFailedError(
            source_id=source_id,
            message=f"Expected a JSON array of records, got {type(data).__name__}",
        )
    return data


def decode_records(
    payload: bytes,
    *,
    source_id: str,
    cancel_event: threading.Event | None = None,
) -> list[Record]:
    """
    Decode a JSON array of ``{"id", "user", "text"}`` objects into records.

    Items are validated one at a time so a cancelled fetch can stop between
    them. Order is preserved exactly as in the payload.
    """
    items = _parse_payload(payload, source_id)

    records: list[Record] = []
    for i, item in enumerate(items):
        if cancel_event is not None and cancel_event.is_set():
            raise FetchCancelledError(source_id=source_id, message=f"Cancelled while decoding item {i}")
        try:
            records.append(Record.model_validate(item, by_alias=True, by_name=False))
        except ValidationError as exc:
            raise DecodeFailedError(
                source_id=source_id,
                message=f"Item {i} does not match the record schema: {exc.errors()[0]['msg']}",
                cause=exc,
                index=i,
            ) from exc

    logger.debug("%s: decoded %d records", source_id, len(records))
    return records


def encode_records(records: Iterable[Record]) -> bytes:
    return json.dumps([r.to_wire() for r in records], ensure_ascii=False).encode("utf-8")
