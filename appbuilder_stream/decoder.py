"""
AppBuilder Stream SDK - Event Decoder & Answer Assembler

Turns raw wire records into ``Event``/``Answer`` values.

Event outputs are decoded best-effort: a malformed payload, or a field of the
wrong type, leaves the affected part of the detail at its zero value instead
of failing the whole answer.
"""

from __future__ import annotations

import dataclasses
import json
import typing
from typing import Any, Dict, Union

from .errors import MalformedPayloadError
from .models import Answer, Event, RawEventDetail, RawResponse
from .observability import get_logger
from .registry import resolve_detail_type


logger = get_logger(__name__)

_MISSING = object()


# ============================================================
# Detail Decoding
# ============================================================

def _zero_value(hint: Any) -> Any:
    origin = typing.get_origin(hint)
    if origin is Union:
        return None
    if origin is list or hint is list:
        return []
    if origin is dict or hint is dict:
        return {}
    if dataclasses.is_dataclass(hint):
        return hint()
    return {str: "", int: 0, float: 0.0, bool: False}.get(hint)


def _coerce(value: Any, hint: Any) -> Any:
    """Convert a JSON value to ``hint``, or return ``_MISSING`` on mismatch."""
    if hint is Any:
        return value

    origin = typing.get_origin(hint)
    if origin is Union:
        # Optional[X]: null keeps the default
        if value is None:
            return _MISSING
        inner = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _coerce(value, inner[0])

    if origin is list:
        if not isinstance(value, list):
            return _MISSING
        (item_hint,) = typing.get_args(hint) or (Any,)
        items = []
        for item in value:
            coerced = _coerce(item, item_hint)
            items.append(_zero_value(item_hint) if coerced is _MISSING else coerced)
        return items

    if origin is dict:
        return value if isinstance(value, dict) else _MISSING

    if dataclasses.is_dataclass(hint):
        if not isinstance(value, dict):
            return _MISSING
        return build_detail(hint, value)

    if hint is bool:
        return value if isinstance(value, bool) else _MISSING
    if hint is int:
        if isinstance(value, bool):
            return _MISSING
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value if isinstance(value, int) else _MISSING
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return _MISSING
        return float(value)
    if hint is str:
        return value if isinstance(value, str) else _MISSING

    return _MISSING


def build_detail(detail_type: type, data: Dict[str, Any]) -> Any:
    """
    Build a detail dataclass from a decoded JSON object.

    Each field is taken independently. Missing fields and fields whose value
    has the wrong type keep their defaults; unknown keys are ignored.
    """
    hints = typing.get_type_hints(detail_type)
    kwargs = {}
    for f in dataclasses.fields(detail_type):
        key = f.metadata.get("key", f.name)
        if key not in data:
            continue
        value = _coerce(data[key], hints[f.name])
        if value is not _MISSING:
            kwargs[f.name] = value
    return detail_type(**kwargs)


def decode_detail(content_type: str, outputs: Any) -> Any:
    """
    Decode event outputs into the detail shape registered for ``content_type``.

    Never raises. ``outputs`` is either the already parsed JSON value or the
    raw payload as bytes, which is parsed first. Anything that is not a JSON
    object, a JSON string included, yields the zero-valued detail.
    """
    detail_type = resolve_detail_type(content_type)

    if isinstance(outputs, (bytes, bytearray)):
        try:
            outputs = json.loads(outputs.decode("utf-8", errors="replace"))
        except (ValueError, RecursionError) as e:
            logger.debug(
                "Event outputs are not valid JSON",
                content_type=content_type,
                error=str(e),
            )
            return detail_type()

    if not isinstance(outputs, dict):
        if outputs is not None:
            logger.debug(
                "Event outputs are not a JSON object",
                content_type=content_type,
                outputs_type=type(outputs).__name__,
            )
        return detail_type()

    return build_detail(detail_type, outputs)


# ============================================================
# Events & Answers
# ============================================================

def decode_event(raw: RawEventDetail) -> Event:
    """Decode one raw record into an ``Event``."""
    return Event(
        code=raw.event_code,
        message=raw.event_message,
        status=raw.event_status,
        event_type=raw.event_type,
        content_type=raw.content_type,
        usage=raw.usage,
        detail=decode_detail(raw.content_type, raw.outputs),
        tool_calls=list(raw.tool_calls),
        event_id=raw.event_id,
    )


def assemble_answer(raw: RawResponse) -> Answer:
    """
    Build an ``Answer`` from a raw response.

    Events keep the order of ``raw.content``.
    """
    return Answer(
        message_id=raw.message_id,
        answer=raw.answer,
        events=[decode_event(record) for record in raw.content],
        code=raw.code,
        message=raw.message,
        request_id=raw.request_id,
        conversation_id=raw.conversation_id,
        is_completion=raw.is_completion,
    )


def parse_raw_response(
    data: Union[str, bytes, Dict[str, Any]],
    request_id: str = ""
) -> RawResponse:
    """
    Parse a JSON document into a ``RawResponse``.

    Raises:
        MalformedPayloadError: if the document is not valid JSON (too deeply
            nested included), not an object, or any field other than an
            event's ``outputs`` has the wrong type.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayloadError(str(e), request_id=request_id) from e

    if isinstance(data, str):
        try:
            data = json.loads(data)
        except RecursionError as e:
            raise MalformedPayloadError(
                "JSON nesting too deep", request_id=request_id
            ) from e
        except ValueError as e:
            raise MalformedPayloadError(str(e), request_id=request_id) from e

    if not isinstance(data, dict):
        raise MalformedPayloadError(
            f"expected a JSON object, got {type(data).__name__}",
            request_id=request_id
        )

    try:
        return RawResponse.from_dict(data)
    except ValueError as e:
        raise MalformedPayloadError(str(e), request_id=request_id) from e


def decode_answer(
    data: Union[str, bytes, Dict[str, Any]],
    request_id: str = ""
) -> Answer:
    """Parse and assemble a JSON document in one step."""
    return assemble_answer(parse_raw_response(data, request_id=request_id))
