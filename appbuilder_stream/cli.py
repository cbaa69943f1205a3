"""Decode captured AppBuilder responses from the command line."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from typing import Any, Dict, Optional, Sequence, TextIO

from .errors import AppBuilderStreamError
from .iterators import AnswerIterator, OnceIterator, StreamIterator
from .models import Answer
from .observability import setup_logging
from .sse import SSEReader


def detail_to_dict(value: Any) -> Any:
    """Serialise a detail using wire keys (``Reference.from_`` is ``from``)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.metadata.get("key", f.name): detail_to_dict(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, list):
        return [detail_to_dict(item) for item in value]
    return value


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    return {
        "request_id": answer.request_id,
        "message_id": answer.message_id,
        "answer": answer.answer,
        "code": answer.code,
        "message": answer.message,
        "events": [
            {
                "code": event.code,
                "status": event.status,
                "event_type": event.event_type,
                "content_type": event.content_type,
                "detail_type": type(event.detail).__name__,
                "detail": detail_to_dict(event.detail),
                "tool_calls": [tc.to_dict() for tc in event.tool_calls],
            }
            for event in answer.events
        ],
    }


def open_iterator(path: str, batch: bool, request_id: str) -> AnswerIterator:
    if batch:
        return OnceIterator(request_id, open(path, "rb"))
    body = open(path, "r", encoding="utf-8")
    return StreamIterator(request_id, SSEReader(body), body)


def decode_file(
    path: str,
    batch: bool = False,
    request_id: str = "",
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Print one JSON line per answer; 0 on normal end, 1 on a stream error."""
    out = out or sys.stdout
    err = err or sys.stderr
    with open_iterator(path, batch, request_id) as answers:
        try:
            for answer in answers:
                out.write(json.dumps(answer_to_dict(answer), ensure_ascii=False, default=str))
                out.write("\n")
        except AppBuilderStreamError as e:
            err.write(f"{e}\n")
            return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appbuilder-stream",
        description="Decode captured AppBuilder conversation responses.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser("decode", help="decode an SSE transcript or JSON body")
    decode.add_argument("path", help="file holding the captured response")
    decode.add_argument("--batch", action="store_true", help="file is one JSON body, not SSE")
    decode.add_argument("--request-id", default="", help="request id used to tag errors")
    decode.add_argument("--log-level", default="WARNING")
    decode.add_argument("--text-logs", action="store_true", help="plain text instead of JSON logs")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, json_output=not args.text_logs)
    try:
        return decode_file(args.path, batch=args.batch, request_id=args.request_id)
    except OSError as e:
        sys.stderr.write(f"cannot read {args.path}: {e}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
