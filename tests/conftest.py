"""
AppBuilder Stream SDK - Pytest Configuration

Shared fixtures: wire payload builders and fake response bodies.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest


def make_record(
    content_type: str = "text",
    outputs: Any = None,
    event_code: int = 0,
    event_message: str = "",
    event_status: str = "done",
    event_type: str = "",
    **extra
) -> Dict[str, Any]:
    """Build one ``content[]`` record as the API sends it."""
    record = {
        "event_code": event_code,
        "event_message": event_message,
        "event_type": event_type,
        "event_id": extra.pop("event_id", "0"),
        "event_status": event_status,
        "content_type": content_type,
        "outputs": outputs if outputs is not None else {},
        "usage": extra.pop("usage", {}),
        "tool_calls": extra.pop("tool_calls", []),
    }
    record.update(extra)
    return record


def make_response(
    answer: str = "",
    content: Optional[List[Dict[str, Any]]] = None,
    request_id: str = "req-1",
    message_id: str = "msg-1",
    **extra
) -> Dict[str, Any]:
    """Build a full response object as the API sends it."""
    response = {
        "request_id": request_id,
        "date": "2024-06-01T10:00:00Z",
        "answer": answer,
        "conversation_id": "conv-1",
        "message_id": message_id,
        "is_completion": False,
        "content": content if content is not None else [],
    }
    response.update(extra)
    return response


def sse_line(payload: Dict[str, Any]) -> str:
    return "data: " + json.dumps(payload, ensure_ascii=False)


class FakeReader:
    """Line source handing out a fixed list of lines, None at the end."""

    def __init__(self, lines: List[str], error: Optional[Exception] = None):
        self._lines = list(lines)
        self._error = error
        self.calls = 0

    def read_message_line(self) -> Optional[str]:
        self.calls += 1
        if self._lines:
            return self._lines.pop(0)
        if self._error is not None:
            raise self._error
        return None


@pytest.fixture
def body():
    """A closable body mock."""
    return MagicMock()


@pytest.fixture
def json_body():
    """Factory for a body whose read() returns the given payload."""
    def _make(payload: Any) -> MagicMock:
        mock = MagicMock()
        if isinstance(payload, (bytes, str)):
            data = payload.encode("utf-8") if isinstance(payload, str) else payload
        else:
            data = json.dumps(payload).encode("utf-8")
        mock.read.return_value = data
        return mock
    return _make


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging changes to the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
