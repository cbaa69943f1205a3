"""
AppBuilder Stream SDK - Answer Iterators

Two ways to consume a run:

- ``StreamIterator``: one ``Answer`` per ``data:`` line of an SSE stream
- ``OnceIterator``: a single ``Answer`` decoded from a complete JSON body

Both follow the same contract. ``next()`` returns an ``Answer``, raises
``StopIteration`` when the run ended normally, or raises an
``AppBuilderStreamError`` when it broke. After either terminal signal the
iterator is spent: further calls repeat the same signal and never touch
the (already closed) body again.

Example:
    >>> with client.run("Hello", conversation_id, stream=True) as answers:
    ...     for answer in answers:
    ...         print(answer.answer, end="", flush=True)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from .decoder import assemble_answer, parse_raw_response
from .errors import AppBuilderStreamError, MalformedFrameError, TransportError
from .models import Answer
from .observability import get_logger


logger = get_logger(__name__)

DATA_PREFIX = "data:"


class IteratorState(str, Enum):
    """Lifecycle of an answer iterator."""
    ACTIVE = "active"         # More answers may follow
    EXHAUSTED = "exhausted"   # Ended normally
    FAILED = "failed"         # Ended with an error


class AnswerIterator(ABC):
    """
    Common interface of the stream and once iterators.

    Owns ``body`` until it reaches a terminal state, then closes it
    exactly once.
    """

    def __init__(self, request_id: str, body: Any):
        self.request_id = request_id
        self._body = body
        self._state = IteratorState.ACTIVE
        self._error: Optional[AppBuilderStreamError] = None
        self._closed = False

    @property
    def state(self) -> IteratorState:
        return self._state

    def next(self) -> Answer:
        """
        Get the next answer.

        Raises:
            StopIteration: the run ended normally
            AppBuilderStreamError: the run broke; the iterator is spent
        """
        if self._state is IteratorState.EXHAUSTED:
            raise StopIteration
        if self._state is IteratorState.FAILED:
            raise self._error
        return self._next()

    @abstractmethod
    def _next(self) -> Answer:
        """Produce one answer while the iterator is active."""

    def __iter__(self) -> AnswerIterator:
        return self

    def __next__(self) -> Answer:
        return self.next()

    def _exhaust(self) -> None:
        self._release()
        self._state = IteratorState.EXHAUSTED
        logger.debug("Answer iterator exhausted", request_id=self.request_id)

    def _fail(self, error: AppBuilderStreamError) -> AppBuilderStreamError:
        self._release()
        self._state = IteratorState.FAILED
        self._error = error
        logger.warning(
            "Answer iterator failed",
            request_id=self.request_id,
            error_code=error.code,
        )
        return error

    def _release(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._body.close()

    def close(self) -> None:
        """Abandon the iterator and release its body."""
        if self._state is IteratorState.ACTIVE:
            self._exhaust()

    def __enter__(self) -> AnswerIterator:
        return self

    def __exit__(self, *args) -> None:
        self.close()


class StreamIterator(AnswerIterator):
    """
    Iterator over an SSE response.

    Args:
        request_id: Request id used to tag errors.
        reader: Line source with ``read_message_line() -> Optional[str]``.
        body: Underlying response, closed on every terminal path.
    """

    def __init__(self, request_id: str, reader: Any, body: Any):
        super().__init__(request_id, body)
        self._reader = reader

    def _next(self) -> Answer:
        try:
            line = self._reader.read_message_line()
        except Exception as e:
            raise self._fail(TransportError(str(e), request_id=self.request_id)) from e

        if line is None:
            self._exhaust()
            raise StopIteration

        if not line.startswith(DATA_PREFIX):
            # not SSE framed, usually a transport level error body
            raise self._fail(MalformedFrameError(line, request_id=self.request_id))

        try:
            raw = parse_raw_response(line[len(DATA_PREFIX):], request_id=self.request_id)
        except AppBuilderStreamError as e:
            self._fail(e)
            raise

        return assemble_answer(raw)


class OnceIterator(AnswerIterator):
    """
    Iterator over a complete (non-streaming) JSON body.

    Yields exactly one answer.

    Args:
        request_id: Request id used to tag errors.
        body: Response with ``read() -> bytes`` and ``close()``.
    """

    def _next(self) -> Answer:
        try:
            data = self._body.read()
        except Exception as e:
            raise self._fail(TransportError(str(e), request_id=self.request_id)) from e
        finally:
            self._release()

        try:
            raw = parse_raw_response(data, request_id=self.request_id)
        except AppBuilderStreamError as e:
            self._fail(e)
            raise

        self._exhaust()
        return assemble_answer(raw)
