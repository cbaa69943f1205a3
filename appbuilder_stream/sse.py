"""
AppBuilder Stream SDK - SSE Line Reader

Minimal line source for the stream iterator: hands out one non-blank
message line per call. No event ids, retry intervals or reconnection.
"""

from typing import Iterable, Iterator, Optional, Union


class SSEReader:
    """
    Reads message lines from an iterable of lines.

    Usage:
        reader = SSEReader(response.iter_lines())
        line = reader.read_message_line()  # None at end of input

    Blank keep-alive lines are skipped and trailing line breaks stripped.
    Exceptions raised by the underlying iterable propagate unchanged.
    """

    def __init__(self, lines: Iterable[Union[str, bytes]]):
        self._lines: Iterator[Union[str, bytes]] = iter(lines)
        self._exhausted = False

    def read_message_line(self) -> Optional[str]:
        """Get the next message line, or None at end of input."""
        if self._exhausted:
            return None

        for line in self._lines:
            if isinstance(line, (bytes, bytearray)):
                line = line.decode("utf-8", errors="replace")
            line = line.rstrip("\r\n")
            if line.strip():
                return line

        self._exhausted = True
        return None
