"""
AppBuilder Stream SDK - SSE Reader Tests
"""

import pytest

from appbuilder_stream.sse import SSEReader


class TestSSEReader:
    """Tests for SSEReader."""

    def test_reads_lines_in_order(self):
        reader = SSEReader(["data: 1", "data: 2"])
        assert reader.read_message_line() == "data: 1"
        assert reader.read_message_line() == "data: 2"
        assert reader.read_message_line() is None

    def test_skips_blank_lines(self):
        reader = SSEReader(["", "   ", "\r\n", "data: x", ""])
        assert reader.read_message_line() == "data: x"
        assert reader.read_message_line() is None

    def test_strips_line_breaks(self):
        reader = SSEReader(["data: x\r\n"])
        assert reader.read_message_line() == "data: x"

    def test_decodes_bytes(self):
        reader = SSEReader([b"data: \xe4\xbd\xa0\xe5\xa5\xbd\n"])
        assert reader.read_message_line() == "data: 你好"

    def test_end_of_input_is_sticky(self):
        reader = SSEReader([])
        assert reader.read_message_line() is None
        assert reader.read_message_line() is None

    def test_errors_propagate(self):
        def lines():
            yield "data: 1"
            raise ConnectionError("dropped")

        reader = SSEReader(lines())
        assert reader.read_message_line() == "data: 1"
        with pytest.raises(ConnectionError):
            reader.read_message_line()
