"""
AppBuilder Stream SDK - Error Tests
"""

from appbuilder_stream.errors import (
    AppBuilderStreamError,
    APIError,
    ConfigurationError,
    MalformedFrameError,
    MalformedPayloadError,
    TransportError,
)


class TestAppBuilderStreamError:
    """Tests for the base error."""

    def test_error_creation(self):
        error = AppBuilderStreamError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "unknown"
        assert error.details == {}

    def test_request_id_prefix(self):
        error = AppBuilderStreamError("broken", request_id="req-1")
        assert str(error) == "requestID=req-1, broken"

    def test_empty_request_id_still_tagged(self):
        error = AppBuilderStreamError("broken", request_id="")
        assert str(error) == "requestID=, broken"

    def test_error_repr(self):
        error = AppBuilderStreamError("Test error", code="test_code", request_id="r")
        repr_str = repr(error)
        assert "AppBuilderStreamError" in repr_str
        assert "Test error" in repr_str
        assert "'r'" in repr_str


class TestSubclasses:
    """Tests for the concrete errors."""

    def test_transport_error(self):
        error = TransportError("timeout", request_id="r1")
        assert str(error) == "requestID=r1, err=timeout"
        assert error.code == "transport_error"
        assert isinstance(error, AppBuilderStreamError)

    def test_malformed_frame_error(self):
        error = MalformedFrameError("internal error", request_id="r1")
        assert str(error) == "requestID=r1, body=internal error"
        assert error.body == "internal error"
        assert error.code == "malformed_frame"

    def test_malformed_payload_error(self):
        error = MalformedPayloadError("Expecting value", request_id="r1")
        assert "err=Expecting value" in str(error)
        assert error.code == "malformed_payload"

    def test_code_cannot_be_overridden(self):
        assert TransportError("x", code="other").code == "transport_error"

    def test_api_error(self):
        error = APIError(401, '{"code":"Unauthorized"}', request_id="r1")
        assert error.status_code == 401
        assert error.body == '{"code":"Unauthorized"}'
        assert "status=401" in str(error)
        assert error.code == "api_error"

    def test_configuration_error(self):
        error = ConfigurationError("token missing")
        assert str(error) == "token missing"
        assert error.request_id is None
