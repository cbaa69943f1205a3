"""
AppBuilder Stream SDK - Error Classes

Fatal errors raised while talking to the AppBuilder API or decoding its
responses. Every error carries the request id of the call that produced it
so failures can be correlated with server-side logs.

End-of-stream is not an error: iterators signal it with ``StopIteration``.
"""

from typing import Any, Dict, Optional


class AppBuilderStreamError(Exception):
    """
    Base exception for the AppBuilder Stream SDK.

    All SDK errors inherit from this class.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        request_id: Request ID for support/debugging
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: str = "unknown",
        request_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.request_id = request_id
        self.details = details or {}
        super().__init__(self._format())

    def _format(self) -> str:
        if self.request_id is None:
            return self.message
        return f"requestID={self.request_id}, {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"request_id={self.request_id!r})"
        )


class TransportError(AppBuilderStreamError):
    """
    The line source or body reader failed.

    This error occurs when:
    - The connection drops mid-stream
    - Reading the response body fails
    - The HTTP request itself could not be sent
    """

    def __init__(
        self,
        message: str = "Transport failure",
        **kwargs
    ):
        kwargs.pop("code", None)  # Remove if passed, we force it
        super().__init__(message=f"err={message}", code="transport_error", **kwargs)


class MalformedFrameError(AppBuilderStreamError):
    """
    A streaming line did not start with the ``data:`` prefix.

    Transport-level error bodies that are not SSE framed end up here.

    Attributes:
        body: The offending line, verbatim
    """

    def __init__(
        self,
        body: str,
        **kwargs
    ):
        kwargs.pop("code", None)  # Remove if passed, we force it
        super().__init__(message=f"body={body}", code="malformed_frame", **kwargs)
        self.body = body


class MalformedPayloadError(AppBuilderStreamError):
    """The top-level response JSON could not be parsed."""

    def __init__(
        self,
        message: str = "Malformed response payload",
        **kwargs
    ):
        kwargs.pop("code", None)  # Remove if passed, we force it
        super().__init__(message=f"err={message}", code="malformed_payload", **kwargs)


class APIError(AppBuilderStreamError):
    """
    The API answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code
        body: Raw response body text
    """

    def __init__(
        self,
        status_code: int,
        body: str = "",
        **kwargs
    ):
        kwargs.pop("code", None)  # Remove if passed, we force it
        super().__init__(
            message=f"status={status_code}, body={body}",
            code="api_error",
            **kwargs
        )
        self.status_code = status_code
        self.body = body


class ConfigurationError(AppBuilderStreamError):
    """
    Client configuration is incomplete.

    Raised when no token is passed and ``APPBUILDER_TOKEN`` is not set.
    """

    def __init__(
        self,
        message: str = "Invalid client configuration",
        **kwargs
    ):
        kwargs.pop("code", None)  # Remove if passed, we force it
        super().__init__(message=message, code="configuration_error", **kwargs)
