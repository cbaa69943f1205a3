"""
AppBuilder Stream SDK - Synchronous Client

Thin transport around the conversation API. Builds the run request, checks
the HTTP status and hands the open response to the matching answer iterator.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from .config import ClientConfig
from .errors import APIError, MalformedPayloadError, TransportError
from .iterators import AnswerIterator, OnceIterator, StreamIterator
from .models import Action, RunRequest, Tool, ToolChoice, ToolOutput
from .observability import get_logger
from .sse import SSEReader


__version__ = "1.0.0"

REQUEST_ID_HEADER = "X-Appbuilder-Request-Id"

logger = get_logger(__name__)


class AppBuilderClient:
    """
    AppBuilder conversation client.

    Args:
        app_id: Id of the published AppBuilder app.
        token: Secret key. If not provided, reads from APPBUILDER_TOKEN env var.
        gateway_url: Gateway base URL. Defaults to GATEWAY_URL_V2 or
            https://qianfan.baidubce.com
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).

    Example:
        >>> client = AppBuilderClient("app-id", token="...")
        >>> conversation_id = client.create_conversation()
        >>> for answer in client.run("Hello", conversation_id, stream=True):
        ...     print(answer.answer, end="", flush=True)
    """

    def __init__(
        self,
        app_id: str,
        token: Optional[str] = None,
        gateway_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.app_id = app_id
        self.config = ClientConfig.from_env(
            token=token, gateway_url=gateway_url, timeout=timeout
        )

        self._client = httpx.Client(
            base_url=self.config.gateway_url,
            headers={
                "X-Appbuilder-Authorization": self.config.token,
                "Content-Type": "application/json",
                "User-Agent": f"appbuilder-stream-python/{__version__}"
            },
            timeout=self.config.timeout,
            transport=transport,
        )

    # ============================================================
    # Conversation API
    # ============================================================

    def create_conversation(self) -> str:
        """
        Create a conversation for this app.

        Returns:
            The new conversation id.
        """
        response = self._send("/v2/app/conversation", {"app_id": self.app_id}, stream=False)
        request_id = response.headers.get(REQUEST_ID_HEADER, "")
        try:
            self._check_response(response, request_id)
            data = response.json()
        except ValueError as e:
            raise MalformedPayloadError(str(e), request_id=request_id) from e
        finally:
            response.close()

        if not isinstance(data, dict) or not isinstance(data.get("conversation_id"), str):
            raise MalformedPayloadError(
                "conversation_id missing from response", request_id=request_id
            )
        return data["conversation_id"]

    def run(
        self,
        query: str,
        conversation_id: str,
        stream: bool = False,
        file_ids: Optional[List[str]] = None,
        tools: Optional[List[Tool]] = None,
        tool_outputs: Optional[List[ToolOutput]] = None,
        tool_choice: Optional[ToolChoice] = None,
        action: Optional[Action] = None,
        end_user_id: Optional[str] = None,
    ) -> AnswerIterator:
        """
        Run the app on a query.

        Args:
            query: User query.
            conversation_id: Conversation from ``create_conversation``.
            stream: Stream answers as they are generated.
            file_ids: Previously uploaded files to attach.
            tools: Functions the agent may call.
            tool_outputs: Results of tool calls from the previous answer.
            tool_choice: Force a specific function call.
            action: e.g. ``Action.resume(event_id)`` to resume a chatflow.
            end_user_id: Id of the end user on whose behalf the app runs.

        Returns:
            A ``StreamIterator`` when ``stream`` is true, else a ``OnceIterator``.
        """
        request = RunRequest(
            app_id=self.app_id,
            query=query,
            conversation_id=conversation_id,
            stream=stream,
            end_user_id=end_user_id,
            file_ids=file_ids or [],
            tools=tools or [],
            tool_outputs=tool_outputs or [],
            tool_choice=tool_choice,
            action=action,
        )

        response = self._send("/v2/app/conversation/runs", request.to_dict(), stream=True)
        request_id = response.headers.get(REQUEST_ID_HEADER, "")
        try:
            self._check_response(response, request_id)
        except APIError:
            response.close()
            raise

        if stream:
            return StreamIterator(request_id, SSEReader(response.iter_lines()), response)
        return OnceIterator(request_id, response)

    # ============================================================
    # Private methods
    # ============================================================

    def _send(self, path: str, payload: Dict[str, Any], stream: bool) -> httpx.Response:
        """Send a POST request; the caller owns (and closes) the response."""
        logger.debug("Sending request", path=path, app_id=self.app_id)
        try:
            request = self._client.build_request("POST", path, json=payload)
            return self._client.send(request, stream=stream)
        except httpx.TimeoutException as e:
            raise TransportError("Request timed out") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}") from e

    def _check_response(self, response: httpx.Response, request_id: str) -> None:
        """Raise APIError for non-success statuses."""
        if response.status_code < 400:
            return
        try:
            body = response.read().decode("utf-8", errors="replace")
        except httpx.HTTPError:
            body = ""
        logger.warning(
            "Request failed",
            request_id=request_id,
            status_code=response.status_code,
        )
        raise APIError(response.status_code, body, request_id=request_id)

    # ============================================================
    # Context Manager
    # ============================================================

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
