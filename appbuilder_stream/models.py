"""
AppBuilder Stream SDK - Data Models

Dataclasses for the AppBuilder conversation API: the raw wire records,
the content-type specific event details, the decoded events and answers,
and the request models used by ``run``.

Wire field names are part of the API contract. Detail fields use the wire
name as attribute name unless a ``key`` is given in the field metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _field(data: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """
    Read a wire field of a fixed JSON type.

    Absent and null fields give ``default``.

    Raises:
        ValueError: if the field holds a value of another type.
    """
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass but never a valid JSON number here
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise ValueError(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _str(data: Dict[str, Any], key: str) -> str:
    return _field(data, key, str, "")


def _int(data: Dict[str, Any], key: str) -> int:
    return _field(data, key, int, 0)


def _objects(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    items = _field(data, key, list, [])
    if not all(isinstance(item, dict) for item in items):
        raise ValueError(f"{key} must be a list of objects")
    return items


# ============================================================
# Event Details
# ============================================================

@dataclass
class TextDetail:
    """Plain text output."""
    text: str = ""


@dataclass
class CodeDetail:
    """Code interpreter output: text, generated code and produced files."""
    text: str = ""
    code: str = ""
    files: List[str] = field(default_factory=list)


@dataclass
class Reference:
    """One retrieved knowledge base segment."""
    id: str = ""
    from_: str = field(default="", metadata={"key": "from"})
    url: str = ""
    content: str = ""
    segment_id: str = ""
    document_id: str = ""
    dataset_id: str = ""
    document_name: str = ""
    knowledgebase_id: str = ""


@dataclass
class RAGDetail:
    """Retrieval augmented answer with its references."""
    text: str = ""
    references: List[Reference] = field(default_factory=list)


@dataclass
class FunctionCallDetail:
    # text may be a string or a structured tool result
    text: Any = None
    image: str = ""
    audio: str = ""
    video: str = ""


@dataclass
class ImageDetail:
    image: str = ""


@dataclass
class AudioDetail:
    audio: str = ""


@dataclass
class VideoDetail:
    video: str = ""


@dataclass
class StatusDetail:
    """Status events carry no payload."""


@dataclass
class ChatflowInterruptDetail:
    """A workflow paused and is waiting to be resumed."""
    interrupt_event_id: str = ""
    interrupt_event_type: str = ""


@dataclass
class PublishMessageDetail:
    message: str = ""
    message_id: str = ""


@dataclass
class ChatReasoningDetail:
    """Model reasoning text emitted before the answer."""
    text: str = ""


@dataclass
class FollowUpQueries:
    follow_up_queries: List[str] = field(
        default_factory=list, metadata={"key": "follow_up_querys"}
    )


@dataclass
class JsonDetail:
    json: FollowUpQueries = field(default_factory=FollowUpQueries)


@dataclass
class DefaultDetail:
    """Fallback detail for content types this client does not know."""
    text: Optional[str] = None
    urls: Optional[List[str]] = None
    files: Optional[List[str]] = None
    image: Optional[str] = None
    video: Optional[str] = None
    audio: Optional[str] = None


# ============================================================
# Tool Calls & Usage
# ============================================================

@dataclass
class FunctionCallOption:
    """Function the agent asks the caller to run."""
    name: str = ""
    arguments: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}


@dataclass
class ToolCall:
    """Tool call emitted by the agent."""
    id: str
    function: FunctionCallOption
    type: str = "function"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ToolCall:
        """
        Create from dictionary.

        Raises:
            ValueError: if a field has the wrong JSON type.
        """
        func_data = _field(data, "function", dict, {})
        return cls(
            id=_str(data, "id"),
            type=_str(data, "type") or "function",
            function=FunctionCallOption(
                name=_str(func_data, "name"),
                arguments=_field(func_data, "arguments", dict, {})
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "id": self.id,
            "type": self.type,
            "function": self.function.to_dict()
        }


@dataclass
class Usage:
    """Token usage information."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Usage:
        """Create from dictionary; ``None`` gives empty usage."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"usage must be dict, got {type(data).__name__}")
        return cls(
            prompt_tokens=_int(data, "prompt_tokens"),
            completion_tokens=_int(data, "completion_tokens"),
            total_tokens=_int(data, "total_tokens"),
            name=_str(data, "name")
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
            "name": self.name
        }


# ============================================================
# Raw Wire Models
# ============================================================

@dataclass
class RawEventDetail:
    """One record of ``content[]`` before its outputs are decoded."""
    event_code: int = 0
    event_message: str = ""
    event_type: str = ""
    event_id: str = ""
    event_status: str = ""
    content_type: str = ""
    outputs: Any = None
    usage: Usage = field(default_factory=Usage)
    tool_calls: List[ToolCall] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RawEventDetail:
        """
        Create from dictionary.

        ``outputs`` is kept as is; its shape is only checked when decoded.

        Raises:
            ValueError: if any other field has the wrong JSON type.
        """
        return cls(
            event_code=_int(data, "event_code"),
            event_message=_str(data, "event_message"),
            event_type=_str(data, "event_type"),
            event_id=_str(data, "event_id"),
            event_status=_str(data, "event_status"),
            content_type=_str(data, "content_type"),
            outputs=data.get("outputs"),
            usage=Usage.from_dict(data.get("usage")),
            tool_calls=[ToolCall.from_dict(tc) for tc in _objects(data, "tool_calls")]
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "event_code": self.event_code,
            "event_message": self.event_message,
            "event_type": self.event_type,
            "event_id": self.event_id,
            "event_status": self.event_status,
            "content_type": self.content_type,
            "outputs": self.outputs,
            "usage": self.usage.to_dict(),
            "tool_calls": [tc.to_dict() for tc in self.tool_calls]
        }


@dataclass
class RawResponse:
    """
    One SSE data frame or one complete JSON body.

    ``code`` and ``message`` are only present when the call failed
    server-side.
    """
    request_id: str = ""
    date: str = ""
    answer: str = ""
    conversation_id: str = ""
    message_id: str = ""
    is_completion: bool = False
    content: List[RawEventDetail] = field(default_factory=list)
    code: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RawResponse:
        """
        Create RawResponse from a decoded JSON object.

        Absent and null fields take their zero value.

        Raises:
            ValueError: if a field, or a field of a ``content`` record, has
                the wrong JSON type.
        """
        return cls(
            request_id=_str(data, "request_id"),
            date=_str(data, "date"),
            answer=_str(data, "answer"),
            conversation_id=_str(data, "conversation_id"),
            message_id=_str(data, "message_id"),
            is_completion=_field(data, "is_completion", bool, False),
            content=[RawEventDetail.from_dict(c) for c in _objects(data, "content")],
            code=_str(data, "code"),
            message=_str(data, "message")
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {
            "request_id": self.request_id,
            "date": self.date,
            "answer": self.answer,
            "conversation_id": self.conversation_id,
            "message_id": self.message_id,
            "is_completion": self.is_completion,
            "content": [c.to_dict() for c in self.content]
        }
        if self.code:
            result["code"] = self.code
        if self.message:
            result["message"] = self.message
        return result


# ============================================================
# Decoded Models
# ============================================================

@dataclass(frozen=True)
class Event:
    """A decoded event; ``detail`` holds the content-type specific payload."""
    code: int
    message: str
    status: str
    event_type: str
    content_type: str
    usage: Usage
    detail: Any
    tool_calls: List[ToolCall] = field(default_factory=list)
    event_id: str = ""

    @property
    def is_interrupt(self) -> bool:
        """Check if the event pauses a chatflow until it is resumed."""
        return isinstance(self.detail, ChatflowInterruptDetail)


@dataclass(frozen=True)
class Answer:
    """One answer produced by an iterator."""
    message_id: str = ""
    answer: str = ""
    events: List[Event] = field(default_factory=list)
    code: str = ""
    message: str = ""
    request_id: str = ""
    conversation_id: str = ""
    is_completion: bool = False

    @property
    def is_error(self) -> bool:
        """Check if the server reported an error in the body."""
        return bool(self.code)

    @property
    def tool_calls(self) -> List[ToolCall]:
        """All tool calls across events, in event order."""
        return [tc for event in self.events for tc in event.tool_calls]


# ============================================================
# Request Models
# ============================================================

@dataclass
class Function:
    """Function definition for tool calling."""
    name: str
    description: str = ""
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters
        }


@dataclass
class Tool:
    """Tool definition for function calling."""
    function: Function
    type: str = "function"

    @classmethod
    def create(
        cls,
        name: str,
        description: str = "",
        parameters: Optional[Dict[str, Any]] = None
    ) -> Tool:
        """Create a tool with the given function definition."""
        return cls(
            function=Function(
                name=name,
                description=description,
                parameters=parameters or {"type": "object", "properties": {}}
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "type": self.type,
            "function": self.function.to_dict()
        }


@dataclass
class ToolOutput:
    """Result of a tool call, sent back on the next run."""
    tool_call_id: str
    output: str

    def to_dict(self) -> Dict[str, str]:
        return {"tool_call_id": self.tool_call_id, "output": self.output}


@dataclass
class ToolChoiceFunction:
    name: str
    input: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolChoice:
    """Force the agent to call a specific function."""
    function: ToolChoiceFunction
    type: str = "function"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "function": {"name": self.function.name, "input": self.function.input}
        }


@dataclass
class Action:
    """Action attached to a run, e.g. resuming an interrupted chatflow."""
    action_type: str
    interrupt_event_id: str
    interrupt_event_type: str = "chat"

    @classmethod
    def resume(cls, event_id: str) -> Action:
        """Create a resume action for an interrupt event."""
        return cls(action_type="resume", interrupt_event_id=event_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action_type": self.action_type,
            "parameters": {
                "interrupt_event": {
                    "id": self.interrupt_event_id,
                    "type": self.interrupt_event_type
                }
            }
        }


@dataclass
class RunRequest:
    """Body of a conversation run call."""
    app_id: str
    query: str
    conversation_id: str
    stream: bool = False
    end_user_id: Optional[str] = None
    file_ids: List[str] = field(default_factory=list)
    tools: List[Tool] = field(default_factory=list)
    tool_outputs: List[ToolOutput] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    action: Optional[Action] = None
    mcp_authorization: Optional[List[Dict[str, Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {
            "app_id": self.app_id,
            "query": self.query,
            "stream": self.stream,
            "end_user_id": self.end_user_id,
            "conversation_id": self.conversation_id,
            "file_ids": self.file_ids,
            "tools": [t.to_dict() for t in self.tools],
            "tool_outputs": [o.to_dict() for o in self.tool_outputs],
            "tool_choice": self.tool_choice.to_dict() if self.tool_choice else None,
            "action": self.action.to_dict() if self.action else None,
        }
        if self.mcp_authorization:
            result["mcp_authorization"] = self.mcp_authorization
        return result
