"""
AppBuilder Stream SDK

Decodes AppBuilder conversation responses, streamed (SSE) or not, into
typed answers and events.

Quick Start:
    from appbuilder_stream import AppBuilderClient

    client = AppBuilderClient("app-id", token="...")
    conversation_id = client.create_conversation()

    # One answer
    answer = next(client.run("Hello!", conversation_id))
    print(answer.answer)

    # Streaming
    with client.run("Tell me a story", conversation_id, stream=True) as answers:
        for answer in answers:
            print(answer.answer, end="", flush=True)
            for event in answer.events:
                print(event.content_type, event.detail)
"""

from .client import AppBuilderClient
from .config import ClientConfig
from .decoder import (
    assemble_answer,
    decode_answer,
    decode_detail,
    decode_event,
    parse_raw_response,
)
from .errors import (
    AppBuilderStreamError,
    TransportError,
    MalformedFrameError,
    MalformedPayloadError,
    APIError,
    ConfigurationError,
)
from .iterators import AnswerIterator, IteratorState, OnceIterator, StreamIterator
from .models import (
    Answer,
    Event,
    Usage,
    ToolCall,
    FunctionCallOption,
    RawResponse,
    RawEventDetail,
    TextDetail,
    CodeDetail,
    ImageDetail,
    RAGDetail,
    Reference,
    FunctionCallDetail,
    AudioDetail,
    VideoDetail,
    StatusDetail,
    ChatflowInterruptDetail,
    PublishMessageDetail,
    JsonDetail,
    FollowUpQueries,
    ChatReasoningDetail,
    DefaultDetail,
    Function,
    Tool,
    ToolOutput,
    ToolChoice,
    ToolChoiceFunction,
    Action,
    RunRequest,
)
from .registry import CONTENT_TYPE_TO_DETAIL, resolve_detail_type
from .sse import SSEReader

__version__ = "1.0.0"
__all__ = [
    # Client
    "AppBuilderClient",
    "ClientConfig",
    # Decoding
    "assemble_answer",
    "decode_answer",
    "decode_detail",
    "decode_event",
    "parse_raw_response",
    "CONTENT_TYPE_TO_DETAIL",
    "resolve_detail_type",
    # Iterators
    "AnswerIterator",
    "IteratorState",
    "OnceIterator",
    "StreamIterator",
    "SSEReader",
    # Models
    "Answer",
    "Event",
    "Usage",
    "ToolCall",
    "FunctionCallOption",
    "RawResponse",
    "RawEventDetail",
    "TextDetail",
    "CodeDetail",
    "ImageDetail",
    "RAGDetail",
    "Reference",
    "FunctionCallDetail",
    "AudioDetail",
    "VideoDetail",
    "StatusDetail",
    "ChatflowInterruptDetail",
    "PublishMessageDetail",
    "JsonDetail",
    "FollowUpQueries",
    "ChatReasoningDetail",
    "DefaultDetail",
    "Function",
    "Tool",
    "ToolOutput",
    "ToolChoice",
    "ToolChoiceFunction",
    "Action",
    "RunRequest",
    # Errors
    "AppBuilderStreamError",
    "TransportError",
    "MalformedFrameError",
    "MalformedPayloadError",
    "APIError",
    "ConfigurationError",
]
