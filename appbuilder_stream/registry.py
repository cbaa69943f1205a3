"""
AppBuilder Stream SDK - Content Type Registry

Maps the ``content_type`` tag of an event to the dataclass its
``outputs`` decode into. Adding a content type is a table edit;
tags the table does not know resolve to ``DefaultDetail``.
"""

from types import MappingProxyType
from typing import Mapping

from .models import (
    AudioDetail,
    ChatflowInterruptDetail,
    ChatReasoningDetail,
    CodeDetail,
    DefaultDetail,
    FunctionCallDetail,
    ImageDetail,
    JsonDetail,
    PublishMessageDetail,
    RAGDetail,
    StatusDetail,
    TextDetail,
    VideoDetail,
)


# Content types
CODE_CONTENT_TYPE = "code"
TEXT_CONTENT_TYPE = "text"
IMAGE_CONTENT_TYPE = "image"
RAG_CONTENT_TYPE = "rag"
FUNCTION_CALL_CONTENT_TYPE = "function_call"
AUDIO_CONTENT_TYPE = "audio"
VIDEO_CONTENT_TYPE = "video"
STATUS_CONTENT_TYPE = "status"
CHATFLOW_INTERRUPT_CONTENT_TYPE = "chatflow_interrupt"
PUBLISH_MESSAGE_CONTENT_TYPE = "publish_message"
JSON_CONTENT_TYPE = "json"
CHAT_REASONING_CONTENT_TYPE = "chat_reasoning"

# Event types
CHATFLOW_EVENT_TYPE = "chatflow"
FOLLOW_UP_QUERY_EVENT_TYPE = "FollowUpQuery"


CONTENT_TYPE_TO_DETAIL: Mapping[str, type] = MappingProxyType({
    CODE_CONTENT_TYPE: CodeDetail,
    TEXT_CONTENT_TYPE: TextDetail,
    IMAGE_CONTENT_TYPE: ImageDetail,
    RAG_CONTENT_TYPE: RAGDetail,
    FUNCTION_CALL_CONTENT_TYPE: FunctionCallDetail,
    AUDIO_CONTENT_TYPE: AudioDetail,
    VIDEO_CONTENT_TYPE: VideoDetail,
    STATUS_CONTENT_TYPE: StatusDetail,
    CHATFLOW_INTERRUPT_CONTENT_TYPE: ChatflowInterruptDetail,
    PUBLISH_MESSAGE_CONTENT_TYPE: PublishMessageDetail,
    JSON_CONTENT_TYPE: JsonDetail,
    CHAT_REASONING_CONTENT_TYPE: ChatReasoningDetail,
})


def resolve_detail_type(content_type: str) -> type:
    """
    Get the detail dataclass for a content type.

    Never fails: unknown tags resolve to ``DefaultDetail``.
    """
    return CONTENT_TYPE_TO_DETAIL.get(content_type, DefaultDetail)


def is_registered(content_type: str) -> bool:
    """Check if a content type has a dedicated detail shape."""
    return content_type in CONTENT_TYPE_TO_DETAIL
