"""
AppBuilder Stream SDK - Model Tests
"""

import dataclasses

import pytest

from appbuilder_stream.models import (
    Action,
    Answer,
    Event,
    RawEventDetail,
    RawResponse,
    RunRequest,
    Tool,
    ToolCall,
    ToolChoice,
    ToolChoiceFunction,
    ToolOutput,
    Usage,
)


class TestRawModels:
    """Tests for wire model parsing."""

    def test_usage_from_dict(self):
        usage = Usage.from_dict({"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3, "name": "m"})
        assert usage == Usage(1, 2, 3, "m")

    def test_usage_null_fields(self):
        assert Usage.from_dict(None) == Usage()
        assert Usage.from_dict({"prompt_tokens": None}) == Usage()

    @pytest.mark.parametrize("data", [
        {"prompt_tokens": "many"},
        {"total_tokens": True},
        {"name": 3},
        [1, 2],
    ])
    def test_usage_rejects_wrong_types(self, data):
        with pytest.raises(ValueError):
            Usage.from_dict(data)

    def test_tool_call_from_dict(self):
        tc = ToolCall.from_dict({
            "id": "call_1",
            "type": "function",
            "function": {"name": "lookup", "arguments": {"q": "x"}},
        })
        assert tc.function.name == "lookup"
        assert tc.function.arguments == {"q": "x"}
        assert tc.to_dict()["function"]["arguments"] == {"q": "x"}

    def test_tool_call_defaults(self):
        tc = ToolCall.from_dict({"id": "a", "function": None})
        assert tc.type == "function"
        assert tc.function.arguments == {}

    def test_tool_call_rejects_wrong_types(self):
        with pytest.raises(ValueError):
            ToolCall.from_dict({"function": "bad"})
        with pytest.raises(ValueError):
            ToolCall.from_dict({"function": {"name": "f", "arguments": "{}"}})

    def test_raw_event_detail_rejects_bad_tool_calls(self):
        with pytest.raises(ValueError):
            RawEventDetail.from_dict({"tool_calls": [{"id": "a"}, "junk"]})
        with pytest.raises(ValueError):
            RawEventDetail.from_dict({"tool_calls": "x"})

    def test_raw_event_detail_keeps_any_outputs(self):
        assert RawEventDetail.from_dict({"outputs": [1, "x"]}).outputs == [1, "x"]

    def test_raw_response_to_dict_omits_empty_error(self):
        assert "code" not in RawResponse().to_dict()
        data = RawResponse(code="E1", message="m").to_dict()
        assert data["code"] == "E1"
        assert data["message"] == "m"


class TestDecodedModels:
    """Decoded values are immutable."""

    def test_answer_is_frozen(self):
        answer = Answer(answer="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            answer.answer = "y"

    def test_event_is_frozen(self):
        event = Event(
            code=0, message="", status="", event_type="", content_type="text",
            usage=Usage(), detail=None,
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.code = 1


class TestRequestModels:
    """Tests for run request bodies."""

    def test_resume_action(self):
        assert Action.resume("evt-1").to_dict() == {
            "action_type": "resume",
            "parameters": {"interrupt_event": {"id": "evt-1", "type": "chat"}},
        }

    def test_tool_create(self):
        tool = Tool.create("get_weather", "Weather lookup")
        assert tool.to_dict() == {
            "type": "function",
            "function": {
                "name": "get_weather",
                "description": "Weather lookup",
                "parameters": {"type": "object", "properties": {}},
            },
        }

    def test_run_request_minimal(self):
        data = RunRequest(app_id="app", query="hi", conversation_id="c").to_dict()
        assert data == {
            "app_id": "app",
            "query": "hi",
            "stream": False,
            "end_user_id": None,
            "conversation_id": "c",
            "file_ids": [],
            "tools": [],
            "tool_outputs": [],
            "tool_choice": None,
            "action": None,
        }

    def test_run_request_full(self):
        data = RunRequest(
            app_id="app",
            query="hi",
            conversation_id="c",
            stream=True,
            tool_outputs=[ToolOutput("call_1", "sunny")],
            tool_choice=ToolChoice(ToolChoiceFunction("get_weather", {"city": "Beijing"})),
            mcp_authorization=[{"server": "s"}],
        ).to_dict()

        assert data["stream"] is True
        assert data["tool_outputs"] == [{"tool_call_id": "call_1", "output": "sunny"}]
        assert data["tool_choice"] == {
            "type": "function",
            "function": {"name": "get_weather", "input": {"city": "Beijing"}},
        }
        assert data["mcp_authorization"] == [{"server": "s"}]
