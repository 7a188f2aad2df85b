"""
Tests for the wire models: messages, tool calls, tool definitions, model ids.
"""

import pytest
from pydantic import ValidationError

from workersai import (
    AssistantToolCallTurn,
    ChatTurn,
    ModelInfo,
    Tool,
    ToolCall,
    ToolCallFunction,
    ToolResultTurn,
    resolve_model_path,
)
from workersai._shared import model_config

# ===================================================================== #
# Message variants                                                       #
# ===================================================================== #


class TestMessageValidation:
    """Construction rules of the three message variants."""

    def test_chat_turn_roles(self):
        for role in ("system", "user", "assistant"):
            assert ChatTurn(role=role, content="x").role == role

    def test_chat_turn_rejects_tool_role(self):
        with pytest.raises(ValidationError):
            ChatTurn(role="tool", content="x")

    def test_only_assistant_replays_tool_calls(self):
        with pytest.raises(ValidationError, match="cannot carry tool_calls"):
            ChatTurn(role="user", tool_calls=[ToolCall(id="a")])

    def test_assistant_turn_has_content_or_tool_calls(self):
        with pytest.raises(ValidationError, match="not both"):
            ChatTurn(role="assistant", content="hi", tool_calls=[ToolCall(id="a")])

    def test_null_content_reads_as_empty(self):
        assert ChatTurn.model_validate({"role": "user", "content": None}).content == ""

    def test_tool_call_turn_needs_calls(self):
        with pytest.raises(ValidationError):
            AssistantToolCallTurn(tool_calls=[])

    def test_tool_result_needs_id(self):
        with pytest.raises(ValidationError):
            ToolResultTurn(tool_call_id="", content="x")

    def test_tool_result_for_call(self):
        call = ToolCall(id="call_9", function=ToolCallFunction(name="add"))
        turn = ToolResultTurn.for_call(call, {"sum": 3})
        assert turn.tool_call_id == "call_9"
        assert turn.content == '{"sum": 3}'

    def test_tool_result_for_call_keeps_strings(self):
        call = ToolCall(id="call_9")
        assert ToolResultTurn.for_call(call, "plain").content == "plain"


# ===================================================================== #
# Tool calls                                                             #
# ===================================================================== #


class TestToolCall:
    """Arguments are always a JSON string."""

    def test_defaults(self):
        call = ToolCall(id="x")
        assert call.type == "function"
        assert call.function.arguments == "{}"

    def test_object_arguments_serialized(self):
        fn = ToolCallFunction(name="f", arguments={"b": [1, 2], "a": "é"})
        assert fn.arguments == '{"b":[1,2],"a":"é"}'

    def test_accessors(self):
        call = ToolCall(
            id="x", function=ToolCallFunction(name="f", arguments='{"n": 1}')
        )
        assert call.name == "f"
        assert call.arguments == '{"n": 1}'
        assert call.parsed_arguments() == {"n": 1}


# ===================================================================== #
# Tool definitions                                                       #
# ===================================================================== #


class TestToolSpec:
    """Tool.from_spec and serialization."""

    def test_generic_spec_wrapped(self):
        tool = Tool.from_spec(
            {
                "name": "add",
                "description": "Add two numbers",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "a": {"type": "integer"},
                        "b": {"type": "integer", "minimum": 0},
                    },
                    "required": ["a", "b"],
                },
            }
        )
        assert tool.to_dict() == {
            "type": "function",
            "function": {
                "name": "add",
                "description": "Add two numbers",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "a": {"type": "integer"},
                        "b": {"type": "integer", "minimum": 0},
                    },
                    "required": ["a", "b"],
                },
            },
        }

    def test_full_envelope_passes_through(self):
        spec = {
            "type": "function",
            "function": {
                "name": "noop",
                "parameters": {"type": "object", "properties": {}},
            },
        }
        assert Tool.from_spec(spec).to_dict() == spec

    def test_minimal_spec_keeps_empty_properties(self):
        d = Tool.from_spec({"name": "noop"}).to_dict()
        assert d == {
            "type": "function",
            "function": {
                "name": "noop",
                "parameters": {"type": "object", "properties": {}},
            },
        }

    def test_nested_array_items(self):
        tool = Tool.from_spec(
            {
                "name": "tag",
                "parameters": {
                    "properties": {
                        "tags": {"type": "array", "items": {"type": "string"}},
                        "mode": {"type": "string", "enum": ["fast", "slow"]},
                    }
                },
            }
        )
        props = tool.to_dict()["function"]["parameters"]["properties"]
        assert props["tags"] == {"type": "array", "items": {"type": "string"}}
        assert props["mode"]["enum"] == ["fast", "slow"]


# ===================================================================== #
# Model ids and catalog entries                                          #
# ===================================================================== #


class TestModelConfig:
    def test_prefix_added(self):
        assert resolve_model_path("meta/llama-3-8b-instruct") == model_config.MODEL_LLAMA_3_8B

    def test_prefixed_id_unchanged(self):
        assert resolve_model_path(model_config.MODEL_QWEN3_30B_A3B) == (
            "@cf/qwen/qwen3-30b-a3b-fp8"
        )

    def test_model_info_tolerates_unknown_fields(self):
        info = ModelInfo.model_validate(
            {
                "name": "@cf/meta/llama-3-8b-instruct",
                "task": {"name": "Text Generation", "id": "abc"},
                "properties": {"max_total_tokens": 8192, "price": []},
                "parameters": {"max_tokens": {"type": "integer", "default": 256}},
                "created_at": "2024-01-01",
            }
        )
        assert info.task.name == "Text Generation"
        assert info.properties.max_total_tokens == 8192
        assert info.parameters["max_tokens"].default == 256
        assert info.beta is False
