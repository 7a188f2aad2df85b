"""Typed Pydantic models for the request side of the wire format.

These models cover:
- Tool definitions sent with a request
- Tool calls issued by the model (and replayed in history)
- The three conversation message variants
- Model catalog entries

Unknown fields are ignored (pydantic's default) so newer service payloads
keep validating.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


def dump_compact(value: Any) -> str:
    """Serialize *value* to JSON without insignificant whitespace."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


# ======================================================================== #
# Tool definitions (client -> service)                                      #
# ======================================================================== #


class Parameter(BaseModel):
    """A single JSON-schema property of a function's parameters."""

    type: str | None = None
    description: str | None = None
    default: Any = None
    minimum: Any = None
    maximum: Any = None
    enum: list[Any] | None = None
    items: Parameter | None = None


class FunctionParameters(BaseModel):
    """JSON schema of a function's arguments. Always an object schema."""

    type: str = "object"
    properties: dict[str, Parameter] = Field(default_factory=dict)
    required: list[str] | None = None


class FunctionDefinition(BaseModel):
    """Name, purpose and parameter schema of a callable function."""

    name: str
    description: str | None = None
    parameters: FunctionParameters = Field(default_factory=FunctionParameters)


class Tool(BaseModel):
    """Function-tool format (nested ``function`` key)."""

    type: str = "function"
    function: FunctionDefinition

    @classmethod
    def from_spec(cls, spec: dict[str, Any]) -> Tool:
        """
        Build a tool from a spec dict.

        * A spec that already has a ``"type"`` key is taken as the full
          envelope.
        * Otherwise it is read as a generic
          ``{"name", "description", "parameters"}`` spec and wrapped in
          ``{"type": "function", "function": {...}}``.
        """
        if "type" in spec:
            return cls.model_validate(spec)
        return cls(
            function=FunctionDefinition(
                name=spec["name"],
                description=spec.get("description") or None,
                parameters=FunctionParameters.model_validate(
                    spec.get("parameters") or {}
                ),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)


# ======================================================================== #
# Tool calls (service -> client, replayed client -> service)                #
# ======================================================================== #


class ToolCallFunction(BaseModel):
    """Function name and arguments inside a tool call.

    ``arguments`` is always a string holding a JSON object.  Some payloads
    send the object itself; it is re-serialized so callers never branch on
    the wire encoding.
    """

    name: str = ""
    arguments: str = "{}"

    @field_validator("arguments", mode="before")
    @classmethod
    def _arguments_as_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value
        return dump_compact(value)


class ToolCall(BaseModel):
    """A single tool call requested by the model."""

    id: str = ""
    type: str = "function"
    function: ToolCallFunction = Field(default_factory=ToolCallFunction)

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def arguments(self) -> str:
        return self.function.arguments

    def parsed_arguments(self) -> Any:
        """Return the arguments decoded from their JSON string form."""
        return json.loads(self.function.arguments)


# ======================================================================== #
# Conversation messages (client -> service)                                 #
# ======================================================================== #


class ChatTurn(BaseModel):
    """A system, user or assistant text turn.

    An assistant turn may instead replay a previous tool request for
    context; it then carries ``tool_calls`` and no content.
    """

    role: Literal["system", "user", "assistant"]
    content: str = ""
    tool_calls: list[ToolCall] | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def _check_tool_calls(self) -> ChatTurn:
        if self.tool_calls:
            if self.role != "assistant":
                raise ValueError(f"a {self.role} turn cannot carry tool_calls")
            if self.content:
                raise ValueError(
                    "an assistant turn carries either content or tool_calls, not both"
                )
        return self

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"role": self.role}
        if self.tool_calls:
            d["tool_calls"] = [tc.model_dump() for tc in self.tool_calls]
        else:
            d["content"] = self.content
        return d


class AssistantToolCallTurn(BaseModel):
    """An assistant turn that requested one or more tool calls."""

    role: Literal["assistant"] = "assistant"
    tool_calls: list[ToolCall] = Field(..., min_length=1)

    def to_dict(self) -> dict[str, Any]:
        # The service rejects a turn that has both content and tool_calls.
        return {
            "role": self.role,
            "tool_calls": [tc.model_dump() for tc in self.tool_calls],
        }


class ToolResultTurn(BaseModel):
    """The result of a tool call, sent back to the model."""

    role: Literal["tool"] = "tool"
    tool_call_id: str = Field(..., min_length=1)
    content: str = ""

    @classmethod
    def for_call(cls, tool_call: ToolCall, result: Any) -> ToolResultTurn:
        """Answer *tool_call*; non-string results are serialized to JSON."""
        content = result if isinstance(result, str) else json.dumps(result)
        return cls(tool_call_id=tool_call.id, content=content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "tool_call_id": self.tool_call_id,
        }


Message = ChatTurn | ToolResultTurn | AssistantToolCallTurn


# ======================================================================== #
# Model catalog                                                             #
# ======================================================================== #


class ModelTask(BaseModel):
    name: str = ""
    description: str = ""


class ModelProperties(BaseModel):
    max_batch_size: int = 0
    max_total_tokens: int = 0


class ModelSource(BaseModel):
    url: str = ""


class ModelInfo(BaseModel):
    """A model catalog entry."""

    name: str = ""
    description: str = ""
    task: ModelTask = Field(default_factory=ModelTask)
    tags: list[str] = Field(default_factory=list)
    properties: ModelProperties = Field(default_factory=ModelProperties)
    source: ModelSource = Field(default_factory=ModelSource)
    beta: bool = False
    parameters: dict[str, Parameter] = Field(default_factory=dict)
