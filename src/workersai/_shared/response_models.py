"""Canonical response models.

Every response shape the service has produced over time decodes into
``ChatResponse``.  Callers read ``content``, ``reasoning_content``,
``tool_calls`` and ``usage`` and never need to know which shape arrived.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from workersai._shared.models import ToolCall, ToolCallFunction, dump_compact

LEGACY_TOOL_CALL_ID_PREFIX = "legacy-tool-call-"


class ResponseFormat(str, Enum):
    """Which wire shape a response's ``result`` was decoded from."""

    STANDARD = "standard"
    HYBRID = "hybrid"
    LEGACY = "legacy"


class Usage(BaseModel):
    """Token usage statistics from an API response."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @field_validator("prompt_tokens", "completion_tokens", "total_tokens", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


# ======================================================================== #
# Standard (and Hybrid) shape                                               #
# ======================================================================== #


class ResponseMessage(BaseModel):
    """The message inside a choice. ``content`` is null while calling tools."""

    role: str = "assistant"
    content: str | None = None
    tool_calls: list[ToolCall] | None = None
    reasoning_content: str = ""

    @field_validator("reasoning_content", mode="before")
    @classmethod
    def _null_reasoning(cls, value: Any) -> Any:
        return "" if value is None else value


class Choice(BaseModel):
    index: int = 0
    message: ResponseMessage = Field(default_factory=ResponseMessage)
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Chat-completion shaped ``result`` (``choices`` + ``usage``)."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)

    @field_validator("usage", mode="before")
    @classmethod
    def _null_usage(cls, value: Any) -> Any:
        return {} if value is None else value


# ======================================================================== #
# Legacy shape                                                              #
# ======================================================================== #


class LegacyToolCall(BaseModel):
    """Legacy tool call: a name and an uninterpreted JSON ``arguments`` value."""

    name: str = ""
    arguments: Any = Field(default_factory=dict)

    def to_tool_call(self, index: int) -> ToolCall:
        """Adapt to the standard ``ToolCall`` with a position-derived id."""
        args = self.arguments
        # A string value is taken as already-serialized arguments and kept
        # unquoted; a missing value defaults to "{}" rather than "".
        return ToolCall(
            id=f"{LEGACY_TOOL_CALL_ID_PREFIX}{index}",
            type="function",
            function=ToolCallFunction(
                name=self.name,
                arguments=args if isinstance(args, str) else dump_compact(args),
            ),
        )


class LegacyResponse(BaseModel):
    """Oldest ``result`` shape: flat ``response`` text and id-less tool calls.

    ``response`` keeps the wire text.  A JSON ``null`` becomes the literal
    string ``"null"`` and any other non-string JSON value becomes its JSON
    text.  Callers have come to depend on the ``"null"`` spelling, so it is
    kept as-is.
    """

    response: str = ""
    tool_calls: list[LegacyToolCall] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)

    @field_validator("usage", mode="before")
    @classmethod
    def _null_usage(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("response", mode="before")
    @classmethod
    def _response_as_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value
        return json.dumps(value)

    @field_validator("tool_calls", mode="before")
    @classmethod
    def _null_tool_calls(cls, value: Any) -> Any:
        return [] if value is None else value


# ======================================================================== #
# Canonical response                                                        #
# ======================================================================== #


class ChatResponse(BaseModel):
    """Normalised response, whichever wire shape it was decoded from.

    Exactly one of ``completion`` (Standard / Hybrid) and ``legacy`` is set,
    and ``format`` says which.
    """

    success: bool = False
    errors: list[str] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    result_raw: Any = None

    format: ResponseFormat = ResponseFormat.LEGACY
    completion: ChatCompletionResponse | None = None
    legacy: LegacyResponse | None = None

    @model_validator(mode="after")
    def _check_single_payload(self) -> ChatResponse:
        if self.format is ResponseFormat.LEGACY:
            if self.legacy is None or self.completion is not None:
                raise ValueError("a legacy response carries only the legacy payload")
        elif self.completion is None or self.legacy is not None:
            raise ValueError(
                f"a {self.format.value} response carries only the completion payload"
            )
        return self

    @property
    def is_legacy(self) -> bool:
        return self.format is ResponseFormat.LEGACY

    def _first_message(self) -> ResponseMessage | None:
        if self.completion is None or not self.completion.choices:
            return None
        return self.completion.choices[0].message

    @property
    def content(self) -> str:
        """Text of the reply, falling back to reasoning text when content is null."""
        if self.legacy is not None:
            return self.legacy.response
        message = self._first_message()
        if message is None:
            return ""
        if message.content is not None:
            return message.content
        return message.reasoning_content

    @property
    def reasoning_content(self) -> str:
        message = self._first_message()
        if message is None:
            return ""
        return message.reasoning_content

    @property
    def tool_calls(self) -> list[ToolCall]:
        """Tool calls of the first choice, in the standard ``ToolCall`` shape."""
        if self.legacy is not None:
            return [tc.to_tool_call(i) for i, tc in enumerate(self.legacy.tool_calls)]
        message = self._first_message()
        if message is None or not message.tool_calls:
            return []
        return list(message.tool_calls)

    @property
    def usage(self) -> Usage:
        if self.legacy is not None:
            return self.legacy.usage
        return self.completion.usage
