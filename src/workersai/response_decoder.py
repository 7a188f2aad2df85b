"""Response format detection and decoding.

The service has answered with three ``result`` shapes over time and never
says which one it used.  ``decode_response`` classifies the shape from its
structure and decodes it into one ``ChatResponse``.

Classification order (first match wins):

* **Standard**: ``result.choices`` is present, even when empty.
* **Hybrid**: no ``choices``, but ``result.tool_calls`` is non-empty and its
  first element carries a non-empty ``id``.  Legacy tool calls never carry
  ids, so the id check is what separates the two.
* **Legacy**: everything else.

Pure functions: no I/O and no shared state.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from workersai._shared.models import ToolCall
from workersai._shared.response_models import (
    ChatCompletionResponse,
    ChatResponse,
    Choice,
    LegacyResponse,
    ResponseFormat,
    ResponseMessage,
    Usage,
)
from workersai.errors import MalformedTopLevel, ShapeDecodeError

logger = logging.getLogger(__name__)


class _ResponseShell(BaseModel):
    """Top-level envelope; ``result`` is kept uninterpreted."""

    success: bool = False
    errors: list[str] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    result: Any = None

    @field_validator("errors", "messages", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class _HybridResult(BaseModel):
    tool_calls: list[ToolCall]
    usage: Usage = Field(default_factory=Usage)

    @field_validator("usage", mode="before")
    @classmethod
    def _null_usage(cls, value: Any) -> Any:
        return {} if value is None else value


def classify_result(result: Any) -> ResponseFormat:
    """Return the wire shape of *result*.

    Only key presence and the first tool call's ``id`` are inspected, so
    field order and unknown fields never change the outcome.
    """
    if not isinstance(result, dict):
        return ResponseFormat.LEGACY

    if result.get("choices") is not None:
        return ResponseFormat.STANDARD

    tool_calls = result.get("tool_calls")
    if isinstance(tool_calls, list) and tool_calls:
        first = tool_calls[0]
        if isinstance(first, dict) and isinstance(first.get("id"), str) and first["id"]:
            return ResponseFormat.HYBRID

    return ResponseFormat.LEGACY


def _decode_standard(result: Any) -> ChatCompletionResponse:
    return ChatCompletionResponse.model_validate(result)


def _decode_hybrid(result: Any) -> ChatCompletionResponse:
    """Wrap top-level tool calls in a single synthetic assistant choice."""
    hybrid = _HybridResult.model_validate(result)
    return ChatCompletionResponse(
        choices=[
            Choice(
                message=ResponseMessage(role="assistant", tool_calls=hybrid.tool_calls)
            )
        ],
        usage=hybrid.usage,
    )


def _decode_legacy(result: Any) -> LegacyResponse:
    return LegacyResponse.model_validate(result)


def decode_response(data: bytes | str) -> ChatResponse:
    """Decode a raw response body into a ``ChatResponse``.

    Args:
        data: The response body as received from the transport.

    Returns:
        ``ChatResponse`` with ``format`` set to the detected shape.  An absent,
        null or empty ``result`` decodes as an empty Legacy payload.

    Raises:
        MalformedTopLevel: The body is not a JSON object envelope.
        ShapeDecodeError: ``result`` was classified but its fields have the
            wrong types for that shape.
    """
    try:
        body = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedTopLevel(
            f"failed to unmarshal initial response shell: {e}", raw=data
        ) from e
    if not isinstance(body, dict):
        raise MalformedTopLevel(
            "failed to unmarshal initial response shell: "
            f"expected an object, got {type(body).__name__}",
            raw=data,
        )

    try:
        shell = _ResponseShell.model_validate(body)
    except ValidationError as e:
        raise MalformedTopLevel(
            f"failed to unmarshal initial response shell: {e}", raw=data
        ) from e

    envelope = {
        "success": shell.success,
        "errors": shell.errors,
        "messages": shell.messages,
        "result_raw": shell.result,
    }

    result = shell.result
    if result is None or result == {}:
        logger.debug("Empty result; falling back to legacy format")
        return ChatResponse(
            **envelope, format=ResponseFormat.LEGACY, legacy=LegacyResponse()
        )

    fmt = classify_result(result)
    logger.debug("Detected %s response format", fmt.value)

    try:
        if fmt is ResponseFormat.STANDARD:
            return ChatResponse(
                **envelope, format=fmt, completion=_decode_standard(result)
            )
        if fmt is ResponseFormat.HYBRID:
            return ChatResponse(
                **envelope, format=fmt, completion=_decode_hybrid(result)
            )
        return ChatResponse(**envelope, format=fmt, legacy=_decode_legacy(result))
    except ValidationError as e:
        raise ShapeDecodeError(str(e), shape=fmt.value, raw=result) from e
