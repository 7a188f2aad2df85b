"""Request body encoding and decoding.

Pure functions: a conversation plus tool catalog goes in, UTF-8 JSON bytes
come out, and the reverse.  Messages carry no type tag on the wire, so the
decode side re-derives each variant from ``role`` (and, for ``assistant``,
from the presence of ``tool_calls``).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from workersai._shared.models import (
    AssistantToolCallTurn,
    ChatTurn,
    Message,
    Tool,
    ToolResultTurn,
)
from workersai.errors import MalformedTopLevel, ShapeDecodeError, UnknownRole
from workersai.llm_params import ModelParameters

logger = logging.getLogger(__name__)


class ChatCompletionRequest(BaseModel):
    """Typed request body for the text-generation ``run`` endpoint."""

    model: str = ""
    messages: list[Message] = Field(default_factory=list)
    tools: list[Tool] | None = None

    # Same limits as ModelParameters.
    temperature: float | None = Field(None, ge=0.0, le=5.0)
    top_p: float | None = Field(None, ge=0.0, le=2.0)
    top_k: int | None = Field(None, ge=0, le=50)
    max_tokens: int | None = Field(None, ge=0)

    @classmethod
    def build(
        cls,
        *,
        model: str,
        messages: Sequence[Message],
        tools: Sequence[Tool] | None = None,
        params: ModelParameters | None = None,
    ) -> ChatCompletionRequest:
        """Construct a request, flattening *params* into top-level fields."""
        return cls(
            model=model,
            messages=list(messages),
            tools=list(tools) if tools else None,
            **(params.to_call_kwargs() if params is not None else {}),
        )

    @property
    def params(self) -> ModelParameters:
        """The flattened sampling fields as ``ModelParameters``."""
        return ModelParameters(
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
            max_tokens=self.max_tokens,
        )

    def to_api_kwargs(self) -> dict[str, Any]:
        """Serialize to the wire dict, dropping empty ``tools`` and unset params."""
        body: dict[str, Any] = {
            "model": self.model,
            "messages": [encode_message(m) for m in self.messages],
        }
        if self.tools:
            body["tools"] = [t.to_dict() for t in self.tools]
        body.update(self.params.to_call_kwargs())
        return body


def encode_message(message: Message) -> dict[str, Any]:
    """Serialize one message variant to its role-appropriate wire shape."""
    return message.to_dict()


def encode_request(
    model: str,
    messages: Sequence[Message],
    tools: Sequence[Tool] | None = None,
    params: Optional[ModelParameters] = None,
) -> bytes:
    """Build the JSON request body for a chat call.

    Returns:
        UTF-8 encoded JSON with ``model``, ``messages``, ``tools`` (only when
        non-empty) and any set sampling parameters.
    """
    request = ChatCompletionRequest.build(
        model=model, messages=messages, tools=tools, params=params
    )
    return json.dumps(request.to_api_kwargs()).encode("utf-8")


def _decode_message(item: Any) -> Message:
    if not isinstance(item, dict):
        raise ShapeDecodeError(
            f"expected a message object, got {type(item).__name__}",
            shape="message",
            raw=item,
        )

    role = item.get("role")
    if role is None:
        role = ""
    elif not isinstance(role, str):
        raise UnknownRole(json.dumps(role), raw=item)

    if role in ("system", "user"):
        variant: type[BaseModel] = ChatTurn
    elif role == "assistant":
        # Only a non-empty tool_calls array marks a tool request.
        variant = AssistantToolCallTurn if item.get("tool_calls") else ChatTurn
    elif role == "tool":
        variant = ToolResultTurn
    else:
        raise UnknownRole(role, raw=item)

    try:
        return variant.model_validate(item)
    except ValidationError as e:
        raise ShapeDecodeError(str(e), shape=f"{role} message", raw=item) from e


def decode_messages(items: Sequence[Any]) -> list[Message]:
    """Rebuild concrete message variants from their wire dicts, in order."""
    return [_decode_message(item) for item in items]


def decode_request(data: bytes | str) -> ChatCompletionRequest:
    """Parse a stored or transmitted request body back into typed messages.

    Raises:
        MalformedTopLevel: The body is not a JSON object.
        UnknownRole: A message has a missing or unrecognized role.
        ShapeDecodeError: A message or the request fields have the wrong type.
    """
    try:
        body = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedTopLevel(
            f"failed to unmarshal request shell: {e}", raw=data
        ) from e
    if not isinstance(body, dict):
        raise MalformedTopLevel(
            f"failed to unmarshal request shell: expected an object, got {type(body).__name__}",
            raw=data,
        )

    raw_messages = body.get("messages") or []
    if not isinstance(raw_messages, list):
        raise ShapeDecodeError(
            "messages must be an array", shape="request", raw=raw_messages
        )
    messages = decode_messages(raw_messages)

    try:
        request = ChatCompletionRequest.model_validate({**body, "messages": messages})
    except ValidationError as e:
        raise ShapeDecodeError(str(e), shape="request", raw=body) from e

    logger.debug(
        "Decoded request for %s with %d message(s)", request.model, len(messages)
    )
    return request
