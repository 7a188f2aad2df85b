"""
Error classes for the Workers AI adapter.
"""

from __future__ import annotations

from typing import Any


class WorkersAIError(Exception):
    """Base exception for everything raised by this package."""


class DecodeError(WorkersAIError):
    """
    Base exception for request and response decode failures.

    Attributes:
        message: Error description
        raw: The payload (or fragment of it) that failed to decode
    """

    def __init__(self, message: str, *, raw: Any = None):
        super().__init__(message)
        self.raw = raw


class MalformedTopLevel(DecodeError):
    """
    Raised when a body cannot be read as a JSON object envelope.

    This occurs when:
    - The body is not valid JSON
    - The top-level value is not an object
    - Envelope fields (``success``, ``errors``, ``messages``) have the wrong type
    """


class UnknownRole(DecodeError):
    """
    Raised when a conversation message carries a role we cannot map.

    ``value`` is the empty string when the role was missing.
    """

    def __init__(self, value: str, *, raw: Any = None):
        super().__init__(f"unknown message role found: {value}", raw=raw)
        self.value = value


class ShapeDecodeError(DecodeError):
    """
    Raised when a payload was classified but its fields do not fit the shape.

    The error stays scoped to ``shape``; the payload is never re-classified.
    """

    def __init__(self, message: str, *, shape: str, raw: Any = None):
        super().__init__(f"failed to parse {shape} payload: {message}", raw=raw)
        self.shape = shape


class APIStatusError(WorkersAIError):
    """Raised when the service answers with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body
