"""
Workers AI chat adapter.

Encodes conversations for the Workers AI text-generation endpoint and
normalizes its three historical response shapes into one ``ChatResponse``.
"""

from workersai._shared.model_config import resolve_model_path
from workersai._shared.models import (
    AssistantToolCallTurn,
    ChatTurn,
    FunctionDefinition,
    FunctionParameters,
    Message,
    ModelInfo,
    Parameter,
    Tool,
    ToolCall,
    ToolCallFunction,
    ToolResultTurn,
)
from workersai._shared.response_models import (
    ChatCompletionResponse,
    ChatResponse,
    Choice,
    LegacyResponse,
    LegacyToolCall,
    ResponseFormat,
    ResponseMessage,
    Usage,
)
from workersai.client import WorkersAIClient
from workersai.errors import (
    APIStatusError,
    DecodeError,
    MalformedTopLevel,
    ShapeDecodeError,
    UnknownRole,
    WorkersAIError,
)
from workersai.llm_params import ModelParameters
from workersai.request_encoder import (
    ChatCompletionRequest,
    decode_messages,
    decode_request,
    encode_message,
    encode_request,
)
from workersai.response_decoder import classify_result, decode_response

__all__ = [
    "APIStatusError",
    "AssistantToolCallTurn",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatResponse",
    "ChatTurn",
    "Choice",
    "DecodeError",
    "FunctionDefinition",
    "FunctionParameters",
    "LegacyResponse",
    "LegacyToolCall",
    "MalformedTopLevel",
    "Message",
    "ModelInfo",
    "ModelParameters",
    "Parameter",
    "ResponseFormat",
    "ResponseMessage",
    "ShapeDecodeError",
    "Tool",
    "ToolCall",
    "ToolCallFunction",
    "ToolResultTurn",
    "UnknownRole",
    "Usage",
    "WorkersAIClient",
    "WorkersAIError",
    "classify_result",
    "decode_messages",
    "decode_request",
    "decode_response",
    "encode_message",
    "encode_request",
    "resolve_model_path",
]
