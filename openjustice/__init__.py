"""
openjustice - Python SDK for OpenJustice dialog flows

Stream multi-step legal workflow answers, resume paused executions,
and export signed PDFs.
"""

__version__ = "0.1.0"

from ._config import ClientConfig
from ._exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    OpenJusticeError,
    PermissionDeniedError,
    ProtocolParseError,
    RateLimitError,
    TransportError,
)
from ._streaming import ExecutionStream
from ._types import ChatMessage, UploadedFile
from .chat import ChatSession
from .client import OpenJustice
from .status import StatusRecord, parse_status_line
from .streaming import (
    EventFrame,
    ResponseAccumulator,
    StreamUpdate,
    consume_stream,
    dispatch_frame,
    iter_updates,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "ChatMessage",
    "ChatSession",
    "ClientConfig",
    "ConfigurationError",
    "EventFrame",
    "ExecutionStream",
    "NotFoundError",
    # Main client
    "OpenJustice",
    "OpenJusticeError",
    "PermissionDeniedError",
    "ProtocolParseError",
    "RateLimitError",
    "ResponseAccumulator",
    "StatusRecord",
    "StreamUpdate",
    "TransportError",
    "UploadedFile",
    "consume_stream",
    "dispatch_frame",
    "iter_updates",
    "parse_status_line",
]
