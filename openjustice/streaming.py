"""
NAP execution stream protocol.

The workflow engine streams Server-Sent Events framed as ``event:``/``data:``
blocks separated by a blank line. Three event types matter:

- ``message``: ``{"text": ...}`` narration and answer text, with status
  lines (see :mod:`openjustice.status`) mixed in
- ``node-result``: ``{"status", "nodeType", "title", "description"}`` for a
  workflow node starting or finishing
- ``awaiting-user-input``: ``{"executionId", "message"|"question"|"prompt"}``
  when the execution pauses for the user

Only text that follows an OUTCOME/Finished marker (or an outcome node
completing, or a pause) is treated as answer content. Everything before it is
progress narration and surfaces only as a status.
"""

from __future__ import annotations

import codecs
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
import json
import logging
from typing import Any

import requests

from ._exceptions import ProtocolParseError, TransportError
from ._types import UploadedFile
from .status import StatusRecord, parse_status_line

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[str, StatusRecord | None], None]

FRAME_DELIMITER = "\n\n"


class NapEventType(str, Enum):
    """NAP stream event types."""

    MESSAGE = "message"
    NODE_RESULT = "node-result"
    AWAITING_USER_INPUT = "awaiting-user-input"

    # Anything else; logged and ignored
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> NapEventType:
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class StreamUpdate:
    """One progress snapshot: the answer so far and the status to show."""

    content: str
    status: StatusRecord | None = None


@dataclass
class EventFrame:
    """One ``event:``/``data:`` block from the stream."""

    event_type: str = NapEventType.MESSAGE.value
    data: str = ""

    @classmethod
    def decode(cls, text: str) -> EventFrame:
        """
        Parse raw frame text.

        ``event:`` sets the type (default ``message``). Every ``data:`` line
        contributes its remainder after the prefix; multiple data lines are
        joined with a newline. Comments and unknown fields are ignored.
        """
        event_type = NapEventType.MESSAGE.value
        data_lines: list[str] = []
        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if not line:
                continue
            if line.startswith("event:"):
                event_type = line[6:].strip()
            elif line.startswith("data:"):
                data_lines.append(line[5:])
        return cls(event_type=event_type, data="\n".join(data_lines))

    @property
    def kind(self) -> NapEventType:
        return NapEventType.from_name(self.event_type)

    def payload(self) -> dict[str, Any]:
        """JSON-decode ``data``. Raises ProtocolParseError if it is not a JSON object."""
        try:
            parsed = json.loads(self.data)
        except json.JSONDecodeError as e:
            raise ProtocolParseError(f"Invalid JSON in {self.event_type} frame: {e}") from e
        if not isinstance(parsed, dict):
            raise ProtocolParseError(f"Expected JSON object in {self.event_type} frame")
        return parsed


@dataclass
class ResponseAccumulator:
    """
    The answer under construction for one stream.

    ``output_text`` is append-only. ``should_accumulate`` gates whether
    ordinary text is captured; turning it on always clears ``current_status``.
    """

    output_text: str = ""
    should_accumulate: bool = False
    current_status: StatusRecord | None = None
    complete: bool = False
    awaiting_input: bool = False
    execution_id: str | None = None
    awaiting_input_message: str | None = None
    conversation_id: str | None = None
    message: str | None = None
    uploaded_file: UploadedFile | None = None
    success: bool = True
    frames_skipped: int = field(default=0, repr=False)

    def append(self, text: str) -> None:
        self.output_text += text

    def start_accumulating(self) -> None:
        self.should_accumulate = True
        self.current_status = None

    def set_status(self, status: StatusRecord) -> None:
        """Show a new in-flight status; pauses accumulation."""
        self.current_status = status
        self.should_accumulate = False

    def process(self, frame: EventFrame, on_update: UpdateCallback | None = None) -> None:
        """Apply one frame. See :func:`dispatch_frame`."""
        dispatch_frame(frame, self, on_update)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "conversationId": self.conversation_id,
            "executionId": self.execution_id,
            "outputText": self.output_text,
            "complete": self.complete,
            "awaitingInput": self.awaiting_input,
            "awaitingInputMessage": self.awaiting_input_message,
            "currentStatus": self.current_status.to_dict() if self.current_status else None,
            "message": self.message,
            "uploadedFile": self.uploaded_file.as_resource() if self.uploaded_file else None,
        }


def _handle_message(
    payload: dict[str, Any], response: ResponseAccumulator, notify: UpdateCallback
) -> None:
    text = payload.get("text")
    if not isinstance(text, str) or not text:
        raise ProtocolParseError("message event without text")

    has_status_line = False
    content_to_add = ""

    for line in text.split("\n"):
        status = parse_status_line(line)
        if status is not None:
            has_status_line = True
            if status.is_finished_outcome:
                response.start_accumulating()
            else:
                response.set_status(status)
        elif response.should_accumulate:
            content_to_add += line + "\n"

    if has_status_line:
        notify(response.output_text, response.current_status)

    if response.should_accumulate and content_to_add:
        response.append(content_to_add)
        notify(response.output_text, None)
    elif not has_status_line and (response.should_accumulate or response.awaiting_input):
        # Follow-up prompts after a pause arrive before any OUTCOME marker.
        response.append(text)
        notify(response.output_text, None)
    elif not has_status_line:
        notify(response.output_text, response.current_status)


def _node_label(node_type: Any, default: str) -> str:
    return str(node_type).upper() if node_type else default


def _handle_node_result(
    payload: dict[str, Any], response: ResponseAccumulator, notify: UpdateCallback
) -> None:
    node_status = payload.get("status")
    node_type = payload.get("nodeType")

    if node_status == "running":
        response.set_status(
            StatusRecord(
                type=_node_label(node_type, "PROCESSING"),
                title=payload.get("title") or "Processing",
                status=payload.get("description") or "in progress",
            )
        )
        notify(response.output_text, response.current_status)
    elif node_status == "completed" and node_type == "outcome":
        # Content follows in message events; node data is not answer text.
        response.start_accumulating()
        notify(response.output_text, None)
    elif node_status == "completed":
        response.set_status(
            StatusRecord(
                type=_node_label(node_type, "COMPLETED"),
                title=payload.get("title") or "Completed",
                status="completed",
            )
        )
        notify(response.output_text, response.current_status)
    else:
        logger.debug("Ignoring node-result with status %r", node_status)


def _handle_awaiting_input(
    payload: dict[str, Any], response: ResponseAccumulator, notify: UpdateCallback
) -> None:
    execution_id = payload.get("executionId")
    response.execution_id = str(execution_id) if execution_id else None
    if not execution_id:
        logger.warning("awaiting-user-input event without executionId")

    response.complete = True
    response.awaiting_input = True
    response.start_accumulating()

    question = payload.get("message") or payload.get("question") or payload.get("prompt")
    if not isinstance(question, str) or not question:
        question = None
    if question is not None and question not in response.output_text:
        separator = "\n\n" if response.output_text.strip() else ""
        response.append(separator + question)
    response.awaiting_input_message = question

    if not response.output_text.strip():
        logger.warning("No content accumulated when awaiting user input")

    notify(response.output_text, None)


_HANDLERS: dict[
    NapEventType, Callable[[dict[str, Any], ResponseAccumulator, UpdateCallback], None]
] = {
    NapEventType.MESSAGE: _handle_message,
    NapEventType.NODE_RESULT: _handle_node_result,
    NapEventType.AWAITING_USER_INPUT: _handle_awaiting_input,
}


def _ignore_update(_content: str, _status: StatusRecord | None) -> None:
    pass


def dispatch_frame(
    frame: EventFrame, response: ResponseAccumulator, on_update: UpdateCallback | None = None
) -> None:
    """
    Apply one decoded frame to ``response`` and report progress to ``on_update``.

    Frames with empty data are dropped. Frames that fail to decode are logged
    and skipped; they never end the stream. Exceptions raised by
    ``on_update`` propagate.
    """
    if not frame.data:
        return

    handler = _HANDLERS.get(frame.kind)
    try:
        payload = frame.payload()
        if handler is None:
            logger.debug("Unhandled event type: %s %s", frame.event_type, payload)
            return
        handler(payload, response, on_update or _ignore_update)
    except ProtocolParseError as e:
        response.frames_skipped += 1
        logger.debug("Could not parse SSE event: %s", e)


class FrameBuffer:
    """Rolling buffer that splits incoming text into complete frames."""

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, text: str) -> list[str]:
        """Add text and return every frame it completes, in order."""
        self._buffer = (self._buffer + text).replace("\r\n", "\n")
        *frames, self._buffer = self._buffer.split(FRAME_DELIMITER)
        return [frame for frame in frames if frame.strip()]

    def flush(self) -> str | None:
        """Return the trailing partial frame at end of stream, if any."""
        remainder, self._buffer = self._buffer, ""
        return remainder if remainder.strip() else None


def iter_frames(chunks: Iterable[bytes | str]) -> Iterator[EventFrame]:
    """
    Decode frames from an incrementally delivered body.

    Each complete frame is yielded before the next chunk is read. A partial
    frame left at end of stream is yielded last. Read failures raise
    TransportError.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = FrameBuffer()
    source = iter(chunks)

    while True:
        try:
            chunk = next(source)
        except StopIteration:
            break
        except (requests.RequestException, OSError) as e:
            logger.error("Stream error: %s", e)
            raise TransportError(f"Stream read failed: {e}") from e

        text = decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
        for frame_text in buffer.feed(text):
            yield EventFrame.decode(frame_text)

    for frame_text in buffer.feed(decoder.decode(b"", final=True)):
        yield EventFrame.decode(frame_text)
    remainder = buffer.flush()
    if remainder is not None:
        yield EventFrame.decode(remainder)


def consume_stream(
    chunks: Iterable[bytes | str],
    response: ResponseAccumulator | None = None,
    on_update: UpdateCallback | None = None,
) -> ResponseAccumulator:
    """Drive a stream to completion and return the finished accumulator."""
    if response is None:
        response = ResponseAccumulator()
    for frame in iter_frames(chunks):
        dispatch_frame(frame, response, on_update)
    response.complete = True
    return response


def iter_updates(
    chunks: Iterable[bytes | str], response: ResponseAccumulator | None = None
) -> Iterator[StreamUpdate]:
    """Same as :func:`consume_stream`, as a lazy sequence of StreamUpdate snapshots."""
    if response is None:
        response = ResponseAccumulator()
    pending: list[StreamUpdate] = []

    def collect(content: str, status: StatusRecord | None) -> None:
        pending.append(StreamUpdate(content, status))

    for frame in iter_frames(chunks):
        dispatch_frame(frame, response, collect)
        yield from pending
        pending.clear()
    response.complete = True
