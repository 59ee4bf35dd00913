"""Builders for NAP stream bodies used across the test suite."""

import json

MARKER = "━━━━━━"


def status_line(type_: str, title: str, status: str | None = None) -> str:
    """Build a decorated status line, e.g. ``━━━━━━ OUTCOME: X (Finished) ━━━━━━``."""
    body = f"{type_}: {title}" + (f" ({status})" if status else "")
    return f"{MARKER} {body} {MARKER}"


def sse_frame(data: dict | str, event: str | None = None) -> str:
    """One frame including its blank-line terminator."""
    payload = data if isinstance(data, str) else json.dumps(data, ensure_ascii=False)
    lines = [f"event: {event}"] if event else []
    lines.append(f"data: {payload}")
    return "\n".join(lines) + "\n\n"


def message_frame(text: str) -> str:
    return sse_frame({"text": text}, event="message")


def node_frame(status: str, node_type: str | None = None, **fields: str) -> str:
    payload: dict = {"status": status, **fields}
    if node_type is not None:
        payload["nodeType"] = node_type
    return sse_frame(payload, event="node-result")


def awaiting_frame(execution_id: str, **fields: str) -> str:
    return sse_frame({"executionId": execution_id, **fields}, event="awaiting-user-input")


class FakeStreamResponse:
    """Stand-in for a streaming requests.Response."""

    def __init__(self, chunks):
        self._chunks = chunks
        self.closed = False

    def iter_content(self, chunk_size=None):
        yield from self._chunks

    def close(self):
        self.closed = True
