"""ExecutionStream context manager over a NAP stream response."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from typing import TYPE_CHECKING

from .streaming import ResponseAccumulator, StreamUpdate, UpdateCallback, iter_updates

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)


class ExecutionStream:
    """Iterable stream of progress snapshots for one workflow execution.

    Usage:
        with client.nap.stream(execution_id="exec_1") as stream:
            for update in stream:
                print(update.status, len(update.content))
        print(stream.text)  # final answer text
    """

    def __init__(
        self, response: requests.Response, accumulator: ResponseAccumulator | None = None
    ):
        self._response = response
        self._accumulator = accumulator if accumulator is not None else ResponseAccumulator()
        self._closed = False

    def _close(self) -> None:
        """Close the underlying response (idempotent)."""
        if not self._closed:
            self._closed = True
            self._response.close()

    def __iter__(self) -> Iterator[StreamUpdate]:
        try:
            chunks = self._response.iter_content(chunk_size=None)
            yield from iter_updates(chunks, self._accumulator)
            logger.debug("Stream completed")
        finally:
            self._close()

    def consume(self, on_update: UpdateCallback | None = None) -> ResponseAccumulator:
        """Read to end of stream, reporting each snapshot to ``on_update``."""
        for update in self:
            if on_update is not None:
                on_update(update.content, update.status)
        return self._accumulator

    def __enter__(self) -> ExecutionStream:
        return self

    def __exit__(self, *_: object) -> None:
        self._close()

    @property
    def accumulator(self) -> ResponseAccumulator:
        return self._accumulator

    @property
    def text(self) -> str:
        """Answer text accumulated so far."""
        return self._accumulator.output_text
