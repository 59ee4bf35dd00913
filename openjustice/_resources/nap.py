"""NAP resource — open execution streams for dialog flows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .._exceptions import ConfigurationError
from .._streaming import ExecutionStream
from ..streaming import ResponseAccumulator

if TYPE_CHECKING:
    from .._http import HTTPClient

logger = logging.getLogger(__name__)


def stream_params(
    *,
    execution_id: str | None = None,
    dialog_flow_id: str | None = None,
    conversation_id: str | None = None,
) -> dict[str, str]:
    """Query for /nap/stream: either resume an execution or start a new one, never both."""
    if execution_id:
        if dialog_flow_id or conversation_id:
            raise ConfigurationError(
                "Pass either execution_id (resume) or dialog_flow_id and conversation_id "
                "(new execution), not both."
            )
        return {"executionId": execution_id}

    if not dialog_flow_id:
        raise ConfigurationError(
            "dialog_flow_id is required for a new execution. "
            "Set OPENJUSTICE_DIALOG_FLOW_ID or pass execution_id to resume."
        )
    if not conversation_id:
        raise ConfigurationError(
            "conversation_id is required for a new execution. "
            "Set OPENJUSTICE_CONVERSATION_ID."
        )
    return {"dialogFlowId": dialog_flow_id, "conversationId": conversation_id}


class Nap:
    """client.nap — stream dialog flow executions."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def stream(
        self,
        *,
        execution_id: str | None = None,
        dialog_flow_id: str | None = None,
        conversation_id: str | None = None,
        accumulator: ResponseAccumulator | None = None,
    ) -> ExecutionStream:
        """Open the event stream for a new or paused execution.

        Resume:  nap.stream(execution_id="exec_1")
        New:     nap.stream(dialog_flow_id="flow_1", conversation_id="conv_1")
        """
        params = stream_params(
            execution_id=execution_id,
            dialog_flow_id=dialog_flow_id,
            conversation_id=conversation_id,
        )
        if execution_id:
            logger.info("Resuming stream with executionId %s", execution_id)
        else:
            logger.info(
                "Starting new stream for conversation %s (flow %s)",
                conversation_id,
                dialog_flow_id,
            )

        resp = self._http.stream(
            "GET",
            "/nap/stream",
            action="Failed to start stream",
            params=params,
            headers={"Accept": "text/event-stream"},
        )
        return ExecutionStream(resp, accumulator)
