"""Conversations resource — post user messages to a conversation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .._config import DEFAULT_MODEL
from .._exceptions import TransportError
from .._types import UploadedFile

if TYPE_CHECKING:
    from .._http import HTTPClient

logger = logging.getLogger(__name__)


def build_message_payload(
    conversation_id: str,
    content: str,
    *,
    model: str = DEFAULT_MODEL,
    resources: list[UploadedFile] | None = None,
) -> dict[str, Any]:
    """Request body for send-message. Metadata is present only when files are attached."""
    message: dict[str, Any] = {"role": "user", "content": content, "model": model}
    if resources:
        message["metadata"] = {"resources": [r.as_resource() for r in resources]}
    return {
        "conversationId": conversation_id,
        "title": None,
        "prompt": None,
        "messages": [message],
    }


class Conversations:
    """client.conversations — send messages that a dialog flow will answer."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def send_message(
        self,
        conversation_id: str,
        content: str,
        *,
        model: str = DEFAULT_MODEL,
        resources: list[UploadedFile] | None = None,
    ) -> str:
        """Send a user message. Returns the conversation ID assigned by the server."""
        payload = build_message_payload(
            conversation_id, content, model=model, resources=resources
        )
        logger.info("Sending message to conversation %s", conversation_id)
        resp = self._http.request(
            "POST", "/conversation/send-message", action="Failed to send message", json=payload
        )
        try:
            returned_id = resp.json().get("conversationId")
        except (ValueError, AttributeError) as e:
            raise TransportError(
                "Failed to send message: Invalid response", status_code=resp.status_code
            ) from e

        if not returned_id:
            # Fall back to the ID we sent; the server only echoes it back.
            logger.debug("send-message response had no conversationId")
            return conversation_id
        return str(returned_id)
