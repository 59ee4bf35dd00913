"""
ChatSession for multi-turn conversations with a dialog flow.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from ._resources.documents import default_pdf_name, encode_image_data_url
from ._types import ChatMessage
from .status import StatusRecord
from .streaming import ResponseAccumulator, UpdateCallback

if TYPE_CHECKING:
    from ._resources.resources import FileInput
    from .client import OpenJustice

logger = logging.getLogger(__name__)


def _image_label(image: FileInput | None, image_name: str | None) -> str | None:
    if image is None:
        return None
    if image_name:
        return image_name
    if isinstance(image, (str, os.PathLike)):
        return Path(image).name
    return getattr(image, "name", None) or "image"


class ChatSession:
    """In-memory transcript that resumes paused executions automatically.

    When a response is awaiting input, the next ``send`` resumes that
    execution instead of starting a new one. Nothing is persisted.
    """

    def __init__(self, client: OpenJustice):
        self.client = client
        self.messages: list[ChatMessage] = []
        self.pending_execution_id: str | None = None
        self.last_response: ResponseAccumulator | None = None

    @property
    def awaiting_input(self) -> bool:
        return self.pending_execution_id is not None

    def send(
        self,
        message: str,
        image: FileInput | None = None,
        on_update: UpdateCallback | None = None,
        *,
        image_name: str | None = None,
    ) -> ResponseAccumulator:
        """
        Send a user message, resuming the pending execution if there is one.

        Args:
            message: User message
            image: Optional image to upload and attach
            on_update: Progress callback ``(content, status)``
            image_name: File name to upload ``image`` under

        Returns:
            The finished ResponseAccumulator
        """
        self.messages.append(
            ChatMessage(role="user", content=message, image_name=_image_label(image, image_name))
        )
        assistant = ChatMessage(role="assistant", content="")
        self.messages.append(assistant)

        resume_token, self.pending_execution_id = self.pending_execution_id, None

        def _track(content: str, status: StatusRecord | None) -> None:
            assistant.content = content or ""
            if on_update is not None:
                on_update(content, status)

        try:
            response = self.client.process_message(
                message, image, _track, resume_token, image_name=image_name
            )
        except Exception as e:
            assistant.content = f"Error: {e}"
            raise

        assistant.content = response.output_text
        if response.awaiting_input and response.execution_id:
            self.pending_execution_id = response.execution_id
            logger.debug("Stored execution ID for resuming: %s", response.execution_id)
        self.last_response = response
        return response

    def last_assistant_message(self) -> ChatMessage | None:
        """Most recent assistant message with content."""
        for message in reversed(self.messages):
            if message.role == "assistant" and message.content:
                return message
        return None

    def reset(self) -> None:
        """Forget the transcript and any paused execution."""
        self.messages.clear()
        self.pending_execution_id = None
        self.last_response = None

    def export_pdf(
        self,
        path: str | os.PathLike | None = None,
        *,
        image: bytes | None = None,
        image_mime_type: str = "image/png",
    ) -> Path:
        """Render the last answer as a signed PDF and write it to ``path``."""
        last = self.last_assistant_message()
        if last is None:
            raise ValueError("No message content available to download")

        target = Path(path) if path is not None else Path(default_pdf_name())
        image_data = encode_image_data_url(image, image_mime_type) if image else None
        pdf = self.client.documents.generate_pdf(
            last.content, image_data=image_data, file_name=target.name
        )
        target.write_bytes(pdf)
        logger.info("Wrote %s (%d bytes)", target, len(pdf))
        return target
