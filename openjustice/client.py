"""OpenJustice client: sends a message and streams the dialog flow answer in one call."""

from __future__ import annotations

import logging
from typing import Any

from ._config import ClientConfig
from ._http import HTTPClient
from ._resources import Conversations, Documents, Nap, Resources
from ._resources.resources import FileInput
from .streaming import ResponseAccumulator, UpdateCallback

logger = logging.getLogger(__name__)


class OpenJustice:
    """Client for OpenJustice dialog flows.

    Usage:
        client = OpenJustice(ClientConfig.from_env())
        response = client.process_message(
            "Can my landlord keep the deposit?",
            on_update=lambda content, status: print(status or content),
        )
        if response.awaiting_input:
            client.process_message("Yes, in writing.", resume_token=response.execution_id)
    """

    def __init__(self, config: ClientConfig | None = None, **overrides: Any):
        if config is None:
            config = ClientConfig.from_env(**overrides)
        elif overrides:
            config = config.with_overrides(**overrides)
        self.config = config

        self._http = HTTPClient(config.api_key, config.api_url, timeout=config.timeout)
        self._pdf_http = HTTPClient(None, config.pdf_server_url, timeout=config.timeout)
        self.resources = Resources(self._http)
        self.conversations = Conversations(self._http)
        self.nap = Nap(self._http)
        self.documents = Documents(self._pdf_http)

    def process_message(
        self,
        message: str,
        image: FileInput | None = None,
        on_update: UpdateCallback | None = None,
        resume_token: str | None = None,
        *,
        image_name: str | None = None,
    ) -> ResponseAccumulator:
        """Send ``message`` and stream the workflow's answer.

        Steps: upload ``image`` (if any), post the message, open the stream
        (resuming ``resume_token`` when given, otherwise a new execution of
        the configured dialog flow), and read it to the end. ``on_update``
        receives ``(content_so_far, status)`` for every change.

        Any failure aborts the call: ConfigurationError before any request
        when settings are missing, TransportError for HTTP/network failures.
        Nothing is retried.
        """
        config = self.config
        config.validate()

        uploaded = None
        if image is not None:
            uploaded = self.resources.upload_file(image, filename=image_name)

        conversation_id = self.conversations.send_message(
            config.conversation_id,  # type: ignore[arg-type]
            message,
            model=config.model,
            resources=[uploaded] if uploaded else None,
        )
        logger.info("Message sent. Conversation ID: %s", conversation_id)

        accumulator = ResponseAccumulator(
            conversation_id=conversation_id, execution_id=resume_token
        )
        if resume_token:
            stream = self.nap.stream(execution_id=resume_token, accumulator=accumulator)
        else:
            stream = self.nap.stream(
                dialog_flow_id=config.dialog_flow_id,
                conversation_id=conversation_id,
                accumulator=accumulator,
            )

        with stream:
            response = stream.consume(on_update)

        response.message = message
        response.uploaded_file = uploaded
        if response.awaiting_input:
            logger.info("Execution %s is awaiting input", response.execution_id)
        return response

    def close(self) -> None:
        self._http.close()
        self._pdf_http.close()

    def __enter__(self) -> OpenJustice:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
