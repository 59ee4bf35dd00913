"""Documents resource. Renders and signs an answer PDF on the document service."""

from __future__ import annotations

import base64
from datetime import date
import logging
from typing import TYPE_CHECKING

import requests

from .._exceptions import STATUS_MAP, APIError, TransportError

if TYPE_CHECKING:
    from .._http import HTTPClient

logger = logging.getLogger(__name__)


def default_pdf_name(today: date | None = None) -> str:
    return f"openjustice-document-{(today or date.today()).isoformat()}.pdf"


def encode_image_data_url(data: bytes, mime_type: str = "image/png") -> str:
    """Encode image bytes as the ``data:`` URL the document service embeds."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def _error_message(resp: requests.Response) -> str:
    message = f"Server error: {resp.status_code} {resp.reason or ''}".rstrip()
    try:
        body = resp.json()
    except ValueError:
        return resp.text or message
    if isinstance(body, dict):
        return body.get("error") or body.get("details") or message
    return message


class Documents:
    """client.documents — signed PDF export of an answer."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def generate_pdf(
        self,
        message: str,
        *,
        image_data: str | None = None,
        file_name: str | None = None,
    ) -> bytes:
        """POST the answer to the document service and return the signed PDF bytes."""
        payload = {
            "imageData": image_data,
            "message": message,
            "fileName": file_name or default_pdf_name(),
        }
        logger.info("Requesting PDF %s from %s", payload["fileName"], self._http.base_url)
        resp = self._http.request(
            "POST",
            "/api/generate-pdf",
            action="Cannot connect to PDF server",
            check=False,
            json=payload,
        )
        if not resp.ok:
            message_text = _error_message(resp)
            resp.close()
            exc_cls = STATUS_MAP.get(resp.status_code, APIError)
            raise exc_cls(message_text, status_code=resp.status_code, path="/api/generate-pdf")

        if not resp.content:
            raise TransportError("Server did not return a valid PDF file", status_code=200)
        return resp.content
