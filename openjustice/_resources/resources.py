"""Resources resource — upload files to attach to conversation messages."""

from __future__ import annotations

import logging
import mimetypes
import os
from pathlib import Path
from typing import IO, TYPE_CHECKING

from .._exceptions import TransportError
from .._types import UploadedFile

if TYPE_CHECKING:
    from .._http import HTTPClient

logger = logging.getLogger(__name__)

FileInput = bytes | str | os.PathLike | IO[bytes]


def _file_part(
    file: FileInput, filename: str | None, content_type: str | None
) -> tuple[str, bytes | IO[bytes], str]:
    """Build the (name, body, content type) tuple requests expects for a multipart field."""
    if isinstance(file, (str, os.PathLike)):
        path = Path(file)
        name = filename or path.name
        body: bytes | IO[bytes] = path.read_bytes()
    elif isinstance(file, bytes):
        name = filename or "upload"
        body = file
    else:
        name = filename or os.path.basename(getattr(file, "name", "") or "upload")
        body = file

    guessed, _ = mimetypes.guess_type(name)
    return name, body, content_type or guessed or "application/octet-stream"


class Resources:
    """client.resources — upload images and documents."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def upload_file(
        self,
        file: FileInput,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> UploadedFile:
        """Upload a file as multipart field ``file``. Accepts bytes, a path, or a binary file."""
        part = _file_part(file, filename, content_type)
        logger.info("Uploading %s (%s)", part[0], part[2])
        resp = self._http.request(
            "POST",
            "/conversation/resources/upload-file",
            action="Failed to upload file",
            files={"file": part},
        )
        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError(
                "Failed to upload file: Invalid response", status_code=resp.status_code
            ) from e

        if not isinstance(body, dict) or not body.get("ok") or not body.get("resourceId"):
            raise TransportError(
                "Failed to upload file: Invalid response",
                status_code=resp.status_code,
                body=resp.text,
            )

        uploaded = UploadedFile.from_dict(body)
        logger.info("Uploaded resource %s", uploaded.resource_id)
        return uploaded
