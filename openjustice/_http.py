"""Thin HTTP client wrapping requests.Session with bearer auth and error mapping."""

import logging
from typing import Any

import requests

from ._exceptions import STATUS_MAP, APIError

logger = logging.getLogger(__name__)


def _raise_for_status(
    resp: requests.Response, *, action: str, method: str = "", path: str = ""
) -> None:
    """Map an HTTP error response to a typed TransportError carrying status and body."""
    try:
        body = resp.text
    except requests.RequestException:
        logger.debug("Failed to read error body for %s %s", method, path)
        body = ""
    finally:
        resp.close()

    message = f"{action}: {resp.status_code} {body}".rstrip()
    logger.error("HTTP %s on %s %s: %s", resp.status_code, method, path, body[:200])
    exc_cls = STATUS_MAP.get(resp.status_code, APIError)
    raise exc_cls(message, status_code=resp.status_code, body=body, method=method, path=path)


class HTTPClient:
    """Minimal HTTP client with Bearer auth and typed errors. Never retries."""

    def __init__(self, api_key: str | None, base_url: str, timeout: int = 300):
        self._session = requests.Session()
        if api_key:
            self._session.headers["Authorization"] = f"Bearer {api_key}"
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def _send(
        self,
        method: str,
        url: str,
        *,
        action: str,
        is_stream: bool = False,
        check: bool = True,
        **kwargs: Any,
    ) -> requests.Response:
        logger.debug("%s %s", method, url)
        kwargs.setdefault("timeout", self._timeout)
        try:
            resp = self._session.request(method, url, stream=is_stream, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise APIError(f"{action}: {e}", method=method, path=url) from e

        if check and not resp.ok:
            _raise_for_status(resp, action=action, method=method, path=url)
        return resp

    def request(
        self, method: str, path: str, *, action: str = "Request failed", **kwargs: Any
    ) -> requests.Response:
        """Send request and raise typed exception on error."""
        return self._send(method, f"{self._base_url}{path}", action=action, **kwargs)

    def stream(
        self, method: str, path: str, *, action: str = "Failed to start stream", **kwargs: Any
    ) -> requests.Response:
        """
        Send request with stream=True for SSE consumption.

        The timeout bounds connecting only; reads between events wait indefinitely.
        """
        return self._send(
            method,
            f"{self._base_url}{path}",
            action=action,
            is_stream=True,
            timeout=(self._timeout, None),
            **kwargs,
        )

    def close(self) -> None:
        self._session.close()
