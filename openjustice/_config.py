"""Client configuration, built once and handed to the client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
import os
from typing import Any

from ._exceptions import ConfigurationError

DEFAULT_API_URL = "https://api.staging.openjustice.ai"
DEFAULT_PDF_SERVER_URL = "http://localhost:3000"
DEFAULT_MODEL = "gpt-4o-mini-2024-07-18"

# Attribute name -> environment variable that supplies it.
ENV_VARS: dict[str, str] = {
    "api_key": "OPENJUSTICE_API_KEY",
    "api_url": "OPENJUSTICE_API_URL",
    "dialog_flow_id": "OPENJUSTICE_DIALOG_FLOW_ID",
    "conversation_id": "OPENJUSTICE_CONVERSATION_ID",
    "model": "OPENJUSTICE_MODEL",
    "pdf_server_url": "OPENJUSTICE_PDF_SERVER_URL",
}

_REQUIRED: tuple[tuple[str, str], ...] = (
    ("api_key", "API key"),
    ("api_url", "API base URL"),
    ("dialog_flow_id", "Dialog flow ID"),
    ("conversation_id", "Conversation ID"),
)


@dataclass(frozen=True)
class ClientConfig:
    """Settings for one OpenJustice client.

    Usage:
        config = ClientConfig.from_env(conversation_id="conv_123")
        client = OpenJustice(config)
    """

    api_key: str | None = None
    api_url: str = DEFAULT_API_URL
    dialog_flow_id: str | None = None
    conversation_id: str | None = None
    model: str = DEFAULT_MODEL
    pdf_server_url: str = DEFAULT_PDF_SERVER_URL
    timeout: int = 300

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> ClientConfig:
        """Read settings from the environment. Non-None overrides take precedence."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for attr, var in ENV_VARS.items():
            value = env.get(var)
            if value:
                values[attr] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> ClientConfig:
        """Copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> None:
        """Raise ConfigurationError for the first missing required setting."""
        for attr, label in _REQUIRED:
            if not getattr(self, attr):
                raise ConfigurationError(
                    f"{label} not found. Set {ENV_VARS[attr]} or pass {attr}=.",
                )
