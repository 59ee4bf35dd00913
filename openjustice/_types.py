"""Dataclass models mirroring OpenJustice API payloads."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """A file stored as a conversation resource."""

    resource_id: str
    file_name: str | None

    @classmethod
    def from_dict(cls, data: dict) -> UploadedFile:
        return cls(resource_id=data["resourceId"], file_name=data.get("fileName"))

    def as_resource(self) -> dict[str, str | None]:
        """Shape used in message metadata: ``{"id", "name"}``."""
        return {"id": self.resource_id, "name": self.file_name}


@dataclass
class ChatMessage:
    """One entry of an in-memory conversation transcript."""

    role: str
    content: str
    image_name: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"role": self.role, "content": self.content, "image": self.image_name}
