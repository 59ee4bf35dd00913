"""
Status-line parsing for NAP workflow narration.

Workflows interleave progress markers with answer text, for example::

    ━━━━━━ SWITCH: Switch (Deciding) ━━━━━━
    ━━━━━━ OUTCOME: Legal reasoning (Finished) ━━━━━━

A status line is never part of the answer; it only updates the status shown
to the user.
"""

from dataclasses import dataclass
import re

STATUS_MARKER = "━━━━━━"

_STATUS_LINE_RE = re.compile(rf"{STATUS_MARKER}\s+(.+?)\s+{STATUS_MARKER}")
_TITLE_STATUS_RE = re.compile(r"^(.+?)\s*\((.+?)\)$")

OUTCOME_TYPE = "OUTCOME"
FINISHED_STATUS = "Finished"


@dataclass(frozen=True)
class StatusRecord:
    """Structured form of one status line or workflow node update."""

    type: str
    title: str
    status: str | None = None

    @property
    def is_finished_outcome(self) -> bool:
        """True for the marker that opens the answer body."""
        return self.type == OUTCOME_TYPE and self.status == FINISHED_STATUS

    def to_dict(self) -> dict[str, str | None]:
        return {"type": self.type, "title": self.title, "status": self.status}


def parse_status_line(line: str) -> StatusRecord | None:
    """
    Parse ``━━━━━━ TYPE: Title (Status) ━━━━━━`` into a StatusRecord.

    Returns None when the line is ordinary text, including envelopes whose
    content has no colon.
    """
    match = _STATUS_LINE_RE.search(line)
    if not match:
        return None

    parts = match.group(1).split(":")
    if len(parts) < 2:
        return None

    status_type = parts[0].strip()
    rest = ":".join(parts[1:]).strip()

    title_status = _TITLE_STATUS_RE.match(rest)
    if title_status:
        return StatusRecord(
            type=status_type,
            title=title_status.group(1).strip(),
            status=title_status.group(2).strip(),
        )
    return StatusRecord(type=status_type, title=rest, status=None)
