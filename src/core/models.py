"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

EVENT_TEXT = "text"
EVENT_STATUS = "status"
EVENT_RESET = "reset"


@dataclass(frozen=True)
class ChatEvent:
    """Minimal inbound event used by the core processor."""

    kind: str
    chat_id: int
    text: str
    sender: Optional[str] = None


@dataclass(frozen=True)
class MentionRecord:
    """The single persisted value: when the topic was last confirmed."""

    last_mention: Optional[datetime] = None

    @property
    def is_absent(self) -> bool:
        return self.last_mention is None


@dataclass(frozen=True)
class StatusReport:
    """Answer to a status query. Both fields are None when never recorded."""

    days: Optional[int]
    last_mention: Optional[datetime]


@dataclass(frozen=True)
class TriggerOutcome:
    """Result of evaluating a keyword hit against the cooldown window."""

    matched_span: str
    suppressed: bool


@dataclass(frozen=True)
class ResetSummary:
    """What a confirmed reset changed, for display."""

    new_mention: datetime
    previous_mention: Optional[datetime]
    days_was: Optional[int]
