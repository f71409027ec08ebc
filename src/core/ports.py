"""Ports (interfaces) used by the core processor.

Ports define the minimal contracts for storage and reply adapters so that
the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from core.models import ChatEvent, MentionRecord, ResetSummary, StatusReport, TriggerOutcome


class CounterStorePort(Protocol):
    """Persistence for the single last-mention record."""

    def load(self) -> MentionRecord:
        """Return the stored record; an absent record instead of raising."""
        ...

    def save(self, record: MentionRecord) -> None:
        """Durably write the record or raise StorageWriteError."""
        ...


class ReplierPort(Protocol):
    """Outbound chat replies required by the core processor."""

    async def send_status(self, event: ChatEvent, report: StatusReport) -> None:
        ...

    async def send_reset(self, event: ChatEvent, summary: ResetSummary) -> None:
        ...

    async def send_soft_trigger(self, event: ChatEvent, outcome: TriggerOutcome) -> None:
        ...
