"""Cooldown and reset decisions (core domain).

The policy is stateless: every keyword hit is judged against the stored
last-mention instant, and nothing about issued notices is remembered.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Tuple

from core.config import DEFAULT_COOLDOWN
from core.models import MentionRecord, ResetSummary, StatusReport, TriggerOutcome

_SECONDS_PER_DAY = 24 * 60 * 60


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed, truncated toward zero."""

    return int((later - earlier).total_seconds() / _SECONDS_PER_DAY)


class MentionPolicy:
    """Decides what a query, a keyword hit or a reset means right now."""

    def __init__(self, cooldown: timedelta = DEFAULT_COOLDOWN) -> None:
        self._cooldown = cooldown

    @property
    def cooldown(self) -> timedelta:
        return self._cooldown

    def evaluate_query(self, record: MentionRecord, now: datetime) -> StatusReport:
        if record.last_mention is None:
            return StatusReport(days=None, last_mention=None)
        return StatusReport(
            days=whole_days_between(record.last_mention, now),
            last_mention=record.last_mention,
        )

    def evaluate_trigger(self, record: MentionRecord, matched_span: str, now: datetime) -> TriggerOutcome:
        """Suppress the notice only while strictly inside the cooldown window."""

        suppressed = record.last_mention is not None and now - record.last_mention < self._cooldown
        return TriggerOutcome(matched_span=matched_span, suppressed=suppressed)

    def confirm_reset(self, record: MentionRecord, now: datetime) -> Tuple[MentionRecord, ResetSummary]:
        """Move the last mention to now. Cooldown never blocks a reset.

        The caller owns persistence of the returned record.
        """

        previous: Optional[datetime] = record.last_mention
        days_was = whole_days_between(previous, now) if previous is not None else None
        summary = ResetSummary(new_mention=now, previous_mention=previous, days_was=days_was)
        return MentionRecord(last_mention=now), summary
