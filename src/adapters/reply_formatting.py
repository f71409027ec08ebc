"""Shared reply formatting helpers.

Every message the bot sends comes from one of the templates here, so the
wording stays consistent regardless of delivery channel.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.models import ResetSummary, StatusReport, TriggerOutcome

DEFAULT_DATE_FORMAT = "%d.%m.%Y %H:%M:%S"
NEVER = "never"


def format_instant(value: Optional[datetime], date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render an instant in the host's local timezone."""

    if value is None:
        return NEVER
    return value.astimezone().strftime(date_format)


def format_status(report: StatusReport, topic: str, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    if report.last_mention is None:
        return f"'{topic}' has never been mentioned yet."
    return (
        f"{report.days} days without mentioning {topic}.\n"
        f"Last mention was: {format_instant(report.last_mention, date_format)}"
    )


def format_reset(summary: ResetSummary, topic: str, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    # A first-ever reset has no streak to report.
    days_was = summary.days_was if summary.days_was is not None else 0
    return (
        f"Someone said something about {topic} at {format_instant(summary.new_mention, date_format)} "
        f"💀💀💀 noted, we held out for {days_was} days.\n"
        f"Previous mention was: {format_instant(summary.previous_mention, date_format)}"
    )


def format_soft_trigger(outcome: TriggerOutcome, topic: str, reset_command: str) -> str:
    return (
        f"Did someone say «{outcome.matched_span}»?\n"
        f"Reset the days-without-{topic} counter? Use /{reset_command} to confirm."
    )
