"""Telegram reply adapter.

Formats one of the fixed reply templates and sends it back to the chat the
event came from.
"""

from __future__ import annotations

from adapters.reply_formatting import (
    DEFAULT_DATE_FORMAT,
    format_reset,
    format_soft_trigger,
    format_status,
)
from core.models import ChatEvent, ResetSummary, StatusReport, TriggerOutcome


class TelegramReplier:
    """Replier adapter that answers in the originating chat."""

    def __init__(self, client, topic: str, reset_command: str, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        self._client = client
        self._topic = topic
        self._reset_command = reset_command
        self._date_format = date_format

    async def _send(self, event: ChatEvent, text: str) -> None:
        await self._client.send_message(event.chat_id, text)

    async def send_status(self, event: ChatEvent, report: StatusReport) -> None:
        await self._send(event, format_status(report, self._topic, self._date_format))

    async def send_reset(self, event: ChatEvent, summary: ResetSummary) -> None:
        await self._send(event, format_reset(summary, self._topic, self._date_format))

    async def send_soft_trigger(self, event: ChatEvent, outcome: TriggerOutcome) -> None:
        await self._send(event, format_soft_trigger(outcome, self._topic, self._reset_command))
