"""Core event processing.

This module is integration-agnostic. It only relies on ports for storage and
replies, enabling other chat frontends without changes here.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from core.errors import StorageWriteError
from core.keyword_matcher import KeywordMatcher
from core.models import EVENT_RESET, EVENT_STATUS, EVENT_TEXT, ChatEvent, MentionRecord
from core.policy import MentionPolicy
from core.ports import CounterStorePort, ReplierPort

LOGGER = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MessageProcessor:
    """Owns the mention record and routes events through matcher and policy."""

    def __init__(
        self,
        matcher: KeywordMatcher,
        policy: MentionPolicy,
        store: CounterStorePort,
        replier: ReplierPort,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._matcher = matcher
        self._policy = policy
        self._store = store
        self._replier = replier
        self._clock = clock
        self._record: Optional[MentionRecord] = None
        # Read-decide-write must not interleave between concurrent handlers.
        self._lock = asyncio.Lock()

    @property
    def record(self) -> MentionRecord:
        if self._record is None:
            self._record = self._store.load()
        return self._record

    async def handle(self, event: ChatEvent) -> None:
        """Process one inbound event, replying at most once."""

        async with self._lock:
            if event.kind == EVENT_STATUS:
                await self._handle_status(event)
            elif event.kind == EVENT_RESET:
                await self._handle_reset(event)
            elif event.kind == EVENT_TEXT:
                await self._handle_text(event)
            else:
                LOGGER.debug("Ignoring event of kind %r", event.kind)

    async def _handle_status(self, event: ChatEvent) -> None:
        LOGGER.info("Status query from user=%s chat=%s", event.sender, event.chat_id)
        report = self._policy.evaluate_query(self.record, self._clock())
        await self._replier.send_status(event, report)

    async def _handle_reset(self, event: ChatEvent) -> None:
        LOGGER.info("Reset from user=%s chat=%s", event.sender, event.chat_id)
        new_record, summary = self._policy.confirm_reset(self.record, self._clock())
        try:
            self._store.save(new_record)
        except StorageWriteError:
            # The old record stays current and the chat gets no confirmation.
            LOGGER.exception("Failed to persist reset for chat=%s", event.chat_id)
            return
        self._record = new_record
        await self._replier.send_reset(event, summary)

    async def _handle_text(self, event: ChatEvent) -> None:
        span = self._matcher.classify(event.text)
        if span is None:
            return

        outcome = self._policy.evaluate_trigger(self.record, span, self._clock())
        if outcome.suppressed:
            LOGGER.debug(
                "Ignoring mention %r, last mention %s is inside the cooldown",
                span,
                self.record.last_mention,
            )
            return

        LOGGER.info("Triggered by keyword=%r in chat=%s", span, event.chat_id)
        await self._replier.send_soft_trigger(event, outcome)
