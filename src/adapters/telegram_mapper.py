"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the core processor.
"""

from __future__ import annotations

from typing import Optional, Tuple

from telethon.tl.custom import Message

from core.config import CommandConfig
from core.models import EVENT_RESET, EVENT_STATUS, EVENT_TEXT, ChatEvent


def parse_command(text: str) -> Optional[Tuple[str, Optional[str]]]:
    """Split "/cmd" or "/cmd@bot" into (command, bot), both lowercased.

    Returns None when the text is not a command.
    """

    stripped = text.strip()
    if not stripped.startswith("/"):
        return None
    head = stripped.split(maxsplit=1)[0][1:]
    name, at, target = head.partition("@")
    if not name:
        return None
    return name.lower(), (target.lower() if at else None)


def event_kind(text: str, commands: CommandConfig, bot_username: Optional[str] = None) -> Optional[str]:
    """Classify raw text as a status query, a reset, plain text or None.

    Commands addressed to another bot return None. Unknown commands are
    scanned like any other text.
    """

    parsed = parse_command(text)
    if parsed is None:
        return EVENT_TEXT
    command, target = parsed
    if target is not None and (not bot_username or target != bot_username.lower()):
        return None
    if command == commands.status.lower():
        return EVENT_STATUS
    if command == commands.reset.lower():
        return EVENT_RESET
    return EVENT_TEXT


def _sender_label(message: Message) -> Optional[str]:
    sender = getattr(message, "sender", None)
    username = getattr(sender, "username", None)
    if isinstance(username, str) and username:
        return username
    sender_id = getattr(message, "sender_id", None)
    return str(sender_id) if sender_id is not None else None


def build_event(
    message: Message, commands: CommandConfig, bot_username: Optional[str] = None
) -> Optional[ChatEvent]:
    """Build a core ChatEvent from a Telethon Message, or None to ignore it.

    bot_username is this bot's own username, used to drop commands
    addressed to other bots in the same chat.
    """

    # Media-only messages carry no caption text.
    text = message.raw_text or ""
    kind = event_kind(text, commands, bot_username)
    if kind is None:
        return None
    return ChatEvent(
        kind=kind,
        chat_id=message.chat_id,
        text=text,
        sender=_sender_label(message),
    )
