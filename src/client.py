"""Telegram client factory for dayswithout.

We explicitly manage the client's lifecycle (start/run_until_disconnected)
so it is obvious when the session is created and when it ends.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from telethon import TelegramClient

from core.errors import ConfigError


def read_bot_token() -> str:
    """Return BOT_TOKEN from the environment (.env included)."""

    load_dotenv()
    token = os.getenv("BOT_TOKEN")
    if not token:
        raise ConfigError("Missing BOT_TOKEN in environment")
    return token


def build_client() -> TelegramClient:
    """Create a Telethon client from environment variables.

    Telethon logs bots in over MTProto, so API_ID/API_HASH are required next
    to the bot token. The session name defaults to "dayswithout".
    """

    load_dotenv()

    api_id = os.getenv("API_ID")
    api_hash = os.getenv("API_HASH")
    session_name = os.getenv("SESSION_NAME", "dayswithout")

    # Fail fast on missing credentials.
    if not api_id or not api_hash:
        raise ConfigError("Missing API_ID or API_HASH in environment")
    try:
        api_id_value = int(api_id)
    except ValueError as exc:
        raise ConfigError("API_ID must be numeric") from exc

    logging.getLogger(__name__).info("Initializing Telegram client")

    return TelegramClient(session_name, api_id_value, api_hash)
