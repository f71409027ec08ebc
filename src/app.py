"""Application entry point for the dayswithout bot."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Optional

from art import tprint
from telethon import events

from adapters.json_storage import JSONCounterStore
from adapters.reply_formatting import format_status
from adapters.telegram_mapper import build_event
from adapters.telegram_replier import TelegramReplier
from client import build_client, read_bot_token
from core.errors import ConfigError
from core.keyword_matcher import build_matcher
from core.policy import MentionPolicy
from core.processor import MessageProcessor, utc_now
from log_config import configure_logging

NAME = "DAYS WITHOUT"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _load_settings():
    """Import settings, turning any config problem into a clean exit."""

    try:
        import settings
    except (ConfigError, FileNotFoundError, json.JSONDecodeError) as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        raise SystemExit(1) from exc
    return settings


def _run(settings) -> None:
    LOGGER.info("Starting dayswithout")
    LOGGER.info(
        "Config loaded: topic=%r, keywords=%s, cooldown=%s, debug=%s",
        settings.TOPIC.label,
        len(settings.TOPIC.keywords),
        settings.TOPIC.cooldown,
        settings.DEBUG,
    )

    try:
        matcher = build_matcher(settings.TOPIC.keywords)
        bot_token = read_bot_token()
        client = build_client()
    except ConfigError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        raise SystemExit(1) from exc

    store = JSONCounterStore(settings.DATA_PATH)
    replier = TelegramReplier(
        client,
        topic=settings.TOPIC.label,
        reset_command=settings.COMMANDS.reset,
        date_format=settings.DATE_FORMAT,
    )
    processor = MessageProcessor(
        matcher=matcher,
        policy=MentionPolicy(settings.TOPIC.cooldown),
        store=store,
        replier=replier,
    )

    # Explicit lifecycle management makes start/shutdown behavior obvious.
    client.start(bot_token=bot_token)
    me = client.loop.run_until_complete(client.get_me())
    LOGGER.info("Authorized as @%s (id=%s)", me.username, me.id)

    # Single handler keeps Telethon integration minimal and defers all
    # routing to the core processor.
    @client.on(events.NewMessage(incoming=True))
    async def handler(event) -> None:
        try:
            chat_event = build_event(event.message, settings.COMMANDS, me.username)
            if chat_event is None:
                return
            await processor.handle(chat_event)
        except Exception:
            LOGGER.exception("Error while processing message")

    LOGGER.info("Bot started, waiting for updates...")
    client.run_until_disconnected()


def _status(settings) -> None:
    policy = MentionPolicy(settings.TOPIC.cooldown)
    record = JSONCounterStore(settings.DATA_PATH).load()
    report = policy.evaluate_query(record, utc_now())
    print(format_status(report, settings.TOPIC.label, settings.DATE_FORMAT))


def _check(settings, text: str) -> None:
    try:
        matcher = build_matcher(settings.TOPIC.keywords)
    except ConfigError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        raise SystemExit(1) from exc
    span = matcher.classify(text)
    print(f"match: {span}" if span is not None else "no match")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="dayswithout")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("status", help="Print the days-without counter from the data file")
    check_parser = subparsers.add_parser("check", help="Show which keyword a text would trigger")
    check_parser.add_argument("text", help="Message text to classify")

    args = parser.parse_args(argv)
    settings = _load_settings()
    configure_logging(settings.LOGGING, settings.PROJECT_ROOT, settings.DEBUG)

    if args.command == "status":
        _status(settings)
        return
    if args.command == "check":
        _check(settings, args.text)
        return
    _print_banner()
    _run(settings)


if __name__ == "__main__":
    main()
