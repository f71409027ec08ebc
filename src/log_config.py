"""Logging setup for the dayswithout bot.

The "logging" section of config.json decides where records go; the bot's
credentials are masked in every line before it is written.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional

from dotenv import load_dotenv

# Loggers whose records are worth keeping at the configured level.
APP_LOGGERS = ("app", "client", "core", "adapters")

DEFAULT_SECRET_VARS = ("BOT_TOKEN", "API_HASH")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MASK = "***"


class SecretMaskingFormatter(logging.Formatter):
    """Formatter that replaces known secret values with a mask."""

    def __init__(self, secrets: Iterable[str], fmt: str = LOG_FORMAT, datefmt: Optional[str] = DATE_FORMAT) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        # Longest first so a token containing another secret is fully masked.
        self._secrets = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, MASK)
        return message


def secret_values(config: dict) -> list[str]:
    """Read the values of the environment variables named under "redact"."""

    redact_cfg = config.get("redact", {})
    if not redact_cfg.get("enabled", True):
        return []
    names = redact_cfg.get("patterns", DEFAULT_SECRET_VARS)
    return [os.environ[name] for name in names if os.getenv(name)]


def resolve_level(config: dict, debug: bool) -> int:
    """The config's debug flag always wins over logging.level."""

    if debug:
        return logging.DEBUG
    level = logging.getLevelName(str(config.get("level", "INFO")).upper())
    return level if isinstance(level, int) else logging.INFO


def build_handlers(config: dict, project_root: str, level: int) -> list[logging.Handler]:
    """Create console and rotating-file handlers sharing one masking formatter."""

    formatter = SecretMaskingFormatter(secret_values(config))
    handlers: list[logging.Handler] = []

    if config.get("console", True):
        handlers.append(logging.StreamHandler())

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/dayswithout.log")
        if not os.path.isabs(path):
            path = os.path.join(project_root, path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path,
                maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
                backupCount=int(file_cfg.get("backup_count", 5)),
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def configure_logging(config: Optional[dict], project_root: str, debug: bool = False) -> None:
    """Install handlers on the root logger. Telethon stays at WARNING unless debugging."""

    config = config or {}
    if not config.get("enabled", True):
        return

    # Secrets may only live in .env.
    load_dotenv()
    level = resolve_level(config, debug)
    handlers = build_handlers(config, project_root, level)
    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    logging.getLogger("telethon").setLevel(logging.DEBUG if debug else logging.WARNING)
