"""Core configuration dataclasses.

We keep config file loading outside the core, but these dataclasses define
the shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterable, Tuple

from core.errors import ConfigError

DEFAULT_COOLDOWN = timedelta(hours=2)


@dataclass(frozen=True)
class KeywordEntry:
    """A literal trigger phrase and whether it may grow to the right."""

    text: str
    allow_suffix: bool = True


@dataclass(frozen=True)
class TopicConfig:
    """Everything the core needs to know about the tracked topic."""

    label: str
    keywords: Tuple[KeywordEntry, ...]
    cooldown: timedelta = DEFAULT_COOLDOWN


@dataclass(frozen=True)
class CommandConfig:
    """Chat command names, without the leading slash."""

    status: str = "days"
    reset: str = "reset"


def _parse_keyword(raw: Any, no_suffix: set[str]) -> KeywordEntry | None:
    if isinstance(raw, str):
        text = raw.strip()
        allow_suffix = True
    elif isinstance(raw, dict):
        text = str(raw.get("text", "")).strip()
        allow_suffix = bool(raw.get("suffix", True))
    else:
        raise ConfigError(f"Unsupported keyword entry: {raw!r}")

    if not text:
        return None
    # The flat no_suffix list wins over per-entry flags.
    if text.lower() in no_suffix:
        allow_suffix = False
    return KeywordEntry(text=text, allow_suffix=allow_suffix)


def build_keywords(raw_keywords: Iterable[Any], no_suffix: Iterable[str] = ()) -> Tuple[KeywordEntry, ...]:
    """Normalize keyword config, dropping blank entries.

    Keywords may be plain strings (suffix allowed) or objects of the form
    ``{"text": "pear", "suffix": false}``.
    """

    no_suffix_set = {str(word).strip().lower() for word in no_suffix}
    entries = []
    for raw in raw_keywords:
        entry = _parse_keyword(raw, no_suffix_set)
        if entry is not None:
            entries.append(entry)
    if not entries:
        raise ConfigError("keywords is empty in config")
    return tuple(entries)


def build_topic_config(raw: dict) -> TopicConfig:
    """Build a validated TopicConfig from the raw config.json mapping."""

    label = str(raw.get("topic") or "").strip()
    if not label:
        raise ConfigError("topic is required in config")

    keywords = build_keywords(raw.get("keywords") or [], raw.get("no_suffix") or [])

    try:
        cooldown_hours = float(raw.get("cooldown_hours", DEFAULT_COOLDOWN.total_seconds() / 3600))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"cooldown_hours must be a number: {exc}") from exc
    if cooldown_hours < 0:
        raise ConfigError("cooldown_hours must not be negative")

    return TopicConfig(label=label, keywords=keywords, cooldown=timedelta(hours=cooldown_hours))


def build_command_config(raw: dict) -> CommandConfig:
    """Read command names, tolerating a leading slash in config."""

    status = str(raw.get("status", "days")).strip().lstrip("/")
    reset = str(raw.get("reset", "reset")).strip().lstrip("/")
    if not status or not reset:
        raise ConfigError("command names must not be empty")
    if status.lower() == reset.lower():
        raise ConfigError("status and reset commands must differ")
    return CommandConfig(status=status, reset=reset)
