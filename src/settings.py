"""Static configuration for dayswithout.

All user-editable settings (topic, keywords, cooldown, commands, logging)
live in a single JSON file for quick edits without touching Python. Secrets
stay in the environment (.env).
"""

import json
import os

from core.config import build_command_config, build_topic_config

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# config.json sits next to the project root unless overridden.
CONFIG_PATH = os.getenv("DAYSWITHOUT_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Topic label, keywords and cooldown are validated once at startup.
TOPIC = build_topic_config(_CONFIG)

# Chat command names, without the leading slash.
COMMANDS = build_command_config(_CONFIG.get("commands", {}))

# Where the last-mention record is kept.
_storage = _CONFIG.get("storage", {})
DATA_PATH = _resolve_path(_storage.get("path", "data.json"))

# How instants are rendered in replies (strftime, local timezone).
_display = _CONFIG.get("display", {})
DATE_FORMAT = _display.get("date_format", "%d.%m.%Y %H:%M:%S")

# debug=true forces DEBUG level regardless of logging.level.
DEBUG = bool(_CONFIG.get("debug", False))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
