"""Keyword compilation and matching logic (core domain)."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from core.config import KeywordEntry
from core.errors import ConfigError

LOGGER = logging.getLogger(__name__)

# A keyword is only a mention when it is not glued to other word characters.
_LEFT_BOUNDARY = r"(?:^|\W)"
_RIGHT_BOUNDARY = r"(?:$|\W)"
_SUFFIX = r"\w*"


def _keyword_pattern(entry: KeywordEntry) -> str:
    # Any run of whitespace inside a phrase matches any other run.
    quoted = r"\s+".join(re.escape(part) for part in entry.text.split())
    suffix = _SUFFIX if entry.allow_suffix else ""
    return f"(?:{quoted}){suffix}"


class KeywordMatcher:
    """Compiled, immutable matcher for one topic's keywords."""

    def __init__(self, pattern: re.Pattern) -> None:
        self._pattern = pattern

    @property
    def pattern(self) -> str:
        return self._pattern.pattern

    def classify(self, text: str) -> Optional[str]:
        """Return the first keyword span found in text, or None.

        The span is taken from the input, so it keeps the author's casing
        and any suffix the keyword grew.
        """

        if not text or not text.strip():
            return None
        match = self._pattern.search(text)
        if match and match.group(1):
            LOGGER.debug("Keyword matched: %r in message=%r", match.group(1), text)
            return match.group(1)
        LOGGER.debug("No keyword matched in message=%r", text)
        return None


def build_matcher(keywords: Iterable[KeywordEntry]) -> KeywordMatcher:
    """Compile keywords into a single boundary-aware alternation.

    Order is preserved: when two keywords can match at the same position,
    the one listed first wins.
    """

    parts = [_keyword_pattern(entry) for entry in keywords if entry.text.strip()]
    if not parts:
        raise ConfigError("keywords is empty in config")

    pattern = _LEFT_BOUNDARY + "(" + "|".join(parts) + ")" + _RIGHT_BOUNDARY
    LOGGER.debug("Compiling keyword pattern: %s", pattern)
    return KeywordMatcher(re.compile(pattern, re.IGNORECASE))
