"""
Codepoint classification for emoji and symbol removal.

A classifier is an immutable range table plus the character-class pattern
compiled from it. One instance per strictness is built on first use and then
shared by every worker thread.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import Pattern, Tuple

from emover.core.utils.constants import EMOJI_RANGES, SYMBOL_RANGES


class Strictness(Enum):
    """Which codepoints count as removable."""
    EMOJI_ONLY = "emoji"
    EMOJI_AND_SYMBOLS = "symbols"


DEFAULT_STRICTNESS = Strictness.EMOJI_AND_SYMBOLS

CodepointRange = Tuple[int, int]


def _ranges_for(strictness: Strictness) -> Tuple[CodepointRange, ...]:
    if strictness is Strictness.EMOJI_AND_SYMBOLS:
        return EMOJI_RANGES + SYMBOL_RANGES
    return EMOJI_RANGES


def _compile_ranges(ranges: Tuple[CodepointRange, ...]) -> Pattern:
    parts = []
    for start, end in ranges:
        if start == end:
            parts.append(re.escape(chr(start)))
        else:
            parts.append(f"{re.escape(chr(start))}-{re.escape(chr(end))}")
    return re.compile(f"[{''.join(parts)}]")


class SymbolClassifier:
    """
    Decides whether single characters are removable under a strictness mode.

    Use ``SymbolClassifier.for_strictness`` rather than the constructor so the
    table is built once per run.
    """

    def __init__(self, strictness: Strictness = DEFAULT_STRICTNESS):
        self.strictness = strictness
        self.ranges = _ranges_for(strictness)
        self._pattern = _compile_ranges(self.ranges)

    @classmethod
    @lru_cache(maxsize=None)
    def for_strictness(cls, strictness: Strictness) -> "SymbolClassifier":
        return cls(strictness)

    def is_removable(self, char: str) -> bool:
        """
        Classify one character.

        Args:
            char: A single character; lone surrogates and unassigned
                codepoints are accepted and classify as non-removable

        Returns:
            True if the character's codepoint falls in an active range
        """
        codepoint = ord(char)
        return any(start <= codepoint <= end for start, end in self.ranges)

    def strip(self, text: str) -> str:
        """Return ``text`` with every removable character deleted."""
        return self._pattern.sub("", text)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(strictness={self.strictness.value})"
