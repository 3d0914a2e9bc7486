"""Strip rules: text removed from a preview before it is attached.

A rule is either a literal substring or a compiled regular expression.
Both remove every match, so callers never need to care which one they hold.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

# Markdown link brackets, reference-style link labels, HTML tags and
# emphasis characters.
DEFAULT_STRIP_PATTERN = re.compile(r"\[|\]\[.*?\]|<.*?>|[*_<>]")


@dataclass(frozen=True)
class LiteralStrip:
    """Remove every literal occurrence of ``text``."""

    text: str = ""

    def remove(self, value: str) -> str:
        if not self.text:
            return value
        return value.replace(self.text, "")


@dataclass(frozen=True)
class PatternStrip:
    """Remove every match of a compiled regular expression."""

    pattern: re.Pattern

    def remove(self, value: str) -> str:
        return self.pattern.sub("", value)


StripRule = Union[LiteralStrip, PatternStrip]

NO_STRIP = LiteralStrip("")
DEFAULT_STRIP = PatternStrip(DEFAULT_STRIP_PATTERN)


def as_strip_rule(value: object) -> StripRule:
    """Normalize a loosely typed strip value.

    ``None`` means "strip nothing"; a string is a literal; a compiled
    pattern is used as-is. Anything already a rule passes through.
    """
    if value is None:
        return NO_STRIP
    if isinstance(value, (LiteralStrip, PatternStrip)):
        return value
    if isinstance(value, re.Pattern):
        return PatternStrip(value)
    if isinstance(value, str):
        return LiteralStrip(value)
    raise TypeError(f"Unsupported strip rule: {value!r}")
