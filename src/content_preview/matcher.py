"""Glob matching for selecting which documents get a preview.

Patterns follow the usual build-tool conventions:

* ``*`` and ``?`` never cross a ``/``
* ``**`` spans any number of path segments, including none, so ``**/*``
  matches every path
* ``[abc]`` / ``[!abc]`` are character classes
* a leading ``!`` negates the pattern and removes paths matched so far
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Sequence, Union


@lru_cache(maxsize=128)
def _compile(pattern: str) -> re.Pattern:
    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < n and pattern[i] == "/":
                    # "**/" may also match zero directories
                    i += 1
                    parts.append("(?:.*/)?")
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "[":
            j = pattern.find("]", i + 2)
            if j == -1:
                parts.append(re.escape(c))
            else:
                body = pattern[i + 1:j].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                i = j + 1
                continue
        else:
            parts.append(re.escape(c))
        i += 1
    return re.compile("".join(parts), re.DOTALL)


def path_matches(path: str, pattern: str) -> bool:
    """True if ``path`` matches a single, non-negated glob pattern."""
    return _compile(pattern).fullmatch(path) is not None


def match_paths(paths: Iterable[str], patterns: Union[str, Sequence[str]]) -> list[str]:
    """
    Select the paths matched by ``patterns``.

    Patterns apply in order: a plain pattern adds its matches, a ``!``
    pattern removes them. The result keeps the order of ``paths``.
    """
    if isinstance(patterns, str):
        patterns = [patterns]
    paths = list(paths)

    selected: set[str] = set()
    for pattern in patterns:
        if pattern.startswith("!"):
            selected -= {p for p in selected if path_matches(p, pattern[1:])}
        else:
            selected |= {p for p in paths if path_matches(p, pattern)}

    return [p for p in paths if p in selected]
