"""Wildcard prefix matching shared by every completion kind."""

from __future__ import annotations

import fnmatch
import re
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


def make_pattern(word: str) -> re.Pattern[str] | None:
    """Compile ``word`` into a case-insensitive glob pattern.

    A trailing ``*`` is kept as typed; otherwise one is appended, so the
    pattern means "starts with". Returns None for the empty word, which
    matches everything.
    """
    if not word:
        return None
    glob = word if word.endswith("*") else f"{word}*"
    return re.compile(fnmatch.translate(glob), re.IGNORECASE)


def matches(word: str, text: str) -> bool:
    """Return True if ``text`` matches the partial ``word``."""
    pattern = make_pattern(word)
    return pattern is None or pattern.match(text) is not None


def filter_matches(word: str, items: Iterable[T], key: Callable[[T], str] | None = None) -> list[T]:
    """Keep the items whose spelling matches ``word``, in their original order."""
    pattern = make_pattern(word)
    if pattern is None:
        return list(items)
    get = key or str
    return [item for item in items if pattern.match(get(item))]


def dedupe(items: Iterable[T], key: Callable[[T], str] | None = None) -> list[T]:
    """Drop items whose spelling repeats an earlier one, ignoring case."""
    get = key or str
    seen: set[str] = set()
    result: list[T] = []
    for item in items:
        folded = get(item).casefold()
        if folded in seen:
            continue
        seen.add(folded)
        result.append(item)
    return result
