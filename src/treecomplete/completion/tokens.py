"""Command-line elements and a shell-like tokenizer that keeps source offsets."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

_NEGATIVE_NUMBER = re.compile(r"-\d+")
_QUOTES = "'\""


class ElementKind(str, Enum):
    """How an element of the command line was written."""

    word = "word"
    string = "string"
    parameter = "parameter"


@dataclass(frozen=True)
class CommandElement:
    """One element of a tokenized command line.

    ``text`` is the raw source slice ``line[start:end]``; ``value`` is the
    text with quotes and escapes removed.
    """

    kind: ElementKind
    text: str
    value: str
    start: int
    end: int

    @property
    def is_parameter(self) -> bool:
        return self.kind is ElementKind.parameter

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["kind"] = self.kind.value
        return d


def is_negative_number(word: str) -> bool:
    """Return True for words like ``-5`` that look like options but are values."""
    return _NEGATIVE_NUMBER.fullmatch(word) is not None


def tokenize(line: str) -> list[CommandElement]:
    """Split ``line`` on unquoted whitespace.

    Quoted segments become string elements; an unterminated quote runs to the
    end of the line. Bare words starting with '-' (other than negative
    numbers and a lone '-') become parameter elements.
    """
    elements: list[CommandElement] = []
    i, n = 0, len(line)
    while i < n:
        if line[i].isspace():
            i += 1
            continue

        start = i
        chunks: list[str] = []
        quoted = False
        while i < n and not line[i].isspace():
            ch = line[i]
            if ch in _QUOTES:
                quoted = True
                close = line.find(ch, i + 1)
                if close == -1:
                    chunks.append(line[i + 1:])
                    i = n
                else:
                    chunks.append(line[i + 1:close])
                    i = close + 1
            elif ch == "\\" and i + 1 < n:
                chunks.append(line[i + 1])
                i += 2
            else:
                chunks.append(ch)
                i += 1

        value = "".join(chunks)
        if quoted:
            kind = ElementKind.string
        elif value.startswith("-") and value != "-" and not is_negative_number(value):
            kind = ElementKind.parameter
        else:
            kind = ElementKind.word
        elements.append(CommandElement(kind=kind, text=line[start:i], value=value, start=start, end=i))
    return elements


def element_at(elements: list[CommandElement], cursor: int) -> CommandElement | None:
    """Return the element the cursor is inside or right after, if any."""
    for element in elements:
        if element.start < cursor <= element.end:
            return element
    return None


def word_at(elements: list[CommandElement], cursor: int) -> str:
    """Return the partial word being completed at ``cursor``.

    Empty when the cursor sits on whitespace after the last element.
    """
    element = element_at(elements, cursor)
    if element is None:
        return ""
    typed = element.text[: cursor - element.start]
    if typed and typed[0] in _QUOTES:
        typed = typed[1:].replace(typed[0], "")
    return typed
