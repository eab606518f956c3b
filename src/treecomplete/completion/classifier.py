"""Token classifier — finds the current catalog node for a command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from treecomplete.catalog.store import CatalogStore
from treecomplete.completion.tokens import CommandElement, is_negative_number
from treecomplete.models.catalog import LONG_PREFIX, SHORT_PREFIX, Command, CommandNode, Group


@dataclass(frozen=True)
class Classification:
    """Where the cursor sits relative to the command path."""

    current: CommandNode
    last_command_index: int  # 0 is the program name / root
    cursor_index: int
    value_mode: bool  # sub-command or argument value, as opposed to an option name

    @property
    def in_sub_command_slot(self) -> bool:
        return self.cursor_index == self.last_command_index + 1


def cursor_element_index(elements: Sequence[CommandElement], cursor: int) -> int:
    """Index of the first element ending at or after ``cursor``, else ``len(elements)``."""
    for index, element in enumerate(elements):
        if element.end >= cursor:
            return index
    return len(elements)


def is_value_word(word: str) -> bool:
    """True unless ``word`` looks like an option name being typed."""
    return not word.startswith(SHORT_PREFIX) or is_negative_number(word)


def leaves_command_path(element: CommandElement) -> bool:
    return element.is_parameter or element.value.startswith(LONG_PREFIX)


def classify(
    store: CatalogStore,
    elements: Sequence[CommandElement],
    cursor: int,
    word_to_complete: str,
) -> Classification:
    """Walk the command path up to the cursor.

    Resolution stops at the first option-looking element, at an unknown
    name, or once a command is reached. Raises CatalogCorruptError if a
    declared node cannot be loaded.
    """
    cursor_index = cursor_element_index(elements, cursor)

    current: CommandNode = store.root
    last_command_index = 0
    for index in range(1, cursor_index):
        element = elements[index]
        if leaves_command_path(element) or not isinstance(current, Group):
            break
        child = store.resolve_child(current, element.value)
        if child is None:
            break
        current = child
        last_command_index = index
        if isinstance(current, Command):
            break

    return Classification(
        current=current,
        last_command_index=last_command_index,
        cursor_index=cursor_index,
        value_mode=is_value_word(word_to_complete),
    )
