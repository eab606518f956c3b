"""Completion resolver — turns a classified command line into candidates.

Three modes, decided from the classification:

- sub-command names, when the cursor is on the slot right after the last
  command-path element;
- option argument values, for any other value-looking word;
- option names, when the word starts with '-'.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Sequence

from treecomplete.catalog.store import CatalogStore
from treecomplete.completion.classifier import Classification, classify, leaves_command_path
from treecomplete.completion.matcher import dedupe, filter_matches, matches
from treecomplete.completion.tokens import CommandElement
from treecomplete.core.exceptions import CatalogCorruptError
from treecomplete.models.catalog import Command, Group

logger = logging.getLogger(__name__)

HELP_FLAGS = ("-h", "--help")
HELP_TOOL_TIP = "Show the help message."


class CandidateKind(str, Enum):
    """What a candidate completes."""

    sub_command = "sub_command"
    parameter_name = "parameter_name"
    parameter_value = "parameter_value"


@dataclass(frozen=True)
class Candidate:
    """One completion suggestion."""

    insert_text: str
    display_text: str
    kind: CandidateKind
    tool_tip: str

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["kind"] = self.kind.value
        return d


def _candidate(text: str, kind: CandidateKind, tip: str) -> Candidate:
    return Candidate(insert_text=text, display_text=text, kind=kind, tool_tip=tip)


class CompletionResolver:
    """Answers completion requests against one catalog store."""

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    def get_completions(
        self,
        word_to_complete: str,
        elements: Sequence[CommandElement],
        cursor: int,
    ) -> list[Candidate]:
        """Return the ordered candidates for the word under ``cursor``.

        Never raises for a corrupt catalog: the condition is logged and no
        candidates are returned.
        """
        try:
            info = classify(self.store, elements, cursor, word_to_complete)
            if not info.value_mode:
                return self._parameter_names(info, elements, word_to_complete)
            if info.in_sub_command_slot:
                return self._sub_commands(info, word_to_complete)
            return self._argument_values(info, elements, word_to_complete)
        except CatalogCorruptError as e:
            logger.error("No completions available: %s", e)
            return []

    # ── Modes ────────────────────────────────────────────────────

    def _sub_commands(self, info: Classification, word: str) -> list[Candidate]:
        group = info.current
        if not isinstance(group, Group):
            return []
        logger.debug("Completing sub-commands of '%s' for %r", group.name, word)
        return [
            _candidate(entry.name, CandidateKind.sub_command, entry.tool_tip)
            for entry in filter_matches(word, group.entries, key=lambda e: e.name)
        ]

    def _argument_values(
        self,
        info: Classification,
        elements: Sequence[CommandElement],
        word: str,
    ) -> list[Candidate]:
        command = info.current
        if not isinstance(command, Command) or info.cursor_index < 1:
            return []

        previous = elements[info.cursor_index - 1]
        if not leaves_command_path(previous):
            return []

        option = command.find_option(previous.value)
        if option is None or option.arguments is None:
            logger.debug("No enumerated values for %r on '%s'", previous.value, command.name)
            return []

        return [
            _candidate(value, CandidateKind.parameter_value, value)
            for value in filter_matches(word, option.arguments)
        ]

    def _parameter_names(
        self,
        info: Classification,
        elements: Sequence[CommandElement],
        word: str,
    ) -> list[Candidate]:
        node = info.current
        if isinstance(node, Group):
            return [
                _candidate(flag, CandidateKind.parameter_name, HELP_TOOL_TIP)
                for flag in filter_matches(word, HELP_FLAGS)
            ]

        used = self._used_spellings(info, elements)
        results: list[Candidate] = []
        for option in node.options:
            if any(s.casefold() in used for s in option.spellings):
                continue
            for spelling in option.spellings:
                if matches(word, spelling):
                    results.append(_candidate(spelling, CandidateKind.parameter_name, option.tool_tip))
        return dedupe(results, key=lambda c: c.insert_text)

    @staticmethod
    def _used_spellings(info: Classification, elements: Sequence[CommandElement]) -> set[str]:
        """Option spellings already on the line after the command path, folded."""
        used: set[str] = set()
        for index in range(info.last_command_index + 1, len(elements)):
            if index == info.cursor_index:
                continue
            element = elements[index]
            if element.is_parameter:
                used.add(element.text.casefold())
            elif leaves_command_path(element):
                used.add(element.value.casefold())
        return used
