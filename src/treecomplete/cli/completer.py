"""prompt_toolkit completer backed by the catalog resolver."""

from __future__ import annotations

from typing import Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from treecomplete.completion.resolver import CompletionResolver
from treecomplete.completion.tokens import element_at, tokenize, word_at


class CatalogCompleter(Completer):
    """Completes sub-commands, option names and option values with descriptions.

    ``program`` is prepended to the buffer when the prompt does not contain
    the program name itself (as in the interactive shell).
    """

    def __init__(self, resolver: CompletionResolver, program: str | None = None) -> None:
        self._resolver = resolver
        self._prefix = f"{program} " if program else ""

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        line = self._prefix + document.text
        cursor = len(self._prefix) + document.cursor_position

        elements = tokenize(line)
        word = word_at(elements, cursor)
        current = element_at(elements, cursor)
        # Replace everything typed for the element, quotes included
        replace_len = cursor - current.start if current is not None else 0

        for candidate in self._resolver.get_completions(word, elements, cursor):
            yield Completion(
                candidate.insert_text,
                start_position=-replace_len,
                display=candidate.display_text,
                display_meta=candidate.tool_tip,
            )
