"""Catalog models — entries, options, and the Group/Command node union."""

from __future__ import annotations

import threading
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from treecomplete.core.exceptions import ValidationError

LONG_PREFIX = "--"
SHORT_PREFIX = "-"


def tool_tip(attribute: str | None, description: str) -> str:
    """Return the tool-tip text: attribute tag (if any) followed by the description."""
    return f"{attribute} {description}" if attribute else description


def _require_text(value: str, field: str) -> str:
    if not value:
        raise ValidationError(f"{field} cannot be empty")
    return value


def _blank_to_none(value: str | None) -> str | None:
    # The harvester writes "" when a line carries no [Attribute] tag
    if value is None:
        return None
    value = value.strip()
    return value or None


class CommandKind(str, Enum):
    """Kind of a catalog entry, as persisted in listing files."""

    GROUP = "Group"
    COMMAND = "Command"


class CatalogEntry(BaseModel):
    """A named reference to a child of a group, before it is materialized."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    kind: CommandKind = Field(alias="type")
    description: str
    attribute: str | None = None

    @field_validator("name", "description")
    @classmethod
    def _not_empty(cls, value: str, info) -> str:
        return _require_text(value, info.field_name)

    @field_validator("attribute")
    @classmethod
    def _normalize_attribute(cls, value: str | None) -> str | None:
        return _blank_to_none(value)

    @property
    def tool_tip(self) -> str:
        return tool_tip(self.attribute, self.description)


class Option(BaseModel):
    """An option of a command, with every spelling it can be typed as."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    aliases: tuple[str, ...] = Field(default=(), alias="alias")
    short_forms: tuple[str, ...] = Field(default=(), alias="short")
    attribute: str | None = None
    description: str
    arguments: tuple[str, ...] | None = None

    @field_validator("aliases", "short_forms", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return () if value is None else value

    @field_validator("attribute")
    @classmethod
    def _normalize_attribute(cls, value: str | None) -> str | None:
        return _blank_to_none(value)

    @field_validator("description")
    @classmethod
    def _description_not_empty(cls, value: str) -> str:
        return _require_text(value, "description")

    @field_validator("name")
    @classmethod
    def _long_name(cls, value: str) -> str:
        _require_text(value, "name")
        if not value.startswith(LONG_PREFIX) or len(value) <= len(LONG_PREFIX):
            raise ValidationError(f"option name must start with '{LONG_PREFIX}': {value!r}")
        return value

    @field_validator("aliases")
    @classmethod
    def _long_aliases(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for alias in value:
            if not alias.startswith(LONG_PREFIX) or len(alias) <= len(LONG_PREFIX):
                raise ValidationError(f"option alias must start with '{LONG_PREFIX}': {alias!r}")
        return value

    @field_validator("short_forms")
    @classmethod
    def _single_char_shorts(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for short in value:
            if len(short) != 2 or not short.startswith(SHORT_PREFIX) or short[1] in "- ":
                raise ValidationError(f"short form must be '-' plus one character: {short!r}")
        return value

    @model_validator(mode="after")
    def _disjoint_spellings(self) -> "Option":
        spellings = self.spellings
        if len(set(spellings)) != len(spellings):
            raise ValidationError(f"option {self.name} declares a spelling more than once")
        return self

    @property
    def spellings(self) -> tuple[str, ...]:
        """Long name, aliases, then short forms, in declaration order."""
        return (self.name, *self.aliases, *self.short_forms)

    @property
    def tool_tip(self) -> str:
        return tool_tip(self.attribute, self.description)


class Command(BaseModel):
    """A terminal catalog node that owns its options."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CommandKind.COMMAND] = CommandKind.COMMAND
    name: str
    description: str
    options: tuple[Option, ...]
    examples: str | None = None

    @field_validator("name", "description")
    @classmethod
    def _not_empty(cls, value: str, info) -> str:
        return _require_text(value, info.field_name)

    @field_validator("options")
    @classmethod
    def _has_options(cls, value: tuple[Option, ...]) -> tuple[Option, ...]:
        if not value:
            raise ValidationError("a command must declare at least one option")
        return value

    def find_option(self, spelling: str) -> Option | None:
        """Look up an option by exact spelling, ignoring case.

        A '--' spelling is checked against long names and aliases, anything
        else against short forms. No prefix matching.
        """
        target = spelling.casefold()
        for option in self.options:
            if spelling.startswith(LONG_PREFIX):
                candidates = (option.name, *option.aliases)
            else:
                candidates = option.short_forms
            if any(c.casefold() == target for c in candidates):
                return option
        return None


class Group(BaseModel):
    """A catalog node whose children are materialized on first access.

    The materialized-children map is owned by the group instance and a name,
    once set, is never replaced. The store fills it under ``lock``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal[CommandKind.GROUP] = CommandKind.GROUP
    name: str
    description: str
    entries: tuple[CatalogEntry, ...]

    _location: Path | None = PrivateAttr(default=None)
    _index: dict[str, CatalogEntry] = PrivateAttr(default_factory=dict)
    _children: dict[str, CommandNode] = PrivateAttr(default_factory=dict)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @field_validator("name", "description")
    @classmethod
    def _not_empty(cls, value: str, info) -> str:
        return _require_text(value, info.field_name)

    @field_validator("entries")
    @classmethod
    def _unique_entries(cls, value: tuple[CatalogEntry, ...]) -> tuple[CatalogEntry, ...]:
        if not value:
            raise ValidationError("a group must declare at least one entry")
        seen: set[str] = set()
        for entry in value:
            key = entry.name.casefold()
            if key in seen:
                raise ValidationError(f"duplicate entry name: {entry.name}")
            seen.add(key)
        return value

    def model_post_init(self, context: Any) -> None:
        self._index = {entry.name.casefold(): entry for entry in self.entries}

    @property
    def location(self) -> Path | None:
        """Directory holding this group's child files, set by the store."""
        return self._location

    def attach(self, location: Path) -> "Group":
        """Bind the group to the directory its child files live in."""
        self._location = location
        return self

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    def entry(self, name: str) -> CatalogEntry | None:
        """Return the declared entry for ``name`` (case-insensitive)."""
        return self._index.get(name.casefold())

    def cached_child(self, name: str) -> CommandNode | None:
        """Return the already-materialized child for ``name``, if any."""
        entry = self.entry(name)
        if entry is None:
            return None
        return self._children.get(entry.name)

    def remember_child(self, name: str, node: CommandNode) -> CommandNode:
        """Cache ``node`` under ``name`` unless one is already there; return the cached node."""
        entry = self.entry(name)
        if entry is None:
            raise KeyError(name)
        return self._children.setdefault(entry.name, node)

    @property
    def materialized(self) -> tuple[str, ...]:
        """Names of the children loaded so far."""
        return tuple(self._children)


CommandNode = Annotated[Union[Group, Command], Field(discriminator="kind")]
