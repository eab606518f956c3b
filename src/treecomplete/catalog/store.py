"""Catalog store — lazily materializes catalog nodes from the persisted JSON files.

Layout written by the harvester, rooted at ``root_dir``::

    <root_dir>/<root>-entries.json          root listing
    <dir>/<group>/<group>-entries.json      listing of a group whose parent lives in <dir>
    <dir>/<command>.json                    descriptor of a command whose parent lives in <dir>
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable

import pydantic
from pydantic import TypeAdapter

from treecomplete.core.exceptions import CatalogCorruptError, NotFoundError
from treecomplete.models.catalog import CatalogEntry, Command, CommandKind, CommandNode, Group

logger = logging.getLogger(__name__)

_ENTRIES_ADAPTER = TypeAdapter(list[CatalogEntry])


def listing_path(parent_dir: Path, group_name: str) -> Path:
    """Return the listing file of group ``group_name`` whose parent lives in ``parent_dir``."""
    return parent_dir / group_name / f"{group_name}-entries.json"


def descriptor_path(parent_dir: Path, command_name: str) -> Path:
    """Return the descriptor file of command ``command_name`` whose parent lives in ``parent_dir``."""
    return parent_dir / f"{command_name}.json"


class CatalogStore:
    """Owns the root group of one catalog and materializes children on demand.

    Constructed once by the host layer and passed to every resolver call.
    """

    def __init__(
        self,
        root_dir: Path | str,
        root_name: str = "az",
        root_description: str = "Root command",
    ) -> None:
        self.root_dir = Path(root_dir).expanduser()
        self.root_name = root_name
        self.root_description = root_description
        self._root: Group | None = None
        self._root_lock = threading.Lock()

    @property
    def root(self) -> Group:
        """The root group, loaded on first access."""
        if self._root is not None:
            return self._root
        with self._root_lock:
            if self._root is None:
                path = self.root_dir / f"{self.root_name}-entries.json"
                entries = self._load_entries(path)
                self._root = self._build_group(self.root_name, self.root_description, entries, path).attach(self.root_dir)
                logger.debug("Loaded catalog root %s (%d entries)", path, len(entries))
        return self._root

    def resolve_child(self, group: Group, name: str) -> CommandNode | None:
        """Return the child ``name`` of ``group``, materializing it on first access.

        Returns None when ``group`` declares no such entry. Raises
        CatalogCorruptError when the entry is declared but its file is
        missing or malformed.
        """
        cached = group.cached_child(name)
        if cached is not None:
            return cached

        entry = group.entry(name)
        if entry is None:
            return None

        with group.lock:
            cached = group.cached_child(name)
            if cached is not None:
                return cached
            node = self._materialize(group, entry)
            return group.remember_child(entry.name, node)

    def resolve_path(self, names: Iterable[str]) -> CommandNode:
        """Walk ``names`` from the root and return the node reached."""
        node: CommandNode = self.root
        walked: list[str] = []
        for name in names:
            if not isinstance(node, Group):
                raise NotFoundError(f"'{' '.join(walked)}' is a command and has no sub-commands")
            child = self.resolve_child(node, name)
            if child is None:
                prefix = " ".join([self.root_name, *walked])
                raise NotFoundError(f"'{name}' is not a sub-command of '{prefix}'")
            walked.append(name)
            node = child
        return node

    # ── Materialization ──────────────────────────────────────────

    def _materialize(self, group: Group, entry: CatalogEntry) -> CommandNode:
        parent_dir = group.location if group.location is not None else self.root_dir
        if entry.kind is CommandKind.GROUP:
            path = listing_path(parent_dir, entry.name)
            entries = self._load_entries(path)
            node: CommandNode = self._build_group(entry.name, entry.description, entries, path).attach(path.parent)
        else:
            path = descriptor_path(parent_dir, entry.name)
            node = self._load_command(path)
        logger.debug(
            "Materialized %s '%s' from %s (%d of %d loaded under '%s')",
            entry.kind.value, entry.name, path, len(group.materialized) + 1, len(group.entries), group.name,
        )
        return node

    def _read(self, path: Path) -> bytes:
        """Read one catalog file. The only storage access of the store."""
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise CatalogCorruptError(path, "file not found") from e
        except OSError as e:
            raise CatalogCorruptError(path, f"cannot read file: {e}") from e

    def _load_entries(self, path: Path) -> list[CatalogEntry]:
        data = self._read(path)
        try:
            return _ENTRIES_ADAPTER.validate_json(data)
        except pydantic.ValidationError as e:
            raise CatalogCorruptError(path, _summarize(e)) from e

    def _load_command(self, path: Path) -> Command:
        data = self._read(path)
        try:
            return Command.model_validate_json(data)
        except pydantic.ValidationError as e:
            raise CatalogCorruptError(path, _summarize(e)) from e

    @staticmethod
    def _build_group(name: str, description: str, entries: list[CatalogEntry], path: Path) -> Group:
        try:
            return Group(name=name, description=description, entries=entries)
        except pydantic.ValidationError as e:
            raise CatalogCorruptError(path, _summarize(e)) from e


def _summarize(error: pydantic.ValidationError) -> str:
    """Condense a pydantic error into one line for logs."""
    first = error.errors()[0] if error.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    message = first.get("msg", str(error))
    more = f" (+{error.error_count() - 1} more)" if error.error_count() > 1 else ""
    return f"{where}: {message}{more}" if where else f"{message}{more}"
