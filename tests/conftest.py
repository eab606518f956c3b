"""Shared fixtures: a small on-disk catalog in the harvester's layout."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from treecomplete.catalog.store import CatalogStore
from treecomplete.completion.resolver import CompletionResolver
from treecomplete.completion.tokens import tokenize, word_at

ROOT_ENTRIES = [
    {"name": "group1", "type": "Group", "description": "First group of commands."},
    {"name": "vm", "type": "Group", "description": "Manage Linux or Windows virtual machines.", "attribute": ""},
    {"name": "upgrade", "type": "Command", "description": "Upgrade the CLI.", "attribute": "[Preview]"},
    {"name": "version", "type": "Command", "description": "Show the versions of the CLI."},
]

GROUP1_ENTRIES = [
    {"name": "do-thing", "type": "Command", "description": "Do the thing."},
    {"name": "sub", "type": "Group", "description": "A nested group.", "attribute": "[Experimental]"},
]

DO_THING = {
    "name": "do-thing",
    "description": "Do the thing.",
    "options": [
        {
            "name": "--output",
            "short": ["-o"],
            "description": "Output format.",
            "arguments": ["json", "table"],
        },
        {
            "name": "--name",
            "alias": ["--display-name"],
            "short": ["-n"],
            "description": "Name of the thing.",
        },
        {
            "name": "--no-wait",
            "attribute": "[Preview]",
            "description": "Do not wait for the long-running operation to finish.",
        },
        {
            "name": "--tier",
            "alias": None,
            "short": None,
            "description": "Service tier.",
            "arguments": ["Basic", "Standard", "Premium"],
        },
    ],
    "examples": "1. Do the thing.\n```sh\naz group1 do-thing --name x\n```",
}

SUB_ENTRIES = [
    {"name": "leaf", "type": "Command", "description": "A leaf command."},
]

LEAF = {
    "name": "leaf",
    "description": "A leaf command.",
    "options": [{"name": "--force", "description": "Force it."}],
}

VM_ENTRIES = [
    {"name": "create", "type": "Command", "description": "Create a virtual machine."},
    {"name": "missing", "type": "Command", "description": "Declared but never harvested."},
    {"name": "garbled", "type": "Command", "description": "Harvested into invalid JSON."},
]

VM_CREATE = {
    "name": "create",
    "description": "Create a virtual machine.",
    "options": [
        {"name": "--resource-group", "short": ["-g"], "description": "Name of resource group."},
        {"name": "--image", "description": "The name of the operating system image."},
        {
            "name": "--size",
            "description": "The VM size to be created.",
            "arguments": ["Standard_B1s", "Standard_B2s", "Standard_D2s_v3"],
        },
        {"name": "--count", "description": "Number of virtual machines to create."},
        {"name": "--location", "short": ["-l"], "description": "Location."},
    ],
}

VERSION = {
    "name": "version",
    "description": "Show the versions of the CLI.",
    "options": [{"name": "--output", "short": ["-o"], "description": "Output format.", "arguments": ["json", "tsv"]}],
}


def _write(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def write_catalog(root_dir: Path) -> Path:
    """Write the sample catalog under ``root_dir`` and return it."""
    _write(root_dir / "az-entries.json", ROOT_ENTRIES)
    _write(root_dir / "group1" / "group1-entries.json", GROUP1_ENTRIES)
    _write(root_dir / "group1" / "do-thing.json", DO_THING)
    _write(root_dir / "group1" / "sub" / "sub-entries.json", SUB_ENTRIES)
    _write(root_dir / "group1" / "sub" / "leaf.json", LEAF)
    _write(root_dir / "vm" / "vm-entries.json", VM_ENTRIES)
    _write(root_dir / "vm" / "create.json", VM_CREATE)
    (root_dir / "vm" / "garbled.json").write_text('{"name": "garbled", "options": [', encoding="utf-8")
    _write(root_dir / "version.json", VERSION)
    _write(root_dir / "upgrade.json", {
        "name": "upgrade",
        "description": "Upgrade the CLI.",
        "options": [{"name": "--yes", "short": ["-y"], "description": "Do not prompt for confirmation."}],
    })
    return root_dir


@pytest.fixture
def catalog_dir(tmp_path):
    return write_catalog(tmp_path / "catalog")


@pytest.fixture
def store(catalog_dir):
    return CatalogStore(catalog_dir, root_name="az", root_description="Azure CLI")


@pytest.fixture
def resolver(store):
    return CompletionResolver(store)


@pytest.fixture
def complete(resolver):
    """Return a helper: complete(line, cursor=None) -> list of insert texts."""

    def _complete(line: str, cursor: int | None = None) -> list[str]:
        if cursor is None:
            cursor = len(line)
        elements = tokenize(line)
        word = word_at(elements, cursor)
        return [c.insert_text for c in resolver.get_completions(word, elements, cursor)]

    return _complete


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config layer at a temporary directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("TREECOMPLETE_CONFIG_DIR", str(path))
    return path
