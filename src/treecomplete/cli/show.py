"""The `show` command — browse the catalog one node at a time."""

from __future__ import annotations

import click

from treecomplete.cli.main import AppContext, pass_context
from treecomplete.models.catalog import Command, Group


@click.command("show")
@click.argument("names", nargs=-1)
@click.option("--examples/--no-examples", default=True, help="Print a command's examples.")
@pass_context
def show(ctx: AppContext, names: tuple[str, ...], examples: bool) -> None:
    """Show a group's entries or a command's options.

    NAMES is the path below the root, e.g. `show vm create`.
    """
    store = ctx.get_store()
    node = store.resolve_path(names)
    path = " ".join([store.root_name, *names])

    if isinstance(node, Group):
        show_group(ctx, path, node)
    elif isinstance(node, Command):
        show_command(ctx, path, node, examples)


def show_group(ctx: AppContext, path: str, group: Group) -> None:
    if ctx.json_mode:
        ctx.formatter.json({
            "name": group.name,
            "kind": group.kind.value,
            "description": group.description,
            "entries": [e.model_dump(mode="json", by_alias=True) for e in group.entries],
        })
        return

    ctx.formatter.table(
        title=f"{path} — {group.description}",
        columns=[("Name", "bold"), ("Kind", "cyan"), ("Attribute", "yellow"), ("Description", "")],
        rows=[[e.name, e.kind.value, e.attribute or "", e.description] for e in group.entries],
    )


def show_command(ctx: AppContext, path: str, command: Command, examples: bool) -> None:
    if ctx.json_mode:
        ctx.formatter.json(command.model_dump(mode="json", by_alias=True, exclude_none=True))
        return

    rows = []
    for option in command.options:
        rows.append([
            ", ".join(option.spellings),
            option.attribute or "",
            option.description,
            ", ".join(option.arguments) if option.arguments else "",
        ])
    ctx.formatter.table(
        title=f"{path} — {command.description}",
        columns=[("Option", "bold"), ("Attribute", "yellow"), ("Description", ""), ("Values", "green")],
        rows=rows,
    )
    if examples and command.examples:
        ctx.formatter.panel(command.examples, title="Examples", border_style="cyan")
