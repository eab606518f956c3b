"""Interactive shell — try completions against the catalog with a live prompt."""

from __future__ import annotations

import click
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.panel import Panel

from treecomplete.cli.completer import CatalogCompleter
from treecomplete.cli.main import AppContext, pass_context
from treecomplete.cli.show import show_command, show_group
from treecomplete.completion.classifier import leaves_command_path
from treecomplete.completion.tokens import tokenize
from treecomplete.core.config import get_history_path
from treecomplete.core.exceptions import TreeCompleteError
from treecomplete.models.catalog import Group

console = Console()

EXIT_WORDS = {"exit", "quit", ":q"}


def _command_path(line: str) -> list[str]:
    """Leading names of ``line`` up to the first option."""
    names = []
    for element in tokenize(line):
        if leaves_command_path(element):
            break
        names.append(element.value)
    return names


def describe_line(ctx: AppContext, line: str) -> None:
    """Print the catalog node that ``line`` resolves to."""
    store = ctx.get_store()
    names = _command_path(line)
    try:
        node = store.resolve_path(names)
    except TreeCompleteError as e:
        ctx.formatter.error(str(e))
        return

    path = " ".join([store.root_name, *names])
    if isinstance(node, Group):
        show_group(ctx, path, node)
    else:
        show_command(ctx, path, node, examples=True)


@click.command("shell")
@pass_context
def shell(ctx: AppContext) -> None:
    """Interactive prompt with catalog completion. Enter shows the node reached."""
    # A corrupt root listing propagates to JsonGroup, which reports it
    program = ctx.get_store().root.name

    console.print(
        Panel(
            f"[bold cyan]treecomplete[/bold cyan] — completing [bold]{program}[/bold]\n"
            "Press Tab to complete, Enter to show the node, Ctrl-D to quit.",
            border_style="cyan",
        )
    )

    completer = CatalogCompleter(ctx.get_resolver(), program=program)
    history = FileHistory(str(get_history_path()))
    session: PromptSession[str] = PromptSession(
        completer=completer,
        history=history,
        complete_while_typing=False,
    )

    while True:
        try:
            text = session.prompt(f"{program}> ").strip()
            if not text:
                continue
            if text.lower() in EXIT_WORDS:
                raise EOFError()
            describe_line(ctx, text)
            console.print()
        except KeyboardInterrupt:
            continue
        except EOFError:
            console.print("[dim]Goodbye![/dim]")
            break
