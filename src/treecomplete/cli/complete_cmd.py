"""The `complete` command — one completion request, printed for a shell or a human."""

from __future__ import annotations

import shlex

import click

from treecomplete.cli.main import AppContext, pass_context
from treecomplete.completion.resolver import Candidate
from treecomplete.completion.tokens import tokenize, word_at

FORMATS = ("table", "json", "plain", "bash", "zsh")


def _bash_lines(candidates: list[Candidate]) -> list[str]:
    return [f"COMPREPLY+=({shlex.quote(c.insert_text + ' ')})" for c in candidates]


def _zsh_lines(candidates: list[Candidate]) -> list[str]:
    # _describe splits on the first unescaped colon
    return [f"{c.insert_text.replace(':', chr(92) + ':')}:{c.tool_tip}" for c in candidates]


@click.command("complete")
@click.option("--line", "line", required=True, help="The command line typed so far.")
@click.option("--cursor", type=int, default=None, help="Cursor offset in the line (default: end of line).")
@click.option("--format", "fmt", type=click.Choice(FORMATS), default=None,
              help="Output format (default: table, or json with --json).")
@pass_context
def complete_cmd(ctx: AppContext, line: str, cursor: int | None, fmt: str | None) -> None:
    """Print completion candidates for LINE at the cursor."""
    if cursor is None:
        cursor = len(line)
    if not 0 <= cursor <= len(line):
        raise click.BadParameter(f"must be between 0 and {len(line)}", param_hint="--cursor")
    if fmt is None:
        fmt = "json" if ctx.json_mode else "table"

    elements = tokenize(line)
    word = word_at(elements, cursor)
    candidates = ctx.get_resolver().get_completions(word, elements, cursor)

    if fmt == "json":
        ctx.formatter.json([c.to_dict() for c in candidates])
    elif fmt == "plain":
        for c in candidates:
            click.echo(c.insert_text)
    elif fmt == "bash":
        for text in _bash_lines(candidates):
            click.echo(text)
    elif fmt == "zsh":
        for text in _zsh_lines(candidates):
            click.echo(text)
    else:
        if not candidates:
            ctx.formatter.info("No completions.")
            return
        ctx.formatter.table(
            title=f"Completions for {word!r}" if word else "Completions",
            columns=[("Candidate", "bold"), ("Kind", "cyan"), ("Description", "")],
            rows=[[c.display_text, c.kind.value, c.tool_tip] for c in candidates],
            data_for_json=[c.to_dict() for c in candidates],
        )
