"""The `script` command — prints the shell hook that wires a program to `treecomplete complete`."""

from __future__ import annotations

import re

import click

from treecomplete.cli.main import AppContext, pass_context

_BASH_TEMPLATE = """\
_treecomplete_{func}() {{
    local src
    COMPREPLY=()
    src=$(treecomplete complete --format bash --line "$COMP_LINE" --cursor "$COMP_POINT" 2>/dev/null)
    if [[ $? == 0 ]]; then
        eval "${{src}}"
    fi
}}

complete -o nospace -o default -F _treecomplete_{func} {program}
"""

_ZSH_TEMPLATE = """\
_treecomplete_{func}() {{
    local -a candidates
    candidates=("${{(@f)$(treecomplete complete --format zsh --line "$BUFFER" --cursor "$CURSOR" 2>/dev/null)}}")
    _describe 'values' candidates
}}

compdef _treecomplete_{func} {program}
"""

SCRIPTS = {"bash": _BASH_TEMPLATE, "zsh": _ZSH_TEMPLATE}


def render_script(shell: str, program: str) -> str:
    """Return the hook script for ``shell`` completing ``program``."""
    func = re.sub(r"\W", "_", program)
    return SCRIPTS[shell].format(func=func, program=program)


@click.command("script")
@click.argument("shell_name", type=click.Choice(sorted(SCRIPTS)))
@click.option("--program", default=None, help="Program to complete (default: the catalog root name).")
@pass_context
def script(ctx: AppContext, shell_name: str, program: str | None) -> None:
    """Print the completion hook for SHELL_NAME; source it from your rc file."""
    if program is None:
        program = ctx.config.get("catalog", {}).get("root_name", "az")
    click.echo(render_script(shell_name, program), nl=False)
