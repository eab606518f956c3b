"""Config CLI commands — inspect and change the TOML settings."""

from __future__ import annotations

import click

from treecomplete.cli.main import AppContext, JsonGroup, pass_context
from treecomplete.core.config import get_config_path, set_value


@click.group(cls=JsonGroup)
@pass_context
def config(ctx: AppContext) -> None:
    """Show or change settings (catalog location, logging)."""
    pass


@config.command("show")
@pass_context
def config_show(ctx: AppContext) -> None:
    """Show the effective configuration."""
    if ctx.json_mode:
        ctx.formatter.json(ctx.config)
        return

    rows = []
    for section, values in ctx.config.items():
        if not isinstance(values, dict):
            rows.append([section, str(values)])
            continue
        for key, value in values.items():
            rows.append([f"{section}.{key}", str(value)])
    ctx.formatter.table(
        title=str(get_config_path()),
        columns=[("Key", "bold"), ("Value", "green")],
        rows=rows,
    )


@config.command("set")
@click.argument("key")
@click.argument("value")
@pass_context
def config_set(ctx: AppContext, key: str, value: str) -> None:
    """Set KEY (e.g. catalog.path) to VALUE."""
    updated = set_value(key, value)
    section, name = key.split(".", 1)
    if ctx.json_mode:
        ctx.formatter.json({key: updated[section][name]})
        return
    ctx.formatter.success(f"{key} = {value}")
