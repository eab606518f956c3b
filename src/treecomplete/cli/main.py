"""Root CLI group — entry point for all treecomplete commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from treecomplete import __version__
from treecomplete.core.exceptions import TreeCompleteError
from treecomplete.output.formatter import OutputFormatter


class AppContext:
    """Shared context passed through Click commands."""

    def __init__(self, json_mode: bool = False, catalog_dir: str | None = None) -> None:
        self.json_mode = json_mode
        self.formatter = OutputFormatter(json_mode=json_mode)
        self.catalog_dir = catalog_dir
        self._config: dict[str, Any] | None = None
        self._store = None

    @property
    def config(self) -> dict[str, Any]:
        """Lazy-load and return the configuration."""
        if self._config is None:
            from treecomplete.core.config import load_config

            self._config = load_config()
        return self._config

    def get_store(self):
        """Lazy-create the catalog store, once per process."""
        if self._store is None:
            from treecomplete.catalog.store import CatalogStore
            from treecomplete.core.config import get_catalog_dir

            catalog = self.config.get("catalog", {})
            root_dir = Path(self.catalog_dir).expanduser() if self.catalog_dir else get_catalog_dir(self.config)
            self._store = CatalogStore(
                root_dir,
                root_name=catalog.get("root_name", "az"),
                root_description=catalog.get("root_description", "Root command"),
            )
        return self._store

    def get_resolver(self):
        """Return a resolver bound to this context's store."""
        from treecomplete.completion.resolver import CompletionResolver

        return CompletionResolver(self.get_store())


pass_context = click.make_pass_decorator(AppContext, ensure=True)


class JsonGroup(click.Group):
    """Click group that reports treecomplete errors through the formatter."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except TreeCompleteError as e:
            app = ctx.find_object(AppContext) or AppContext()
            app.formatter.error(str(e))
            ctx.exit(1)


@click.group(cls=JsonGroup)
@click.option("--json", "json_mode", is_flag=True, help="Output JSON for scripts.")
@click.option("--catalog", "catalog_dir", default=None, type=click.Path(file_okay=False),
              help="Catalog directory (overrides the configured path).")
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug).")
@click.version_option(__version__, prog_name="treecomplete")
@click.pass_context
def cli(ctx: click.Context, json_mode: bool, catalog_dir: str | None, verbose: int) -> None:
    """treecomplete — tab completion for large multi-level CLIs from a harvested catalog."""
    from treecomplete.core.log import configure_logging

    ctx.obj = AppContext(json_mode=json_mode, catalog_dir=catalog_dir)
    log_config = ctx.obj.config.get("logging", {})
    level = {0: log_config.get("level", "WARNING"), 1: "INFO"}.get(verbose, "DEBUG")
    configure_logging(level, log_config.get("file") or None)


# ── Register subcommands ──────────────────────────────────────────

from treecomplete.cli.complete_cmd import complete_cmd
cli.add_command(complete_cmd, "complete")

from treecomplete.cli.show import show
cli.add_command(show)

from treecomplete.cli.script_cmd import script
cli.add_command(script)

from treecomplete.cli.config_cmd import config
cli.add_command(config)

from treecomplete.cli.repl import shell
cli.add_command(shell)
