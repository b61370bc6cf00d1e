"""Main Typer application — imports and registers all CLI commands.

Entry point: ``relaylog`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import typer

from relaylog.cli.commands.emit import emit_cmd
from relaylog.cli.commands.inspect import levels_cmd, show_config_cmd

app = typer.Typer(
    name="relaylog",
    help="relaylog: leveled, multi-sink logging.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="emit", help="Log one record through the configured sinks.")(emit_cmd)
app.command(name="levels", help="Show the severity levels.")(levels_cmd)
app.command(name="show-config", help="Show the settings resolved from the environment.")(show_config_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
