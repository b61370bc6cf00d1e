"""``relaylog levels`` and ``relaylog show-config`` — read-only views."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from relaylog.config import LoggerSettings
from relaylog.models.config import resolve_config
from relaylog.models.severity import DEFAULT_THRESHOLD, Severity, is_urgent

console = Console()


def levels_cmd() -> None:
    """Show the severity levels and how each one is routed."""
    table = Table(title="Severity Levels")
    table.add_column("Value", justify="right", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Routing")
    table.add_column("Remote tag", justify="center")

    for severity in Severity:
        if severity == Severity.STDOUT_ONLY:
            routing = "console only, never suppressed"
        elif severity == DEFAULT_THRESHOLD:
            routing = "all enabled sinks (default threshold)"
        else:
            routing = "all enabled sinks"
        tag = "[red]Yes[/red]" if is_urgent(severity) else "[dim]No[/dim]"
        table.add_row(str(int(severity)), severity.label, routing, tag)

    console.print(table)


def show_config_cmd() -> None:
    """Show the logger configuration resolved from the environment."""
    settings = LoggerSettings()
    table = Table(title="relaylog Settings (RELAYLOG_*)")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name, value in settings.model_dump().items():
        table.add_row(name, "[dim]unset[/dim]" if value in (None, "") else str(value))

    if settings.kb_team:
        # Resolving would open a remote session; only report what was asked for.
        table.add_row("sinks", "remote requested (session checked at startup)")
    else:
        config = resolve_config(settings.to_opts())
        table.add_row("threshold", config.threshold.label)
        sinks = ", ".join(kind.value for kind in config.enabled_sinks())
        table.add_row("sinks", sinks or "[dim]none[/dim]")

    console.print(table)
