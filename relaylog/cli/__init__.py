"""relaylog command-line interface (Typer)."""
