"""CLI commands: one module per command (serve, validate-config)."""

from typer import Typer

from botadmin.cli import serve_mode, validate_config as validate_config_module

app = Typer(help="Chat-bot admin console")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(serve_mode.serve)
    app.command(name="validate-config")(validate_config_module.validate_config)


register_commands()
