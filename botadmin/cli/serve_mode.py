"""Serve mode: run the admin console with uvicorn."""

import sys

import typer
import uvicorn

from botadmin.admin.server import create_app
from botadmin.config import APP_ENV, DATA_DIR, HOST, PORT
from botadmin.errors import ConfigError
from botadmin.utils.logger import configure_logging

from .shared import console, logger


def serve(
    port: int = typer.Option(PORT, "--port", "-p", help="Port for the admin console"),
    host: str = typer.Option(HOST, "--host", "-h", help="Bind host"),
    log_level: str = typer.Option("", "--log-level", "-l", help="Override LOG_LEVEL (DEBUG, INFO, WARNING)"),
) -> None:
    """Start the admin console."""
    if log_level:
        configure_logging(level=log_level)
    log = logger.bind(command="serve", port=port, app_env=APP_ENV)
    log.info("serve.start")

    try:
        app = create_app()
    except ConfigError as e:
        console.print(f"[red]Config error: {e}[/red]")
        log.error("serve.config_error", error=str(e))
        raise typer.Exit(1) from e
    except OSError as e:
        console.print(f"[red]Cannot create data directory {DATA_DIR}: {e}[/red]")
        log.error("serve.data_dir_error", data_dir=str(DATA_DIR), error=str(e))
        raise typer.Exit(1) from e

    console.print(f"[green]Admin Panel running on http://{host}:{port}/login[/green]")
    console.print(f"[dim]Data directory: {DATA_DIR}[/dim]")
    try:
        uvicorn.run(
            app,
            host=host,
            port=port,
            log_level="info",
            log_config=None,
            timeout_graceful_shutdown=15,
        )
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
        sys.exit(0)
