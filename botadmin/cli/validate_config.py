"""Validate configuration and data files: print a summary table, exit 1 on any problem."""

from pathlib import Path

from rich.table import Table

from botadmin.config import DATA_DIR, JSON_FILES, PRODUCTS_DIR, check_config
from botadmin.errors import ConfigError
from botadmin.store import FlatFileStore

from .shared import console, logger


def validate_config() -> None:
    """Check ADMIN_PASS/SESSION_SECRET and that every JSON data file decodes to an array."""
    log = logger.bind(command="validate-config")
    log.info("validate_config.start")

    try:
        check_config()
    except ConfigError as e:
        console.print(f"[red]Config error: {e}[/red]")
        log.error("validate_config.fail", error=str(e))
        raise SystemExit(1) from e

    store = FlatFileStore(data_dir=DATA_DIR, products_dir=PRODUCTS_DIR)
    table = Table(title=f"Data files in {DATA_DIR}")
    table.add_column("File", style="cyan")
    table.add_column("Records", justify="right")
    table.add_column("Status")

    errors = []
    for name in JSON_FILES:
        path: Path = store.path_for(name)
        result = store.load_array(name)
        if not result.ok:
            errors.append(f"{name}: {result.error}")
            table.add_row(name, "-", f"[red]{result.error}[/red]")
        elif not path.exists():
            table.add_row(name, "0", "[yellow]missing (treated as empty)[/yellow]")
        else:
            table.add_row(name, str(len(result.items)), "[green]ok[/green]")
    table.add_row("produk/*.txt", str(len(store.list_names())), "[green]ok[/green]")

    console.print(table)
    if errors:
        for msg in errors:
            console.print(f"[red]{msg}[/red]")
        log.error("validate_config.validation_failed", errors=errors)
        raise SystemExit(1)
    console.print(f"[green]Config valid. {len(JSON_FILES)} data files checked.[/green]")
    log.info("validate_config.ok", files=len(JSON_FILES))
