"""Shared CLI helpers: console and logger."""

from rich.console import Console

from botadmin.utils.logger import get_logger

console = Console()
logger = get_logger("botadmin.cli")
