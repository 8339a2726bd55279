"""Helpers shared by the CLI command modules."""

import click
from rich.panel import Panel

from stillwater.config import AppConfig, load_config
from stillwater.db.store import DataStore


def get_config(ctx: click.Context) -> AppConfig:
    """The config loaded by the root group, or a fresh load."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and "config" in obj:
        return obj["config"]
    return load_config()


def get_data_store(ctx: click.Context) -> DataStore:
    """Get the data store instance."""
    return DataStore(get_config(ctx).storage.db_path)


def error_panel(message: str, title: str = "Error") -> Panel:
    return Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    )
