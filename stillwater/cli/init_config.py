"""First-run setup command."""

import click
from rich.console import Console
from rich.panel import Panel

from stillwater.config import config_path, create_template_config

console = Console()


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Write a template configuration file.

    \b
    Examples:
      stillwater init
      stillwater init --force
    """
    path = config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        console.print("[dim]Use --force to overwrite it.[/dim]")
        return

    written = create_template_config(path)
    console.print(Panel(
        f"[green]Configuration written to[/green] {written}\n\n"
        "[dim]Set your name and email under [user] to prefill settings.[/dim]",
        title="[bold green]Stillwater Ready[/bold green]",
        border_style="green",
    ))
