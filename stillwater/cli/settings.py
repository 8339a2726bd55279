"""Settings commands for Stillwater CLI.

Shows and edits the settings profile. Changed fields are validated as
they are applied, and the profile is only saved when every field is
valid.
"""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from stillwater.cli.common import error_panel, get_config, get_data_store
from stillwater.cli.render import render_form
from stillwater.errors import PersistenceWriteError
from stillwater.managers.settings import SettingsManager

console = Console()


def _get_manager(ctx: click.Context) -> SettingsManager:
    """Build a settings manager hydrated from the store and config."""
    config = get_config(ctx)
    manager = SettingsManager(
        get_data_store(ctx),
        latency=config.settings.submit_latency,
        success_window=config.settings.success_window,
    )
    manager.hydrate(config.identity())
    return manager


@click.group()
def settings() -> None:
    """Profile and practice settings.

    \b
    Commands:
      show  - Display the current settings
      set   - Change and save settings
    """
    pass


@settings.command("show")
@click.pass_context
def show_settings(ctx: click.Context) -> None:
    """Display the current settings."""
    manager = _get_manager(ctx)
    sensory = get_config(ctx).sensory_context()

    console.print(Panel(
        render_form(manager.draft, {}),
        title="[bold]Settings[/bold]",
        border_style="cyan",
    ))
    console.print(
        f"[dim]Theme: {sensory.theme} · Breathing: {sensory.breathing_pattern} "
        f"({sensory.breathing_speed})[/dim]"
    )


@settings.command("set")
@click.option("--display-name", "-n", default=None, help="Name shown in the app.")
@click.option("--email", "-e", default=None, help="Contact email.")
@click.option("--daily-goal", "-g", default=None, help="Daily practice goal in minutes (1-120).")
@click.option("--notifications/--no-notifications", default=None, help="Reminder notifications.")
@click.option("--sound/--no-sound", "sound_enabled", default=None, help="Session sounds.")
@click.pass_context
def set_settings(
    ctx: click.Context,
    display_name: Optional[str],
    email: Optional[str],
    daily_goal: Optional[str],
    notifications: Optional[bool],
    sound_enabled: Optional[bool],
) -> None:
    """Change settings and save them.

    \b
    Examples:
      stillwater settings set --display-name "Sam" --email sam@example.com
      stillwater settings set --daily-goal 20 --no-sound
    """
    manager = _get_manager(ctx)

    changes = {
        "display_name": display_name,
        "email": email,
        "daily_goal": daily_goal,
        "notifications": notifications,
        "sound_enabled": sound_enabled,
    }
    for name, value in changes.items():
        if value is None:
            continue
        manager.set_field(name, value)
        manager.touch_field(name)

    try:
        saved = manager.submit_sync()
    except PersistenceWriteError as e:
        console.print(error_panel(f"Settings could not be saved:\n\n{e}"))
        raise SystemExit(1)

    if not saved:
        console.print(Panel(
            render_form(manager.draft, manager.errors, manager.touched),
            title="[bold red]Please fix the highlighted fields[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    console.print(Panel(
        render_form(manager.draft, {}),
        title="[bold green]Settings saved successfully![/bold green]",
        border_style="green",
    ))
