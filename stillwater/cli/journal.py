"""Journal commands for Stillwater CLI.

Handles writing, editing, browsing and deleting journal entries.
"""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from stillwater.cli.common import error_panel, get_data_store
from stillwater.cli.render import render_entries, render_entry
from stillwater.errors import PersistenceWriteError
from stillwater.managers.journal import JournalManager
from stillwater.models.journal import ALL_MOODS, Mood
from stillwater.validation import validate_journal_draft

console = Console()

MOOD_CHOICES = [m.value for m in Mood]


def _get_manager(ctx: click.Context, assume_yes: bool = False) -> JournalManager:
    """Build a journal manager over the configured store."""
    def confirm(message: str) -> bool:
        return assume_yes or click.confirm(message)

    return JournalManager(get_data_store(ctx), confirm=confirm)


def _apply_options(manager: JournalManager, options: dict) -> None:
    for name, value in options.items():
        if value is not None:
            manager.set_field(name, value)


def _commit(manager: JournalManager, verb: str) -> None:
    """Submit the draft and report the outcome."""
    draft = manager.draft
    try:
        entry = manager.submit()
    except PersistenceWriteError as e:
        console.print(error_panel(f"Entry {verb} but could not be saved:\n\n{e}"))
        raise SystemExit(1)

    if entry is None:
        errors = validate_journal_draft(draft) or {"entry": "Entry not found"}
        console.print(error_panel("\n".join(errors.values()), title="Entry Not Saved"))
        raise SystemExit(1)

    console.print(Panel(
        f"[bold green]Entry {verb}[/bold green]\n\n"
        f"ID:    {entry.id}\n"
        f"Title: {entry.title}\n"
        f"Mood:  {entry.mood.value}",
        title="[bold]Journal[/bold]",
        border_style="green",
    ))


def _entry_options(func):
    """Shared field options for add and edit."""
    options = [
        click.option("--date", "-d", "date", default=None, help="Entry date (YYYY-MM-DD)."),
        click.option("--mood", "-m", type=click.Choice(MOOD_CHOICES), default=None,
                     help="How you are feeling."),
        click.option("--content", "-c", default=None, help="Reflection text."),
        click.option("--gratitude", "-g", default=None, help="What you are thankful for."),
        click.option("--goals", default=None, help="Intentions for tomorrow."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def journal() -> None:
    """Mindfulness journal.

    \b
    Commands:
      list    - Browse entries, optionally by mood
      show    - Read one entry
      add     - Write a new entry
      edit    - Change an entry
      delete  - Remove an entry
    """
    pass


@journal.command("list")
@click.option(
    "--mood", "-m",
    type=click.Choice([ALL_MOODS] + MOOD_CHOICES),
    default=ALL_MOODS,
    help="Only show entries with this mood.",
)
@click.pass_context
def list_entries(ctx: click.Context, mood: str) -> None:
    """Show journal entries, newest first.

    \b
    Examples:
      stillwater journal list
      stillwater journal list --mood great
    """
    manager = _get_manager(ctx)
    entries = manager.filter(mood)

    if not entries:
        console.print(Panel(
            "[dim]No journal entries yet. Use 'stillwater journal add' to write your first.[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    console.print(render_entries(entries))
    console.print(f"\n[dim]Showing {len(entries)} of {len(manager)} entries[/dim]")


@journal.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_entry(ctx: click.Context, entry_id: int) -> None:
    """Read a single entry."""
    entry = _get_manager(ctx).get(entry_id)
    if entry is None:
        console.print(f"[yellow]Entry with ID {entry_id} not found[/yellow]")
        return
    console.print(render_entry(entry))


@journal.command("add")
@click.option("--title", "-t", default="", help="Entry title (required).")
@_entry_options
@click.pass_context
def add_entry(ctx: click.Context, title: str, **fields: Optional[str]) -> None:
    """Write a new journal entry.

    \b
    Examples:
      stillwater journal add -t "Morning calm" -m good
      stillwater journal add -t "Long day" -m stressed -c "Too many meetings"
    """
    manager = _get_manager(ctx)
    manager.set_field("title", title)
    _apply_options(manager, fields)
    _commit(manager, "created")


@journal.command("edit")
@click.argument("entry_id", type=int)
@click.option("--title", "-t", default=None, help="New title.")
@_entry_options
@click.pass_context
def edit_entry(ctx: click.Context, entry_id: int, **fields: Optional[str]) -> None:
    """Change an existing entry.

    Only the options given are changed.

    \b
    Examples:
      stillwater journal edit 1700000000000 -m great
    """
    manager = _get_manager(ctx)
    if not manager.begin_edit(entry_id):
        console.print(f"[yellow]Entry with ID {entry_id} not found[/yellow]")
        return

    _apply_options(manager, fields)
    _commit(manager, "updated")


@journal.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt.")
@click.pass_context
def delete_entry(ctx: click.Context, entry_id: int, yes: bool) -> None:
    """Delete an entry permanently.

    \b
    Examples:
      stillwater journal delete 1700000000000
      stillwater journal delete 1700000000000 --yes
    """
    manager = _get_manager(ctx, assume_yes=yes)
    entry = manager.get(entry_id)
    if entry is None:
        console.print(f"[yellow]Entry with ID {entry_id} not found[/yellow]")
        return

    if not manager.delete(entry_id):
        console.print("[dim]Delete cancelled.[/dim]")
        return

    console.print(f"[green]✓ Deleted entry {entry_id} ({entry.title})[/green]")
