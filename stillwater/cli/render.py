"""Rich renderables for journal entries and the settings form."""

from datetime import date
from typing import Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from stillwater.errors import ValidationErrors
from stillwater.models.journal import JournalEntry, mood_color, mood_emoji

FORM_LABELS = {
    "displayName": "Display Name",
    "email": "Email",
    "dailyGoal": "Daily Goal (minutes)",
    "notifications": "Notifications",
    "soundEnabled": "Sound",
}


def format_entry_date(value: str) -> str:
    """Format an entry date as e.g. 'Monday, March 4, 2024'.

    Dates that do not parse are shown as typed.
    """
    try:
        parsed = date.fromisoformat(value)
    except (TypeError, ValueError):
        return value
    return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year}"


def render_entries(entries: list[JournalEntry], title: str = "Mindfulness Journal") -> Table:
    """Table of journal entries in the given order."""
    table = Table(title=title, show_header=True, header_style="bold cyan")

    table.add_column("ID", style="dim")
    table.add_column("Mood", justify="center")
    table.add_column("Date")
    table.add_column("Title", style="bold")
    table.add_column("Edited", style="dim")

    for entry in entries:
        mood = Text(f"{mood_emoji(entry.mood)} {entry.mood.value}", style=mood_color(entry.mood))
        edited = entry.updated_at.astimezone().strftime("%Y-%m-%d %H:%M") if entry.updated_at else ""
        table.add_row(
            str(entry.id),
            mood,
            format_entry_date(entry.date),
            entry.title,
            edited,
        )

    return table


def render_entry(entry: JournalEntry) -> Panel:
    """Full view of a single entry."""
    lines = [f"[bold]{entry.title}[/bold]"]
    if entry.content:
        lines.append(f"\n{entry.content}")
    if entry.gratitude:
        lines.append(f"\n[bold]🙏 Gratitude:[/bold]\n{entry.gratitude}")
    if entry.goals:
        lines.append(f"\n[bold]🎯 Intentions:[/bold]\n{entry.goals}")

    return Panel(
        "\n".join(lines),
        title=f"{mood_emoji(entry.mood)} {format_entry_date(entry.date)}",
        subtitle=f"[dim]#{entry.id}[/dim]",
        border_style=mood_color(entry.mood),
    )


def render_form(
    draft: dict,
    errors: ValidationErrors,
    touched: Optional[dict[str, bool]] = None,
) -> Table:
    """Settings form with inline errors for touched fields.

    Args:
        draft: Field values keyed by camelCase name.
        errors: Field errors keyed by camelCase name.
        touched: Fields whose errors may be shown. None shows all errors.
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_column("Error", style="red")

    for name, label in FORM_LABELS.items():
        value = draft.get(name)
        if isinstance(value, bool):
            shown = "[green]on[/green]" if value else "[dim]off[/dim]"
        else:
            shown = str(value) if value not in (None, "") else "[dim]-[/dim]"

        message = errors.get(name)
        if touched is not None and not touched.get(name):
            message = None
        table.add_row(label, shown, message or "")

    return table
