"""Session feedback commands for Stillwater CLI."""

import click
from rich.console import Console
from rich.panel import Panel

from stillwater.cli.common import get_data_store
from stillwater.managers.feedback import FeedbackManager

console = Console()


@click.group()
def feedback() -> None:
    """Share how you feel after a session."""
    pass


@feedback.command("submit")
@click.option(
    "--mood", "-m",
    type=click.IntRange(1, 5),
    default=3,
    show_default=True,
    help="How you feel after the session (1-5).",
)
@click.option("--text", "-t", default="", help="Additional feedback.")
@click.pass_context
def submit_feedback(ctx: click.Context, mood: int, text: str) -> None:
    """Record feedback for the session you just finished.

    \b
    Examples:
      stillwater feedback submit --mood 4
      stillwater feedback submit -m 5 -t "Felt very calm"
    """
    manager = FeedbackManager(get_data_store(ctx))
    manager.set_mood(mood)
    manager.set_feedback(text)
    session = manager.submit()

    body = f"Your mood: {session.emoji} {session.label}"
    if session.feedback:
        body += f'\n\n"{session.feedback}"'
    console.print(Panel(
        body,
        title="[bold green]Thank you for your feedback![/bold green]",
        subtitle=f"[dim]Sessions: {manager.session_count}[/dim]",
        border_style="green",
    ))


@feedback.command("count")
@click.pass_context
def session_count(ctx: click.Context) -> None:
    """Show how many sessions you have given feedback for."""
    manager = FeedbackManager(get_data_store(ctx))
    console.print(f"Sessions: [bold]{manager.session_count}[/bold]")
