"""Main CLI entry point for Stillwater.

This module provides the main click group and lazy loading
of the command modules.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when they are invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Import the command's module; the command is named after its key."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        cmd = getattr(importlib.import_module(module_path), cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "journal": "stillwater.cli.journal",
    "settings": "stillwater.cli.settings",
    "feedback": "stillwater.cli.feedback",
    "init": "stillwater.cli.init_config",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def configure_logging(level: str | int) -> None:
    """Send stillwater log records to stderr through rich."""
    logger = logging.getLogger("stillwater")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="stillwater")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Stillwater - a calm place for your journal and practice settings.

    \b
    Quick Start:
      stillwater init                      # Write a config file
      stillwater journal add -t "Morning"  # Write a journal entry
      stillwater journal list --mood good  # Browse entries by mood
      stillwater settings set --daily-goal 15
    """
    from stillwater.config import load_config

    ctx.ensure_object(dict)
    config = load_config()
    ctx.obj["config"] = config
    configure_logging("DEBUG" if verbose else config.logging.level)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
