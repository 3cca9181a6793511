"""
CLI main entry point for permdeps
"""

import importlib
import sys
from pathlib import Path

import click
import typer.main

from permdeps.core.config_manager import get_config_manager
from permdeps.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _load_env_file() -> None:
    """
    Load .env file from appropriate location using ConfigManager.
    """
    possible_paths = [Path.cwd() / ".env"]
    if sys.argv:
        main_script = Path(sys.argv[0]).resolve()
        if main_script.is_file():
            possible_paths.append(main_script.parent / ".env")

    get_config_manager().load_env_files(possible_paths, override=False)


LAZY_COMMANDS = {
    "resolve": "permdeps.cli.commands.resolve",
    "map": "permdeps.cli.commands.dependency_map",
}


class LazyGroup(click.Group):
    """Click group whose subcommands are typer apps imported on first use."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*self.commands, *LAZY_COMMANDS})

    def get_command(self, ctx: click.Context, name: str) -> click.Command | None:
        if name in self.commands:
            return self.commands[name]
        if name not in LAZY_COMMANDS:
            return None

        try:
            typer_app = importlib.import_module(LAZY_COMMANDS[name]).app
        except (ImportError, AttributeError) as e:
            logger.error(f"Failed to load command {name}: {e}")
            return None

        self.commands[name] = typer.main.get_command(typer_app)
        return self.commands[name]


@click.group(
    cls=LazyGroup,
    name="permdeps",
    help="Permission dependency resolution CLI",
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.option(
    "--log-level",
    default=None,
    help="Log level (DEBUG, INFO, WARNING, ERROR). Defaults to PERMDEPS_LOG_LEVEL or WARNING.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Main CLI entry point."""
    _load_env_file()
    config_manager = get_config_manager()
    if log_level:
        config_manager.set_log_level(log_level)
    setup_logging(config_manager.get_log_level())


@cli.command()
def version() -> None:
    """Show version information."""
    from permdeps import __version__

    click.echo(f"permdeps version {__version__}")


def main() -> None:
    """Entry point for console script."""
    cli()


app = cli

if __name__ == "__main__":
    app()
