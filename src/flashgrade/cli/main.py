"""
CLI Entry Point

Command-line interface for the flashgrade answer grader using the Click
framework with rich output formatting.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from .. import __version__
from ..core.config import get_config, reload_config
from ..core.exceptions import FlashGradeException
from ..utils.logging import setup_logging, get_logger
from .commands import check, audit, show as config_show

console = Console()
logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--debug', is_flag=True, help='Enable debug mode')
@click.version_option(__version__, prog_name='flashgrade')
@click.pass_context
def cli(ctx, config, verbose, debug):
    """flashgrade - free-text answer grading for flashcards."""
    ctx.ensure_object(dict)

    try:
        if config:
            app_config = reload_config(Path(config))
        else:
            app_config = get_config()
    except FlashGradeException as e:
        console.print(f"[red]Error loading configuration: {str(e)}[/red]")
        sys.exit(1)

    if debug:
        app_config.debug = debug

    if verbose or debug:
        app_config.logging.level = 'DEBUG'
    setup_logging(app_config)

    ctx.obj['config'] = app_config

    if not ctx.invoked_subcommand:
        _display_banner()


def _display_banner():
    """Display application banner."""
    banner = Panel.fit(
        "[bold blue]flashgrade[/bold blue]\n"
        "[dim]Free-text answer grading for flashcards[/dim]\n\n"
        "Use --help for available commands",
        title="📚 Answer Grading",
        border_style="blue"
    )
    console.print(banner)


@cli.group()
def config():
    """Configuration commands."""
    pass


config.add_command(config_show)

cli.add_command(check)
cli.add_command(audit)


def main():
    """Main entry point with error handling."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)
    except FlashGradeException as e:
        logger.error(f"Application error: {str(e)}")
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)


if __name__ == '__main__':
    main()
