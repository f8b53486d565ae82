"""TeachLang command line tool.

Usage:
    teachlang check <file> [--tokens/--no-tokens] [--filename NAME]
    teachlang tokens <file>
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from teachlang import __version__
from teachlang.config import get_config
from teachlang.lexer import format_tokens, tokenize_file
from teachlang.pipeline import check_file

logger = logging.getLogger(__name__)


def _console() -> Console:
    return Console(no_color=not get_config().color, highlight=False)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _unreadable(ctx: click.Context, console: Console, path: str, error: Exception) -> None:
    console.print(f"[red]Error:[/red] cannot read {path}: ", end="")
    console.print(str(error), markup=False, soft_wrap=True)
    ctx.exit(1)


@click.group()
@click.version_option(__version__, prog_name="teachlang")
@click.option("--log-level", default=None, help="Logging level (default from TEACHLANG_LOG_LEVEL).")
def main(log_level: str | None) -> None:
    """TeachLang front end: tokenize and check programs."""
    _configure_logging(log_level or get_config().log_level)


@main.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--tokens/--no-tokens", "show_tokens", default=None,
              help="Print the token stream before parsing.")
@click.option("--filename", default=None, help="Name to report instead of the file path.")
@click.pass_context
def check(ctx: click.Context, file: str, show_tokens: bool | None, filename: str | None) -> None:
    """Parse FILE and report soft and fatal errors."""
    console = _console()
    try:
        report = check_file(file, encoding=get_config().encoding, filename=filename)
    except (OSError, UnicodeDecodeError) as e:
        _unreadable(ctx, console, file, e)
        return

    if show_tokens is None:
        show_tokens = get_config().show_tokens
    if show_tokens:
        console.print(format_tokens(report.tokens), markup=False, soft_wrap=True)

    for message in report.errors:
        console.print("[yellow]Error:[/yellow] ", end="")
        console.print(message, markup=False, soft_wrap=True)

    if report.fatal is not None:
        location = report.fatal.diagnostic.location
        logger.info("Fatal error at %s", location)
        console.print("[red]Parsing failed:[/red] ", end="")
        console.print(str(report.fatal), markup=False, soft_wrap=True)
        if location is not None:
            console.print(f"  --> {location}", markup=False, soft_wrap=True)
        ctx.exit(1)

    console.print("[green]Parsing completed successfully![/green]")


@main.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_context
def tokens(ctx: click.Context, file: str) -> None:
    """Print the token stream of FILE, one token per line."""
    console = _console()
    try:
        stream = tokenize_file(file, encoding=get_config().encoding)
    except (OSError, UnicodeDecodeError) as e:
        _unreadable(ctx, console, file, e)
        return

    console.print(format_tokens(stream), markup=False, soft_wrap=True)


if __name__ == "__main__":
    main()
