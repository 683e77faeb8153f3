"""
Command-line interface for pygrep.

Usage:
    $ pygrep PATTERN GLOB

Searches every file matched by GLOB for the regular expression PATTERN and
prints each matching line under its file name:

    $ pygrep 'wo\\w+' 'docs/**/*.md'
    docs/intro.md
         1:7   hello world!
         2:5   bye world!

Quote the glob so the shell does not expand it first.

Exit status is 0 when the search ran, whether or not anything matched, and 1
when the pattern or glob is invalid. Files that cannot be read are skipped;
use --debug or --stats to see them.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from .. import __version__
from ..core.api import PyGrep
from ..core.config import DEFAULT_MAX_CONCURRENT_FILES, SearchConfig
from ..core.types import SearchMode, SearchRequest
from ..utils.error_handling import ConfigurationError
from ..utils.logging_config import LogFormat, LogLevel, configure_logging


@click.command()
@click.argument("pattern")
@click.argument("glob")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in SearchMode]),
    default=SearchMode.ASYNC.value,
    show_default=True,
    help="Concurrency model: asyncio event loop or thread pool",
)
@click.option("--workers", type=int, default=0, help="Thread pool size for --mode parallel (0 = CPU count)")
@click.option(
    "--max-open",
    "max_open",
    type=int,
    default=DEFAULT_MAX_CONCURRENT_FILES,
    show_default=True,
    help="Maximum files open at once for --mode async",
)
@click.option("--color/--no-color", default=None, help="Force colored output on or off")
@click.option("--encoding", default="utf-8", show_default=True, help="Text encoding of searched files")
@click.option("--stats", is_flag=True, default=False, help="Print run statistics to stderr")
# Logging and debugging options
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging and error report")
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel]),
    default=LogLevel.WARNING.value,
    help="Log level",
)
@click.option("--log-file", help="Log file path")
@click.option(
    "--log-format",
    type=click.Choice([fmt.value for fmt in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Log format",
)
@click.version_option(__version__, prog_name="pygrep")
def cli(
    pattern: str,
    glob: str,
    mode: str,
    workers: int,
    max_open: int,
    color: bool | None,
    encoding: str,
    stats: bool,
    debug: bool,
    log_level: str,
    log_file: str | None,
    log_format: str,
) -> None:
    """Search files matching GLOB for lines matching the regex PATTERN."""
    logger = configure_logging(
        level=LogLevel(log_level),
        format_type=LogFormat(log_format),
        log_file=Path(log_file) if log_file else None,
    )
    if debug:
        logger.set_level(LogLevel.DEBUG)

    if color is None:
        color = sys.stdout.isatty()

    try:
        cfg = SearchConfig(
            workers=workers,
            max_concurrent_files=max_open,
            encoding=encoding,
            color=color,
        )
        engine = PyGrep(SearchRequest(pattern=pattern, glob=glob), cfg, logger=logger)
        result = engine.run(SearchMode(mode))
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if stats:
        click.echo(result.summary_line(), err=True)

    if debug and engine.has_errors():
        click.echo(engine.get_error_report(), err=True)


def main() -> None:
    cli(prog_name="pygrep")


if __name__ == "__main__":
    main()
