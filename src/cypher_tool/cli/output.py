"""Output format selection, TTY auto-detection and the stdout sink."""

from __future__ import annotations

import sys
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cypher_tool.core.models import QueryResult
    from cypher_tool.formatters.base import Formatter, Sink


class OutputFormat(StrEnum):
    PLAIN = "plain"
    VERBOSE = "verbose"


def detect_tty() -> bool:
    return sys.stdout.isatty()


def resolve_format(format_flag: str | None) -> str:
    """Determine the output format.

    Explicit --format overrides TTY detection.
    Default: verbose for TTY, plain for pipes.
    """
    if format_flag is not None:
        return format_flag
    return "verbose" if detect_tty() else "plain"


def get_formatter(
    format_flag: str | None = None,
    *,
    width: int = -1,
    wrap: bool = True,
) -> Formatter:
    """Build and return the appropriate formatter instance."""
    # Import here to trigger registry population from formatter modules.
    import cypher_tool.formatters.plain  # noqa: F401
    from cypher_tool.formatters.base import registry

    fmt_name = resolve_format(format_flag)
    return registry.get(fmt_name, width=width, wrap=wrap)


def printer() -> Sink:
    """Return a sink that writes lines to stdout, skipping blank ones."""

    def sink(line: str) -> None:
        if line is not None and line.strip():
            sys.stdout.write(line + "\n")

    return sink


def write_output(formatter: Formatter, result: QueryResult) -> None:
    """Write formatted output to stdout."""
    formatter.format(result, printer())
