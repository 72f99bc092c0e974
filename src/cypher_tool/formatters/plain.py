"""Plain and verbose result formatters.

Writes the column header of the first record, one line per record and
then the execution summary. Values are rendered by formatters.values, so
the lines can be pasted back into a query.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cypher_tool.formatters.base import registry
from cypher_tool.formatters.summary import summarize
from cypher_tool.formatters.values import COMMA_SEPARATOR, render

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cypher_tool.core.models import QueryResult, Record
    from cypher_tool.formatters.base import Sink

UNBOUNDED_WIDTH = -1


def _truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    return value[: width - 1] + "…"


def _wrap(value: str, width: int) -> list[str]:
    if len(value) <= width:
        return [value]
    return [value[i : i + width] for i in range(0, len(value), width)]


def format_record(record: Record) -> str:
    return COMMA_SEPARATOR.join(render(value) for value in record.values)


class PlainFormatter:
    """Render records and summary as plain text lines.

    Args:
        width: Maximum line width, or -1 for no limit.
        wrap: With a width set, wrap long lines onto following lines
            instead of truncating them.
    """

    verbose = False

    def __init__(self, width: int = UNBOUNDED_WIDTH, wrap: bool = True) -> None:
        self.width = width
        self.wrap = wrap

    def _fit(self, line: str) -> list[str]:
        if self.width <= 0:
            return [line]
        if self.wrap:
            return _wrap(line, self.width)
        return [_truncate(line, self.width)]

    def lines(self, result: QueryResult) -> Iterator[str]:
        records = result.records()
        record_count = 0
        for record in records:
            if record_count == 0:
                yield from self._fit(COMMA_SEPARATOR.join(record.keys))
            yield from self._fit(format_record(record))
            record_count += 1

        statistics = summarize(result.summary())
        if statistics:
            if record_count:
                yield ""
            yield from statistics.split("\n")
        elif self.verbose:
            yield ""

    def format(self, result: QueryResult, sink: Sink) -> None:
        for line in self.lines(result):
            sink(line)


class VerboseFormatter(PlainFormatter):
    """Plain output that always emits the summary block, even when empty."""

    verbose = True


registry.register("plain", PlainFormatter)
registry.register("verbose", VerboseFormatter)
