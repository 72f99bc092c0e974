"""Output formatters for Cypher Tool."""

from cypher_tool.formatters.base import Formatter, FormatterRegistry, Sink, registry
from cypher_tool.formatters.escaping import escape
from cypher_tool.formatters.plain import PlainFormatter, VerboseFormatter
from cypher_tool.formatters.summary import summarize
from cypher_tool.formatters.values import render
