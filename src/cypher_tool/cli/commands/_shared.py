"""Shared CLI plumbing for command modules.

Client creation, output, and query parameter helpers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cypher_tool.cli.output import get_formatter, write_output
from cypher_tool.core.client import Neo4jClient
from cypher_tool.core.config import ResolvedConfig, load_config, resolve_config
from cypher_tool.formatters.escaping import escape

if TYPE_CHECKING:
    import typer

    from cypher_tool.core.models import QueryResult

_CLI_OVERRIDE_KEYS = ("user", "password", "database", "format", "width", "wrap")


def get_resolved_config(
    ctx: typer.Context, timeout: float | None = None
) -> ResolvedConfig:
    obj = ctx.ensure_object(dict)
    config = load_config(obj.get("config_file"))

    cli_overrides: dict[str, Any] = {}
    for key in _CLI_OVERRIDE_KEYS:
        val = obj.get(key)
        if val is not None:
            cli_overrides[key] = val
    if timeout is not None:
        cli_overrides["timeout"] = timeout

    return resolve_config(
        config,
        profile_name=obj.get("profile"),
        uri=obj.get("uri"),
        **cli_overrides,
    )


def get_client(resolved: ResolvedConfig) -> Neo4jClient:
    return Neo4jClient(resolved)


def output_result(resolved: ResolvedConfig, result: QueryResult) -> None:
    formatter = get_formatter(
        resolved.default_format, width=resolved.width, wrap=resolved.wrap
    )
    write_output(formatter, result)


def parse_params(params: list[str] | None) -> dict[str, str]:
    """Split ``name=value`` query parameters into name and value expression.

    The value is kept as Cypher text; evaluate_params() resolves it.
    """
    parsed: dict[str, str] = {}
    for item in params or []:
        name, sep, expression = item.partition("=")
        name, expression = name.strip(), expression.strip()
        if not sep or not name or not expression:
            msg = f"Invalid parameter '{item}'. Expected name=value"
            raise ValueError(msg)
        parsed[name] = expression
    return parsed


def evaluate_params(
    client: Neo4jClient, expressions: dict[str, str]
) -> dict[str, Any]:
    """Evaluate each value expression on the server with ``RETURN <value>``.

    Values follow Cypher literal syntax: ``[1, 2]`` is a list, ``{a: 1}`` a
    map, ``'text'`` a string, and an expression such as ``date()`` works too.
    """
    return {
        name: client.fetch_value(f"RETURN {expression} AS {escape(name)}")
        for name, expression in expressions.items()
    }
