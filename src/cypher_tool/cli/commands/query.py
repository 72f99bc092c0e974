from __future__ import annotations

import sys
from typing import Annotated

import typer

from cypher_tool.cli.commands._shared import (
    evaluate_params,
    get_client,
    get_resolved_config,
    output_result,
    parse_params,
)
from cypher_tool.core.exceptions import InputError
from cypher_tool.core.exit_codes import ExitCode
from cypher_tool.core.query_source import resolve_query_source


def query_command(
    ctx: typer.Context,
    file: Annotated[
        str | None,
        typer.Argument(help="Cypher file to execute"),
    ] = None,
    execute: Annotated[
        str | None,
        typer.Option("--execute", "-e", help="Execute inline Cypher query"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Transaction timeout in seconds"),
    ] = None,
    param: Annotated[
        list[str] | None,
        typer.Option("--param", help="Query parameter as name=<Cypher value>"),
    ] = None,
) -> None:
    """Execute a Cypher query from file, inline (-e), or stdin."""
    try:
        is_tty = sys.stdin.isatty()
    except (ValueError, AttributeError):
        is_tty = False
    if execute is None and file is None and is_tty:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        cypher = resolve_query_source(inline=execute, file_path=file)
    except InputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    try:
        expressions = parse_params(param)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.USAGE_ERROR) from exc

    resolved = get_resolved_config(ctx, timeout=timeout)
    with get_client(resolved) as client:
        params = evaluate_params(client, expressions)
        result = client.execute_query(cypher, params)
        output_result(resolved, result)
