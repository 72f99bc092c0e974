"""Cypher Tool main entry point and command registration."""

from __future__ import annotations

import atexit
from pathlib import Path  # noqa: TC003
from typing import Annotated

import sentry_sdk
import typer

from cypher_tool.__about__ import __version__
from cypher_tool.cli.commands.config import config_app
from cypher_tool.cli.commands.query import query_command
from cypher_tool.cli.output import OutputFormat  # noqa: TC001
from cypher_tool.core.exceptions import CypherToolError
from cypher_tool.core.exit_codes import ExitCode
from cypher_tool.core.logging import setup_logging
from cypher_tool.core.monitoring import setup_sentry

app = typer.Typer(
    help="Cypher Tool - run Neo4j queries and print results as Cypher text",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")
app.command("query")(query_command)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cypher-tool {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable verbose logging"),
    ] = False,
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-P", help="Named connection profile"),
    ] = None,
    uri: Annotated[
        str | None,
        typer.Option("--uri", "-a", help="Server URI, e.g. neo4j://localhost:7687"),
    ] = None,
    user: Annotated[
        str | None,
        typer.Option("--user", "-u", help="User name"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", "-p", help="Password"),
    ] = None,
    database: Annotated[
        str | None,
        typer.Option("--database", "-d", help="Database name"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file"),
    ] = None,
    format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format: plain|verbose"),
    ] = None,
    width: Annotated[
        int | None,
        typer.Option("--width", help="Maximum line width, -1 for unbounded"),
    ] = None,
    wrap: Annotated[
        bool | None,
        typer.Option("--wrap/--no-wrap", help="Wrap lines longer than --width"),
    ] = None,
) -> None:
    """Cypher Tool - run Neo4j queries and print results as Cypher text."""
    setup_logging(verbose)
    setup_sentry()

    transaction = sentry_sdk.start_transaction(
        op="cli", name=ctx.invoked_subcommand or "cypher-tool"
    )
    transaction.__enter__()

    def cleanup() -> None:
        transaction.__exit__(None, None, None)
        sentry_sdk.flush(timeout=2)

    atexit.register(cleanup)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["profile"] = profile
    ctx.obj["uri"] = uri
    ctx.obj["user"] = user
    ctx.obj["password"] = password
    ctx.obj["database"] = database
    ctx.obj["config_file"] = config_file
    ctx.obj["format"] = format.value if format else None
    ctx.obj["width"] = width
    ctx.obj["wrap"] = wrap


def run() -> None:
    """Entry point with global error handling."""
    try:
        app()
    except CypherToolError as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e.message}", err=True)
        raise SystemExit(e.exit_code) from None
    except SystemExit:
        raise
    except KeyboardInterrupt:
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except Exception as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None
