"""Exception hierarchy for Cypher Tool.

All exceptions carry an exit_code for CLI return value mapping.
"""

from cypher_tool.core.exit_codes import ExitCode


class CypherToolError(Exception):
    """Base exception for all Cypher Tool errors."""

    exit_code: int = ExitCode.GENERAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NetworkError(CypherToolError):
    """Connection failures, unreachable server, rejected credentials."""

    exit_code: int = ExitCode.NETWORK_ERROR


class TimeoutError(NetworkError):
    """Transaction timeout, connection timeout."""

    exit_code: int = ExitCode.TIMEOUT


class QueryError(CypherToolError):
    """Cypher syntax errors and other client-side statement failures."""

    exit_code: int = ExitCode.GENERAL_ERROR


class InputError(CypherToolError):
    """File not found, no query given."""

    exit_code: int = ExitCode.INPUT_ERROR


class RenderError(CypherToolError):
    """A value the renderer cannot represent.

    Raised for types outside the graph value union and for paths whose
    segments do not connect. Both point at a broken result producer, not
    at user input.
    """

    exit_code: int = ExitCode.OUTPUT_ERROR


class ConfigError(CypherToolError):
    """Malformed config, missing profile."""

    exit_code: int = ExitCode.CONFIG_ERROR
