"""Process exit codes returned by cypher-tool."""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    # Cypher errors reported by the server, unexpected failures
    GENERAL_ERROR = 1
    # Bad flags or --param values
    USAGE_ERROR = 2
    # No query, missing query file
    INPUT_ERROR = 3
    # A value the renderer cannot print
    OUTPUT_ERROR = 4
    # Server unreachable, authentication rejected
    NETWORK_ERROR = 5
    # Transaction timed out
    TIMEOUT = 6
    # Malformed config file, unknown profile, bad URI
    CONFIG_ERROR = 7
    # Ctrl-C (128 + SIGINT)
    INTERRUPTED = 130
