"""structlog setup for Cypher Tool.

Query results own stdout, so every log line is written to stderr.
Connection secrets never reach the log: event keys listed in
SECRET_KEYS are replaced with a mask before rendering.
"""

import logging
import sys
from typing import Any

import structlog

SECRET_KEYS = frozenset({"password", "auth"})
_MASK = "***"


def _mask_secrets(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    for key in SECRET_KEYS & event_dict.keys():
        if event_dict[key] is not None:
            event_dict[key] = _MASK
    return event_dict


class _StderrLoggerFactory:
    """Build PrintLoggers bound to whatever sys.stderr is right now.

    CliRunner swaps stderr per invocation, so a handle captured at
    configure() time goes stale between tests.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=sys.stderr)


def setup_logging(verbose: bool = False) -> None:
    """Configure structlog; DEBUG with verbose, INFO otherwise."""
    level = logging.DEBUG if verbose else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _mask_secrets,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_StderrLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, bound to ``logger=name`` when given.

    Call it inside functions, after setup_logging(), not at import time.
    """
    log = structlog.get_logger()
    return log.bind(logger=name) if name else log
