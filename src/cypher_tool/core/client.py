"""Neo4j client for Cypher Tool.

Wraps the synchronous neo4j driver with query execution, transaction
timeout, and exception mapping to the CypherToolError hierarchy.
Records are converted lazily, so the session stays open until the
result has been consumed and the client is closed.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import neo4j
import neo4j.exceptions
import sentry_sdk

from cypher_tool.core.convert import to_record, to_summary
from cypher_tool.core.exceptions import (
    CypherToolError,
    NetworkError,
    QueryError,
    TimeoutError,
)
from cypher_tool.core.logging import get_logger
from cypher_tool.core.models import QueryResult

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cypher_tool.core.config import ResolvedConfig
    from cypher_tool.core.models import Record, ResultSummary

_TIMEOUT_CODES = frozenset(
    {
        "Neo.ClientError.Transaction.TransactionTimedOut",
        "Neo.ClientError.Transaction.TransactionTimedOutClientConfiguration",
    }
)

# Connection lost or no server to route to.
_CONNECTION_ERRORS = (
    neo4j.exceptions.ServiceUnavailable,
    neo4j.exceptions.SessionExpired,
)


def _map_driver_error(e: neo4j.exceptions.Neo4jError, timeout: float) -> CypherToolError:
    if e.code in _TIMEOUT_CODES:
        return TimeoutError(f"Query timed out after {timeout}s: {e.message}")
    if isinstance(e, neo4j.exceptions.CypherSyntaxError):
        return QueryError(f"Cypher syntax error: {e.message}")
    return QueryError(f"Cypher error: {e.message}")


class Neo4jClient:
    """Synchronous Neo4j client using the official driver."""

    def __init__(self, config: ResolvedConfig) -> None:
        self.config = config
        self._driver: neo4j.Driver | None = None
        self._session: neo4j.Session | None = None

    def __enter__(self) -> Neo4jClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _connect(self) -> neo4j.Driver:
        if self._driver is not None:
            return self._driver

        get_logger("cypher_tool.client").debug(
            "connecting", uri=self.config.uri, user=self.config.user
        )
        auth = (self.config.user, self.config.password or "")
        driver = neo4j.GraphDatabase.driver(
            self.config.uri,
            auth=auth,
            connection_timeout=self.config.connection_timeout,
        )
        try:
            driver.verify_connectivity()
        except neo4j.exceptions.AuthError as e:
            driver.close()
            msg = f"Authentication failed for user '{self.config.user}': {e.message}"
            raise NetworkError(msg) from e
        except (neo4j.exceptions.ServiceUnavailable, OSError) as e:
            driver.close()
            msg = f"Connection failed to {self.config.uri}: {e}"
            raise NetworkError(msg) from e

        self._driver = driver
        return driver

    def _session_for_query(self) -> neo4j.Session:
        if self._session is not None:
            self._session.close()
        self._session = self._connect().session(database=self.config.database)
        return self._session

    def execute_query(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> QueryResult:
        """Run a Cypher statement and return its records and summary.

        Records stream from the server as the QueryResult is iterated;
        the summary becomes available once they have been drained.
        """
        log = get_logger("cypher_tool.client")
        session = self._session_for_query()
        timeout = self.config.default_timeout

        cypher_normalized = " ".join(cypher.split())
        log.debug("executing query", cypher=cypher_normalized)
        start_time = time.monotonic()
        try:
            result = session.run(neo4j.Query(cypher, timeout=timeout), params or {})
        except neo4j.exceptions.Neo4jError as e:
            log.error("query failed", cypher=cypher_normalized, error=e.message)
            raise _map_driver_error(e, timeout) from e
        except _CONNECTION_ERRORS as e:
            log.error("database unavailable", cypher=cypher_normalized, error=str(e))
            raise NetworkError(f"Database error: {e}") from e

        def records() -> Iterator[Record]:
            with sentry_sdk.start_span(
                op="db.query", description=cypher_normalized[:100]
            ) as span:
                row_count = 0
                try:
                    for record in result:
                        row_count += 1
                        yield to_record(record)
                except neo4j.exceptions.Neo4jError as e:
                    span.set_status("internal_error")
                    log.error("query failed", cypher=cypher_normalized, error=e.message)
                    raise _map_driver_error(e, timeout) from e
                except _CONNECTION_ERRORS as e:
                    span.set_status("unavailable")
                    log.error("database unavailable", error=str(e))
                    raise NetworkError(f"Database error: {e}") from e
                duration_ms = (time.monotonic() - start_time) * 1000
                span.set_data("row_count", row_count)
                span.set_data("duration_ms", duration_ms)
                log.debug(
                    "query complete",
                    duration_ms=f"{duration_ms:.1f}",
                    row_count=row_count,
                )

        def summary() -> ResultSummary:
            try:
                return to_summary(result.consume())
            except neo4j.exceptions.Neo4jError as e:
                raise _map_driver_error(e, timeout) from e
            except _CONNECTION_ERRORS as e:
                raise NetworkError(f"Database error: {e}") from e

        return QueryResult(records(), summary)

    def fetch_value(self, cypher: str) -> Any:
        """Run a single-row, single-column statement and return its value.

        The value is returned as the driver produced it, without conversion,
        so it can be sent back as a query parameter.
        """
        session = self._session_for_query()
        timeout = self.config.default_timeout
        get_logger("cypher_tool.client").debug("fetching value", cypher=cypher)
        try:
            record = session.run(neo4j.Query(cypher, timeout=timeout)).single(
                strict=True
            )
        except neo4j.exceptions.Neo4jError as e:
            raise _map_driver_error(e, timeout) from e
        except _CONNECTION_ERRORS as e:
            raise NetworkError(f"Database error: {e}") from e
        return record.values()[0]

    def close(self) -> None:
        """Close the open session and the driver."""
        if self._session is not None:
            self._session.close()
            self._session = None
        if self._driver is not None:
            self._driver.close()
            self._driver = None
