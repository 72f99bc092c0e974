"""Query result models for Cypher Tool.

Pydantic models for the graph values, records and execution summaries
produced by Neo4jClient.execute_query(). Values are a closed union:
None, bool, int, float, str, list, dict, Node, Relationship and Path.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

NodeId = int | str


class _GraphEntity(BaseModel):
    model_config = ConfigDict(frozen=True)


class Node(_GraphEntity):
    """A node: opaque identity, labels in source order and properties."""

    id: NodeId
    labels: list[str] = []
    properties: dict[str, Any] = {}


class Relationship(_GraphEntity):
    """A relationship with its canonical start and end node identities."""

    id: NodeId
    type: str
    start_id: NodeId
    end_id: NodeId
    properties: dict[str, Any] = {}


class Segment(_GraphEntity):
    """One hop of a path, with start and end in traversal order."""

    start: Node
    relationship: Relationship
    end: Node


class Path(_GraphEntity):
    start: Node | None = None
    segments: list[Segment] = []

    @model_validator(mode="before")
    @classmethod
    def start_from_first_segment(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("start") is None:
            segments = data.get("segments") or []
            if not segments:
                msg = "A path needs a start node or at least one segment"
                raise ValueError(msg)
            first = segments[0]
            data = {
                **data,
                "start": first.start if isinstance(first, Segment) else first["start"],
            }
        return data

    @property
    def nodes(self) -> list[Node]:
        """All nodes in traversal order, starting with the start node."""
        return [self.start, *(segment.end for segment in self.segments)]  # type: ignore[list-item]

    @property
    def relationships(self) -> list[Relationship]:
        return [segment.relationship for segment in self.segments]

    def __len__(self) -> int:
        return len(self.segments)


class Record(_GraphEntity):
    """One result row: column names paired positionally with values."""

    keys: list[str]
    values: list[Any]

    @model_validator(mode="after")
    def keys_match_values(self) -> Record:
        if len(self.keys) != len(self.values):
            msg = (
                f"Record has {len(self.keys)} keys but {len(self.values)} values"
            )
            raise ValueError(msg)
        return self

    def __getitem__(self, key: str) -> Any:
        return self.values[self.keys.index(key)]


class StatementType(StrEnum):
    READ_ONLY = "READ_ONLY"
    READ_WRITE = "READ_WRITE"
    WRITE_ONLY = "WRITE_ONLY"
    SCHEMA_WRITE = "SCHEMA_WRITE"


class SummaryCounters(_GraphEntity):
    """Update statistics. Field order is the order counters are reported in."""

    nodes_created: int = 0
    nodes_deleted: int = 0
    relationships_created: int = 0
    relationships_deleted: int = 0
    properties_set: int = 0
    labels_added: int = 0
    labels_removed: int = 0
    indexes_added: int = 0
    indexes_removed: int = 0
    constraints_added: int = 0
    constraints_removed: int = 0

    @property
    def contains_updates(self) -> bool:
        return any(getattr(self, name) for name in type(self).model_fields)


class Plan(_GraphEntity):
    """An EXPLAIN plan operator and its child operators."""

    operator_type: str
    arguments: dict[str, Any] = {}
    identifiers: list[str] = []
    estimated_rows: float | None = None
    children: list[Plan] = []


class ProfiledPlan(Plan):
    """A PROFILE plan operator with actual row and database hit counts."""

    db_hits: int = 0
    records: int = 0
    children: list[ProfiledPlan] = []  # type: ignore[assignment]


class ResultSummary(_GraphEntity):
    """Execution metadata, available once the records have been consumed."""

    counters: SummaryCounters = SummaryCounters()
    statement_type: StatementType | None = None
    plan: Plan | None = None
    profile: ProfiledPlan | None = None
    result_available_after: int | None = None
    result_consumed_after: int | None = None

    @property
    def has_plan(self) -> bool:
        return self.plan is not None or self.profile is not None

    @property
    def has_profile(self) -> bool:
        return self.profile is not None


class QueryResult:
    """Records of one query execution plus its summary.

    The records are a single-pass iterable. The summary may be passed as a
    zero-argument callable; it is then only called by summary(), which
    callers invoke after the records are drained.
    """

    def __init__(
        self,
        records: Iterable[Record],
        summary: ResultSummary | Callable[[], ResultSummary] | None = None,
    ) -> None:
        self._records = records
        self._summary = summary
        self._consumed = False

    def __iter__(self) -> Iterator[Record]:
        return self.records()

    def records(self) -> Iterator[Record]:
        if self._consumed:
            msg = "Query result records can only be iterated once"
            raise RuntimeError(msg)
        self._consumed = True
        return iter(self._records)

    def summary(self) -> ResultSummary:
        if self._summary is None:
            return ResultSummary()
        if callable(self._summary):
            self._summary = self._summary()
        return self._summary
