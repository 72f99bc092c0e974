"""Conversion from neo4j driver objects to Cypher Tool models.

Scalars are turned into the text of the matching Cypher literal here,
so the renderer can write them out unchanged: strings become quoted
string literals and temporal/spatial values become function calls such
as ``date('2024-01-15')``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from neo4j.graph import Node as DriverNode
from neo4j.graph import Path as DriverPath
from neo4j.graph import Relationship as DriverRelationship
from neo4j.spatial import Point

from cypher_tool.core.models import (
    Node,
    Path,
    Plan,
    ProfiledPlan,
    Record,
    Relationship,
    ResultSummary,
    Segment,
    StatementType,
    SummaryCounters,
)

if TYPE_CHECKING:
    import neo4j

_STATEMENT_TYPES: dict[str, StatementType] = {
    "r": StatementType.READ_ONLY,
    "rw": StatementType.READ_WRITE,
    "w": StatementType.WRITE_ONLY,
    "s": StatementType.SCHEMA_WRITE,
}


def string_literal(value: str) -> str:
    """Quote a string as a Cypher string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _temporal_literal(value: Any) -> str | None:
    type_name = type(value).__name__
    if type_name not in ("DateTime", "Date", "Time", "Duration"):
        return None
    function = type_name.lower()
    if type_name in ("DateTime", "Time") and getattr(value, "tzinfo", None) is None:
        function = "local" + function
    return f"{function}('{value.iso_format()}')"


def _point_literal(point: Point) -> str:
    axes = ("x", "y", "z")
    coordinates = ", ".join(f"{axis}: {c!r}" for axis, c in zip(axes, point))
    return f"point({{srid: {point.srid}, {coordinates}}})"


def to_value(value: Any) -> Any:
    """Convert one driver value into the graph value union."""
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return string_literal(value)
    if isinstance(value, DriverNode):
        return to_node(value)
    if isinstance(value, DriverRelationship):
        return to_relationship(value)
    if isinstance(value, DriverPath):
        return to_path(value)
    if isinstance(value, Point):
        return _point_literal(value)
    temporal = _temporal_literal(value)
    if temporal is not None:
        return temporal
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple)):
        return [to_value(v) for v in value]
    if isinstance(value, dict):
        return {k: to_value(v) for k, v in value.items()}
    return string_literal(str(value))


def to_node(node: DriverNode) -> Node:
    """Convert a driver node, with its labels sorted.

    The driver hands labels over as a frozenset, so the order they were
    written in is already lost. Sorting gives a stable order between runs,
    not source order.
    """
    return Node(
        id=node.element_id,
        labels=sorted(node.labels),
        properties={k: to_value(v) for k, v in node.items()},
    )


def to_relationship(relationship: DriverRelationship) -> Relationship:
    start, end = relationship.nodes
    return Relationship(
        id=relationship.element_id,
        type=relationship.type,
        start_id=start.element_id if start is not None else "",
        end_id=end.element_id if end is not None else "",
        properties={k: to_value(v) for k, v in relationship.items()},
    )


def to_path(path: DriverPath) -> Path:
    nodes = [to_node(n) for n in path.nodes]
    segments = [
        Segment(start=nodes[i], relationship=to_relationship(rel), end=nodes[i + 1])
        for i, rel in enumerate(path.relationships)
    ]
    return Path(start=nodes[0], segments=segments)


def to_record(record: neo4j.Record) -> Record:
    return Record(
        keys=list(record.keys()), values=[to_value(v) for v in record.values()]
    )


def _to_plan(data: dict[str, Any]) -> Plan:
    arguments = dict(data.get("args") or {})
    return Plan(
        operator_type=data.get("operatorType", ""),
        arguments=arguments,
        identifiers=list(data.get("identifiers") or []),
        estimated_rows=arguments.get("EstimatedRows"),
        children=[_to_plan(child) for child in data.get("children") or []],
    )


def _to_profiled_plan(data: dict[str, Any]) -> ProfiledPlan:
    arguments = dict(data.get("args") or {})
    return ProfiledPlan(
        operator_type=data.get("operatorType", ""),
        arguments=arguments,
        identifiers=list(data.get("identifiers") or []),
        estimated_rows=arguments.get("EstimatedRows"),
        db_hits=data.get("dbHits", 0),
        records=data.get("rows", 0),
        children=[_to_profiled_plan(child) for child in data.get("children") or []],
    )


def to_summary(summary: neo4j.ResultSummary) -> ResultSummary:
    counters = {
        name: getattr(summary.counters, name, 0)
        for name in SummaryCounters.model_fields
    }
    return ResultSummary(
        counters=SummaryCounters(**counters),
        statement_type=_STATEMENT_TYPES.get(summary.query_type or ""),
        plan=_to_plan(summary.plan) if summary.plan else None,
        profile=_to_profiled_plan(summary.profile) if summary.profile else None,
        result_available_after=summary.result_available_after,
        result_consumed_after=summary.result_consumed_after,
    )
