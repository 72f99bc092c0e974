"""Execution summary report: update counters, or plan and profile details."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cypher_tool.formatters.values import render

if TYPE_CHECKING:
    from cypher_tool.core.models import Plan, ResultSummary, SummaryCounters

# (counter field, verb, noun) in the order counters are reported.
_COUNTERS: list[tuple[str, str, str]] = [
    ("nodes_created", "Added", "nodes"),
    ("nodes_deleted", "Deleted", "nodes"),
    ("relationships_created", "Created", "relationships"),
    ("relationships_deleted", "Deleted", "relationships"),
    ("properties_set", "Set", "properties"),
    ("labels_added", "Added", "labels"),
    ("labels_removed", "Removed", "labels"),
    ("indexes_added", "Added", "indexes"),
    ("indexes_removed", "Removed", "indexes"),
    ("constraints_added", "Added", "constraints"),
    ("constraints_removed", "Removed", "constraints"),
]

_PLAN_ARGUMENTS = ("Version", "Planner", "Runtime")


def _quoted(value: Any) -> str:
    text = value if isinstance(value, str) else render(value)
    return f'"{text}"'


def _plan_argument(plan: Plan, name: str) -> Any:
    if name in plan.arguments:
        return plan.arguments[name]
    return plan.arguments.get(name.lower())


def counters_line(counters: SummaryCounters) -> str:
    """Return e.g. ``Added 10 nodes, Added 1 labels``, or "" with no updates."""
    parts = [
        f"{verb} {getattr(counters, field)} {noun}"
        for field, verb, noun in _COUNTERS
        if getattr(counters, field)
    ]
    return ", ".join(parts)


def plan_lines(summary: ResultSummary) -> list[str]:
    profile = summary.profile
    plan = profile if profile is not None else summary.plan
    if plan is None:
        return []

    lines = [f"Plan: {_quoted('PROFILE' if profile is not None else 'EXPLAIN')}"]
    if summary.statement_type is not None:
        lines.append(f"Statement: {_quoted(summary.statement_type.value)}")
    for name in _PLAN_ARGUMENTS:
        value = _plan_argument(plan, name)
        if value is not None:
            lines.append(f"{name}: {_quoted(value)}")

    timings = [
        t
        for t in (summary.result_available_after, summary.result_consumed_after)
        if t is not None
    ]
    if timings:
        lines.append(f"Time: {sum(timings)}")

    if profile is not None:
        lines.append(f"Rows: {profile.records}")
        lines.append(f"DbHits: {profile.db_hits}")
    return lines


def summarize(summary: ResultSummary) -> str:
    """Build the summary block as newline-separated ``label: value`` lines.

    Plans (EXPLAIN/PROFILE) take precedence over update counters. Returns
    an empty string when there is nothing to report.
    """
    if summary.has_plan:
        return "\n".join(plan_lines(summary))
    return counters_line(summary.counters)
