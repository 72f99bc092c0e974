"""Render graph values as Cypher-like text.

Output is meant to be pasted back into a query: nodes as ``(:Label {k: v})``,
relationships as ``[:TYPE {k: v}]`` and paths as a chain of both with arrows
showing the direction each relationship was traversed in.

Strings are written verbatim. Producers that want string literals quoted
(see cypher_tool.core.convert) put the quotes into the value itself.
"""

from __future__ import annotations

import math
from typing import Any

from cypher_tool.core.exceptions import RenderError
from cypher_tool.core.models import Node, Path, Relationship
from cypher_tool.formatters.escaping import escape

COMMA_SEPARATOR = ", "
COLON_SEPARATOR = ": "
COLON = ":"
SPACE = " "


def render(value: Any) -> str:
    """Render one value of the graph value union."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, str)):
        return str(value)
    if isinstance(value, float):
        return render_float(value)
    if isinstance(value, (list, tuple)):
        return render_list(value)
    if isinstance(value, dict):
        return render_map(value)
    if isinstance(value, Node):
        return render_node(value)
    if isinstance(value, Relationship):
        return render_relationship(value)
    if isinstance(value, Path):
        return render_path(value)
    msg = f"Cannot render value of type {type(value).__name__}: {value!r}"
    raise RenderError(msg)


def render_float(value: float) -> str:
    """Render a float as a Cypher float literal.

    Exponents use ``E`` with a decimal point in the mantissa (``1.0E20``),
    and non-finite values are written ``NaN``, ``Infinity``, ``-Infinity``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    if "." not in mantissa:
        mantissa += ".0"
    return f"{mantissa}E{int(exponent)}"


def render_list(values: list[Any] | tuple[Any, ...]) -> str:
    return "[" + COMMA_SEPARATOR.join(render(v) for v in values) + "]"


def render_map(mapping: dict[str, Any]) -> str:
    """Render a map; an empty map renders as the empty string."""
    if not mapping:
        return ""
    entries = (
        escape(key) + COLON_SEPARATOR + render(value) for key, value in mapping.items()
    )
    return "{" + COMMA_SEPARATOR.join(entries) + "}"


def _join_with_space(parts: list[str]) -> str:
    return SPACE.join(part for part in parts if part and part.strip())


def render_node(node: Node) -> str:
    labels = "".join(COLON + escape(label) for label in node.labels)
    return "(" + _join_with_space([labels, render_map(node.properties)]) + ")"


def render_relationship(relationship: Relationship) -> str:
    rel_type = COLON + escape(relationship.type)
    return (
        "[" + _join_with_space([rel_type, render_map(relationship.properties)]) + "]"
    )


def render_path(path: Path) -> str:
    """Render a path left to right with traversal-direction arrows.

    A relationship is drawn ``-[...]->`` when its stored start node is the
    node the walk is currently at, and ``<-[...]-`` otherwise. The node the
    walk is at after each hop is that segment's end.
    """
    start = path.start
    if start is None:
        msg = "Cannot render a path without a start node"
        raise RenderError(msg)

    parts = [render_node(start)]
    last_visited = start
    for index, segment in enumerate(path.segments):
        if index and last_visited.id not in (segment.start.id, segment.end.id):
            msg = (
                f"Path segment {index} does not connect to node {last_visited.id!r}"
            )
            raise RenderError(msg)

        relationship = segment.relationship
        if relationship.start_id == last_visited.id:
            parts.append("-" + render_relationship(relationship) + "->")
        else:
            parts.append("<-" + render_relationship(relationship) + "-")
        parts.append(render_node(segment.end))
        last_visited = segment.end

    return "".join(parts)
