"""Query source resolution for Cypher Tool.

Resolves the Cypher query text from one of three sources:
1. Inline (-e flag)  - highest priority
2. File path         - middle priority
3. stdin             - lowest priority
"""

from __future__ import annotations

import sys
from pathlib import Path

from cypher_tool.core.exceptions import InputError


def strip_trailing_semicolons(text: str) -> str:
    """Drop statement terminators the driver would reject."""
    return text.rstrip().rstrip(";").rstrip()


def resolve_query_source(
    inline: str | None,
    file_path: str | None,
) -> str:
    """Resolve a Cypher query from inline, file, or stdin.

    Precedence: inline > file > stdin.
    Raises InputError when no source is available or the query is blank.
    """
    if inline is not None:
        query = inline
    elif file_path is not None:
        p = Path(file_path)
        if not p.exists():
            msg = (
                f"Query file not found: {file_path}\n"
                "Use -e for inline queries or pipe query via stdin."
            )
            raise InputError(msg)
        query = p.read_text()
    elif not sys.stdin.isatty():
        query = sys.stdin.read()
    else:
        msg = "No query provided. Use -e, file path, or pipe to stdin."
        raise InputError(msg)

    query = strip_trailing_semicolons(query)
    if not query:
        msg = "Query is empty."
        raise InputError(msg)
    return query
