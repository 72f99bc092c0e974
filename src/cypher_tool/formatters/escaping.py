"""Backtick escaping for Cypher identifiers (map keys, labels, types)."""

from __future__ import annotations


def is_safe_identifier(name: str) -> bool:
    """True when name can be written without backticks.

    A safe identifier starts with a letter or underscore, followed by
    letters, digits or underscores. Letters and digits are Unicode-aware.
    """
    if not name:
        return False
    first, rest = name[0], name[1:]
    if not (first.isalpha() or first == "_"):
        return False
    return all(ch.isalnum() or ch == "_" for ch in rest)


def escape(name: str) -> str:
    """Return name as a Cypher identifier, backtick-quoted only if needed.

    >>> escape("label2")
    'label2'
    >>> escape("label `1")
    '`label ``1`'
    """
    if is_safe_identifier(name):
        return name
    return "`" + name.replace("`", "``") + "`"
