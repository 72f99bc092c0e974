"""Cypher Tool - render graph query results as copy-pasteable Cypher text."""

from cypher_tool.__about__ import __version__

__all__ = ["__version__"]
