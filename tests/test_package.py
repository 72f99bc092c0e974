"""Tests for package structure and imports."""

import pytest


@pytest.mark.unit
def test_package_imports():
    import cypher_tool

    assert cypher_tool.__version__


@pytest.mark.unit
def test_formatters_package_exports():
    from cypher_tool.formatters import PlainFormatter, escape, registry, render

    assert escape("a b") == "`a b`"
    assert render([1]) == "[1]"
    assert registry.get("plain").__class__ is PlainFormatter
