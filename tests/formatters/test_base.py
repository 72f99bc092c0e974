"""Tests for Formatter protocol and registry."""

import pytest

from cypher_tool.core.models import QueryResult, Record, ResultSummary
from cypher_tool.formatters.base import Formatter, FormatterRegistry, registry
from cypher_tool.formatters.plain import PlainFormatter, VerboseFormatter


def _make_result(records=None):
    if records is None:
        records = [Record(keys=["id"], values=[1])]
    return QueryResult(records, ResultSummary())


class _StubFormatter:
    def lines(self, result):
        for record in result.records():
            yield str(record.values)

    def format(self, result, sink):
        for line in self.lines(result):
            sink(line)


class _BadFormatter:
    """Missing lines and format methods."""

    pass


@pytest.mark.unit
def test_stub_formatter_implements_protocol():
    assert isinstance(_StubFormatter(), Formatter)


@pytest.mark.unit
def test_bad_formatter_does_not_implement_protocol():
    assert not isinstance(_BadFormatter(), Formatter)


@pytest.mark.unit
def test_formatter_yields_strings():
    fmt = _StubFormatter()
    result = _make_result(
        [Record(keys=["id"], values=[1]), Record(keys=["id"], values=[2])]
    )
    assert list(fmt.lines(result)) == ["[1]", "[2]"]


@pytest.mark.unit
def test_registry_register_and_get():
    reg = FormatterRegistry()
    reg.register("stub", _StubFormatter)
    fmt = reg.get("stub")
    assert isinstance(fmt, _StubFormatter)


@pytest.mark.unit
def test_registry_get_unknown_raises_key_error():
    reg = FormatterRegistry()
    with pytest.raises(KeyError, match="Unknown format 'nope'"):
        reg.get("nope")


@pytest.mark.unit
def test_registry_get_unknown_lists_available():
    reg = FormatterRegistry()
    reg.register("plain", _StubFormatter)
    reg.register("verbose", _StubFormatter)
    with pytest.raises(KeyError, match="plain, verbose"):
        reg.get("nope")


@pytest.mark.unit
def test_registry_available_returns_sorted_names():
    reg = FormatterRegistry()
    reg.register("verbose", _StubFormatter)
    reg.register("plain", _StubFormatter)
    assert reg.available == ["plain", "verbose"]


@pytest.mark.unit
def test_registry_passes_kwargs_to_constructor():
    fmt = registry.get("plain", width=80, wrap=False)
    assert isinstance(fmt, PlainFormatter)
    assert fmt.width == 80
    assert fmt.wrap is False


@pytest.mark.unit
def test_global_registry_has_plain_and_verbose():
    assert {"plain", "verbose"} <= set(registry.available)
    assert isinstance(registry.get("verbose"), VerboseFormatter)
