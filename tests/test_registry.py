"""Tests for argument kinds and the command registry."""

import pytest

from btcjson_mcp.protocol.errors import UnknownCommand
from btcjson_mcp.protocol.kinds import Kind, describe_kind, kind_of, matches, parse_kinds
from btcjson_mcp.protocol.registry import (
    DEFAULT_REGISTRY,
    DEFAULT_SIGNATURES,
    CommandRegistry,
    Signature,
    signature,
)


def test_kind_of_distinguishes_bool_int_float():
    assert kind_of(True) == Kind.BOOLEAN
    assert kind_of(0) == Kind.INTEGER
    assert kind_of(0.0) == Kind.FLOAT
    assert kind_of("") == Kind.STRING


def test_kind_of_unsupported_values():
    assert kind_of(None) is None
    assert kind_of([1]) is None
    assert kind_of({"a": 1}) is None
    assert kind_of(b"raw") is None


def test_union_slot_matches_either_kind():
    slot = Kind.INTEGER | Kind.STRING
    assert matches(1, slot)
    assert matches("1", slot)
    assert not matches(1.0, slot)
    assert not matches(True, slot)


def test_describe_kind():
    assert describe_kind(Kind.FLOAT) == "float"
    assert describe_kind(Kind.INTEGER | Kind.STRING) == "string or integer"


def test_parse_kinds():
    assert parse_kinds("") == ()
    assert parse_kinds("SIF") == (Kind.STRING, Kind.INTEGER, Kind.FLOAT)
    assert parse_kinds("I|S S") == (Kind.INTEGER | Kind.STRING, Kind.STRING)
    with pytest.raises(ValueError):
        parse_kinds("X")


def test_signature_helper():
    sig = signature("sendfrom", "SSF", "I", "S")
    assert sig.required == (Kind.STRING, Kind.STRING, Kind.FLOAT)
    assert sig.optional == (Kind.INTEGER,)
    assert sig.variadic == Kind.STRING
    assert sig.min_args == 3
    assert sig.max_args is None


def test_signature_rejects_multi_kind_variadic():
    with pytest.raises(ValueError):
        signature("bad", variadic="SI")


def test_expected_kind_by_position():
    sig = signature("move", "SSF", "IS")
    assert sig.expected_kind(0) == Kind.STRING
    assert sig.expected_kind(2) == Kind.FLOAT
    assert sig.expected_kind(3) == Kind.INTEGER
    assert sig.expected_kind(4) == Kind.STRING
    assert sig.expected_kind(5) is None
    assert sig.max_args == 5


def test_usage_string():
    sig = DEFAULT_REGISTRY.lookup("sendfrom")
    assert sig.usage() == "sendfrom <string> <string> <float> [integer] [string...]"


def test_to_dict():
    d = DEFAULT_REGISTRY.lookup("setgenerate").to_dict()
    assert d["required"] == ["boolean"]
    assert d["optional"] == ["integer"]
    assert d["variadic"] is None
    assert d["help"]


def test_lookup_known_and_unknown():
    assert DEFAULT_REGISTRY.lookup("getinfo").name == "getinfo"
    with pytest.raises(UnknownCommand) as exc:
        DEFAULT_REGISTRY.lookup("fakecommand")
    assert exc.value.name == "fakecommand"


def test_lookup_unhashable_name_is_unknown():
    with pytest.raises(UnknownCommand):
        DEFAULT_REGISTRY.lookup(["getinfo"])


def test_contains_tolerates_unhashable_names():
    assert "getinfo" in DEFAULT_REGISTRY
    assert ["getinfo"] not in DEFAULT_REGISTRY


def test_default_names_are_unique():
    names = [sig.name for sig in DEFAULT_SIGNATURES]
    assert len(names) == len(set(names))
    assert len(DEFAULT_REGISTRY) == len(names)


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        CommandRegistry([signature("a"), signature("a", "S")])


def test_empty_name_rejected():
    with pytest.raises(ValueError):
        CommandRegistry([Signature(name="")])


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_REGISTRY.signatures["evil"] = signature("evil")
    assert "evil" not in DEFAULT_REGISTRY


def test_registry_not_affected_by_source_list():
    source = [signature("one")]
    registry = CommandRegistry(source)
    source.append(signature("two"))
    assert "two" not in registry


def test_signatures_are_frozen():
    sig = DEFAULT_REGISTRY.lookup("getinfo")
    with pytest.raises(AttributeError):
        sig.required = (Kind.STRING,)


def test_iteration_is_sorted():
    names = list(DEFAULT_REGISTRY)
    assert names == sorted(names)
    assert "getblockhash" in names


def test_no_argument_commands():
    for name in ("getinfo", "getblockcount", "stop", "walletlock"):
        sig = DEFAULT_REGISTRY.lookup(name)
        assert sig.min_args == 0
        assert sig.max_args == 0
