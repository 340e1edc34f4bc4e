"""Tests for typed command builders."""

import pytest

from btcjson_mcp.protocol.commands import (
    build_add_multisig_address,
    build_get_balance,
    build_get_block_hash,
    build_get_info,
    build_get_raw_transaction,
    build_import_priv_key,
    build_list_transactions,
    build_lock_unspent,
    build_move,
    build_send_from,
    build_send_many,
    build_send_to_address,
    build_set_generate,
    build_set_tx_fee,
)
from btcjson_mcp.protocol.errors import TooFewArguments, TypeMismatch


def test_build_get_info():
    request = build_get_info()
    assert request.method == "getinfo"
    assert request.params == ()


def test_build_get_block_hash():
    request = build_get_block_hash(42)
    assert request.method == "getblockhash"
    assert request.params == (42,)


def test_get_block_hash_rejects_float():
    """Typed builders still go through registry validation."""
    with pytest.raises(TypeMismatch):
        build_get_block_hash(1.0)


def test_optional_arguments_are_dropped():
    assert build_get_balance().params == ()
    assert build_get_balance("acct").params == ("acct",)
    assert build_get_balance("acct", 6).params == ("acct", 6)


def test_optional_gap_raises():
    """A later optional cannot be given without the ones before it."""
    with pytest.raises(ValueError):
        build_get_balance(None, 6)
    with pytest.raises(ValueError):
        build_list_transactions("acct", None, 10)


def test_build_get_raw_transaction():
    assert build_get_raw_transaction("txid").params == ("txid",)
    assert build_get_raw_transaction("txid", 1).params == ("txid", 1)


def test_build_set_generate():
    assert build_set_generate(True).params == (True,)
    assert build_set_generate(False, 2).params == (False, 2)


def test_build_import_priv_key():
    request = build_import_priv_key("key", "label", False)
    assert request.params == ("key", "label", False)


def test_build_set_tx_fee_requires_float():
    assert build_set_tx_fee(0.0001).params == (0.0001,)
    with pytest.raises(TypeMismatch):
        build_set_tx_fee(1)


def test_build_send_from_with_comments():
    request = build_send_from("acct", "addr", 1.0, 1, "cmt", "cmt2")
    assert request.params == ("acct", "addr", 1.0, 1, "cmt", "cmt2")


def test_build_send_from_minimal():
    assert build_send_from("acct", "addr", 0.5).params == ("acct", "addr", 0.5)


def test_build_send_from_comments_need_minconf():
    with pytest.raises(ValueError):
        build_send_from("acct", "addr", 1.0, None, "cmt")


def test_build_move():
    assert build_move("a", "b", 1.0).params == ("a", "b", 1.0)
    assert build_move("a", "b", 1.0, 1, "memo").params == ("a", "b", 1.0, 1, "memo")


def test_build_send_to_address():
    request = build_send_to_address("addr", 2.5, "for rent")
    assert request.params == ("addr", 2.5, "for rent")


def test_build_send_many_accepts_comment_in_minconf_slot():
    assert build_send_many("in1", "out1", 1.0, "comment").params == (
        "in1", "out1", 1.0, "comment",
    )
    assert build_send_many("in1", "out1", 1.0, 1, "comment").params == (
        "in1", "out1", 1.0, 1, "comment",
    )


def test_build_add_multisig_address():
    request = build_add_multisig_address(2, "key1", "key2", "key3")
    assert request.params == (2, "key1", "key2", "key3")
    with pytest.raises(TooFewArguments):
        build_add_multisig_address(1, "key1")


def test_build_lock_unspent():
    assert build_lock_unspent(True, "out1", "out2").params == (True, "out1", "out2")

