"""Typed builders for the supported RPC commands.

Each builder takes ordinary Python parameters, drops optional parameters
that were left as ``None`` and hands the rest to :func:`build_request`,
so the command registry stays the single source of truth for what the
node accepts. Optional parameters must be supplied left to right: leaving
one out while passing a later one is an error.
"""

from __future__ import annotations

from .framing import Request, build_request
from .kinds import DynamicValue


def _present(*values: DynamicValue | None) -> list[DynamicValue]:
    """Strip trailing ``None`` values, rejecting gaps before a given value."""
    args = list(values)
    while args and args[-1] is None:
        args.pop()
    if any(v is None for v in args):
        raise ValueError("Optional arguments must be supplied in order")
    return args


# ─── NODE / CHAIN ────────────────────────────────────────────────────

def build_get_info() -> Request:
    return build_request("getinfo")


def build_get_block_count() -> Request:
    return build_request("getblockcount")


def build_get_block_hash(index: int) -> Request:
    """Build a getblockhash request for the block at height ``index``."""
    return build_request("getblockhash", index)


def build_get_block(block_hash: str) -> Request:
    return build_request("getblock", block_hash)


def build_get_raw_transaction(txid: str, verbose: int | None = None) -> Request:
    """Build a getrawtransaction request.

    Args:
        txid: Transaction id.
        verbose: 1 for a decoded object, 0 for hex.
    """
    return build_request("getrawtransaction", *_present(txid, verbose))


def build_add_node(node: str, command: int | None = None) -> Request:
    return build_request("addnode", *_present(node, command))


def build_get_added_node_info(dns: bool, node: str | None = None) -> Request:
    return build_request("getaddednodeinfo", *_present(dns, node))


def build_set_generate(generate: bool, proc_limit: int | None = None) -> Request:
    return build_request("setgenerate", *_present(generate, proc_limit))


def build_get_memory_pool(data: str | None = None) -> Request:
    return build_request("getmemorypool", *_present(data))


def build_submit_block(hex_block: str) -> Request:
    return build_request("submitblock", hex_block)


# ─── WALLET ──────────────────────────────────────────────────────────

def build_get_balance(
    account: str | None = None,
    minconf: int | None = None,
) -> Request:
    """Build a getbalance request.

    Args:
        account: Account name; omit for the whole wallet.
        minconf: Minimum confirmations (requires ``account``).
    """
    return build_request("getbalance", *_present(account, minconf))


def build_list_accounts(minconf: int | None = None) -> Request:
    return build_request("listaccounts", *_present(minconf))


def build_list_transactions(
    account: str | None = None,
    count: int | None = None,
    skip: int | None = None,
) -> Request:
    return build_request("listtransactions", *_present(account, count, skip))


def build_list_unspent(
    minconf: int | None = None,
    maxconf: int | None = None,
) -> Request:
    return build_request("listunspent", *_present(minconf, maxconf))


def build_list_received_by_account(
    minconf: int | None = None,
    include_empty: bool | None = None,
) -> Request:
    return build_request("listreceivedbyaccount", *_present(minconf, include_empty))


def build_backup_wallet(destination: str) -> Request:
    return build_request("backupwallet", destination)


def build_set_account(address: str, account: str) -> Request:
    return build_request("setaccount", address, account)


def build_verify_message(address: str, signature: str, message: str) -> Request:
    return build_request("verifymessage", address, signature, message)


def build_import_priv_key(
    privkey: str,
    label: str | None = None,
    rescan: bool | None = None,
) -> Request:
    return build_request("importprivkey", *_present(privkey, label, rescan))


def build_set_tx_fee(amount: float) -> Request:
    """Build a settxfee request. ``amount`` must be a float (BTC per kB)."""
    return build_request("settxfee", amount)


def build_wallet_passphrase(passphrase: str, timeout: int) -> Request:
    return build_request("walletpassphrase", passphrase, timeout)


# ─── SENDING ─────────────────────────────────────────────────────────

def build_send_from(
    from_account: str,
    to_address: str,
    amount: float,
    minconf: int | None = None,
    *comments: str,
) -> Request:
    """Build a sendfrom request.

    Trailing ``comments`` (comment, comment-to) require ``minconf``.
    """
    if comments and minconf is None:
        raise ValueError("minconf is required when comments are given")
    return build_request(
        "sendfrom", *_present(from_account, to_address, amount, minconf), *comments
    )


def build_move(
    from_account: str,
    to_account: str,
    amount: float,
    minconf: int | None = None,
    comment: str | None = None,
) -> Request:
    return build_request(
        "move", *_present(from_account, to_account, amount, minconf, comment)
    )


def build_send_to_address(
    address: str,
    amount: float,
    comment: str | None = None,
    comment_to: str | None = None,
) -> Request:
    return build_request(
        "sendtoaddress", *_present(address, amount, comment, comment_to)
    )


def build_send_many(
    from_account: str,
    address: str,
    amount: float,
    minconf: int | str | None = None,
    comment: str | None = None,
) -> Request:
    return build_request(
        "sendmany", *_present(from_account, address, amount, minconf, comment)
    )


# ─── MULTISIG / RAW TRANSACTIONS ─────────────────────────────────────

def build_add_multisig_address(n_required: int, *keys: str) -> Request:
    """Build an addmultisignaddress request over one or more keys."""
    return build_request("addmultisignaddress", n_required, *keys)


def build_create_raw_transaction(
    txid: str,
    vout: str,
    address: str,
    amount: float,
) -> Request:
    return build_request("createrawtransaction", txid, vout, address, amount)


def build_lock_unspent(unlock: bool, *outputs: str) -> Request:
    return build_request("lockunspent", unlock, *outputs)


def build_sign_raw_transaction(
    hex_tx: str,
    prevtxs: str,
    privkeys: str,
    sighash: str,
    flags: str,
) -> Request:
    return build_request(
        "signrawtransaction", hex_tx, prevtxs, privkeys, sighash, flags
    )
