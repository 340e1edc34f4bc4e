"""Command signatures and the registry of supported RPC commands.

Each command is described by the kinds of its required positional
arguments, the kinds of the optional arguments that may follow them
(consumed left to right), and optionally one kind for an unbounded
trailing group.

Signature codes used in the table below::

    S  string      I  integer
    F  float       B  boolean

A slot accepting more than one kind is written with ``|`` (``I|S``), in
which case the slots of that field are separated by spaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .errors import UnknownCommand
from .kinds import Kind, describe_kind, parse_kinds


@dataclass(frozen=True)
class Signature:
    """Argument contract for a single command."""

    name: str
    required: tuple[Kind, ...] = ()
    optional: tuple[Kind, ...] = ()
    variadic: Kind | None = None
    help: str = ""

    @property
    def min_args(self) -> int:
        return len(self.required)

    @property
    def max_args(self) -> int | None:
        """Upper bound on argument count, or None when variadic."""
        if self.variadic is not None:
            return None
        return len(self.required) + len(self.optional)

    def expected_kind(self, position: int) -> Kind | None:
        """Kind expected at ``position``, or None if no slot exists there."""
        if position < len(self.required):
            return self.required[position]
        position -= len(self.required)
        if position < len(self.optional):
            return self.optional[position]
        return self.variadic

    def usage(self) -> str:
        """Render the signature as ``name <string> [integer] [string...]``."""
        parts = [self.name]
        parts += [f"<{describe_kind(k)}>" for k in self.required]
        parts += [f"[{describe_kind(k)}]" for k in self.optional]
        if self.variadic is not None:
            parts.append(f"[{describe_kind(self.variadic)}...]")
        return " ".join(parts)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "required": [describe_kind(k) for k in self.required],
            "optional": [describe_kind(k) for k in self.optional],
            "variadic": describe_kind(self.variadic) if self.variadic else None,
            "usage": self.usage(),
            "help": self.help,
        }


def signature(
    name: str,
    required: str = "",
    optional: str = "",
    variadic: str = "",
    help: str = "",
) -> Signature:
    """Build a Signature from compact kind codes, e.g. ``signature("move", "SSF", "IS")``."""
    variadic_kinds = parse_kinds(variadic)
    if len(variadic_kinds) > 1:
        raise ValueError(f"{name}: variadic tail must name a single kind")
    return Signature(
        name=name,
        required=parse_kinds(required),
        optional=parse_kinds(optional),
        variadic=variadic_kinds[0] if variadic_kinds else None,
        help=help,
    )


class CommandRegistry:
    """Read-only lookup table of command signatures.

    Built once from a sequence of signatures; duplicate names are rejected.
    There are no mutators, so instances can be shared between threads.
    """

    def __init__(self, signatures: Iterable[Signature]) -> None:
        table: dict[str, Signature] = {}
        for sig in signatures:
            if not sig.name:
                raise ValueError("Command name must not be empty")
            if sig.name in table:
                raise ValueError(f"Duplicate command {sig.name!r}")
            table[sig.name] = sig
        self._signatures: Mapping[str, Signature] = MappingProxyType(table)

    @property
    def signatures(self) -> Mapping[str, Signature]:
        return self._signatures

    def lookup(self, name: str) -> Signature:
        """Return the signature for ``name``.

        Raises:
            UnknownCommand: If the command is not registered.
        """
        try:
            return self._signatures[name]
        except (KeyError, TypeError):
            raise UnknownCommand(name) from None

    def names(self) -> list[str]:
        return sorted(self._signatures)

    def __contains__(self, name: object) -> bool:
        try:
            return name in self._signatures
        except TypeError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._signatures)

    def __repr__(self) -> str:
        return f"CommandRegistry({len(self)} commands)"


_NO_ARGS = {
    "getblockcount": "Number of blocks in the longest chain.",
    "getconnectioncount": "Number of connections to other nodes.",
    "getdifficulty": "Proof-of-work difficulty as a multiple of the minimum.",
    "getgenerate": "Whether the node is generating coins.",
    "gethashespersec": "Recent hashes per second while generating.",
    "getinfo": "Various state information about the node.",
    "getmininginfo": "Mining-related information.",
    "getpeerinfo": "Data about each connected peer.",
    "getrawmempool": "Transaction ids in the memory pool.",
    "keypoolrefill": "Fill the key pool.",
    "listaddressgroupings": "Addresses grouped by common ownership.",
    "listlockunspent": "Temporarily unspendable outputs.",
    "stop": "Stop the node.",
    "walletlock": "Remove the wallet encryption key from memory.",
}

_ONE_STRING = {
    "backupwallet": "Copy the wallet to a destination path.",
    "decoderawtransaction": "Decode a hex-encoded transaction.",
    "dumpprivkey": "Reveal the private key of an address.",
    "dumpwallet": "Dump all wallet keys to a file.",
    "encryptwallet": "Encrypt the wallet with a passphrase.",
    "getaccount": "Account associated with an address.",
    "getaccountaddress": "Current receiving address of an account.",
    "getaddressesbyaccount": "Addresses belonging to an account.",
    "getblock": "Information about a block given its hash.",
    "gettransaction": "Details of a wallet transaction.",
    "importwallet": "Import keys from a wallet dump file.",
    "sendrawtransaction": "Submit a raw transaction to the network.",
    "submitblock": "Submit a new block to the network.",
    "validateaddress": "Information about an address.",
}

_ONE_OPTIONAL_STRING = {
    "getmemorypool": "Block template, or submit a block.",
    "getnewaddress": "New receiving address, optionally for an account.",
    "getwork": "Hashing work, or submit solved work.",
    "help": "List commands, or help for one command.",
}

DEFAULT_SIGNATURES: tuple[Signature, ...] = (
    *(signature(name, help=text) for name, text in _NO_ARGS.items()),
    *(signature(name, "S", help=text) for name, text in _ONE_STRING.items()),
    *(signature(name, optional="S", help=text)
      for name, text in _ONE_OPTIONAL_STRING.items()),
    signature("listaccounts", optional="I",
              help="Account balances, filtered by minimum confirmations."),
    signature("getblockhash", "I", help="Hash of the block at a height."),
    signature("settxfee", "F", help="Set the transaction fee per kB."),
    signature("setaccount", "SS", help="Associate an address with an account."),
    signature("signmessage", "SS", help="Sign a message with an address key."),
    signature("walletpassphrasechange", "SS", help="Change the wallet passphrase."),
    signature("walletpassphrase", "SI",
              help="Unlock the wallet for a number of seconds."),
    signature("verifymessage", "SSS", help="Verify a signed message."),
    signature("getaddednodeinfo", "B", "S", help="Information about added nodes."),
    signature("setgenerate", "B", "I", help="Turn generation on or off."),
    signature("getbalance", optional="SI", help="Balance of an account."),
    signature("getreceivedbyaccount", optional="SI",
              help="Total received by an account."),
    signature("addnode", "S", "I", help="Add, remove or try a peer."),
    signature("getrawtransaction", "S", "I", help="Raw transaction data."),
    signature("getreceivedbyaddress", "S", "I", help="Total received by an address."),
    signature("listreceivedbyaccount", optional="IB",
              help="Amounts received per account."),
    signature("listreceivedbyaddress", optional="IB",
              help="Amounts received per address."),
    signature("listtransactions", optional="SII",
              help="Recent transactions of an account."),
    signature("listsinceblock", optional="SI",
              help="Transactions since a block."),
    signature("importprivkey", "S", "SB", help="Add a private key to the wallet."),
    signature("listunspent", optional="II",
              help="Unspent outputs within a confirmation range."),
    signature("sendfrom", "SSF", "I", "S",
              help="Send an amount from an account to an address."),
    signature("move", "SSF", "IS", help="Move funds between accounts."),
    signature("sendtoaddress", "SF", "SS", help="Send an amount to an address."),
    signature("addmultisignaddress", "ISS", variadic="S",
              help="Add an n-required-to-sign address to the wallet."),
    signature("createmultisig", "IS", variadic="S",
              help="Create an n-required-to-sign address."),
    signature("createrawtransaction", "SSSF",
              help="Create a transaction spending an input to an address."),
    signature("sendmany", "SSF", "I|S S",
              help="Send from an account to an address."),
    signature("lockunspent", "BS", variadic="S",
              help="Lock or unlock transaction outputs."),
    signature("signrawtransaction", "SSSSS", help="Sign a raw transaction."),
)

DEFAULT_REGISTRY = CommandRegistry(DEFAULT_SIGNATURES)
