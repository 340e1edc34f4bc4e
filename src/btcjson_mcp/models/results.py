"""Typed models for commonly used command results.

Only fields the node is known to send are modelled; anything else in the
reply is kept in ``extra`` so nothing is lost across node versions.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from .amounts import json_to_amount


def _split(cls, data: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate known dataclass fields from unknown keys."""
    known = {f.name for f in fields(cls)} - {"extra"}
    values = {k: v for k, v in data.items() if k in known}
    extra = {k: v for k, v in data.items() if k not in known}
    return values, extra


@dataclass
class InfoResult:
    """Result of ``getinfo``."""

    version: int = 0
    protocolversion: int = 0
    walletversion: int = 0
    balance: float = 0.0
    blocks: int = 0
    timeoffset: int = 0
    connections: int = 0
    proxy: str = ""
    difficulty: float = 0.0
    testnet: bool = False
    keypoololdest: int = 0
    keypoolsize: int = 0
    paytxfee: float = 0.0
    errors: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def balance_satoshi(self) -> int:
        return json_to_amount(self.balance)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InfoResult:
        values, extra = _split(cls, data)
        return cls(**values, extra=extra)


@dataclass
class MiningInfoResult:
    """Result of ``getmininginfo``."""

    blocks: int = 0
    currentblocksize: int = 0
    currentblocktx: int = 0
    difficulty: float = 0.0
    errors: str = ""
    generate: bool = False
    genproclimit: int = 0
    hashespersec: int = 0
    pooledtx: int = 0
    testnet: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MiningInfoResult:
        values, extra = _split(cls, data)
        return cls(**values, extra=extra)


@dataclass
class PeerInfo:
    """One entry of ``getpeerinfo``."""

    addr: str = ""
    services: str = ""
    lastsend: int = 0
    lastrecv: int = 0
    bytessent: int = 0
    bytesrecv: int = 0
    conntime: int = 0
    version: int = 0
    subver: str = ""
    inbound: bool = False
    startingheight: int = 0
    banscore: int = 0
    syncnode: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PeerInfo:
        values, extra = _split(cls, data)
        return cls(**values, extra=extra)


@dataclass
class BlockResult:
    """Result of ``getblock``."""

    hash: str = ""
    confirmations: int = 0
    size: int = 0
    height: int = 0
    version: int = 0
    merkleroot: str = ""
    tx: list[str] = field(default_factory=list)
    time: int = 0
    nonce: int = 0
    bits: str = ""
    difficulty: float = 0.0
    previousblockhash: str = ""
    nextblockhash: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockResult:
        values, extra = _split(cls, data)
        return cls(**values, extra=extra)


@dataclass
class UnspentResult:
    """One entry of ``listunspent``."""

    txid: str = ""
    vout: int = 0
    address: str = ""
    account: str = ""
    scriptPubKey: str = ""
    amount: float = 0.0
    confirmations: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def amount_satoshi(self) -> int:
        return json_to_amount(self.amount)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UnspentResult:
        values, extra = _split(cls, data)
        return cls(**values, extra=extra)


@dataclass
class ValidateAddressResult:
    """Result of ``validateaddress``."""

    isvalid: bool = False
    address: str = ""
    ismine: bool = False
    isscript: bool = False
    pubkey: str = ""
    iscompressed: bool = False
    account: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidateAddressResult:
        values, extra = _split(cls, data)
        return cls(**values, extra=extra)
