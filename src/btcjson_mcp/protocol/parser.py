"""Reply parsing for node responses."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ..models.results import (
    BlockResult,
    InfoResult,
    MiningInfoResult,
    PeerInfo,
    UnspentResult,
    ValidateAddressResult,
)
from .errors import RemoteError, ReplyDecodeError


@dataclass
class RpcError:
    """Error object carried in a reply envelope."""

    code: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


@dataclass
class Reply:
    """Decoded JSON-RPC reply envelope."""

    result: Any
    error: RpcError | None
    id: str | None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.error is not None:
            return f"Reply(id={self.id!r}, error={self.error.code}: {self.error.message!r})"
        return f"Reply(id={self.id!r}, result={self.result!r})"


def parse_reply(data: bytes | str) -> Reply:
    """Decode a reply body into a Reply.

    Raises:
        ReplyDecodeError: If the body is not a JSON-RPC reply envelope.
    """
    try:
        envelope = json.loads(data)
    except (TypeError, ValueError) as e:
        raise ReplyDecodeError(f"Reply is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise ReplyDecodeError("Reply must be a JSON object")
    if "result" not in envelope and "error" not in envelope:
        raise ReplyDecodeError("Reply has neither result nor error")

    error = None
    raw_error = envelope.get("error")
    if raw_error is not None:
        if isinstance(raw_error, dict):
            try:
                code = int(raw_error.get("code", 0))
            except (TypeError, ValueError, OverflowError) as e:
                raise ReplyDecodeError(f"Reply error code is not an integer: {e}") from e
            error = RpcError(code=code, message=str(raw_error.get("message", "")))
        else:
            # Some nodes report a bare string.
            error = RpcError(code=0, message=str(raw_error))

    reply_id = envelope.get("id")
    return Reply(
        result=envelope.get("result"),
        error=error,
        id=None if reply_id is None else str(reply_id),
    )


def _parse_list(cls):
    def parse(result: Any) -> list:
        if not isinstance(result, list):
            raise ReplyDecodeError(f"Expected a list of {cls.__name__}")
        if not all(isinstance(item, dict) for item in result):
            raise ReplyDecodeError(f"Expected an object for each {cls.__name__}")
        return [cls.from_dict(item) for item in result]

    return parse


def _parse_object(cls):
    def parse(result: Any):
        if not isinstance(result, dict):
            raise ReplyDecodeError(f"Expected an object for {cls.__name__}")
        return cls.from_dict(result)

    return parse


RESULT_PARSERS = {
    "getinfo": _parse_object(InfoResult),
    "getmininginfo": _parse_object(MiningInfoResult),
    "getblock": _parse_object(BlockResult),
    "validateaddress": _parse_object(ValidateAddressResult),
    "getpeerinfo": _parse_list(PeerInfo),
    "listunspent": _parse_list(UnspentResult),
}


def parse_result(command: str, reply: Reply):
    """Return the reply's result, decoded into a model where one exists.

    Raises:
        RemoteError: If the reply carries an error.
        ReplyDecodeError: If the result does not have the expected shape.
    """
    if reply.error is not None:
        raise RemoteError(reply.error.code, reply.error.message)

    parser = RESULT_PARSERS.get(command)
    if parser is None:
        return reply.result
    return parser(reply.result)
