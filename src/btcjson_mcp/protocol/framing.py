"""JSON-RPC request envelopes: validation, building and parsing.

Wire layout of a request::

    {"jsonrpc": "1.0", "id": "btcjson-7", "method": "getblockhash", "params": [1]}

- ``method``: command name, copied verbatim from the caller
- ``params``: the validated arguments in the order they were supplied
- ``id``: correlation token, unique per request within the process

A request is only ever built after the arguments have been checked
against the command's signature.
"""

from __future__ import annotations

import itertools
import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Sequence

from .errors import InvalidRequest, TooFewArguments, TooManyArguments, TypeMismatch
from .kinds import DynamicValue, kind_of
from .registry import DEFAULT_REGISTRY, CommandRegistry, Signature

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "1.0"
ID_PREFIX = "btcjson"

_id_counter = itertools.count(1)
_id_lock = threading.Lock()


def next_id() -> str:
    """Allocate a fresh request id; safe to call from several threads."""
    with _id_lock:
        n = next(_id_counter)
    return f"{ID_PREFIX}-{n}"


@dataclass(frozen=True)
class Request:
    """A validated JSON-RPC request."""

    method: str
    params: tuple[Any, ...]
    id: str
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": list(self.params),
        }

    def to_bytes(self) -> bytes:
        """Serialize to the UTF-8 JSON body sent to the node."""
        return json.dumps(self.to_dict()).encode("utf-8")

    def __repr__(self) -> str:
        return f"Request(id={self.id!r}, method={self.method!r}, params={list(self.params)!r})"


def validate_args(sig: Signature, args: Sequence[DynamicValue]) -> None:
    """Check argument count and kinds against a signature.

    Raises:
        TooFewArguments: Fewer arguments than required slots.
        TooManyArguments: More arguments than slots on a non-variadic command.
        TypeMismatch: An argument's kind differs from its slot's kind.
    """
    n = len(args)
    if n < sig.min_args:
        raise TooFewArguments(sig.name, n, sig.min_args, sig.max_args)
    if sig.max_args is not None and n > sig.max_args:
        raise TooManyArguments(sig.name, n, sig.min_args, sig.max_args)

    for position, value in enumerate(args):
        # Every position below n has a slot: the arity check above
        # guarantees it, and the variadic kind covers the tail.
        expected = sig.expected_kind(position)
        actual = kind_of(value)
        if actual is None or actual not in expected:
            raise TypeMismatch(sig.name, position, expected, actual, value)


def build_request(
    command: str,
    *args: DynamicValue,
    registry: CommandRegistry = DEFAULT_REGISTRY,
) -> Request:
    """Validate a command invocation and build its request envelope.

    Args:
        command: RPC command name, e.g. ``"getblockhash"``.
        *args: Positional arguments in the order the node expects them.
        registry: Signature table to validate against.

    Raises:
        UnknownCommand: ``command`` is not in ``registry``.
        TooFewArguments, TooManyArguments, TypeMismatch: see :func:`validate_args`.
    """
    sig = registry.lookup(command)
    validate_args(sig, args)
    request = Request(method=command, params=tuple(args), id=next_id())
    logger.debug("Built %r", request)
    return request


def create_message(
    command: str,
    *args: DynamicValue,
    registry: CommandRegistry = DEFAULT_REGISTRY,
) -> bytes:
    """Validate a command invocation and return the serialized request."""
    return build_request(command, *args, registry=registry).to_bytes()


def parse_request(message: bytes | str) -> Request:
    """Parse a serialized request, rejecting anything that cannot be sent.

    Only the envelope is checked here (a JSON object with a non-empty
    ``method`` and a list of ``params``); argument kinds are not re-validated
    so that commands outside the registry can still be sent raw.

    Raises:
        InvalidRequest: If the message is not a sendable JSON-RPC request.
    """
    try:
        data = json.loads(message)
    except (TypeError, ValueError) as e:
        raise InvalidRequest(f"Request is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidRequest("Request must be a JSON object")

    method = data.get("method")
    if not isinstance(method, str) or not method:
        raise InvalidRequest("Request has no method")

    params = data.get("params", [])
    if params is None:
        params = []
    if not isinstance(params, list):
        raise InvalidRequest("Request params must be a list")

    request_id = data.get("id")
    return Request(
        method=method,
        params=tuple(params),
        id="" if request_id is None else str(request_id),
        jsonrpc=str(data.get("jsonrpc", JSONRPC_VERSION)),
    )
