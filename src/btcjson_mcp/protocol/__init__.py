"""Protocol layer: command registry, request building and reply parsing."""

from .errors import (
    BtcJsonError,
    InvalidRequest,
    ReadError,
    RemoteError,
    ReplyDecodeError,
    TooFewArguments,
    TooManyArguments,
    TransportError,
    TypeMismatch,
    UnknownCommand,
    ValidationError,
)
from .framing import Request, build_request, create_message, parse_request
from .kinds import Kind, kind_of
from .parser import Reply, RpcError, parse_reply, parse_result
from .registry import DEFAULT_REGISTRY, CommandRegistry, Signature, signature
