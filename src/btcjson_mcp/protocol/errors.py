"""Exception hierarchy for building, sending and reading RPC messages.

Every failure surfaces as its own exception type so callers can tell an
illegal call apart from a broken stream or an unreachable node::

    BtcJsonError
     +-- ValidationError (ValueError)
     |    +-- UnknownCommand
     |    +-- TooFewArguments
     |    +-- TooManyArguments
     |    +-- TypeMismatch
     |    +-- InvalidRequest
     +-- ReadError (IOError)
     +-- TransportError (ConnectionError)
     +-- ReplyDecodeError (ValueError)
     +-- RemoteError
"""

from __future__ import annotations

from .kinds import Kind, describe_kind


class BtcJsonError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(BtcJsonError, ValueError):
    """A command invocation was rejected before anything was sent."""


class UnknownCommand(ValidationError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown command {name!r}")


def _describe_range(min_args: int, max_args: int | None) -> str:
    if max_args is None:
        return f"at least {min_args}"
    if min_args == max_args:
        return f"exactly {min_args}"
    return f"{min_args} to {max_args}"


class ArityError(ValidationError):
    """Wrong number of arguments for a command."""

    def __init__(
        self,
        command: str,
        supplied: int,
        min_args: int,
        max_args: int | None,
    ) -> None:
        self.command = command
        self.supplied = supplied
        self.min_args = min_args
        self.max_args = max_args
        super().__init__(
            f"{self._prefix} arguments for {command}: got {supplied}, "
            f"expected {_describe_range(min_args, max_args)}"
        )

    _prefix = "Wrong number of"


class TooFewArguments(ArityError):
    _prefix = "Too few"


class TooManyArguments(ArityError):
    _prefix = "Too many"


class TypeMismatch(ValidationError):
    """An argument's kind does not match the slot it was supplied in."""

    def __init__(
        self,
        command: str,
        position: int,
        expected: Kind,
        actual: Kind | None,
        value: object = None,
    ) -> None:
        self.command = command
        self.position = position
        self.expected = expected
        self.actual = actual
        actual_name = (
            describe_kind(actual)
            if actual is not None
            else f"unsupported type {type(value).__name__}"
        )
        super().__init__(
            f"Argument {position} of {command} must be "
            f"{describe_kind(expected)}, got {actual_name}"
        )


class InvalidRequest(ValidationError):
    """A serialized request is not a well-formed JSON-RPC call."""


class ReadError(BtcJsonError, IOError):
    """The reply stream failed or was truncated while being read."""


class TransportError(BtcJsonError, ConnectionError):
    """The node could not be reached or refused the request."""


class ReplyDecodeError(BtcJsonError, ValueError):
    """A reply body is not a valid JSON-RPC envelope."""


class RemoteError(BtcJsonError):
    """The node answered with an error envelope."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"RPC error {code}: {message}")
