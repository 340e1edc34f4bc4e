"""Dynamic kinds of RPC argument values.

Callers pass plain Python values; each is classified into one of four
kinds before it is checked against a command signature. ``Kind`` is a
flag so a signature slot can accept more than one kind
(``Kind.INTEGER | Kind.STRING``).
"""

from __future__ import annotations

from enum import Flag, auto
from typing import Union

DynamicValue = Union[str, int, float, bool]


class Kind(Flag):
    """Argument kinds understood by the node."""

    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()


KIND_NAMES: dict[Kind, str] = {
    Kind.STRING: "string",
    Kind.INTEGER: "integer",
    Kind.FLOAT: "float",
    Kind.BOOLEAN: "boolean",
}

# Short codes used in signature tables and command listings.
KIND_CODES: dict[str, Kind] = {
    "S": Kind.STRING,
    "I": Kind.INTEGER,
    "F": Kind.FLOAT,
    "B": Kind.BOOLEAN,
}


def kind_of(value: object) -> Kind | None:
    """Return the kind of ``value``, or None if it is not a dynamic value.

    ``bool`` is tested before ``int`` because it is an ``int`` subclass.
    """
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, int):
        return Kind.INTEGER
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, str):
        return Kind.STRING
    return None


def matches(value: object, expected: Kind) -> bool:
    """True if ``value`` is of a kind accepted by ``expected``."""
    actual = kind_of(value)
    return actual is not None and actual in expected


def describe_kind(kind: Kind) -> str:
    """Human-readable name, e.g. ``"string or integer"``."""
    names = [name for member, name in KIND_NAMES.items() if member in kind]
    return " or ".join(names)


def parse_kinds(codes: str) -> tuple[Kind, ...]:
    """Parse a compact signature string such as ``"SSF"`` or ``"S I|S"``.

    Whitespace separates slots when a slot names a union (``I|S``);
    otherwise every character is its own slot.
    """
    if not codes:
        return ()
    tokens = codes.split() if " " in codes else list(codes)
    kinds = []
    for token in tokens:
        kind = None
        for code in token.split("|"):
            if code not in KIND_CODES:
                raise ValueError(f"Unknown kind code {code!r} in {codes!r}")
            kind = KIND_CODES[code] if kind is None else kind | KIND_CODES[code]
        kinds.append(kind)
    return tuple(kinds)
