"""Conversion between JSON BTC amounts and integer satoshi."""

from __future__ import annotations

import math

SATOSHI_PER_BTC = 100_000_000
MAX_MONEY = 21_000_000 * SATOSHI_PER_BTC


def json_to_amount(value: float) -> int:
    """Convert a BTC amount as found in JSON into satoshi.

    Rounds half away from zero so that values such as ``0.1`` (which is
    not exactly representable) land on the intended satoshi.

    Raises:
        ValueError: If the value is not finite or exceeds the money supply.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Amount must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"Amount must be finite, got {value}")

    scaled = value * SATOSHI_PER_BTC
    satoshi = int(scaled + 0.5) if scaled >= 0 else int(scaled - 0.5)
    if abs(satoshi) > MAX_MONEY:
        raise ValueError(f"Amount {value} exceeds the maximum money supply")
    return satoshi


def amount_to_json(satoshi: int) -> float:
    """Convert satoshi into the BTC float the node expects."""
    return satoshi / SATOSHI_PER_BTC
