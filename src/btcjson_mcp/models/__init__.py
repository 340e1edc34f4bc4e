"""Data models for command results and amounts."""

from .amounts import amount_to_json, json_to_amount
from .results import (
    BlockResult,
    InfoResult,
    MiningInfoResult,
    PeerInfo,
    UnspentResult,
    ValidateAddressResult,
)
