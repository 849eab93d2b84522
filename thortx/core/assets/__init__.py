"""
Asset identifiers and amounts.

Pure functions, no I/O:
- normalize_asset: parse native (``.``), secured (``-``) and trade (``~``) notations
- to_wire / to_display: convert between display and 1e8 wire units
"""

from .constants import HOME_CHAIN, HOME_NATIVE_DENOM, WIRE_DECIMALS, WIRE_SCALE, UNKNOWN
from .normalizer import (
    AssetKind,
    NormalizedAsset,
    asset_symbol,
    classify_asset,
    normalize_asset,
)
from .units import (
    DisplayAmount,
    WireAmount,
    format_amount,
    format_amount_with_symbol,
    is_dust,
    is_valid_amount,
    to_display,
    to_wire,
)

__all__ = [
    "HOME_CHAIN",
    "HOME_NATIVE_DENOM",
    "WIRE_DECIMALS",
    "WIRE_SCALE",
    "UNKNOWN",
    "AssetKind",
    "NormalizedAsset",
    "asset_symbol",
    "classify_asset",
    "normalize_asset",
    "DisplayAmount",
    "WireAmount",
    "format_amount",
    "format_amount_with_symbol",
    "is_dust",
    "is_valid_amount",
    "to_display",
    "to_wire",
]
