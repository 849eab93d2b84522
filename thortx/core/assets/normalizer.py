"""
Asset identifier normalization.

THORChain names the same underlying asset three ways:

- NATIVE (``.``):  L1 assets on their own chain, e.g. ``BTC.BTC``, ``ETH.USDC-0xA0b8...``
- SECURED (``-``): vault-backed claims held on THORChain, e.g. ``BTC-BTC``
- TRADE (``~``):   trade-account exposure, e.g. ``BTC~BTC``

Format is ``CHAIN<sep>SYMBOL[-CONTRACT]``. Single names such as ``rune`` or
``tcy`` are home-chain natives. Parsing never raises: malformed input comes
back with ``UNKNOWN`` chain and symbol so display code can still render it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import (
    CONTRACT_SEPARATOR,
    HOME_CHAIN,
    HOME_NATIVE_SYMBOL,
    MAX_BARE_SYMBOL_LENGTH,
    NATIVE_SEPARATOR,
    SECURED_SEPARATOR,
    TRADE_SEPARATOR,
    UNKNOWN,
)


class AssetKind(str, Enum):
    NATIVE = "native"
    SECURED = "secured"
    TRADE = "trade"


_SEPARATORS = {
    AssetKind.NATIVE: NATIVE_SEPARATOR,
    AssetKind.SECURED: SECURED_SEPARATOR,
    AssetKind.TRADE: TRADE_SEPARATOR,
}


@dataclass(frozen=True)
class NormalizedAsset:
    """Structured form of an asset string.

    ``raw_input`` is excluded from equality so that an asset compares equal to
    the result of re-normalizing its own canonical id.
    """

    canonical_id: str
    chain: str
    symbol: str
    kind: AssetKind
    contract_address: Optional[str] = None
    raw_input: str = field(default="", compare=False)

    @property
    def is_unknown(self) -> bool:
        return self.chain == UNKNOWN

    @property
    def is_home_native(self) -> bool:
        return self.kind == AssetKind.NATIVE and self.chain == HOME_CHAIN

    @property
    def is_rune(self) -> bool:
        return self.is_home_native and self.symbol == HOME_NATIVE_SYMBOL and not self.contract_address


def classify_asset(asset: str) -> Optional[AssetKind]:
    """Return the notation an asset string uses, or None for a bare name.

    ``~`` always means trade. When both ``.`` and ``-`` occur, whichever comes
    first wins, so ``ETH.USDC-0x...`` stays native with a contract suffix.
    """
    if TRADE_SEPARATOR in asset:
        return AssetKind.TRADE

    dot = asset.find(NATIVE_SEPARATOR)
    dash = asset.find(SECURED_SEPARATOR)
    if dash >= 0 and (dot < 0 or dash < dot):
        return AssetKind.SECURED
    if dot >= 0:
        return AssetKind.NATIVE
    return None


def _unknown(raw: str, kind: AssetKind, canonical: Optional[str] = None) -> NormalizedAsset:
    return NormalizedAsset(
        canonical_id=canonical if canonical is not None else raw.upper(),
        chain=UNKNOWN,
        symbol=UNKNOWN,
        kind=kind,
        raw_input=raw,
    )


def _parse(asset: str, raw: str, kind: AssetKind) -> NormalizedAsset:
    separator = _SEPARATORS[kind]
    chain, _, rest = asset.partition(separator)
    if kind == AssetKind.TRADE and TRADE_SEPARATOR in rest:
        return _unknown(raw, kind, asset.upper())

    symbol, _, contract = rest.partition(CONTRACT_SEPARATOR)
    if not chain or not symbol:
        return _unknown(raw, kind, asset.upper())

    chain = chain.upper()
    symbol = symbol.upper()
    contract_address = contract or None

    canonical = f"{chain}{separator}{symbol}"
    if contract_address:
        canonical = f"{canonical}{CONTRACT_SEPARATOR}{contract_address}"

    return NormalizedAsset(
        canonical_id=canonical,
        chain=chain,
        symbol=symbol,
        kind=kind,
        contract_address=contract_address,
        raw_input=raw,
    )


def normalize_asset(raw: Optional[str]) -> NormalizedAsset:
    """Parse any of the three notations into a ``NormalizedAsset``."""
    if not raw or not isinstance(raw, str) or not raw.strip():
        return _unknown(raw or "", AssetKind.NATIVE, UNKNOWN)

    asset = raw.strip()
    kind = classify_asset(asset)

    if kind is None:
        if len(asset) <= MAX_BARE_SYMBOL_LENGTH:
            symbol = asset.upper()
            return NormalizedAsset(
                canonical_id=f"{HOME_CHAIN}{NATIVE_SEPARATOR}{symbol}",
                chain=HOME_CHAIN,
                symbol=symbol,
                kind=AssetKind.NATIVE,
                raw_input=raw,
            )
        return _unknown(raw, AssetKind.NATIVE, asset.upper())

    return _parse(asset, raw, kind)


def asset_symbol(raw: str) -> str:
    """Ticker for display, falling back to the raw string for unknown assets."""
    normalized = normalize_asset(raw)
    if normalized.is_unknown:
        return raw
    return normalized.symbol
