"""
Amount conversion between display and wire units.

- DISPLAY units: what a user types or sees ("0.0001" RUNE, "1.5" BTC)
- WIRE units: what the chain stores, an integer at a fixed 1e8 scale
  ("10000" for 0.0001 RUNE) for every asset

The two are distinct types so a display amount can never reach a message
builder without an explicit ``to_wire`` call. Conversion truncates toward zero
so rounding can never over-spend.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal, InvalidOperation, ROUND_DOWN, localcontext
from typing import Optional, Union

from ..errors import InvalidAmount
from .constants import MAX_WIRE_UNITS, WIRE_DECIMALS, WIRE_SCALE
from .normalizer import asset_symbol

# Wide enough for any 256-bit wire amount plus its fractional digits
_CONTEXT = Context(prec=100, rounding=ROUND_DOWN)

# Order of magnitude of the largest wire amount
_MAX_WIRE_EXPONENT = Decimal(MAX_WIRE_UNITS).adjusted()


def _canonical_decimal(value: Decimal) -> str:
    """Plain-notation decimal string without trailing zeros."""
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class DisplayAmount:
    """Human-facing decimal amount. ``value`` holds the exact parsed Decimal."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise TypeError("DisplayAmount requires a Decimal; use DisplayAmount.parse()")

    @classmethod
    def parse(cls, amount: Union[str, int, Decimal, "DisplayAmount"]) -> "DisplayAmount":
        if isinstance(amount, DisplayAmount):
            return amount
        if isinstance(amount, WireAmount):
            raise TypeError("Wire amount passed where a display amount is expected; call to_display()")
        return cls(_parse_non_negative(amount))

    def __str__(self) -> str:
        return _canonical_decimal(self.value)

    @property
    def is_zero(self) -> bool:
        return self.value == 0


@dataclass(frozen=True)
class WireAmount:
    """Integer amount at the fixed 1e8 wire scale."""

    units: int

    def __post_init__(self) -> None:
        if isinstance(self.units, bool) or not isinstance(self.units, int):
            raise TypeError("WireAmount requires an int; use WireAmount.parse()")
        if self.units < 0:
            raise InvalidAmount(self.units, "wire units cannot be negative")
        if self.units > MAX_WIRE_UNITS:
            # str() of an unbounded int can itself fail, so report the width only
            raise InvalidAmount(f"<{self.units.bit_length()}-bit integer>", "exceeds the maximum representable amount")

    @classmethod
    def parse(cls, amount: Union[str, int, "WireAmount"]) -> "WireAmount":
        if isinstance(amount, WireAmount):
            return amount
        if isinstance(amount, DisplayAmount):
            raise TypeError("Display amount passed where a wire amount is expected; call to_wire()")
        value = _parse_non_negative(amount)
        if value > MAX_WIRE_UNITS:
            raise InvalidAmount(amount if isinstance(amount, str) else value, "exceeds the maximum representable amount")
        if value != value.to_integral_value():
            raise InvalidAmount(amount, "wire units must be a whole number")
        return cls(int(value) if value else 0)

    def __str__(self) -> str:
        return str(self.units)


def _parse_non_negative(amount: Union[str, int, Decimal]) -> Decimal:
    if isinstance(amount, bool) or isinstance(amount, float):
        # floats have already lost precision by the time they get here
        raise InvalidAmount(amount, "pass amounts as strings or Decimals")
    try:
        value = Decimal(amount.strip()) if isinstance(amount, str) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(amount, "not a number")
    if not value.is_finite():
        raise InvalidAmount(amount, "not finite")
    if value < 0:
        raise InvalidAmount(amount, "negative")
    return value


def to_wire(display: Union[str, Decimal, DisplayAmount], asset: Optional[str] = None) -> WireAmount:
    """Convert a display amount to wire units, truncating excess precision.

    ``asset`` is accepted for call-site symmetry; the scale is the same for
    every THORChain asset.
    """
    amount = DisplayAmount.parse(display)
    if not amount.is_zero and amount.value.adjusted() + WIRE_DECIMALS > _MAX_WIRE_EXPONENT:
        raise InvalidAmount(amount.value, "exceeds the maximum representable amount")
    with localcontext(_CONTEXT):
        units = (amount.value * WIRE_SCALE).to_integral_value(rounding=ROUND_DOWN)
    if units > MAX_WIRE_UNITS:
        raise InvalidAmount(amount.value, "exceeds the maximum representable amount")
    return WireAmount(int(units))


def to_display(wire: Union[str, int, WireAmount], asset: Optional[str] = None) -> DisplayAmount:
    """Convert wire units to an exact display amount."""
    amount = WireAmount.parse(wire)
    with localcontext(_CONTEXT):
        return DisplayAmount(Decimal(amount.units).scaleb(-WIRE_DECIMALS))


def is_dust(display: Union[str, Decimal, DisplayAmount], asset: Optional[str] = None) -> bool:
    """True when the amount is worth less than one wire unit.

    Unparseable input counts as dust since it can never be sent.
    """
    try:
        return to_wire(display, asset).units < 1
    except InvalidAmount:
        return True


def is_valid_amount(amount: Union[str, Decimal, DisplayAmount, None]) -> bool:
    """True for a strictly positive, finite amount."""
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return False
    try:
        return not DisplayAmount.parse(amount).is_zero
    except (InvalidAmount, TypeError):
        return False


def format_amount(amount: Union[str, Decimal, DisplayAmount], asset: Optional[str] = None) -> str:
    """Display string limited to wire precision with trailing zeros stripped.

    Returns the input untouched when it cannot be parsed.
    """
    try:
        parsed = DisplayAmount.parse(amount)
    except (InvalidAmount, TypeError):
        return str(amount)
    try:
        with localcontext(_CONTEXT):
            truncated = parsed.value.quantize(Decimal(1).scaleb(-WIRE_DECIMALS), rounding=ROUND_DOWN)
    except InvalidOperation:
        return str(parsed.value)
    return _canonical_decimal(truncated)


def format_amount_with_symbol(amount: Union[str, Decimal, DisplayAmount], asset: str) -> str:
    return f"{format_amount(amount, asset)} {asset_symbol(asset)}"
