"""Constants shared by asset parsing and amount conversion."""

from decimal import Decimal

# All THORChain amounts are carried at a fixed 1e8 scale regardless of asset
WIRE_DECIMALS = 8
WIRE_SCALE = Decimal(10) ** WIRE_DECIMALS

# Cosmos SDK Int is 256 bits wide
MAX_WIRE_UNITS = 2 ** 256 - 1

HOME_CHAIN = "THOR"
HOME_NATIVE_SYMBOL = "RUNE"
HOME_NATIVE_DENOM = "rune"

UNKNOWN = "UNKNOWN"

NATIVE_SEPARATOR = "."
SECURED_SEPARATOR = "-"
TRADE_SEPARATOR = "~"
CONTRACT_SEPARATOR = "-"

# Bare tokens longer than this are not assumed to be home-chain assets
MAX_BARE_SYMBOL_LENGTH = 10
