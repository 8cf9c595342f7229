"""Shared constants: leverage bounds, column precision, rounding scales."""

from decimal import Decimal

MIN_LEVERAGE = 1
MAX_LEVERAGE = 125

# Column precision (digits, fractional digits)
PRICE_DIGITS, PRICE_PLACES = 18, 8
MONEY_DIGITS, MONEY_PLACES = 18, 2
PERCENT_DIGITS, PERCENT_PLACES = 10, 2

# Fractional digits kept on price-derived ratios before scaling to a percentage
RATIO_PLACES = 8
# Fractional digits kept on the win ratio before scaling to a percentage
WIN_RATIO_PLACES = 4

HUNDRED = Decimal("100")

COIN_MAX_LENGTH = 20
EXCHANGE_MAX_LENGTH = 50
