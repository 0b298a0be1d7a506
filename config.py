import os
from decimal import Decimal

CURRENCY_SYMBOL = os.environ.get("SPLIT_APP_CURRENCY", "₹")
LOG_LEVEL = os.environ.get("SPLIT_APP_LOG_LEVEL", "INFO").upper()

# Balances within this band of zero count as settled.
SETTLE_EPSILON = Decimal("0.01")

UNKNOWN_NAME = "Unknown"

# Keeps every amount well inside the 28-digit decimal context.
MAX_AMOUNT = Decimal("1e12")
