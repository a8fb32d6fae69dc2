"""Static reference data for the counter.

Denomination tables are fixed per currency (not user-editable). Notes and coins
are listed largest first, which is also the order the counting form shows them.
"""

from typing import Dict, Tuple

# code -> (banknotes, coins)
DENOMINATIONS: Dict[str, Tuple[Tuple[float, ...], Tuple[float, ...]]] = {
    "CZK": (
        (5000, 2000, 1000, 500, 200, 100),
        (50, 20, 10, 5, 2, 1),
    ),
    "EUR": (
        (500, 200, 100, 50, 20, 10, 5),
        (2, 1, 0.5, 0.2, 0.1, 0.05, 0.02, 0.01),
    ),
    "USD": (
        (100, 50, 20, 10, 5, 2, 1),
        (0.5, 0.25, 0.1, 0.05, 0.01),
    ),
    "GBP": (
        (50, 20, 10, 5),
        (2, 1, 0.5, 0.2, 0.1, 0.05, 0.02, 0.01),
    ),
    "CHF": (
        (1000, 200, 100, 50, 20, 10),
        (5, 2, 1, 0.5, 0.2, 0.1, 0.05),
    ),
    "PLN": (
        (500, 200, 100, 50, 20, 10),
        (5, 2, 1, 0.5, 0.2, 0.1, 0.05, 0.02, 0.01),
    ),
    "HUF": (
        (20000, 10000, 5000, 2000, 1000, 500),
        (200, 100, 50, 20, 10, 5),
    ),
    "JPY": (
        (10000, 5000, 2000, 1000),
        (500, 100, 50, 10, 5, 1),
    ),
}

# Positional layout of the external tables; only the boundary parsers use these.
RATE_ROW_MIN_COLUMNS = 7
CASH_FLOW_CURRENCY_COLUMN = 2
CASH_FLOW_BALANCE_COLUMN = 5
