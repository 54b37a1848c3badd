"""Calculator modules for profitability computations."""

from .waterfall_calculator import WaterfallCalculator, compute
from .state_editor import (
    set_expense_amount,
    set_expense_percent,
    set_quantity,
    set_unit_price,
)

__all__ = [
    "WaterfallCalculator",
    "compute",
    "set_expense_amount",
    "set_expense_percent",
    "set_quantity",
    "set_unit_price",
]
