"""Profitability calculator domain: snapshot model, waterfall engine, serialization."""

from .models import (
    Amount,
    CalculatorState,
    ComputationResult,
    ComputedRow,
    ExpenseEntry,
    ExpenseId,
    ExpenseMode,
    Expenses,
    Percent,
    Project,
)
from .defaults import initial_state
from .calculators import (
    compute,
    set_expense_amount,
    set_expense_percent,
    set_quantity,
    set_unit_price,
)

__all__ = [
    "Amount",
    "CalculatorState",
    "ComputationResult",
    "ComputedRow",
    "ExpenseEntry",
    "ExpenseId",
    "ExpenseMode",
    "Expenses",
    "Percent",
    "Project",
    "initial_state",
    "compute",
    "set_expense_amount",
    "set_expense_percent",
    "set_quantity",
    "set_unit_price",
]
