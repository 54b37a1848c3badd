"""
State editor - field-level edits on a calculator snapshot.

Each function returns a new CalculatorState; the input is never modified.
Out-of-range numbers are clamped, never rejected.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Union

from calculator.models import Amount, CalculatorState, ExpenseId, Percent
from .numeric import clamp, non_negative, sanitize


def set_expense_percent(
    state: CalculatorState,
    expense_id: Union[ExpenseId, str],
    percent01: Any,
) -> CalculatorState:
    """Switch an expense to percent mode with a fraction in [0, 1]."""
    entry = state.expenses.get(expense_id)
    updated = replace(entry, setting=Percent(clamp(sanitize(percent01), 0.0, 1.0)))
    return replace(state, expenses=state.expenses.replace(updated))


def set_expense_amount(
    state: CalculatorState,
    expense_id: Union[ExpenseId, str],
    amount: Any,
) -> CalculatorState:
    """Switch an expense to a fixed amount (non-negative)."""
    entry = state.expenses.get(expense_id)
    updated = replace(entry, setting=Amount(non_negative(amount)))
    return replace(state, expenses=state.expenses.replace(updated))


def set_unit_price(state: CalculatorState, unit_price: Any) -> CalculatorState:
    return replace(state, unit_price=non_negative(unit_price))


def set_quantity(state: CalculatorState, quantity: Any) -> CalculatorState:
    return replace(state, quantity=non_negative(quantity))
