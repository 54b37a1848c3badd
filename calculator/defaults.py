"""Canonical default snapshot for a new calculation."""

from __future__ import annotations
from typing import Dict

from .models import (
    Amount,
    CalculatorState,
    ExpenseEntry,
    ExpenseId,
    Expenses,
    ExpenseSetting,
    Percent,
)


DEFAULT_UNIT_PRICE = 120000.0
DEFAULT_QUANTITY = 1.0

DEFAULT_LABELS: Dict[ExpenseId, str] = {
    ExpenseId.MANAGERS: "Managers",
    ExpenseId.MARKETING: "Marketing",
    ExpenseId.PRODUCTION: "Production",
    ExpenseId.HARDWARE: "Hardware",
    ExpenseId.LOGISTICS: "Logistics",
    ExpenseId.INSTALLERS: "Installers",
    ExpenseId.CLAIMS: "Claims",
}

DEFAULT_SETTINGS: Dict[ExpenseId, ExpenseSetting] = {
    ExpenseId.MANAGERS: Percent(0.10),
    ExpenseId.MARKETING: Percent(0.0),
    ExpenseId.PRODUCTION: Percent(0.54),
    ExpenseId.HARDWARE: Amount(2000.0),
    ExpenseId.LOGISTICS: Amount(2000.0),
    ExpenseId.INSTALLERS: Percent(0.07),
    ExpenseId.CLAIMS: Percent(0.02),
}


def default_entry(expense_id: ExpenseId) -> ExpenseEntry:
    return ExpenseEntry(
        id=expense_id,
        label=DEFAULT_LABELS[expense_id],
        setting=DEFAULT_SETTINGS[expense_id],
    )


def initial_state() -> CalculatorState:
    """Return the seed snapshot used for new projects."""
    return CalculatorState(
        unit_price=DEFAULT_UNIT_PRICE,
        quantity=DEFAULT_QUANTITY,
        expenses=Expenses(**{eid.value: default_entry(eid) for eid in ExpenseId}),
    )
