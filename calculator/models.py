"""
Calculator Models
=================

Immutable value types for the profitability calculator.

This module provides:
- ExpenseId: the closed set of seven expense line items
- Percent / Amount: the two ways an expense can be entered
- ExpenseEntry, Expenses, CalculatorState: the editable snapshot
- ComputedRow, ComputationResult: the derived waterfall
- Project: a named, persisted snapshot

Every type here is frozen. Edits go through calculator.calculators.state_editor,
which always returns a new snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass, replace as dc_replace
from enum import Enum
from typing import Iterator, Tuple, Union


class ExpenseId(str, Enum):
    """Expense line items, in display order."""

    MANAGERS = "managers"
    MARKETING = "marketing"
    PRODUCTION = "production"
    HARDWARE = "hardware"
    LOGISTICS = "logistics"
    INSTALLERS = "installers"
    CLAIMS = "claims"

    @classmethod
    def parse(cls, value: Union["ExpenseId", str]) -> "ExpenseId":
        """Accept an ExpenseId or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise ValueError(f"Unknown expense id: {value!r}") from None


class ExpenseMode(str, Enum):
    PERCENT = "percent"
    AMOUNT = "amount"


@dataclass(frozen=True)
class Percent:
    """Share of the entry's base, as a fraction in [0, 1]."""

    fraction: float

    @property
    def mode(self) -> ExpenseMode:
        return ExpenseMode.PERCENT

    @property
    def value(self) -> float:
        return self.fraction


@dataclass(frozen=True)
class Amount:
    """Fixed currency amount."""

    amount: float

    @property
    def mode(self) -> ExpenseMode:
        return ExpenseMode.AMOUNT

    @property
    def value(self) -> float:
        return self.amount


ExpenseSetting = Union[Percent, Amount]


@dataclass(frozen=True)
class ExpenseEntry:
    id: ExpenseId
    label: str
    setting: ExpenseSetting

    @property
    def mode(self) -> ExpenseMode:
        return self.setting.mode

    @property
    def value(self) -> float:
        return self.setting.value


@dataclass(frozen=True)
class Expenses:
    """All seven expense entries. The set is fixed; entries are only replaced."""

    managers: ExpenseEntry
    marketing: ExpenseEntry
    production: ExpenseEntry
    hardware: ExpenseEntry
    logistics: ExpenseEntry
    installers: ExpenseEntry
    claims: ExpenseEntry

    def get(self, expense_id: Union[ExpenseId, str]) -> ExpenseEntry:
        return getattr(self, ExpenseId.parse(expense_id).value)

    def replace(self, entry: ExpenseEntry) -> "Expenses":
        """Return a copy with the entry of the same id swapped in."""
        return dc_replace(self, **{ExpenseId.parse(entry.id).value: entry})

    def __iter__(self) -> Iterator[ExpenseEntry]:
        for expense_id in ExpenseId:
            yield self.get(expense_id)


@dataclass(frozen=True)
class CalculatorState:
    unit_price: float
    quantity: float
    expenses: Expenses


@dataclass(frozen=True)
class ComputedRow:
    id: ExpenseId
    label: str
    base: float
    percent: float
    amount: float
    remaining_after: float


@dataclass(frozen=True)
class ComputationResult:
    revenue: float
    rows: Tuple[ComputedRow, ...]
    total_expenses_amount: float
    total_expenses_percent: float
    profit_amount: float
    profit_percent: float

    def row(self, expense_id: Union[ExpenseId, str]) -> ComputedRow:
        """Look up a row by expense id."""
        wanted = ExpenseId.parse(expense_id)
        for r in self.rows:
            if r.id == wanted:
                return r
        raise KeyError(wanted.value)


@dataclass(frozen=True)
class Project:
    """A named snapshot owned by the persistence layer."""

    id: str
    name: str
    created_at: str
    updated_at: str
    state: CalculatorState
