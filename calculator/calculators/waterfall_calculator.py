"""Waterfall calculator - Pure calculation logic without UI."""

from __future__ import annotations
from typing import Dict, Tuple

from calculator.models import (
    CalculatorState,
    ComputationResult,
    ComputedRow,
    ExpenseEntry,
    ExpenseId,
    ExpenseMode,
)
from .numeric import clamp, non_negative, safe_ratio, sanitize


class WaterfallCalculator:
    """Derives revenue, expense rows and profit from a calculator snapshot."""

    @staticmethod
    def resolve_expense(base: float, entry: ExpenseEntry) -> Tuple[float, float]:
        """
        Resolve an entry against its base.

        Returns:
            (percent, amount)
        """
        safe_base = non_negative(base)

        if entry.mode == ExpenseMode.PERCENT:
            percent = clamp(sanitize(entry.value), 0.0, 1.0)
            return percent, sanitize(safe_base * percent)

        amount = non_negative(entry.value)
        return safe_ratio(amount, safe_base), amount

    @staticmethod
    def compute(state: CalculatorState) -> ComputationResult:
        """
        Compute the full waterfall.

        Calculation order:
        1. Logistics against revenue
        2. Managers against the remainder after logistics
        3. Marketing against the remainder after managers
        4. Production, hardware, installers, claims against revenue,
           with the running remainder carried on from marketing

        Rows are returned in display order (ExpenseId order), which is not
        the calculation order.
        """
        expenses = state.expenses
        resolve = WaterfallCalculator.resolve_expense

        revenue = sanitize(non_negative(state.unit_price) * non_negative(state.quantity))

        bases: Dict[ExpenseId, float] = {}
        resolved: Dict[ExpenseId, Tuple[float, float]] = {}
        remaining: Dict[ExpenseId, float] = {}

        # Sequential part: each base is the previous remainder
        running = revenue
        for expense_id in (ExpenseId.LOGISTICS, ExpenseId.MANAGERS, ExpenseId.MARKETING):
            bases[expense_id] = running
            resolved[expense_id] = resolve(running, expenses.get(expense_id))
            running = sanitize(running - resolved[expense_id][1])
            remaining[expense_id] = running

        # Revenue-based part: base pinned to revenue, remainder keeps running
        for expense_id in (
            ExpenseId.PRODUCTION,
            ExpenseId.HARDWARE,
            ExpenseId.INSTALLERS,
            ExpenseId.CLAIMS,
        ):
            bases[expense_id] = revenue
            resolved[expense_id] = resolve(revenue, expenses.get(expense_id))
            running = sanitize(running - resolved[expense_id][1])
            remaining[expense_id] = running

        rows = tuple(
            ComputedRow(
                id=expense_id,
                label=expenses.get(expense_id).label,
                base=non_negative(bases[expense_id]),
                percent=resolved[expense_id][0],
                amount=resolved[expense_id][1],
                remaining_after=remaining[expense_id],
            )
            for expense_id in ExpenseId
        )

        total_expenses = sanitize(sum(row.amount for row in rows))
        profit = sanitize(revenue - total_expenses)

        return ComputationResult(
            revenue=revenue,
            rows=rows,
            total_expenses_amount=total_expenses,
            total_expenses_percent=safe_ratio(total_expenses, revenue),
            profit_amount=profit,
            profit_percent=safe_ratio(profit, revenue),
        )


def compute(state: CalculatorState) -> ComputationResult:
    return WaterfallCalculator.compute(state)
