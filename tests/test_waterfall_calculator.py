"""
Tests for the waterfall calculator.

Covers:
- Chained bases (logistics -> managers -> marketing) and revenue-pinned bases
- Running remainder across the revenue-based group
- Totals and profit identities
- Zero revenue, negative profit and non-finite inputs
"""

import math
from dataclasses import replace

import pytest

from calculator.calculators import WaterfallCalculator, compute, set_expense_amount, set_expense_percent
from calculator.models import (
    Amount,
    ExpenseEntry,
    ExpenseId,
    ExpenseMode,
    Percent,
)


def with_setting(state, expense_id, setting):
    entry = state.expenses.get(expense_id)
    return replace(state, expenses=state.expenses.replace(replace(entry, setting=setting)))


def all_values(result):
    yield result.revenue
    yield result.total_expenses_amount
    yield result.total_expenses_percent
    yield result.profit_amount
    yield result.profit_percent
    for row in result.rows:
        yield from (row.base, row.percent, row.amount, row.remaining_after)


class TestChainedScenario:
    """Default snapshot: 120 000 revenue, logistics and hardware as amounts."""

    def setup_method(self):
        from calculator.defaults import initial_state
        self.result = compute(initial_state())

    def test_revenue(self):
        assert self.result.revenue == 120000

    def test_logistics_runs_first_against_revenue(self):
        row = self.result.row(ExpenseId.LOGISTICS)
        assert row.base == 120000
        assert row.amount == 2000
        assert row.remaining_after == pytest.approx(118000)
        assert row.percent == pytest.approx(2000 / 120000)

    def test_managers_use_remainder_after_logistics(self):
        row = self.result.row(ExpenseId.MANAGERS)
        assert row.base == pytest.approx(118000)
        assert row.percent == pytest.approx(0.10)
        assert row.amount == pytest.approx(11800)
        assert row.remaining_after == pytest.approx(106200)

    def test_marketing_uses_remainder_after_managers(self):
        row = self.result.row(ExpenseId.MARKETING)
        assert row.base == pytest.approx(106200)
        assert row.amount == 0
        assert row.remaining_after == pytest.approx(106200)

    def test_revenue_based_group(self):
        expected = {
            ExpenseId.PRODUCTION: 64800,
            ExpenseId.HARDWARE: 2000,
            ExpenseId.INSTALLERS: 8400,
            ExpenseId.CLAIMS: 2400,
        }
        for expense_id, amount in expected.items():
            row = self.result.row(expense_id)
            assert row.base == 120000
            assert row.amount == pytest.approx(amount)

    def test_remaining_after_runs_through_group_in_order(self):
        assert self.result.row(ExpenseId.PRODUCTION).remaining_after == pytest.approx(41400)
        assert self.result.row(ExpenseId.HARDWARE).remaining_after == pytest.approx(39400)
        assert self.result.row(ExpenseId.INSTALLERS).remaining_after == pytest.approx(31000)
        assert self.result.row(ExpenseId.CLAIMS).remaining_after == pytest.approx(28600)

    def test_totals_and_profit(self):
        assert self.result.total_expenses_amount == pytest.approx(91400)
        assert self.result.total_expenses_percent == pytest.approx(91400 / 120000)
        assert self.result.profit_amount == pytest.approx(28600)
        assert self.result.profit_percent == pytest.approx(0.23833, abs=1e-5)

    def test_last_remaining_equals_profit(self):
        assert self.result.row(ExpenseId.CLAIMS).remaining_after == pytest.approx(self.result.profit_amount)

    def test_rows_in_display_order(self):
        assert [r.id for r in self.result.rows] == [
            ExpenseId.MANAGERS,
            ExpenseId.MARKETING,
            ExpenseId.PRODUCTION,
            ExpenseId.HARDWARE,
            ExpenseId.LOGISTICS,
            ExpenseId.INSTALLERS,
            ExpenseId.CLAIMS,
        ]

    def test_labels_carried_from_state(self):
        assert self.result.row(ExpenseId.HARDWARE).label == "Hardware"


class TestIdentities:
    """Revenue, totals and profit identities hold for assorted snapshots."""

    @pytest.mark.parametrize(
        "unit_price, quantity",
        [(120000, 1), (0, 5), (99.5, 3), (-10, 4), (1500, -2), (250000, 12)],
    )
    def test_revenue_is_product_of_non_negative_inputs(self, default_state, unit_price, quantity):
        state = replace(default_state, unit_price=unit_price, quantity=quantity)
        assert compute(state).revenue == max(0, unit_price) * max(0, quantity)

    @pytest.mark.parametrize("unit_price", [0, 1, 3333.33, 120000, 7e6])
    def test_total_is_sum_of_rows_and_profit_is_remainder(self, default_state, unit_price):
        result = compute(replace(default_state, unit_price=unit_price))
        assert result.total_expenses_amount == pytest.approx(sum(r.amount for r in result.rows))
        assert result.profit_amount == pytest.approx(result.revenue - result.total_expenses_amount)

    def test_compute_is_deterministic(self, default_state):
        state = set_expense_percent(default_state, ExpenseId.MARKETING, 0.05)
        assert compute(state) == compute(state)

    def test_class_and_module_entry_points_agree(self, default_state):
        assert WaterfallCalculator.compute(default_state) == compute(default_state)


class TestZeroRevenue:
    """No revenue: every ratio short-circuits to zero."""

    def setup_method(self):
        from calculator.defaults import initial_state
        self.state = replace(initial_state(), unit_price=0, quantity=5)
        self.result = compute(self.state)

    def test_revenue_zero(self):
        assert self.result.revenue == 0

    def test_amount_rows_have_zero_percent(self):
        for entry in self.state.expenses:
            if entry.mode == ExpenseMode.AMOUNT:
                assert self.result.row(entry.id).percent == 0

    def test_percent_rows_deduct_nothing(self):
        for entry in self.state.expenses:
            if entry.mode == ExpenseMode.PERCENT:
                assert self.result.row(entry.id).amount == 0

    def test_profit_percent_is_zero_not_nan(self):
        assert self.result.profit_percent == 0
        assert self.result.total_expenses_percent == 0
        # Fixed amounts still count as a loss
        assert self.result.profit_amount == -4000


class TestNegativeProfit:
    def test_expenses_above_revenue_give_negative_profit(self, default_state):
        state = replace(default_state, unit_price=10000, quantity=1)
        state = set_expense_amount(state, ExpenseId.PRODUCTION, 15000)
        result = compute(state)

        assert result.profit_amount < 0
        assert result.profit_percent < 0
        assert result.profit_amount == pytest.approx(result.revenue - result.total_expenses_amount)

    def test_amount_larger_than_base_gives_percent_above_one(self, default_state):
        state = replace(default_state, unit_price=1000, quantity=1)
        state = set_expense_amount(state, ExpenseId.CLAIMS, 3000)
        assert compute(state).row(ExpenseId.CLAIMS).percent == pytest.approx(3.0)

    def test_exhausted_remainder_clamps_later_bases_to_zero(self, default_state):
        state = replace(default_state, unit_price=1000, quantity=1)
        state = set_expense_amount(state, ExpenseId.LOGISTICS, 5000)
        result = compute(state)

        assert result.row(ExpenseId.LOGISTICS).remaining_after == -4000
        managers = result.row(ExpenseId.MANAGERS)
        assert managers.base == 0
        assert managers.amount == 0


class TestNonFiniteInputs:
    """NaN and infinity never reach the result."""

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_bad_unit_price_or_quantity(self, default_state, bad):
        for state in (replace(default_state, unit_price=bad), replace(default_state, quantity=bad)):
            result = compute(state)
            assert result.revenue == 0
            assert all(math.isfinite(v) for v in all_values(result))

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), -5.0])
    def test_bad_entry_values_are_sanitized(self, default_state, bad):
        state = with_setting(default_state, ExpenseId.PRODUCTION, Percent(bad))
        state = with_setting(state, ExpenseId.HARDWARE, Amount(bad))
        result = compute(state)

        assert all(math.isfinite(v) for v in all_values(result))
        assert result.row(ExpenseId.HARDWARE).amount == 0
        assert result.row(ExpenseId.PRODUCTION).percent == 0.0

    def test_percent_above_one_is_clamped(self, default_state):
        state = with_setting(default_state, ExpenseId.CLAIMS, Percent(1.7))
        row = compute(state).row(ExpenseId.CLAIMS)
        assert row.percent == 1.0
        assert row.amount == 120000

    def test_overflowing_revenue_collapses_to_zero(self, default_state):
        state = replace(default_state, unit_price=1e308, quantity=1e308)
        result = compute(state)
        assert result.revenue == 0
        assert all(math.isfinite(v) for v in all_values(result))


class TestResolveExpense:
    def test_percent_mode(self):
        entry = ExpenseEntry(ExpenseId.CLAIMS, "Claims", Percent(0.25))
        assert WaterfallCalculator.resolve_expense(4000, entry) == (0.25, 1000)

    def test_amount_mode(self):
        entry = ExpenseEntry(ExpenseId.CLAIMS, "Claims", Amount(1000))
        assert WaterfallCalculator.resolve_expense(4000, entry) == (0.25, 1000)

    def test_negative_base_treated_as_zero(self):
        entry = ExpenseEntry(ExpenseId.CLAIMS, "Claims", Amount(1000))
        assert WaterfallCalculator.resolve_expense(-4000, entry) == (0.0, 1000)
