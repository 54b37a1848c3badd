"""
Calculator UI Component
=======================

Inputs, expense waterfall and profit summary for the current snapshot.

Each expense row has two linked controls:
- a percent slider (switches the entry to percent mode)
- an amount field (switches the entry to amount mode)

Whichever control was edited last decides the entry's mode. Widget values
are rewritten from the computed result on every run, so both controls
always show the current figures.

Related Files:
- calculator/calculators/: compute() and the state editor
- calculator/ui/session.py: where the snapshot lives between reruns
"""

from __future__ import annotations
import streamlit as st

from calculator.calculators import (
    compute,
    set_expense_amount,
    set_expense_percent,
    set_quantity,
    set_unit_price,
)
from calculator.exporters import build_export_rows, export_to_excel, export_to_print
from calculator.formatting import format_pct, format_uah, parse_number
from calculator.models import ComputationResult, ComputedRow, ExpenseId
from .session import get_project_name, get_state, set_state


def _pct_key(expense_id: ExpenseId) -> str:
    return f"pct_{expense_id.value}"


def _amt_key(expense_id: ExpenseId) -> str:
    return f"amt_{expense_id.value}"


# ============================================================================
# CALLBACKS
# ============================================================================

def _on_percent_change(expense_id: ExpenseId) -> None:
    percent = st.session_state[_pct_key(expense_id)]
    set_state(set_expense_percent(get_state(), expense_id, float(percent) / 100.0))


def _on_amount_change(expense_id: ExpenseId) -> None:
    raw = st.session_state[_amt_key(expense_id)]
    set_state(set_expense_amount(get_state(), expense_id, parse_number(raw)))


def _on_unit_price_change() -> None:
    set_state(set_unit_price(get_state(), parse_number(st.session_state["unit_price_input"])))


def _on_quantity_change() -> None:
    set_state(set_quantity(get_state(), parse_number(st.session_state["quantity_input"])))


# ============================================================================
# MAIN VIEW
# ============================================================================

def render_calculator() -> ComputationResult:
    """
    Render the calculator for the snapshot in session state.

    Returns:
        The computation result that was displayed
    """
    state = get_state()
    result = compute(state)

    _render_inputs(state.unit_price, state.quantity, result.revenue)
    _render_expenses(result)
    _render_summary(result)

    export_rows = build_export_rows(get_project_name(), state, result)
    title = get_project_name() or "calculation"
    e1, e2 = st.columns(2)
    with e1:
        export_to_excel(export_rows, title)
    with e2:
        export_to_print(export_rows, title)

    return result


def _render_inputs(unit_price: float, quantity: float, revenue: float) -> None:
    st.subheader("Inputs")

    st.session_state["unit_price_input"] = f"{unit_price:g}"
    st.session_state["quantity_input"] = f"{quantity:g}"

    c1, c2, c3 = st.columns(3)
    with c1:
        st.text_input("Unit price (₴)", key="unit_price_input", on_change=_on_unit_price_change)
    with c2:
        st.text_input("Quantity (pcs)", key="quantity_input", on_change=_on_quantity_change)
    with c3:
        st.metric("Revenue", format_uah(revenue))


def _render_expenses(result: ComputationResult) -> None:
    st.subheader("Expenses")
    st.caption("Every expense can be entered in % or in ₴: the slider sets %, the field sets the amount.")

    widths = [2, 2, 4, 2, 2]
    header = st.columns(widths)
    for col, title in zip(header, ["Expense", "Base", "Share", "Amount (₴)", "Remaining"]):
        col.markdown(f"**{title}**")

    for row in result.rows:
        _render_expense_row(row, widths)


def _render_expense_row(row: ComputedRow, widths: list) -> None:
    st.session_state[_pct_key(row.id)] = round(min(100.0, max(0.0, row.percent * 100.0)), 1)
    st.session_state[_amt_key(row.id)] = str(round(row.amount))

    c_label, c_base, c_pct, c_amt, c_rest = st.columns(widths)
    c_label.write(row.label)
    c_base.write(format_uah(row.base))
    with c_pct:
        st.slider(
            f"{row.label} %",
            min_value=0.0,
            max_value=100.0,
            step=0.1,
            key=_pct_key(row.id),
            on_change=_on_percent_change,
            args=(row.id,),
            label_visibility="collapsed",
        )
        st.caption(format_pct(row.percent))
    with c_amt:
        st.text_input(
            f"{row.label} ₴",
            key=_amt_key(row.id),
            on_change=_on_amount_change,
            args=(row.id,),
            label_visibility="collapsed",
        )
    c_rest.write(format_uah(row.remaining_after))


def _render_summary(result: ComputationResult) -> None:
    st.markdown("---")
    st.subheader("Summary")

    s1, s2, s3 = st.columns(3)
    with s1:
        st.metric("Total expenses", format_uah(result.total_expenses_amount))
        st.caption(format_pct(result.total_expenses_percent))
    with s2:
        st.metric(
            "Profit (₴)",
            format_uah(result.profit_amount),
            delta=format_pct(result.profit_percent),
            delta_color="normal",
        )
    with s3:
        st.metric("Profit (%)", format_pct(result.profit_percent))

    if result.profit_amount < 0:
        st.warning("Expenses exceed revenue: this calculation runs at a loss.")
