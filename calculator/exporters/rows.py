"""Flatten a calculation into (item, value) pairs for export."""

from __future__ import annotations
from typing import Any, List, Tuple

from calculator.formatting import format_pct, format_uah
from calculator.models import CalculatorState, ComputationResult


def build_export_rows(
    project_name: str,
    state: CalculatorState,
    result: ComputationResult,
) -> List[Tuple[str, Any]]:
    """
    Build the breakdown rows shared by the Excel and print exports.

    Rows are ordered as on screen: inputs, revenue, one block per expense
    in display order, then totals and profit.
    """
    rows: List[Tuple[str, Any]] = [
        ("Project", project_name or "Untitled"),
        ("Unit price", format_uah(state.unit_price)),
        ("Quantity (pcs)", f"{state.quantity:g}"),
        ("Revenue", format_uah(result.revenue)),
    ]

    for row in result.rows:
        rows.extend([
            (f"{row.label}: base", format_uah(row.base)),
            (f"{row.label}: share", format_pct(row.percent)),
            (f"{row.label}: amount", format_uah(row.amount)),
            (f"{row.label}: remaining after", format_uah(row.remaining_after)),
        ])

    rows.extend([
        ("Total expenses", format_uah(result.total_expenses_amount)),
        ("Total expenses (%)", format_pct(result.total_expenses_percent)),
        ("Profit", format_uah(result.profit_amount)),
        ("Profit (%)", format_pct(result.profit_percent)),
    ])
    return rows
