"""
State Adapter
=============

Normalizes stored state blobs for backward compatibility.

Purpose:
The first version of the calculator stored its state as

{
  "price": 120000,
  "quantity": 1,
  "expenses": {
    "managers": {"id": "managers", "name": "...", "percentage": 10,
                 "amount": 12000, "isPercentageBased": true},
    ...
    "complaints": {...}
  }
}

with percentages on a 0-100 scale, a "complaints" entry instead of
"claims" and no "installers" entry. This adapter rewrites such blobs into the
current shape so calculator.serialization only ever sees one format.

Related Files:
- calculator/serialization.py: decoding of the current shape
- calculator/defaults.py: values for entries the old shape lacks
"""

from __future__ import annotations
from typing import Any, Dict

from .defaults import DEFAULT_LABELS
from .models import ExpenseId, ExpenseMode

LEGACY_KEY_ALIASES = {"complaints": ExpenseId.CLAIMS.value}


def is_legacy_state(data: Any) -> bool:
    """Old blobs carry 'price' instead of 'unitPrice'."""
    return isinstance(data, dict) and "price" in data and "unitPrice" not in data


def _convert_legacy_entry(expense_id: str, raw: Any) -> Any:
    if not isinstance(raw, dict):
        return None

    if raw.get("isPercentageBased", True):
        mode, value = ExpenseMode.PERCENT.value, _as_float(raw.get("percentage")) / 100.0
    else:
        mode, value = ExpenseMode.AMOUNT.value, _as_float(raw.get("amount"))

    return {
        "id": expense_id,
        "label": raw.get("name") or DEFAULT_LABELS[ExpenseId(expense_id)],
        "mode": mode,
        "value": value,
    }


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def normalize_state_dict(data: Any) -> Dict[str, Any]:
    """
    Normalize a stored state blob to the current format.

    Args:
        data: State blob as read from storage (any shape, possibly None)

    Returns:
        Dict in the current stored shape. Entries the blob lacks are left out
        and get their defaults when decoded.
    """
    if not isinstance(data, dict):
        return {}

    if not is_legacy_state(data):
        return data

    raw_expenses = data.get("expenses")
    if not isinstance(raw_expenses, dict):
        raw_expenses = {}

    expenses: Dict[str, Any] = {}
    for key, raw in raw_expenses.items():
        expense_id = LEGACY_KEY_ALIASES.get(key, key)
        if expense_id not in {e.value for e in ExpenseId}:
            continue
        converted = _convert_legacy_entry(expense_id, raw)
        if converted is not None:
            expenses[expense_id] = converted

    return {
        "unitPrice": data.get("price"),
        "quantity": data.get("quantity"),
        "expenses": expenses,
    }
