"""
State Serialization
===================

Converts calculator snapshots and projects to and from plain dicts.

Stored shape (camelCase, as kept in the projects table and the local file):

{
  "unitPrice": 120000,
  "quantity": 1,
  "expenses": {
    "managers": {"id": "managers", "label": "Managers", "mode": "percent", "value": 0.1},
    ...
  }
}

Decoding never fails: missing or malformed fields fall back to the default
entry or to 0, and every value is sanitized the same way the state editor
sanitizes user input.
"""

from __future__ import annotations
from typing import Any, Dict

from .calculators.numeric import clamp, non_negative, sanitize
from .defaults import default_entry
from .state_adapter import normalize_state_dict
from .models import (
    Amount,
    CalculatorState,
    ExpenseEntry,
    ExpenseId,
    ExpenseMode,
    Expenses,
    Percent,
    Project,
)


def entry_to_dict(entry: ExpenseEntry) -> Dict[str, Any]:
    return {
        "id": entry.id.value,
        "label": entry.label,
        "mode": entry.mode.value,
        "value": entry.value,
    }


def state_to_dict(state: CalculatorState) -> Dict[str, Any]:
    """Encode a snapshot into its stored shape."""
    return {
        "unitPrice": state.unit_price,
        "quantity": state.quantity,
        "expenses": {entry.id.value: entry_to_dict(entry) for entry in state.expenses},
    }


def entry_from_dict(expense_id: ExpenseId, data: Any) -> ExpenseEntry:
    """Decode one entry; anything unusable yields the default entry."""
    fallback = default_entry(expense_id)
    if not isinstance(data, dict):
        return fallback

    label = data.get("label")
    label = str(label) if isinstance(label, str) and label.strip() else fallback.label

    try:
        mode = ExpenseMode(str(data.get("mode", "")).strip().lower())
    except ValueError:
        return ExpenseEntry(id=expense_id, label=label, setting=fallback.setting)

    if mode == ExpenseMode.PERCENT:
        setting = Percent(clamp(sanitize(data.get("value")), 0.0, 1.0))
    else:
        setting = Amount(non_negative(data.get("value")))

    return ExpenseEntry(id=expense_id, label=label, setting=setting)


def state_from_dict(data: Any) -> CalculatorState:
    """Decode a stored snapshot. Unknown expense keys are ignored."""
    if not isinstance(data, dict):
        data = {}

    raw_expenses = data.get("expenses")
    if not isinstance(raw_expenses, dict):
        raw_expenses = {}

    return CalculatorState(
        unit_price=non_negative(data.get("unitPrice")),
        quantity=non_negative(data.get("quantity")),
        expenses=Expenses(
            **{eid.value: entry_from_dict(eid, raw_expenses.get(eid.value)) for eid in ExpenseId}
        ),
    )


def project_to_dict(project: Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "createdAt": project.created_at,
        "updatedAt": project.updated_at,
        "state": state_to_dict(project.state),
    }


def project_from_dict(data: Dict[str, Any]) -> Project:
    """
    Decode a project envelope.

    The state blob passes through the legacy adapter first, so projects saved
    by older versions load into the current shape.
    """
    return Project(
        id=str(data.get("id", "")),
        name=str(data.get("name") or ""),
        created_at=str(data.get("createdAt") or ""),
        updated_at=str(data.get("updatedAt") or data.get("createdAt") or ""),
        state=state_from_dict(normalize_state_dict(data.get("state"))),
    )
