"""Excel export functionality."""

from __future__ import annotations
from io import BytesIO
from datetime import datetime
from typing import List, Tuple, Any
import streamlit as st

from services.utils import slugify


def build_excel_bytes(export_rows: List[Tuple[str, Any]]) -> bytes:
    """Write the breakdown to a single-sheet workbook and return its bytes."""
    import pandas as pd

    buf = BytesIO()
    bd_rows = [
        {"Item": k, "Value": ("" if v in (None, "") else v)}
        for k, v in export_rows
    ]

    with pd.ExcelWriter(buf, engine="xlsxwriter") as xw:
        df = pd.DataFrame(bd_rows, columns=["Item", "Value"])
        df.to_excel(xw, index=False, sheet_name="Profit")
        ws = xw.sheets["Profit"]
        ws.set_column(0, 0, 42)
        ws.set_column(1, 1, 22)

    return buf.getvalue()


def export_to_excel(
    export_rows: List[Tuple[str, Any]],
    project_title: str
) -> None:
    """Render Excel download button."""
    calc_id = datetime.now().strftime("%Y%m%d-%H%M%S")

    st.download_button(
        "Download Excel",
        data=build_excel_bytes(export_rows),
        file_name=f"profit_{slugify(project_title)}_{calc_id}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        use_container_width=True,
    )
