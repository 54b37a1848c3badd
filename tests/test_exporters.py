"""Tests for the export row builder, Excel bytes and print HTML."""

from calculator.calculators import compute
from calculator.exporters import build_excel_bytes, build_export_rows
from calculator.exporters.print_exporter import _generate_print_html

NBSP = "\u00a0"


class TestBuildExportRows:
    def setup_method(self):
        from calculator.defaults import initial_state
        self.state = initial_state()
        self.rows = build_export_rows("Office", self.state, compute(self.state))
        self.items = dict(self.rows)

    def test_header_and_revenue(self):
        assert self.rows[0] == ("Project", "Office")
        assert self.items["Revenue"] == f"120{NBSP}000{NBSP}₴"

    def test_one_block_per_expense_in_display_order(self):
        amount_items = [k for k, _ in self.rows if k.endswith(": amount")]
        assert amount_items == [
            "Managers: amount",
            "Marketing: amount",
            "Production: amount",
            "Hardware: amount",
            "Logistics: amount",
            "Installers: amount",
            "Claims: amount",
        ]
        assert self.items["Managers: base"] == f"118{NBSP}000{NBSP}₴"

    def test_profit(self):
        assert self.items["Profit"] == f"28{NBSP}600{NBSP}₴"
        assert self.items["Profit (%)"] == "23.8%"
        assert self.rows[-1][0] == "Profit (%)"

    def test_untitled(self):
        rows = build_export_rows("", self.state, compute(self.state))
        assert rows[0] == ("Project", "Untitled")


class TestExcel:
    def test_workbook_bytes(self):
        data = build_excel_bytes([("Revenue", f"120{NBSP}000{NBSP}₴"), ("Profit", None)])
        # xlsx is a zip container
        assert data[:2] == b"PK"


class TestPrintHtml:
    def test_rows_and_escaping(self):
        html = _generate_print_html([("<b>Item</b>", "1 ₴")], "A & B")
        assert "&lt;b&gt;Item&lt;/b&gt;" in html
        assert "A &amp; B" in html
        assert "1 ₴" in html
