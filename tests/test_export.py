"""
Tests for the flat-text (CSV) export.
"""

import csv
import io

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.ledger import EmptyLedgerError, export_csv, parse_csv
from expense_tracker.ledger.export import format_amount
from expense_tracker.models.expense import ExpenseRecord


def record(expense_id, description="Lunch", amount="12.50", category="food"):
    return ExpenseRecord(
        id=expense_id,
        category=category,
        date=date(2024, 7, expense_id),
        amount=Decimal(amount),
        description=description,
    )


class TestExportCsv:
    """Tests for export_csv."""

    def test_header_and_rows(self):
        """Test the header row followed by one row per expense."""
        text = export_csv([record(1), record(2, "Bus", "3", "transport")])
        assert text.split("\n") == [
            "ID,Category,Date,Amount,Description",
            '1,food,2024-07-01,12.50,"Lunch"',
            '2,transport,2024-07-02,3.00,"Bus"',
        ]

    @pytest.mark.parametrize(
        "amount, expected",
        [("12.5", "12.50"), ("7", "7.00"), ("0.005", "0.01"), ("19.999", "20.00")],
    )
    def test_amount_has_two_decimals(self, amount, expected):
        """Test amounts always render with exactly two decimals."""
        assert format_amount(Decimal(amount)) == expected

    def test_quotes_are_doubled(self):
        """Test embedded quotes are escaped by doubling."""
        text = export_csv([record(1, 'The "good" diner')])
        assert text.split("\n")[1].endswith('"The ""good"" diner"')

    def test_empty_ledger_raises(self):
        """Test exporting nothing raises EmptyLedgerError."""
        with pytest.raises(EmptyLedgerError):
            export_csv([])

    def test_standard_csv_reader_reads_export(self):
        """Test a plain csv reader sees five columns per row."""
        text = export_csv([record(1, "Pizza, drinks"), record(2, 'Say "hi"')])
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1] == ["1", "food", "2024-07-01", "12.50", "Pizza, drinks"]
        assert rows[2][4] == 'Say "hi"'


class TestParseCsv:
    """Tests for reading an export back."""

    def test_round_trip_recovers_fields(self):
        """Test export then parse recovers every field."""
        expenses = [
            record(1, "Pizza, drinks and \"dessert\""),
            record(2, "Line one\nline two", "3.25", "entertainment"),
            record(3, "", "100", "utilities"),
        ]
        assert parse_csv(export_csv(expenses)) == expenses

    def test_round_trip_rounds_amount_to_cents(self):
        """Test amounts come back at two-decimal precision."""
        parsed = parse_csv(export_csv([record(1, amount="9.999")]))
        assert parsed[0].amount == Decimal("10.00")

    def test_parse_rejects_foreign_header(self):
        """Test text with another header is refused."""
        with pytest.raises(ValueError, match="Unexpected export header"):
            parse_csv("a,b,c\n1,2,3")

    def test_parse_empty_text(self):
        """Test empty text parses to no records."""
        assert parse_csv("") == []
