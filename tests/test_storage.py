"""
Tests for the JSON and in-memory stores.

File-backed tests write only under pytest's tmp_path.
"""

import json

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.audit import AuditLogger
from expense_tracker.models.audit import AuditEventType
from expense_tracker.models.expense import BudgetConfig, ExpenseCategory, ExpenseRecord
from expense_tracker.services.storage import (
    InMemoryConfigStore,
    InMemoryLedgerStore,
    JsonConfigStore,
    JsonLedgerStore,
    StorageError,
)


class RecordingAuditLogger(AuditLogger):
    """Keeps logged events in memory."""

    def __init__(self):
        super().__init__()
        self.events = []

    def log(self, event):
        self.events.append(event)


@pytest.fixture
def expenses():
    return [
        ExpenseRecord(
            id=1,
            category=ExpenseCategory.FOOD,
            date=date(2024, 7, 3),
            amount=Decimal("12.5"),
            description="Lunch",
        ),
        ExpenseRecord(
            id=2,
            category=ExpenseCategory.TRANSPORT,
            date=date(2024, 7, 4),
            amount=Decimal("2.75"),
            description="Bus",
        ),
    ]


class TestJsonLedgerStore:
    """Tests for JsonLedgerStore."""

    def test_missing_file_is_empty_ledger(self, tmp_path):
        """Test a ledger file that doesn't exist loads as empty."""
        store = JsonLedgerStore(tmp_path / "expenses.json")
        assert store.load() == []
        assert not (tmp_path / "expenses.json").exists()

    def test_save_then_load(self, tmp_path, expenses):
        """Test saved records load back unchanged and in order."""
        store = JsonLedgerStore(tmp_path / "expenses.json")
        store.save(expenses)
        assert store.load() == expenses

    def test_document_shape(self, tmp_path, expenses):
        """Test the file is a JSON array with the documented keys."""
        path = tmp_path / "expenses.json"
        JsonLedgerStore(path).save(expenses)

        document = json.loads(path.read_text())
        assert document[0] == {
            "id": 1,
            "category": "food",
            "date": "2024-07-03",
            "amount": 12.5,
            "description": "Lunch",
        }

    def test_reads_documents_with_capitalized_categories(self, tmp_path):
        """Test category strings are normalized on load."""
        path = tmp_path / "expenses.json"
        path.write_text(json.dumps([
            {"id": 1, "category": "Food", "date": "2024-07-03",
             "amount": 10, "description": "x"},
        ]))
        assert JsonLedgerStore(path).load()[0].category == ExpenseCategory.FOOD

    def test_corrupt_file_loads_empty_and_is_kept(self, tmp_path):
        """Test unparsable JSON gives an empty ledger and the file is untouched."""
        path = tmp_path / "expenses.json"
        path.write_text("{not json")

        assert JsonLedgerStore(path).load() == []
        assert path.read_text() == "{not json"

    def test_invalid_records_load_empty(self, tmp_path):
        """Test records that fail validation are treated like a corrupt file."""
        path = tmp_path / "expenses.json"
        path.write_text(json.dumps([{"id": "one", "category": "food"}]))
        assert JsonLedgerStore(path).load() == []

    @pytest.mark.parametrize("amount", [-50, 0])
    def test_non_positive_amount_loads_empty_and_is_logged(self, tmp_path, amount):
        """Test a stored amount that isn't positive fails the whole document."""
        path = tmp_path / "expenses.json"
        path.write_text(json.dumps([
            {"id": 1, "category": "food", "date": "2024-07-03",
             "amount": amount, "description": "Refund"},
        ]))
        audit = RecordingAuditLogger()

        assert JsonLedgerStore(path, audit_logger=audit).load() == []
        assert [e.event_type for e in audit.events] == [AuditEventType.STORE_PARSE_FAILED]
        assert audit.events[0].details["path"] == str(path)

    def test_write_failure_raises_storage_error(self, tmp_path, expenses):
        """Test an unwritable path surfaces as StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = JsonLedgerStore(blocker / "expenses.json")
        with pytest.raises(StorageError):
            store.save(expenses)


class TestJsonConfigStore:
    """Tests for JsonConfigStore."""

    def test_missing_file_is_created_with_zero_budget(self, tmp_path):
        """Test the first load writes a default config."""
        path = tmp_path / "config.json"
        config = JsonConfigStore(path).load()

        assert config.monthly_budget == Decimal("0")
        assert json.loads(path.read_text()) == {"monthlyBudget": 0}

    def test_save_then_load(self, tmp_path):
        """Test a saved budget loads back."""
        store = JsonConfigStore(tmp_path / "config.json")
        store.save(BudgetConfig(monthly_budget=Decimal("450.5")))

        assert store.load().monthly_budget == Decimal("450.5")
        assert json.loads((tmp_path / "config.json").read_text()) == {"monthlyBudget": 450.5}

    def test_corrupt_file_gives_undefined_budget(self, tmp_path):
        """Test unparsable config yields an undefined (None) budget."""
        path = tmp_path / "config.json"
        path.write_text("not json at all")

        config = JsonConfigStore(path).load()
        assert config.monthly_budget is None
        assert not config.is_defined
        assert path.read_text() == "not json at all"

    def test_object_without_budget_is_undefined(self, tmp_path):
        """Test `{}` means the budget is undefined rather than 0."""
        path = tmp_path / "config.json"
        path.write_text("{}")
        assert JsonConfigStore(path).load().monthly_budget is None

    def test_non_object_document_is_undefined(self, tmp_path):
        """Test a JSON array is not a valid config."""
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        assert JsonConfigStore(path).load().monthly_budget is None

    def test_corrupt_file_under_long_path_still_loads(self, tmp_path):
        """Test a deep data dir doesn't break logging of a corrupt config."""
        data_dir = tmp_path / ("d" * 200) / ("e" * 200) / ("f" * 200)
        data_dir.mkdir(parents=True)
        path = data_dir / "config.json"
        path.write_text("not json at all")

        config = JsonConfigStore(path, audit_logger=AuditLogger()).load()
        assert config.monthly_budget is None


class TestInMemoryStores:
    """Tests for the in-memory stores."""

    def test_ledger_load_returns_copy(self, expenses):
        """Test callers can't mutate the stored ledger through load()."""
        store = InMemoryLedgerStore(expenses)
        loaded = store.load()
        loaded.pop()
        assert store.load() == expenses

    def test_ledger_save_counts_writes(self, expenses):
        """Test each save replaces the ledger and is counted."""
        store = InMemoryLedgerStore()
        store.save(expenses)
        assert store.load() == expenses
        assert store.save_count == 1

    def test_config_defaults_to_zero_budget(self):
        """Test a fresh in-memory config has budget 0."""
        assert InMemoryConfigStore().load().monthly_budget == Decimal("0")
