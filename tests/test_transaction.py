"""Tests for UndoRedoTransaction."""

from unittest.mock import MagicMock

import pytest

from undoredo.models.constants import ExecuteType
from undoredo.models.record import UndoRedoEntry, UndoRedoRecord
from undoredo.models.transaction import UndoRedoTransaction


@pytest.fixture
def executed():
    """List collecting payloads in execution order."""
    return []


@pytest.fixture
def abc_transaction(executed):
    """Transaction with A, B, C added in that order."""
    tran = UndoRedoTransaction("batch")
    for label in ("A", "B", "C"):
        tran.add_undo_redo_operation(UndoRedoRecord(executed.append, label, label))
    return tran


class TestTransactionContents:
    """Tests for adding operations."""

    def test_transaction_is_entry(self):
        """Transactions share the entry interface with records."""
        assert isinstance(UndoRedoTransaction("t"), UndoRedoEntry)

    def test_new_transaction_is_empty(self):
        """A new transaction has no operations."""
        tran = UndoRedoTransaction("t")

        assert tran.is_empty()
        assert tran.operations_count == 0
        assert tran.top_operation is None
        assert tran.top_data is None

    def test_missing_name_is_empty(self):
        """A None name becomes an empty string."""
        assert UndoRedoTransaction(None).name == ""

    def test_operations_are_most_recent_first(self, abc_transaction):
        """Added operations are prepended."""
        names = [op.name for op in abc_transaction.operations]
        assert names == ["C", "B", "A"]

    def test_top_operation_is_most_recent(self, abc_transaction):
        """top_operation is the last operation added."""
        assert abc_transaction.top_operation.name == "C"
        assert abc_transaction.top_data == "C"

    def test_top_data_drills_into_nested_transaction(self):
        """top_data follows nested transactions down to a record."""
        inner = UndoRedoTransaction("inner")
        inner.add_undo_redo_operation(UndoRedoRecord(MagicMock(), "deep"))
        outer = UndoRedoTransaction("outer")
        outer.add_undo_redo_operation(inner)

        assert outer.top_data == "deep"


class TestTransactionExecute:
    """Tests for replay modes."""

    def test_default_runs_reverse_of_recording_order(self, abc_transaction, executed):
        """DEFAULT executes C, then B, then A."""
        assert abc_transaction.execute() is True
        assert executed == ["C", "B", "A"]

    def test_top_only_runs_most_recent(self, abc_transaction, executed):
        """TOP_ONLY executes only the last added operation."""
        assert abc_transaction.execute(ExecuteType.TOP_ONLY) is True
        assert executed == ["C"]

    def test_bottom_only_runs_oldest(self, abc_transaction, executed):
        """BOTTOM_ONLY executes only the first added operation."""
        assert abc_transaction.execute(ExecuteType.BOTTOM_ONLY) is True
        assert executed == ["A"]

    def test_empty_partial_modes_return_false(self):
        """TOP_ONLY/BOTTOM_ONLY on an empty transaction do nothing."""
        tran = UndoRedoTransaction("empty")

        assert tran.execute(ExecuteType.TOP_ONLY) is False
        assert tran.execute(ExecuteType.BOTTOM_ONLY) is False

    def test_empty_default_is_noop(self):
        """DEFAULT on an empty transaction runs nothing."""
        assert UndoRedoTransaction("empty").execute() is True

    def test_nested_transaction_runs_children(self, executed):
        """A nested transaction replays its own children in place."""
        inner = UndoRedoTransaction("inner")
        inner.add_undo_redo_operation(UndoRedoRecord(executed.append, "inner-1"))
        inner.add_undo_redo_operation(UndoRedoRecord(executed.append, "inner-2"))

        outer = UndoRedoTransaction("outer")
        outer.add_undo_redo_operation(UndoRedoRecord(executed.append, "first"))
        outer.add_undo_redo_operation(inner)
        outer.add_undo_redo_operation(UndoRedoRecord(executed.append, "last"))

        outer.execute()

        assert executed == ["last", "inner-2", "inner-1", "first"]

    def test_mode_passed_to_nested_transaction(self, executed):
        """TOP_ONLY applies to the nested transaction it selects."""
        inner = UndoRedoTransaction("inner")
        inner.add_undo_redo_operation(UndoRedoRecord(executed.append, "inner-1"))
        inner.add_undo_redo_operation(UndoRedoRecord(executed.append, "inner-2"))

        outer = UndoRedoTransaction("outer")
        outer.add_undo_redo_operation(inner)

        outer.execute(ExecuteType.TOP_ONLY)

        assert executed == ["inner-2"]
