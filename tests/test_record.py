"""Tests for UndoRedoRecord."""

import threading
from unittest.mock import MagicMock

import pytest

from undoredo.data.undo_manager import UndoRedoManager
from undoredo.models.constants import ExecuteType
from undoredo.models.record import UndoRedoEntry, UndoRedoRecord, snapshot_payload


class DelegatingProxy:
    """Wrapper forwarding attribute access to its target."""

    def __init__(self, target):
        self._target = target

    def __getattr__(self, name):
        return getattr(self._target, name)


class TestRecordConstruction:
    """Tests for building records."""

    def test_record_is_entry(self):
        """Records share the entry interface with transactions."""
        record = UndoRedoRecord(MagicMock(), "white", "set-color-red")
        assert isinstance(record, UndoRedoEntry)

    def test_name_is_description(self):
        """name returns the description given at construction."""
        record = UndoRedoRecord(MagicMock(), "white", "set-color-red")
        assert record.name == "set-color-red"

    def test_missing_description_is_empty(self):
        """A None description becomes an empty string."""
        record = UndoRedoRecord(MagicMock(), "white", None)
        assert record.name == ""

    def test_none_operation_raises(self):
        """A missing operation is rejected immediately."""
        with pytest.raises(TypeError):
            UndoRedoRecord(None, "white")

    def test_non_callable_operation_raises(self):
        """A non-callable operation is rejected immediately."""
        with pytest.raises(TypeError):
            UndoRedoRecord("not callable", "white")


class TestRecordSnapshot:
    """Tests for payload capture."""

    def test_delegating_proxy_kept_by_reference(self):
        """A proxy whose __getattr__ recurses during deepcopy is stored as-is."""
        payload = DelegatingProxy([1])
        manager = UndoRedoManager()

        record = manager.push(lambda _: None, payload, "proxy")

        assert record.data is payload
        assert manager.get_undo_stack_top() is payload
        assert manager.get_undo_stack_information() == ["proxy"]

    def test_payload_is_frozen(self):
        """Mutating the original payload doesn't change the record."""
        colors = ["white"]
        record = UndoRedoRecord(MagicMock(), colors)

        colors.append("red")

        assert record.data == ["white"]
        assert record.data is not colors

    def test_snapshot_disabled_keeps_reference(self):
        """snapshot=False stores the payload object itself."""
        colors = ["white"]
        record = UndoRedoRecord(MagicMock(), colors, snapshot=False)

        assert record.data is colors

    def test_uncopyable_payload_kept_by_reference(self):
        """Payloads deepcopy can't handle are kept as-is."""
        lock = threading.Lock()
        record = UndoRedoRecord(MagicMock(), lock)

        assert record.data is lock

    def test_snapshot_payload_copies_nested(self):
        """snapshot_payload copies nested containers."""
        original = {"colors": ["white"]}
        copied = snapshot_payload(original)

        original["colors"].append("red")

        assert copied == {"colors": ["white"]}


class TestRecordExecute:
    """Tests for replaying a record."""

    def test_execute_calls_operation_with_data(self):
        """execute() calls the operation with the captured payload."""
        operation = MagicMock()
        record = UndoRedoRecord(operation, "white")

        assert record.execute() is True
        operation.assert_called_once_with("white")

    def test_execute_ignores_mode(self):
        """Every mode runs the operation."""
        operation = MagicMock()
        record = UndoRedoRecord(operation, 1)

        for mode in ExecuteType:
            record.execute(mode)

        assert operation.call_count == len(ExecuteType)

    def test_execute_is_repeatable(self):
        """Executing twice calls the operation twice."""
        operation = MagicMock()
        record = UndoRedoRecord(operation, 1)

        record.execute()
        record.execute()

        assert operation.call_count == 2

    def test_top_data_is_payload(self):
        """top_data of a record is its own payload."""
        record = UndoRedoRecord(MagicMock(), 42)
        assert record.top_data == 42

    def test_operation_errors_propagate(self):
        """Record.execute doesn't hide operation errors."""
        operation = MagicMock(side_effect=ValueError("boom"))
        record = UndoRedoRecord(operation, 1)

        with pytest.raises(ValueError):
            record.execute()
