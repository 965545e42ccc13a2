# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import datetime

import pydantic
import pytest

from planner.sync import SyncData, SyncStatus, Task, TransactionRecord, TransactionStatus
from planner.sync.transaction import TransactionTracker


@pytest.mark.sync
@pytest.mark.models
class TestTask:
    def test_defaults(self):
        task = Task(id=1)

        assert task.title == ""
        assert task.due_date == 0
        assert not task.completed
        assert task.exists
        assert task.is_active

    def test_due(self):
        task = Task(id=1, title="Exam", due_date=1735689600)

        assert task.has_due_date
        assert task.due == datetime.datetime(2025, 1, 1, tzinfo=datetime.UTC)

    def test_no_due_date(self):
        task = Task(id=1, title="Someday")

        assert not task.has_due_date
        assert task.due is None

    def test_is_active(self):
        assert not Task(id=1, completed=True).is_active
        assert not Task(id=1, exists=False).is_active

    def test_frozen(self):
        task = Task(id=1)
        with pytest.raises(pydantic.ValidationError):
            task.title = "changed"  # pyright: ignore[reportAttributeAccessIssue]

    def test_rejects_negative(self):
        with pytest.raises(pydantic.ValidationError):
            Task(id=-1)
        with pytest.raises(pydantic.ValidationError):
            Task(id=1, due_date=-5)

    def test_snapshot_defaults(self):
        assert SyncData() == SyncData(my_task_count=0, tasks=())
        status = SyncStatus()
        assert not (status.is_loading or status.is_pending or status.is_confirming or status.is_confirmed)
        assert status.hash is None
        assert status.error is None


@pytest.mark.sync
@pytest.mark.models
class TestTransactionRecord:
    def test_forward_transitions(self):
        record = TransactionRecord(hash="0x1", function="addTask")
        assert record.status == TransactionStatus.SUBMITTED

        confirming = record.transition(TransactionStatus.CONFIRMING)
        confirmed = confirming.transition(TransactionStatus.CONFIRMED)

        assert record.status == TransactionStatus.SUBMITTED
        assert confirming.status == TransactionStatus.CONFIRMING
        assert confirmed.status == TransactionStatus.CONFIRMED
        assert confirmed.status.terminal

    def test_failure_keeps_error(self):
        cause = RuntimeError("reverted")
        failed = TransactionRecord(hash="0x1", function="deleteTask").transition(TransactionStatus.FAILED, error=cause)

        assert failed.status == TransactionStatus.FAILED
        assert failed.error is cause

    @pytest.mark.parametrize(
        ("start", "target"),
        [
            (TransactionStatus.CONFIRMING, TransactionStatus.SUBMITTED),
            (TransactionStatus.CONFIRMED, TransactionStatus.FAILED),
            (TransactionStatus.FAILED, TransactionStatus.CONFIRMED),
            (TransactionStatus.SUBMITTED, TransactionStatus.SUBMITTED),
        ],
    )
    def test_invalid_transitions(self, start, target):
        record = TransactionRecord(hash="0x1", function="addTask", status=start)

        with pytest.raises(ValueError, match=r"Invalid transaction transition"):
            record.transition(target)


@pytest.mark.sync
@pytest.mark.models
class TestTransactionTracker:
    def test_idle(self):
        tracker = TransactionTracker()

        assert tracker.current is None
        assert tracker.in_flight == ()
        assert not (tracker.is_pending or tracker.is_confirming or tracker.is_confirmed)

    def test_lifecycle(self):
        tracker = TransactionTracker()
        tracker.submitted("0x1", "addTask")
        assert tracker.is_pending

        assert tracker.advance("0x1", TransactionStatus.CONFIRMING) is not None
        assert tracker.is_confirming
        assert not tracker.is_pending

        assert tracker.advance("0x1", TransactionStatus.CONFIRMED) is not None
        assert tracker.is_confirmed
        assert tracker.in_flight == ()
        assert tracker.get("0x1") is None

    def test_duplicate_submission(self):
        tracker = TransactionTracker()
        tracker.submitted("0x1", "addTask")

        with pytest.raises(ValueError, match=r"already being tracked"):
            tracker.submitted("0x1", "addTask")

    def test_ignored_transitions(self):
        tracker = TransactionTracker()
        tracker.submitted("0x1", "addTask")

        assert tracker.advance("0x2", TransactionStatus.CONFIRMED) is None
        assert tracker.advance("0x1", TransactionStatus.SUBMITTED) is None

        tracker.advance("0x1", TransactionStatus.FAILED)
        assert tracker.advance("0x1", TransactionStatus.CONFIRMED) is None
        assert tracker.current is not None
        assert tracker.current.status == TransactionStatus.FAILED

    def test_overlapping(self):
        tracker = TransactionTracker()
        tracker.submitted("0x1", "addTask")
        tracker.submitted("0x2", "deleteTask")
        assert tracker.current is not None
        assert tracker.current.hash == "0x2"

        tracker.advance("0x1", TransactionStatus.CONFIRMING)
        assert tracker.is_pending
        assert tracker.is_confirming

        tracker.advance("0x1", TransactionStatus.CONFIRMED)
        assert not tracker.is_confirmed
        assert [record.hash for record in tracker.in_flight] == ["0x2"]
