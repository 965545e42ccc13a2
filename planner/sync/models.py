# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import datetime

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


# MARK: Task
class Task(BaseModel):
    """A task record owned by one address, as stored by the Study Planner contract."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: NonNegativeInt = Field(description="Identifier, unique within the owner's task set")
    title: str = Field(default="", description="Task label")
    due_date: NonNegativeInt = Field(default=0, description="Due date as Unix seconds, 0 when the task has no due date")
    completed: bool = Field(default=False, description="Whether the task was marked as completed")
    exists: bool = Field(default=True, description="False once the task has been deleted (tombstone)")

    @property
    def has_due_date(self) -> bool:
        return self.due_date != 0

    @property
    def due(self) -> datetime.datetime | None:
        if not self.has_due_date:
            return None
        return datetime.datetime.fromtimestamp(self.due_date, tz=datetime.UTC)

    @property
    def is_active(self) -> bool:
        return self.exists and not self.completed


TaskSet = tuple[Task, ...]


# MARK: Transactions
class TransactionStatus(StrEnum):
    IDLE       = "idle"
    SUBMITTED  = "submitted"
    CONFIRMING = "confirming"
    CONFIRMED  = "confirmed"
    FAILED     = "failed"

    @property
    def terminal(self) -> bool:
        return self in (TransactionStatus.CONFIRMED, TransactionStatus.FAILED)

    def can_transition_to(self, other: TransactionStatus) -> bool:
        return other in TRANSITIONS[self]


TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    TransactionStatus.IDLE      : frozenset({TransactionStatus.SUBMITTED, TransactionStatus.FAILED}),
    TransactionStatus.SUBMITTED : frozenset({TransactionStatus.CONFIRMING, TransactionStatus.CONFIRMED, TransactionStatus.FAILED}),
    TransactionStatus.CONFIRMING: frozenset({TransactionStatus.CONFIRMED, TransactionStatus.FAILED}),
    TransactionStatus.CONFIRMED : frozenset(),
    TransactionStatus.FAILED    : frozenset(),
}  # fmt: skip


class TransactionRecord(BaseModel):
    """Lifecycle of one submitted transaction. Records are immutable; every transition creates a new one."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    hash: str
    function: str
    status: TransactionStatus = TransactionStatus.SUBMITTED
    error: BaseException | None = None

    def transition(self, status: TransactionStatus, *, error: BaseException | None = None) -> TransactionRecord:
        if not self.status.can_transition_to(status):
            msg = f"Invalid transaction transition {self.status} -> {status} for {self.hash}"
            raise ValueError(msg)
        return self.model_copy(update={"status": status, "error": error})


# MARK: Snapshots exposed to the presentation layer
class SyncData(BaseModel):
    model_config = ConfigDict(frozen=True)

    my_task_count: NonNegativeInt = 0
    tasks: TaskSet = ()


class SyncStatus(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    is_loading: bool = False
    is_pending: bool = False
    is_confirming: bool = False
    is_confirmed: bool = False
    hash: str | None = None
    error: BaseException | None = None


@dataclass(frozen=True, slots=True)
class SyncActions:
    add_task: Callable[[str, int], Awaitable[None]]
    mark_completed: Callable[[int], Awaitable[None]]
    delete_task: Callable[[int], Awaitable[None]]
    fetch_all: Callable[[], Awaitable[None]]

    @property
    def refetch(self) -> Callable[[], Awaitable[None]]:
        return self.fetch_all
