# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""In-memory simulation of the Study Planner contract.

Tasks are kept per owner address, in insertion order, and identified by a per-owner counter that is
never reused. Each submitted transaction is mined in the background after ``confirmation_delay``
seconds, at which point its state change is applied exactly once; its receipt is forgotten as soon
as a watcher has observed the outcome. When ``simulate`` is enabled a call that would revert is
rejected by :meth:`MemoryLedgerProvider.submit` before a transaction hash exists, the way a wallet
pre-flight ``eth_call`` would.
"""

from __future__ import annotations

import asyncio
import datetime
import hashlib

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, override

from frozendict import frozendict
from pydantic import Field, NonNegativeFloat, NonNegativeInt, field_validator

from ....sync.ledger import (
    ConfirmationEvent,
    ConfirmationStatus,
    ContractRevertError,
    LedgerFunction,
    TaskNotFoundError,
    TransactionHandle,
)
from ....sync.normalize import parse_due_date
from ....util.config import BaseConfigModel
from ....util.helpers import FrozenDict
from .ledger import LedgerProvider, LedgerProviderConfig


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence


# MARK: Configuration
class DeleteMode(StrEnum):
    TOMBSTONE = "tombstone"
    REMOVE    = "remove"


class RawFormat(StrEnum):
    TUPLE = "tuple"
    NAMED = "named"


class MemoryTaskSeed(BaseConfigModel):
    title: str = Field(min_length=1, description="Task label")
    due_date: NonNegativeInt = Field(default=0, description="Due date as Unix seconds or YYYY-MM-DD, 0 for none")
    completed: bool = Field(default=False, description="Whether the task starts out completed")

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, value: Any) -> Any:
        if isinstance(value, datetime.date) or (isinstance(value, str) and not value.strip().isdigit()):
            return parse_due_date(value)
        return value


class MemoryLedgerProviderConfig(LedgerProviderConfig):
    confirmation_delay: NonNegativeFloat = Field(default=0.0, description="Seconds between submission and confirmation of a transaction")
    delete_mode: DeleteMode = Field(default=DeleteMode.TOMBSTONE, description="Whether deleted tasks stay behind as tombstones or are removed")
    simulate: bool = Field(default=True, description="Reject calls that would revert at submission time instead of at confirmation")
    raw_format: RawFormat = Field(default=RawFormat.TUPLE, description="Shape of the raw task records returned by reads")
    tasks: FrozenDict[str, tuple[MemoryTaskSeed, ...]] = Field(default_factory=frozendict, description="Initial tasks per owner address")


# MARK: Storage
@dataclass(slots=True)
class StoredTask:
    id: int
    title: str
    due_date: int = 0
    completed: bool = False
    exists: bool = True


# MARK: Provider
class MemoryLedgerProvider(LedgerProvider[MemoryLedgerProviderConfig]):
    def __init__(self, config: MemoryLedgerProviderConfig, *, instance_name: str | None = None, instance_parent: Any = None) -> None:
        super().__init__(config, instance_name=instance_name, instance_parent=instance_parent)

        self._tasks: dict[str, list[StoredTask]] = {}
        self._next_id: dict[str, int] = {}
        self._nonce = 0
        self._receipts: dict[str, asyncio.Task[ContractRevertError | None]] = {}

        for owner, seeds in config.tasks.items():
            for seed in seeds:
                self._store(self._key(owner), seed.title, seed.due_date, completed=seed.completed)

    @staticmethod
    def _key(address: str) -> str:
        return address.lower()

    def _store(self, owner: str, title: str, due_date: int, *, completed: bool = False) -> StoredTask:
        task_id = self._next_id.get(owner, 0)
        self._next_id[owner] = task_id + 1

        task = StoredTask(id=task_id, title=title, due_date=due_date, completed=completed)
        self._tasks.setdefault(owner, []).append(task)
        return task

    def _find(self, owner: str, task_id: int) -> StoredTask:
        for task in self._tasks.get(owner, ()):
            if task.id == task_id and task.exists:
                return task
        raise TaskNotFoundError(task_id)

    # MARK: Reads
    @override
    async def read_task_count(self, address: str) -> int:
        return sum(1 for task in self._tasks.get(self._key(address), ()) if task.exists)

    @override
    async def read_tasks(self, address: str) -> list[Any]:
        return [self._raw(task) for task in self._tasks.get(self._key(address), ())]

    def _raw(self, task: StoredTask) -> Any:
        if self.config.raw_format == RawFormat.NAMED:
            return {
                "id": task.id,
                "title": task.title,
                "dueDate": task.due_date,
                "completed": task.completed,
                "exists": task.exists,
            }
        return (task.id, task.title, task.due_date, task.completed, task.exists)

    # MARK: Writes
    @override
    async def submit(self, function_name: LedgerFunction | str, args: Sequence[Any]) -> TransactionHandle:
        function = LedgerFunction(function_name)
        args = tuple(args)
        self._check_arguments(function, args)

        owner = self._key(self.account)
        if self.config.simulate:
            self._apply(owner, function, args, dry_run=True)

        self._nonce += 1
        digest = hashlib.sha256(f"{owner}:{self._nonce}:{function}:{args!r}".encode()).hexdigest()
        handle = TransactionHandle(hash=f"0x{digest}", function=function, args=args)

        self._receipts[handle.hash] = asyncio.create_task(self._mine(owner, handle), name=f"mine-{handle.hash}")
        self.log.debug("Accepted %s%r as %s", function, args, handle.hash)
        return handle

    @staticmethod
    def _check_arguments(function: LedgerFunction, args: tuple[Any, ...]) -> None:
        if function == LedgerFunction.ADD_TASK:
            expected = (str, int)
        else:
            expected = (int,)

        if len(args) != len(expected):
            msg = f"{function} expects {len(expected)} argument(s), got {len(args)}"
            raise TypeError(msg)

        for arg, kind in zip(args, expected, strict=True):
            if isinstance(arg, bool) or not isinstance(arg, kind):
                msg = f"Invalid {function} argument {arg!r}: expected {kind.__name__}"
                raise TypeError(msg)
            if kind is int and arg < 0:
                msg = f"Invalid {function} argument {arg!r}: must be an unsigned integer"
                raise ValueError(msg)

    def _apply(self, owner: str, function: LedgerFunction, args: tuple[Any, ...], *, dry_run: bool) -> None:
        if function == LedgerFunction.ADD_TASK:
            title, due_date = args
            if not title:
                msg = "Title cannot be empty"
                raise ContractRevertError(msg)
            if not dry_run:
                self._store(owner, title, due_date)
            return

        (task_id,) = args
        task = self._find(owner, task_id)

        if function == LedgerFunction.MARK_COMPLETED:
            if task.completed:
                msg = "Task already completed"
                raise ContractRevertError(msg)
            if not dry_run:
                task.completed = True
            return

        if dry_run:
            return
        if self.config.delete_mode == DeleteMode.TOMBSTONE:
            task.exists = False
        else:
            self._tasks[owner].remove(task)

    async def _mine(self, owner: str, handle: TransactionHandle) -> ContractRevertError | None:
        if self.config.confirmation_delay:
            await asyncio.sleep(self.config.confirmation_delay)

        try:
            self._apply(owner, handle.function, handle.args, dry_run=False)
        except ContractRevertError as err:
            self.log.debug("Transaction %s reverted: %s", handle.hash, err.reason)
            return err

        self.log.debug("Mined %s", handle.hash)
        return None

    # MARK: Confirmation
    @override
    async def watch_confirmation(self, handle: TransactionHandle) -> AsyncIterator[ConfirmationEvent]:
        receipt = self._receipts.get(handle.hash)
        if receipt is None:
            yield ConfirmationEvent(ConfirmationStatus.FAILED, error=LookupError(f"Unknown transaction {handle.hash}"))
            return

        yield ConfirmationEvent(ConfirmationStatus.PENDING)
        yield ConfirmationEvent(ConfirmationStatus.CONFIRMING)

        # Watchers may be cancelled, the transaction itself may not
        error = await asyncio.shield(receipt)

        # The outcome is reported once, to the first watcher that observes it
        self._receipts.pop(handle.hash, None)
        if error is None:
            yield ConfirmationEvent(ConfirmationStatus.CONFIRMED)
        else:
            yield ConfirmationEvent(ConfirmationStatus.FAILED, error=error)

    async def aclose(self) -> None:
        """Cancel every transaction that has not been mined yet and forget every receipt."""
        pending = [receipt for receipt in self._receipts.values() if not receipt.done()]
        self._receipts.clear()
        for receipt in pending:
            receipt.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            self.log.debug("Dropped %d unmined transaction(s)", len(pending))


COMPONENT = MemoryLedgerProvider
