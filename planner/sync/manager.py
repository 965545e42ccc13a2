# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import asyncio

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..util.mixins import LoggableNamedMixin
from .config import SyncConfig
from .errors import ConfirmationError, ReadError, SubmissionError, SyncError
from .ledger import LedgerClient, LedgerFunction, TransactionHandle
from .models import SyncActions, SyncData, SyncStatus, TaskSet, TransactionStatus
from .normalize import coerce_uint, normalize_tasks
from .transaction import EVENT_STATUS, TransactionTracker


if TYPE_CHECKING:
    from collections.abc import Coroutine, Sequence

    from .models import TransactionRecord


# MARK: State
@dataclass(slots=True)
class SyncState:
    """Process-local cache of the ledger state for one activated address."""

    address: str
    task_count: int | None = None
    tasks: TaskSet = ()
    last_error: BaseException | None = None
    transactions: TransactionTracker = field(default_factory=TransactionTracker)

    dispatching: int = 0
    fetch_seq: int = 0
    applied_seq: int = 0
    background: set[asyncio.Task[Any]] = field(default_factory=set)

    def record_error(self, error: BaseException) -> None:
        if self.last_error is None:
            self.last_error = error


# MARK: Manager
class SyncManager(LoggableNamedMixin):
    """Keeps a local view of the Study Planner contract state for one address in sync with the ledger.

    Reads are cached in a :class:`SyncState` that is created by :meth:`activate` and discarded by
    :meth:`deactivate`. Mutating actions submit a transaction through the ledger client and return
    once it has a hash; its confirmation is then watched in the background, and a confirmed
    transaction triggers a refetch of the task count and task list.

    Consumers only ever see immutable snapshots through :attr:`data`, :attr:`state` and
    :attr:`actions`.
    """

    client: LedgerClient
    config: SyncConfig

    def __init__(self, client: LedgerClient, *, config: SyncConfig | None = None, instance_name: str | None = None, instance_parent: Any = None) -> None:
        super().__init__(instance_name=instance_name, instance_parent=instance_parent)

        if not isinstance(client, LedgerClient):
            msg = f"Expected a ledger client, got {type(client).__name__}"
            raise TypeError(msg)

        self.client = client
        self.config = config if config is not None else SyncConfig()
        self._sync_state: SyncState | None = None

    # MARK: Lifecycle
    @property
    def active(self) -> bool:
        return self._sync_state is not None

    @property
    def address(self) -> str | None:
        return None if self._sync_state is None else self._sync_state.address

    async def activate(self, address: str) -> None:
        if not address:
            msg = "Cannot activate without an address"
            raise ValueError(msg)

        if (current := self._sync_state) is not None:
            if current.address == address:
                return
            await self.deactivate()

        self.log.info("Activating for %s", address)
        self._sync_state = SyncState(address=address)

        if self.config.fetch_on_activate:
            await self.fetch_all()

    async def deactivate(self) -> None:
        if (state := self._sync_state) is None:
            return

        self.log.info("Deactivating for %s", state.address)
        self._sync_state = None

        pending = list(state.background)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            self.log.debug("Cancelled %d background task(s)", len(pending))

    async def settle(self) -> None:
        """Wait until every confirmation watcher and confirmation-triggered refetch has finished."""
        while (state := self._sync_state) is not None and state.background:
            await asyncio.gather(*list(state.background), return_exceptions=True)

    # MARK: Snapshots
    @property
    def data(self) -> SyncData:
        if (state := self._sync_state) is None:
            return SyncData()
        count = state.task_count if state.task_count is not None else len(state.tasks)
        return SyncData(my_task_count=count, tasks=state.tasks)

    @property
    def state(self) -> SyncStatus:
        if (state := self._sync_state) is None:
            return SyncStatus()

        transactions = state.transactions
        current = transactions.current
        return SyncStatus(
            is_loading=state.dispatching > 0 or transactions.is_pending or transactions.is_confirming,
            is_pending=transactions.is_pending,
            is_confirming=transactions.is_confirming,
            is_confirmed=transactions.is_confirmed,
            hash=None if current is None else current.hash,
            error=state.last_error,
        )

    @property
    def current_transaction(self) -> TransactionRecord | None:
        return None if self._sync_state is None else self._sync_state.transactions.current

    @property
    def last_error(self) -> BaseException | None:
        return None if self._sync_state is None else self._sync_state.last_error

    @property
    def actions(self) -> SyncActions:
        return SyncActions(
            add_task=self.add_task,
            mark_completed=self.mark_completed,
            delete_task=self.delete_task,
            fetch_all=self.fetch_all,
        )

    # MARK: Reads
    async def fetch_all(self) -> None:
        """Refresh the task count and task list of the active address.

        Failures are recorded into the state and never raised; the previously cached data is kept.
        """
        if (state := self._sync_state) is None:
            self.log.debug("Not active, skipping fetch")
            return

        state.fetch_seq += 1
        seq = state.fetch_seq
        self.log.debug("Fetching tasks for %s (#%d)", state.address, seq)

        try:
            count, tasks = await self._read(state.address)
        except ReadError as err:
            if self._is_current(state, seq):
                self.log.warning("Fetch #%d failed: %s", seq, err)
                state.record_error(err)
            return

        if not self._is_current(state, seq):
            self.log.debug("Discarding stale fetch #%d", seq)
            return

        state.applied_seq = seq
        state.task_count = count
        state.tasks = tasks
        self.log.debug("Fetched %d task(s), count %d", len(tasks), count)

    def _is_current(self, state: SyncState, seq: int) -> bool:
        return self._sync_state is state and seq > state.applied_seq

    async def _read(self, address: str) -> tuple[int, TaskSet]:
        results = await asyncio.gather(
            self.client.read_task_count(address),
            self.client.read_tasks(address),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, ReadError):
                raise result
            if isinstance(result, Exception):
                msg = f"Failed to read tasks for {address}: {result}"
                raise ReadError(msg) from result

        raw_count, raw_tasks = results
        tasks = normalize_tasks(raw_tasks)
        count = coerce_uint(raw_count, what="task count")
        return count, tasks

    # MARK: Actions
    async def add_task(self, title: str, due_date: int = 0) -> None:
        if not title:
            self.log.debug("Ignoring task with an empty title")
            return
        await self._dispatch(LedgerFunction.ADD_TASK, (title, due_date))

    async def mark_completed(self, task_id: int) -> None:
        await self._dispatch(LedgerFunction.MARK_COMPLETED, (task_id,))

    async def delete_task(self, task_id: int) -> None:
        await self._dispatch(LedgerFunction.DELETE_TASK, (task_id,))

    async def _dispatch(self, function: LedgerFunction, args: Sequence[Any]) -> TransactionHandle:
        if (state := self._sync_state) is None:
            msg = f"Cannot submit {function} without an active address"
            raise SubmissionError(msg, function=function)

        state.dispatching += 1
        state.last_error = None
        state.transactions.current = None
        self.log.debug("Submitting %s%r", function, tuple(args))

        try:
            handle = await self.client.submit(function, tuple(args))
            if self._sync_state is state:
                state.transactions.submitted(handle.hash, function)
        except Exception as err:
            msg = f"Submission of {function} failed: {err}"
            error = SubmissionError(msg, function=function)
            self.log.warning(msg)
            state.record_error(error)
            raise error from err
        finally:
            state.dispatching -= 1

        if self._sync_state is not state:
            self.log.warning("Transaction %s submitted after deactivation, not tracking it", handle.hash)
            return handle

        self.log.info("Submitted %s as %s", function, handle.hash)
        self._spawn(state, self._watch(state, handle), name=f"watch-{handle.hash}")
        return handle

    # MARK: Confirmation
    def _spawn(self, state: SyncState, coro: Coroutine[Any, Any, None], *, name: str) -> None:
        task = asyncio.create_task(coro, name=name)
        state.background.add(task)
        task.add_done_callback(state.background.discard)

    async def _watch(self, state: SyncState, handle: TransactionHandle) -> None:
        tracker = state.transactions
        events = self.client.watch_confirmation(handle)

        try:
            async for event in events:
                status = EVENT_STATUS[event.status]
                error = None
                if status == TransactionStatus.FAILED:
                    error = ConfirmationError(f"Transaction {handle.hash} failed: {event.error or 'no reason given'}", tx_hash=handle.hash)
                    error.__cause__ = event.error

                if tracker.advance(handle.hash, status, error=error) is None:
                    self.log.debug("Ignoring %s event for %s", event.status, handle.hash)
                    continue

                if status.terminal:
                    self._settled(state, handle, status, error)
                    return
        except asyncio.CancelledError as err:
            # Only the watcher's own cancellation propagates; a stream cancelled by the client fails the transaction
            if (task := asyncio.current_task()) is not None and task.cancelling():
                raise
            error = ConfirmationError(f"Confirmation stream for {handle.hash} was cancelled", tx_hash=handle.hash)
            error.__cause__ = err
        except Exception as err:
            error = ConfirmationError(f"Watching transaction {handle.hash} failed: {err}", tx_hash=handle.hash)
            error.__cause__ = err
        else:
            error = ConfirmationError(f"Confirmation stream for {handle.hash} ended before the transaction settled", tx_hash=handle.hash)
        finally:
            if (aclose := getattr(events, "aclose", None)) is not None:
                await aclose()

        if tracker.advance(handle.hash, TransactionStatus.FAILED, error=error) is not None:
            self._settled(state, handle, TransactionStatus.FAILED, error)

    def _settled(self, state: SyncState, handle: TransactionHandle, status: TransactionStatus, error: SyncError | None) -> None:
        if status == TransactionStatus.CONFIRMED:
            self.log.info("Transaction %s confirmed", handle.hash)
            if self._sync_state is state:
                self._spawn(state, self.fetch_all(), name=f"refetch-{handle.hash}")
            return

        self.log.error("Transaction %s failed: %s", handle.hash, error)
        if error is not None:
            state.record_error(error)
