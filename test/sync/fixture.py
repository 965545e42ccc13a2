# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import asyncio

from collections import deque
from collections.abc import AsyncIterator, Sequence
from typing import Any

import pytest

from planner.components.providers.ledger.memory import MemoryLedgerProvider, MemoryLedgerProviderConfig
from planner.sync import ConfirmationEvent, ConfirmationStatus, LedgerFunction, SyncConfig, SyncManager, TransactionHandle


ADDRESS = "0x00000000000000000000000000000000000000aa"


async def spin(iterations: int = 20) -> None:
    """Let background tasks run until they block."""
    for _ in range(iterations):
        await asyncio.sleep(0)


# MARK: Scripted ledger client
class ScriptedLedgerClient:
    """Ledger client double whose reads, submissions and confirmation streams are driven by the test."""

    def __init__(self) -> None:
        self.count: Any = 0
        self.tasks: Any = []
        self.read_error: BaseException | None = None
        self.submit_error: BaseException | None = None

        self.count_calls = 0
        self.task_calls = 0
        self.submissions: list[tuple[str, tuple[Any, ...]]] = []

        self.task_gates: deque[asyncio.Event] = deque()
        self.submit_gate: asyncio.Event | None = None
        self.fixed_hash: str | None = None

        self.streams: dict[str, asyncio.Queue[ConfirmationEvent | BaseException | None]] = {}
        self.closed: set[str] = set()

    async def read_task_count(self, address: str) -> Any:
        self.count_calls += 1
        if self.read_error is not None:
            raise self.read_error
        return self.count

    async def read_tasks(self, address: str) -> Any:
        self.task_calls += 1
        tasks = self.tasks
        if self.task_gates:
            await self.task_gates.popleft().wait()
        if self.read_error is not None:
            raise self.read_error
        return tasks

    async def submit(self, function_name: LedgerFunction | str, args: Sequence[Any]) -> TransactionHandle:
        self.submissions.append((str(function_name), tuple(args)))
        if self.submit_gate is not None:
            await self.submit_gate.wait()
        if self.submit_error is not None:
            raise self.submit_error

        tx_hash = self.fixed_hash or f"0x{len(self.submissions):064x}"
        handle = TransactionHandle(hash=tx_hash, function=LedgerFunction(function_name), args=tuple(args))
        self.streams.setdefault(handle.hash, asyncio.Queue())
        return handle

    async def watch_confirmation(self, handle: TransactionHandle) -> AsyncIterator[ConfirmationEvent]:
        queue = self.streams[handle.hash]
        try:
            while (item := await queue.get()) is not None:
                if isinstance(item, BaseException):
                    raise item
                yield item
        finally:
            self.closed.add(handle.hash)

    # Scripting helpers
    def emit(self, tx_hash: str, status: str, error: BaseException | None = None) -> None:
        self.streams[tx_hash].put_nowait(ConfirmationEvent(ConfirmationStatus(status), error=error))

    def confirm(self, tx_hash: str) -> None:
        for status in ("pending", "confirming", "confirmed"):
            self.emit(tx_hash, status)

    def end(self, tx_hash: str) -> None:
        self.streams[tx_hash].put_nowait(None)

    def break_stream(self, tx_hash: str, error: BaseException) -> None:
        self.streams[tx_hash].put_nowait(error)

    @property
    def fetches(self) -> int:
        return min(self.count_calls, self.task_calls)


@pytest.fixture
def ledger_client() -> ScriptedLedgerClient:
    return ScriptedLedgerClient()


@pytest.fixture
def sync_manager(ledger_client: ScriptedLedgerClient) -> SyncManager:
    return SyncManager(ledger_client, instance_name="sync")


# MARK: In-memory ledger
def create_memory_ledger(**options: Any) -> MemoryLedgerProvider:
    options.setdefault("account", ADDRESS)
    config = MemoryLedgerProviderConfig.model_validate({"package": "ledger.memory", **options})
    return MemoryLedgerProvider(config, instance_name="ledger")


@pytest.fixture
def memory_ledger() -> MemoryLedgerProvider:
    return create_memory_ledger()


def create_sync_manager(client: Any, **options: Any) -> SyncManager:
    return SyncManager(client, config=SyncConfig.model_validate(options), instance_name="sync")
