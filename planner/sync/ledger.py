# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""Contract between the synchronisation layer and a ledger client.

A ledger client hides the wallet, the RPC transport and the chain itself. It reads the Study Planner
contract state for an address, submits state-mutating calls on behalf of the connected account, and
reports the confirmation progress of each submitted transaction as an asynchronous stream of
:class:`ConfirmationEvent`.
"""

from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable


# MARK: Contract functions
class LedgerFunction(StrEnum):
    ADD_TASK       = "addTask"
    MARK_COMPLETED = "markCompleted"
    DELETE_TASK    = "deleteTask"


# MARK: Transactions
@dataclass(frozen=True, slots=True)
class TransactionHandle:
    """Opaque reference to a submitted transaction."""

    hash: str
    function: LedgerFunction
    args: tuple[Any, ...] = field(default=())


class ConfirmationStatus(StrEnum):
    PENDING    = "pending"
    CONFIRMING = "confirming"
    CONFIRMED  = "confirmed"
    FAILED     = "failed"

    @property
    def terminal(self) -> bool:
        return self in (ConfirmationStatus.CONFIRMED, ConfirmationStatus.FAILED)


@dataclass(frozen=True, slots=True)
class ConfirmationEvent:
    status: ConfirmationStatus
    error: BaseException | None = None


# MARK: Contract errors
class ContractRevertError(Exception):
    """The contract rejected a call."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Execution reverted: {reason}")
        self.reason = reason


class TaskNotFoundError(ContractRevertError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"task {task_id} does not exist")
        self.task_id = task_id


# MARK: Client protocol
@runtime_checkable
class LedgerClient(Protocol):
    async def read_task_count(self, address: str) -> Any:
        """Return the number of tasks owned by ``address``."""
        ...

    async def read_tasks(self, address: str) -> Sequence[Any] | None:
        """Return the raw task records owned by ``address``, in contract storage order."""
        ...

    async def submit(self, function_name: LedgerFunction | str, args: Sequence[Any]) -> TransactionHandle:
        """Submit a state-mutating call and return its handle once the transaction has a hash."""
        ...

    def watch_confirmation(self, handle: TransactionHandle) -> AsyncIterator[ConfirmationEvent]:
        """Stream the confirmation progress of ``handle``. Closing the iterator cancels the subscription."""
        ...
