# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from .config import SyncConfig
from .errors import ConfirmationError, NormalizationError, ReadError, SubmissionError, SyncError
from .ledger import ConfirmationEvent, ConfirmationStatus, ContractRevertError, LedgerClient, LedgerFunction, TaskNotFoundError, TransactionHandle
from .manager import SyncManager, SyncState
from .models import SyncActions, SyncData, SyncStatus, Task, TaskSet, TransactionRecord, TransactionStatus
from .normalize import normalize_task, normalize_tasks, parse_due_date


__all__ = [
    "ConfirmationError",
    "ConfirmationEvent",
    "ConfirmationStatus",
    "ContractRevertError",
    "LedgerClient",
    "LedgerFunction",
    "NormalizationError",
    "ReadError",
    "SubmissionError",
    "SyncActions",
    "SyncConfig",
    "SyncData",
    "SyncError",
    "SyncManager",
    "SyncState",
    "SyncStatus",
    "Task",
    "TaskNotFoundError",
    "TaskSet",
    "TransactionHandle",
    "TransactionRecord",
    "TransactionStatus",
    "normalize_task",
    "normalize_tasks",
    "parse_due_date",
]
