# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""Errors surfaced by the synchronisation layer.

Read-side errors (:class:`ReadError`, :class:`NormalizationError`) and :class:`ConfirmationError` are
only ever recorded into the manager state. :class:`SubmissionError` is additionally raised to the
caller of the mutating action that failed.
"""


class SyncError(Exception):
    """Base class of every error recorded by :class:`~planner.sync.manager.SyncManager`."""


class ReadError(SyncError):
    """Fetching the task count or the task list failed."""


class NormalizationError(ReadError):
    """A raw task record returned by the ledger could not be converted into a :class:`~planner.sync.models.Task`."""


class SubmissionError(SyncError):
    """A mutating request was rejected before a transaction hash was produced."""

    def __init__(self, msg: str, *, function: str | None = None) -> None:
        super().__init__(msg)
        self.function = function


class ConfirmationError(SyncError):
    """A submitted transaction failed on-chain, or its confirmation could not be observed."""

    def __init__(self, msg: str, *, tx_hash: str | None = None) -> None:
        super().__init__(msg)
        self.tx_hash = tx_hash
