# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from .ledger import ConfirmationStatus
from .models import TransactionRecord, TransactionStatus


EVENT_STATUS: dict[ConfirmationStatus, TransactionStatus] = {
    ConfirmationStatus.PENDING   : TransactionStatus.SUBMITTED,
    ConfirmationStatus.CONFIRMING: TransactionStatus.CONFIRMING,
    ConfirmationStatus.CONFIRMED : TransactionStatus.CONFIRMED,
    ConfirmationStatus.FAILED    : TransactionStatus.FAILED,
}  # fmt: skip


class TransactionTracker:
    """Book-keeping of the transactions submitted through one manager activation.

    Every submitted transaction is tracked by hash until it reaches a terminal status, so overlapping
    submissions never lose each other. ``current`` always refers to the most recent submission and
    keeps its terminal record once it settles.
    """

    def __init__(self) -> None:
        self._in_flight: dict[str, TransactionRecord] = {}
        self.current: TransactionRecord | None = None

    def submitted(self, tx_hash: str, function: str) -> TransactionRecord:
        if tx_hash in self._in_flight:
            msg = f"Transaction {tx_hash} is already being tracked"
            raise ValueError(msg)

        record = TransactionRecord(hash=tx_hash, function=function, status=TransactionStatus.SUBMITTED)
        self._in_flight[tx_hash] = record
        self.current = record
        return record

    def advance(self, tx_hash: str, status: TransactionStatus, *, error: BaseException | None = None) -> TransactionRecord | None:
        """Move ``tx_hash`` to ``status``.

        Returns the new record, or None when the transition does not apply: the transaction is no
        longer in flight, the status is unchanged, or the status would move backwards.
        """
        record = self._in_flight.get(tx_hash)
        if record is None or not record.status.can_transition_to(status):
            return None

        record = record.transition(status, error=error)
        if status.terminal:
            del self._in_flight[tx_hash]
        else:
            self._in_flight[tx_hash] = record

        if self.current is not None and self.current.hash == tx_hash:
            self.current = record
        return record

    def get(self, tx_hash: str) -> TransactionRecord | None:
        return self._in_flight.get(tx_hash)

    @property
    def in_flight(self) -> tuple[TransactionRecord, ...]:
        return tuple(self._in_flight.values())

    @property
    def is_pending(self) -> bool:
        return any(record.status == TransactionStatus.SUBMITTED for record in self._in_flight.values())

    @property
    def is_confirming(self) -> bool:
        return any(record.status == TransactionStatus.CONFIRMING for record in self._in_flight.values())

    @property
    def is_confirmed(self) -> bool:
        return self.current is not None and self.current.status == TransactionStatus.CONFIRMED
