# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field

from .. import Provider, ProviderConfig, ProviderType


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from ....sync.ledger import ConfirmationEvent, LedgerFunction, TransactionHandle


# MARK: Provider Base Configuration
class LedgerProviderConfig(ProviderConfig, metaclass=ABCMeta):
    account: str = Field(default="0x0000000000000000000000000000000000000001", min_length=1, description="Account on whose behalf transactions are submitted")


# MARK: Provider Base class
class LedgerProvider[C: LedgerProviderConfig](Provider[C], metaclass=ABCMeta):
    """Base class of the ledger clients consumed by :class:`~planner.sync.manager.SyncManager`."""

    default_key: ClassVar[str] = ProviderType.LEDGER

    @property
    def account(self) -> str:
        return self.config.account

    @abstractmethod
    async def read_task_count(self, address: str) -> Any:
        msg = "This method should be implemented by subclasses."
        raise NotImplementedError(msg)

    @abstractmethod
    async def read_tasks(self, address: str) -> Sequence[Any] | None:
        msg = "This method should be implemented by subclasses."
        raise NotImplementedError(msg)

    @abstractmethod
    async def submit(self, function_name: LedgerFunction | str, args: Sequence[Any]) -> TransactionHandle:
        msg = "This method should be implemented by subclasses."
        raise NotImplementedError(msg)

    @abstractmethod
    def watch_confirmation(self, handle: TransactionHandle) -> AsyncIterator[ConfirmationEvent]:
        msg = "This method should be implemented by subclasses."
        raise NotImplementedError(msg)
