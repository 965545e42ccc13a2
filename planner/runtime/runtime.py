# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import asyncio

from typing import TYPE_CHECKING, Any

from frozendict import frozendict

from ..components.providers import Provider, ProviderType
from ..components.providers.ledger import LedgerProvider
from ..sync import SyncData, SyncManager
from ..util.mixins import LoggableNamedMixin


if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..config import ConfigManager
    from ..config.main import RunConfig


class Runtime(LoggableNamedMixin):
    initialized: bool

    config: ConfigManager
    providers: Mapping[ProviderType | str, Provider]
    sync: SyncManager

    # MARK: Initialization
    def __init__(self, *, config: ConfigManager | None = None, instance_parent: Any = None, instance_name: str | None = None) -> None:
        super().__init__(instance_parent=instance_parent, instance_name=instance_name)

        self.initialized = False

        if config is None:
            from ..config import CFG

            config = CFG

        self.config = config

    def initialize(self) -> None:
        if self.initialized:
            return

        self._initialize_config()
        self._initialize_providers()
        self._initialize_sync()

        self.initialized = True

    def _initialize_config(self) -> None:
        self.config.initialize()

    def _initialize_providers(self) -> None:
        providers = {}
        for key, provider_config in self.config.providers.items():
            provider = provider_config.create_component(instance_name=key, instance_parent=self)
            assert isinstance(provider, Provider)
            providers[key] = provider

        self.providers = frozendict(providers)

    def _initialize_sync(self) -> None:
        self.sync = SyncManager(self.get_ledger_provider(), config=self.config.sync, instance_name="sync", instance_parent=self)

    # MARK: Providers
    def has_provider(self, key: ProviderType | str) -> bool:
        return key in self.providers

    def get_provider_or_none(self, key: ProviderType | str) -> Provider | None:
        return self.providers.get(key)

    def get_provider(self, key: ProviderType | str) -> Provider:
        if provider := self.get_provider_or_none(key):
            return provider
        msg = f"Provider '{key}' not found in runtime providers: {list(self.providers.keys())}"
        raise KeyError(msg)

    def get_ledger_provider(self, key: ProviderType | str = ProviderType.LEDGER) -> LedgerProvider:
        provider = self.get_provider(key)
        if not isinstance(provider, LedgerProvider):
            msg = f"Expected LedgerProvider for key '{key}', got {type(provider).__name__}"
            raise TypeError(msg)
        return provider

    # MARK: Run
    def run(self) -> SyncData:
        if not self.initialized:
            self.initialize()

        return asyncio.run(self.arun())

    async def arun(self) -> SyncData:
        """Activate the manager, perform the configured action and wait until its outcome is known."""
        ledger = self.sync.client
        address = self.config.sync.address
        if address is None:
            assert isinstance(ledger, LedgerProvider)
            address = ledger.account

        await self.sync.activate(address)
        try:
            await self._perform(self.config.run)
            await self.sync.settle()
            self._report()
            return self.sync.data
        finally:
            await self.sync.deactivate()
            if (aclose := getattr(ledger, "aclose", None)) is not None:
                await aclose()

    async def _perform(self, run: RunConfig) -> None:
        if run.add is not None:
            await self.sync.add_task(run.add, run.due)
        elif run.complete is not None:
            await self.sync.mark_completed(run.complete)
        elif run.delete is not None:
            await self.sync.delete_task(run.delete)

    def _report(self) -> None:
        data = self.sync.data
        state = self.sync.state

        if state.hash is not None:
            self.log.info("Last transaction %s confirmed: %s", state.hash, state.is_confirmed)
        if state.error is not None:
            self.log.error("%s", state.error)

        self.log.info("%d task(s) for %s", data.my_task_count, self.sync.address)
        for task in data.tasks:
            if not task.exists:
                continue
            due = task.due.strftime("%Y-%m-%d") if task.due is not None else "no due date"
            mark = "x" if task.completed else " "
            self.log.info("[%s] #%d %s (%s)", mark, task.id, task.title, due, extra={"simple": True})
