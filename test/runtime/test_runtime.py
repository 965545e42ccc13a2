# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import pytest

from planner.components.providers import ProviderType
from planner.components.providers.ledger.memory import MemoryLedgerProvider
from planner.sync import SubmissionError, SyncManager

from ..components.fixture import RuntimeFixture
from ..sync.fixture import ADDRESS


OTHER_ADDRESS = "0x00000000000000000000000000000000000000bb"


def ledger_config(**options) -> dict:
    return {
        "package": "ledger.memory",
        "account": ADDRESS,
        "tasks": {
            ADDRESS: [
                {"title": "Read chapter", "due_date": "2025-01-01"},
                {"title": "Essay"},
            ],
        },
        **options,
    }


@pytest.mark.runtime
class TestRuntime:
    def test_initialize(self, runtime: RuntimeFixture):
        instance = runtime.create({})

        assert instance.initialized
        assert instance.has_provider(ProviderType.LEDGER)
        ledger = instance.get_ledger_provider()
        assert isinstance(ledger, MemoryLedgerProvider)
        assert isinstance(instance.sync, SyncManager)
        assert instance.sync.client is ledger
        assert instance.sync.log.name == "Runtime.sync"

    def test_missing_provider(self, runtime: RuntimeFixture):
        instance = runtime.create({})

        assert instance.get_provider_or_none("oracle") is None
        with pytest.raises(KeyError, match=r"oracle"):
            instance.get_provider("oracle")

    def test_run_without_action(self, runtime: RuntimeFixture):
        instance = runtime.create({"providers": {"ledger": ledger_config()}})

        data = instance.run()

        assert data.my_task_count == 2
        assert [task.title for task in data.tasks] == ["Read chapter", "Essay"]
        assert data.tasks[0].due_date == 1735689600
        assert not instance.sync.active

    def test_run_add(self, runtime: RuntimeFixture):
        instance = runtime.create({"providers": {"ledger": ledger_config()}, "run": {"add": "Lab report", "due": "2025-02-01"}})

        data = instance.run()

        assert data.my_task_count == 3
        assert data.tasks[-1].id == 2
        assert data.tasks[-1].title == "Lab report"
        assert data.tasks[-1].due_date == 1738368000

    def test_run_complete(self, runtime: RuntimeFixture):
        instance = runtime.create({"providers": {"ledger": ledger_config()}, "run": {"complete": 1}})

        data = instance.run()

        assert [task.completed for task in data.tasks] == [False, True]

    def test_run_delete(self, runtime: RuntimeFixture):
        instance = runtime.create({"providers": {"ledger": ledger_config(delete_mode="remove")}, "run": {"delete": 0}})

        data = instance.run()

        assert [task.title for task in data.tasks] == ["Essay"]
        assert data.my_task_count == 1

    def test_run_for_other_address(self, runtime: RuntimeFixture):
        instance = runtime.create(
            {
                "providers": {"ledger": ledger_config(tasks={OTHER_ADDRESS: [{"title": "Someone else's"}]})},
                "sync": {"address": OTHER_ADDRESS},
            }
        )

        data = instance.run()

        assert instance.sync.address is None
        assert [task.title for task in data.tasks] == ["Someone else's"]

    def test_run_rejected_action(self, runtime: RuntimeFixture):
        instance = runtime.create({"providers": {"ledger": ledger_config()}, "run": {"complete": 42}})

        with pytest.raises(SubmissionError, match=r"task 42 does not exist"):
            instance.run()

        assert not instance.sync.active
