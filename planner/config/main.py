# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import datetime

from typing import Any, Self

from pydantic import Field, NonNegativeInt, field_validator, model_validator

from ..components import ProviderConfig, ProviderType
from ..sync.config import SyncConfig
from ..sync.normalize import parse_due_date
from ..util.config import BaseConfigModel, ConfigBase
from ..util.helpers import FrozenDict


# MARK: Run
class RunConfig(BaseConfigModel):
    add: str | None = Field(default=None, min_length=1, description="Title of a task to add")
    due: NonNegativeInt = Field(default=0, description="Due date of the added task, as Unix seconds or YYYY-MM-DD")
    complete: NonNegativeInt | None = Field(default=None, description="Identifier of a task to mark as completed")
    delete: NonNegativeInt | None = Field(default=None, description="Identifier of a task to delete")

    @field_validator("due", mode="before")
    @classmethod
    def _parse_due(cls, value: Any) -> Any:
        if isinstance(value, datetime.date) or (isinstance(value, str) and not value.strip().isdigit()):
            return parse_due_date(value)
        return value

    @model_validator(mode="after")
    def _single_action(self) -> Self:
        actions = [name for name in ("add", "complete", "delete") if getattr(self, name) is not None]
        if len(actions) > 1:
            msg = f"Only one action may be requested per run, got {', '.join(actions)}"
            raise ValueError(msg)
        if self.due and self.add is None:
            msg = "'due' requires 'add'"
            raise ValueError(msg)
        return self

    @property
    def has_action(self) -> bool:
        return self.add is not None or self.complete is not None or self.delete is not None


# MARK: Main Config
class Config(ConfigBase):
    providers: FrozenDict[str, ProviderConfig] = Field(
        default_factory=lambda: {ProviderType.LEDGER: {"package": "ledger.memory"}},
        validate_default=True,
        description="Dictionary of configured providers, the in-memory ledger unless configured otherwise",
    )

    sync: SyncConfig = Field(default_factory=SyncConfig, description="Synchronisation settings")

    run: RunConfig = Field(default_factory=RunConfig, description="Action performed by a command-line run")
