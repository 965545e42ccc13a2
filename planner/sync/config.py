# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from pydantic import Field

from ..util.config import BaseConfigModel


class SyncConfig(BaseConfigModel):
    address: str | None = Field(default=None, min_length=1, description="Address whose tasks are synchronised by the runtime")
    fetch_on_activate: bool = Field(default=True, description="Fetch the task count and task list as soon as an address is activated")
