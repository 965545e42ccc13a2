# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...mixins import LoggableMixin


if TYPE_CHECKING:
    import rich.repr


class BaseConfigModel(BaseModel, LoggableMixin):
    """Base class of every configuration section: immutable, and strict about unknown keys."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    def __rich_repr__(self) -> "rich.repr.Result":
        for attr, info in type(self).model_fields.items():
            if info.repr is False:
                continue
            yield attr, getattr(self, attr, None)
