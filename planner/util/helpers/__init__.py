# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from . import script_info
from .env_file import EnvFile
from .frozendict import FrozenDict


__all__ = [
    "EnvFile",
    "FrozenDict",
    "script_info",
]
