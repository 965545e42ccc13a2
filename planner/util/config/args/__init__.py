# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from .default import DefaultArgParser
from .parser import ArgParserBase


__all__ = [
    "ArgParserBase",
    "DefaultArgParser",
]
