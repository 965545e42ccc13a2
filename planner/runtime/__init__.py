# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from .runtime import Runtime


__all__ = [
    "Runtime",
]
