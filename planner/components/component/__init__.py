# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from .component import Component
from .component_config import ComponentConfig


__all__ = [
    "Component",
    "ComponentConfig",
]
