# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors


from .component import Component, ComponentConfig
from .providers import Provider, ProviderConfig, ProviderType


__all__ = [
    "Component",
    "ComponentConfig",
    "Provider",
    "ProviderConfig",
    "ProviderType",
]
