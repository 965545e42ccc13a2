# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors


from .provider import Provider, ProviderConfig
from .type_enum import ProviderType


__all__ = [
    "Provider",
    "ProviderConfig",
    "ProviderType",
]
