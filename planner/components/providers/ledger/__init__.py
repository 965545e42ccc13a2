# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from .ledger import LedgerProvider, LedgerProviderConfig


__all__ = [
    "LedgerProvider",
    "LedgerProviderConfig",
]
