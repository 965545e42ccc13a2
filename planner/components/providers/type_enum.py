# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from enum import StrEnum


class ProviderType(StrEnum):
    LEDGER = "ledger"
