# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors


from .loggable import LoggableMixin, LoggableNamedMixin, LoggableProtocol
from .named import HierarchicalProtocol, NamedMixin, NamedProtocol


__all__ = [
    "HierarchicalProtocol",
    "LoggableMixin",
    "LoggableNamedMixin",
    "LoggableProtocol",
    "NamedMixin",
    "NamedProtocol",
]
