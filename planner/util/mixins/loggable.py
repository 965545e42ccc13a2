# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from typing import override

from ..logging import LoggableProtocol, Logger, getLogger
from .named import HierarchicalProtocol, NamedMixin, NamedProtocol


class LoggableMixin:
    """Mixin that adds a logger to a class.

    Provides a ``.log`` property named after the instance, nested underneath the logger of
    ``instance_parent`` when the parent is itself loggable.
    """

    # MARK: Logging
    @property
    def log(self) -> Logger:
        parent = getattr(self, "instance_parent", None)
        if not isinstance(parent, LoggableProtocol):
            parent = None
        return getLogger(self.__log_name__, parent=parent)

    @property
    def __log_name__(self) -> str:
        if isinstance(self, NamedProtocol) and (name := self.instance_name) is not None:
            return name
        return type(self).__name__

    # MARK: Printing
    @override
    def __repr__(self) -> str:
        name = self.instance_hierarchy if isinstance(self, HierarchicalProtocol) else self.__log_name__
        cls_name = type(self).__name__
        return f"<{name}>" if cls_name in name else f"<{cls_name} {name}>"


class LoggableNamedMixin(LoggableMixin, NamedMixin):
    """Mixin combining logging and naming support."""
