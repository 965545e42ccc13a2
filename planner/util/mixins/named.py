# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import re

from typing import Any, Protocol, override, runtime_checkable


# MARK: shorten_name
def shorten_name(name: str) -> str:
    """Shorten a CamelCase name to its capitals.

    >>> shorten_name("MemoryLedgerProvider")
    'MLP'
    >>> shorten_name("runtime")
    'runtime'
    """
    res = re.sub("[^A-Z0-9]", "", name)
    return res or name


# MARK: Protocols
@runtime_checkable
class NamedProtocol(Protocol):
    @property
    def instance_name(self) -> str | None: ...


@runtime_checkable
class HierarchicalProtocol(Protocol):
    @property
    def instance_parent(self) -> Any: ...

    @property
    def instance_hierarchy(self) -> str: ...


# MARK: Named Mixin
class NamedMixin:
    """Give an object an optional instance name and an optional parent in the object hierarchy."""

    def __init__(self, *args, instance_name: str | None = None, instance_parent: Any = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._instance_name = instance_name
        self._instance_parent = instance_parent

    @property
    def instance_name(self) -> str | None:
        return self._instance_name

    @property
    def instance_parent(self) -> Any:
        return self._instance_parent

    @property
    def final_instance_name(self) -> str:
        if (name := self.instance_name) is None:
            name = type(self).__name__
        return name

    @property
    def instance_hierarchy(self) -> str:
        parent = self.instance_parent
        if isinstance(parent, HierarchicalProtocol):
            return f"{parent.instance_hierarchy}.{self.final_instance_name}"
        return self.final_instance_name

    @override
    def __str__(self) -> str:
        return self.final_instance_name
