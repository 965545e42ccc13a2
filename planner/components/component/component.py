# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import types
import typing

from abc import ABCMeta
from typing import Any, ClassVar

from ...util.mixins import LoggableNamedMixin
from .component_config import ComponentConfig


# MARK: Component Base Class
class Component[C: ComponentConfig](LoggableNamedMixin, metaclass=ABCMeta):
    """A configurable building block, instantiated from its :class:`ComponentConfig`.

    The configuration class is taken from the type argument, e.g. ``class Foo(Component[FooConfig])``.
    Generic subclasses that forward their type variable keep ``config_class`` unset and cannot be
    instantiated.
    """

    config: C
    config_class: ClassVar[type[ComponentConfig] | None] = None

    @classmethod
    def _introspect_config_class(cls) -> type[ComponentConfig] | None:
        for base in types.get_original_bases(cls):
            origin = typing.get_origin(base)
            if not isinstance(origin, type) or not issubclass(origin, Component):
                continue
            for arg in typing.get_args(base):
                if isinstance(arg, type) and issubclass(arg, ComponentConfig):
                    return arg
        return None

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)

        if (config_class := cls._introspect_config_class()) is not None:
            cls.config_class = config_class

    def __init__(self, config: C, *, instance_name: str | None = None, instance_parent: Any = None) -> None:
        if (config_class := self.config_class) is None:
            msg = f"{type(self).__name__} is a generic component and must not be instantiated without an explicit configuration class."
            raise TypeError(msg)
        if not isinstance(config, config_class):
            msg = f"Expected {config_class.__name__} for {type(self).__name__}, got {type(config).__name__}."
            raise TypeError(msg)

        super().__init__(instance_name=instance_name or config.title, instance_parent=instance_parent)
        self.config = config
