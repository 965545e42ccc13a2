# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import importlib

from abc import ABCMeta
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field, ModelWrapValidatorHandler, model_validator

from ...util.config import BaseConfigModel


if TYPE_CHECKING:
    from .component import Component


# MARK: Base Component Configuration
class ComponentConfig(BaseConfigModel, metaclass=ABCMeta):
    PACKAGE_ROOT: ClassVar[str] = "planner.components"

    package: str = Field(description="Package name of the component to load, relative to the component root")

    title: str | None = Field(default=None, description="Logical title of the component instance, to help identification")

    @model_validator(mode="wrap")
    @classmethod
    def _coerce_to_concrete_class(cls, data: Any, handler: ModelWrapValidatorHandler) -> Any:
        # Already instantiated
        if isinstance(data, cls):
            return data

        if not isinstance(data, dict):
            msg = f"Expected a dictionary for {cls.__name__} configuration, got {type(data).__name__}."
            raise TypeError(msg)

        package = data.get("package", None)
        if package is None:
            msg = f"Missing 'package' key in {cls.__name__} configuration."
            raise ValueError(msg)

        # Get the concrete configuration class for this package
        concrete_cls = cls.get_component_class_for_package(package).config_class
        if concrete_cls is None:
            msg = f"Component for {package} does not define a configuration class."
            raise ImportError(msg)
        if cls is concrete_cls:
            return handler(data)
        if not issubclass(concrete_cls, cls):
            msg = f"Expected configuration class {cls.__name__}, got {concrete_cls.__name__} instead."
            raise TypeError(msg)

        return concrete_cls.model_validate(data)

    @classmethod
    def get_component_class_for_package(cls, package: str) -> type[Component]:
        root_path = cls.PACKAGE_ROOT
        path = f"{root_path}.{package}"
        try:
            mod = importlib.import_module(f".{package}", root_path)
        except ModuleNotFoundError as err:
            msg = f"Component package '{path}' not found."
            raise ImportError(msg) from err

        component_cls = getattr(mod, "COMPONENT", None)
        if component_cls is None:
            msg = f"Component class for {package} not found in '{path}'."
            raise ImportError(msg)
        if not isinstance(component_cls, type):
            msg = f"Expected a class for {package} component, got {type(component_cls).__name__} instead."
            raise TypeError(msg)

        # Sanity check the configuration class
        config_cls = getattr(component_cls, "config_class", None)
        if config_cls is None:
            msg = f"Component for {package} does not define a configuration class."
            raise ImportError(msg)
        if not issubclass(config_cls, ComponentConfig):
            msg = f"Expected a component configuration class, got {config_cls.__name__} instead."
            raise TypeError(msg)

        return component_cls

    @property
    def component_class(self) -> type[Component]:
        return self.get_component_class_for_package(self.package)

    def create_component(self, *args, **kwargs) -> Component:
        component_cls = self.component_class
        return component_cls(self, *args, **kwargs)
