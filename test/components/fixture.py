# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors


from typing import Any

import pytest

from planner.components import Component
from planner.runtime import Runtime

from ..util.config.fixture import ConfigFixture


# MARK: Component fixture
class ComponentFixture[T: Component]:
    def __init__(self):
        self.component: T | None = None

    def create(self, data: dict[str, Any], cls: type[T], **kwargs) -> T:
        config_class = cls.config_class
        if config_class is None:
            msg = f"{cls.__name__} does not define a configuration class."
            raise TypeError(msg)

        self.component = cls(config_class.model_validate(data), **kwargs)
        return self.component

    def get(self) -> T:
        if self.component is None:
            msg = "Component not initialized. Call 'create()' first."
            raise RuntimeError(msg)
        return self.component


@pytest.fixture
def component() -> ComponentFixture:
    return ComponentFixture()


# MARK: Runtime
class RuntimeFixture:
    def __init__(self, config: ConfigFixture):
        self.config = config
        self.runtime: Runtime | None = None

    def create(self, data: dict[str, Any]) -> Runtime:
        self.config.create(data)
        self.runtime = Runtime(config=self.config.get())
        self.runtime.initialize()
        return self.runtime

    def get(self) -> Runtime:
        if self.runtime is None:
            msg = "Runtime not initialized."
            raise RuntimeError(msg)
        return self.runtime


@pytest.fixture
def runtime(config: ConfigFixture) -> RuntimeFixture:
    return RuntimeFixture(config)
