# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import os
import pathlib

from typing import Any

import yaml


class IncludeLoader(yaml.SafeLoader):
    """Safe YAML loader supporting ``!include relative/path.yaml``, resolved next to the including file."""

    def __init__(self, stream: Any, root: pathlib.Path | None = None) -> None:
        if root is None:
            name = getattr(stream, "name", None)
            root = pathlib.Path(name).resolve().parent if isinstance(name, str) and not name.startswith("<") else pathlib.Path.cwd()

        self._root: pathlib.Path = root

        super().__init__(stream)

    def include(self, node: yaml.Node) -> Any:
        filename = pathlib.Path(os.path.expandvars(self._root / str(self.construct_scalar(node)))).expanduser()  # pyright: ignore[reportArgumentType]

        with filename.open(encoding="UTF-8") as f:
            return yaml.load(f, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader


IncludeLoader.add_constructor("!include", IncludeLoader.include)
