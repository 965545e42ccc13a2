# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from __future__ import annotations

import sys

from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO, override

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema


if TYPE_CHECKING:
    from io import TextIOBase


class ConfigFilePath:
    """Path of the configuration file, or ``-`` to read it from standard input."""

    def __init__(self, path: Any) -> None:
        if not isinstance(path, str):
            msg = f"Expected a string, got {type(path).__name__}"
            raise TypeError(msg)

        if path != "-" and not Path(path).is_file():
            msg = f"Configuration file not found: {path}"
            raise FileNotFoundError(msg)
        self.file_path: Path | str = Path(path) if path != "-" else "-"

    def open(self, encoding: str = "UTF-8") -> TextIO | TextIOBase:
        if isinstance(self.file_path, Path):
            return self.file_path.open(mode="r", encoding=encoding)
        return sys.stdin

    @property
    def is_stdin(self) -> bool:
        return self.file_path == "-"

    @property
    def dirname(self) -> Path:
        if isinstance(self.file_path, Path):
            return self.file_path.resolve().parent
        return Path.cwd()

    @classmethod
    def __get_pydantic_core_schema__(cls, source: type[Any], handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_plain_validator_function(
            function=cls._pydantic_validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _pydantic_validate(cls, value: Any) -> ConfigFilePath:
        if isinstance(value, cls):
            return value
        return cls(value)

    @override
    def __str__(self) -> str:
        if isinstance(self.file_path, Path):
            return self.file_path.as_posix()
        return self.file_path

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self!s}')"
