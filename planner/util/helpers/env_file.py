# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import os

from pathlib import Path


class EnvFile:
    """``KEY=value`` file whose entries become environment variables, e.g. ``STUDYPLANNER_SYNC_ADDRESS``.

    Blank lines and ``#`` comments are skipped, an optional ``export`` prefix is accepted and values
    may be wrapped in single or double quotes.
    """

    def __init__(self, filepath: Path | str) -> None:
        self.filepath = Path(filepath)
        self.values: dict[str, str] = {}
        self._load()

    def _load(self) -> None:
        if not self.filepath.is_file():
            msg = f"Environment file '{self.filepath}' does not exist."
            raise FileNotFoundError(msg)

        with self.filepath.open("r", encoding="utf-8") as f:
            for number, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                line = line.removeprefix("export ").lstrip()

                key, sep, value = line.partition("=")
                key = key.strip()
                if not sep or not key:
                    msg = f"Invalid line {number} in environment file '{self.filepath}': {line}"
                    raise ValueError(msg)

                value = value.strip()
                if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":  # noqa: PLR2004
                    value = value[1:-1]
                self.values[key] = value

    def apply(self, *, override: bool = True) -> None:
        for key, value in self.values.items():
            if override or key not in os.environ:
                os.environ[key] = value
