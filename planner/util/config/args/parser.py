# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""Command-line argument parsing.

Every argument destination is a dotted configuration key (e.g. ``logging.levels.tty``) that
overrides the matching entry of the configuration file.
"""

import argparse
import os
import sys

from abc import ABCMeta, abstractmethod
from collections.abc import Sequence
from typing import Any, override

from ...helpers.script_info import get_exe_name, get_script_name, is_unit_test


ENV_PREFIX = get_script_name().upper()


class ArgParserBase(argparse.ArgumentParser, metaclass=ABCMeta):
    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("prog", get_exe_name())
        kwargs.setdefault("description", "Study Planner ledger synchronisation")
        kwargs["formatter_class"] = argparse.ArgumentDefaultsHelpFormatter

        super().__init__(*args, **kwargs)

        self.initialize()

    @override
    def add_argument(self, name: str, *args, default: Any = None, **kwargs) -> argparse.Action:  # pyright: ignore[reportIncompatibleMethodOverride]
        """Add a command-line argument whose default may come from a ``STUDYPLANNER_<KEY>`` environment variable.

        Args:
            name (str): The destination configuration key.
            *args: Argument flags (e.g., '-v', '--verbosity').
            default: Default value if not set elsewhere.
            **kwargs: Additional argparse options.

        """
        env_name = name.upper().replace(".", "_")

        return super().add_argument(*args, dest=name, default=os.getenv(f"{ENV_PREFIX}_{env_name}", default), **kwargs)

    def add(self, *args, **kwargs) -> argparse.Action:
        return self.add_argument(*args, **kwargs)

    @abstractmethod
    def initialize(self) -> None:
        msg = "Subclasses must implement the 'initialize' method."
        raise NotImplementedError(msg)

    def get_argv(self) -> Sequence[str]:
        # Unit tests must not pick up pytest's own arguments
        if is_unit_test():
            return ("-",)
        return sys.argv[1:]

    @override
    def parse_args(self, args: Sequence[str] | None = None, namespace: Any = None) -> argparse.Namespace:  # pyright: ignore[reportIncompatibleMethodOverride]
        self.namespace = super().parse_args(self.get_argv() if args is None else args, namespace)
        return self.namespace
