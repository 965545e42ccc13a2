# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""Command-line options of the studyplanner runtime."""

from typing import override

from ..util.config import DefaultArgParser


class ArgParser(DefaultArgParser):
    @override
    def initialize(self) -> None:
        super().initialize()

        # Synchronisation
        self.add("sync.address", "-A", "--address", action="store", help="Address whose tasks are synchronised (defaults to the ledger account)")

        # Actions
        group = self.add_mutually_exclusive_group()
        group.add_argument("-a", "--add", dest="run.add", action="store", default=None, help="Add a task with the given title")
        group.add_argument("-c", "--complete", dest="run.complete", action="store", type=int, default=None, help="Mark the task with the given id as completed")
        group.add_argument("-d", "--delete", dest="run.delete", action="store", type=int, default=None, help="Delete the task with the given id")
        self.add("run.due", "--due", action="store", help="Due date (YYYY-MM-DD) of the task added with --add")
