# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

from typing import override

from .parser import ArgParserBase


LEVEL_HELP = "Can be numeric or one of the default logging levels (CRITICAL=50, ERROR=40, WARNING=30, INFO=20, DEBUG=10, OFF)"


class DefaultArgParser(ArgParserBase):
    @override
    def initialize(self) -> None:
        # Configuration
        self.add("app.paths.config", action="store", help="Configuration file to load, or '-' for standard input")

        # Logging
        self.add("logging.levels.file", "-lv", "--logfile-verbosity", action="store", help=f"Logfile verbosity. {LEVEL_HELP}")
        self.add("logging.levels.tty", "-cv", "--console-verbosity", action="store", help=f"Console verbosity. {LEVEL_HELP}")
        self.add("logging.levels.default", "-v", "--verbosity", action="store", help=f"Default verbosity. {LEVEL_HELP}")

        self.add("logging.rich", "-r", "--rich", action="store_const", const=True, help="Use rich for console output")
        self.add("logging.rich", "-nr", "--no-rich", action="store_const", const=False, help="Do not use rich for console output")
