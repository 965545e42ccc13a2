# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""Main entry point for the studyplanner CLI application.

Loads the configuration, synchronises the tasks of the configured address, optionally performs one
action (``--add``, ``--complete`` or ``--delete``) and reports the resulting task list.
"""

from pathlib import Path

from planner.runtime import Runtime
from planner.util.helpers import EnvFile


def main() -> None:
    # Load environment variables from 'env' file if it exists
    env_file = Path("env")
    if env_file.is_file():
        EnvFile(env_file).apply(override=False)

    # Initialize and run the application runtime
    runtime = Runtime()
    runtime.run()


if __name__ == "__main__":
    main()
