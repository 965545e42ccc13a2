# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import os
import pathlib
import re
import sys


_IS_UNIT_TEST = None


def is_unit_test() -> bool:
    """Test whether running in a unit test environment.

    Returns:
        bool: True if running in a unit test environment, False otherwise.

    """
    global _IS_UNIT_TEST  # noqa: PLW0603

    if _IS_UNIT_TEST is not None:
        return _IS_UNIT_TEST

    _IS_UNIT_TEST = _is_unit_test()
    return _IS_UNIT_TEST


def _is_unit_test() -> bool:
    # Detect pytest
    if os.environ.get("PYTEST_VERSION", None) is not None:
        return True

    env = os.environ.get("UNIT_TEST", "").strip()
    if not env:
        return False

    return env.lower() not in ("false", "0", "no")


DEFAULT_EXE_NAME = "studyplanner.py"


def get_exe_name() -> str:
    return DEFAULT_EXE_NAME


def get_script_name() -> str:
    return re.sub("\\.py$", "", get_exe_name(), flags=re.IGNORECASE)


def get_script_home() -> pathlib.Path:
    if (not is_unit_test()) and len(sys.argv) > 0 and sys.argv[0]:
        return pathlib.Path(sys.argv[0]).resolve().parent
    return pathlib.Path.cwd()
