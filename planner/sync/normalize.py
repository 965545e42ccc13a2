# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

"""Conversion of raw contract records into :class:`~planner.sync.models.Task`.

Ledger clients return task records either with named fields (mappings, named tuples, attribute
objects) or as bare positional tuples laid out as ``(id, title, dueDate, completed, exists)``. Named
fields take precedence over positions; absent fields fall back to their defaults.

>>> normalize_task((3, "Read chapter", 1700000000, False, True))
Task(id=3, title='Read chapter', due_date=1700000000, completed=False, exists=True)
>>> normalize_task({"id": "7", "title": "Essay"})
Task(id=7, title='Essay', due_date=0, completed=False, exists=True)
"""

import datetime
import decimal
import numbers

from collections.abc import Mapping, Sequence
from typing import Any

from .errors import NormalizationError
from .models import Task, TaskSet


# MARK: Field layout
# (field, accepted names, position in the positional layout)
FIELDS: tuple[tuple[str, tuple[str, ...], int], ...] = (
    ("id"       , ("id",)                 , 0),
    ("title"    , ("title",)              , 1),
    ("due_date" , ("dueDate", "due_date") , 2),
    ("completed", ("completed",)          , 3),
    ("exists"   , ("exists",)             , 4),
)  # fmt: skip

_MISSING = object()


# MARK: Scalar coercion
def coerce_uint(value: Any, *, what: str) -> int:
    """Coerce ``value`` into a non-negative integer, raising :class:`NormalizationError` when impossible.

    >>> coerce_uint("42", what="id")
    42
    >>> coerce_uint(-1, what="id")
    Traceback (most recent call last):
    ...
    planner.sync.errors.NormalizationError: Invalid id -1: must not be negative
    """
    result: int

    if isinstance(value, bool):
        msg = f"Invalid {what} {value!r}: expected an integer, got a boolean"
        raise NormalizationError(msg)

    if isinstance(value, numbers.Integral):
        result = int(value)
    elif isinstance(value, (numbers.Real, decimal.Decimal)):
        try:
            result = int(value)
        except (ValueError, OverflowError) as err:
            msg = f"Invalid {what} {value!r}: not a finite number"
            raise NormalizationError(msg) from err
        if result != value:
            msg = f"Invalid {what} {value!r}: not an integral number"
            raise NormalizationError(msg)
    elif isinstance(value, (str, bytes)):
        try:
            result = int(value, 0) if isinstance(value, str) and value.strip().lower().startswith("0x") else int(value)
        except ValueError as err:
            msg = f"Invalid {what} {value!r}: not an integer"
            raise NormalizationError(msg) from err
    else:
        msg = f"Invalid {what} {value!r}: unsupported type {type(value).__name__}"
        raise NormalizationError(msg)

    if result < 0:
        msg = f"Invalid {what} {result}: must not be negative"
        raise NormalizationError(msg)

    return result


# MARK: Record access
def _named(raw: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        if isinstance(raw, Mapping):
            value = raw.get(name, _MISSING)
        else:
            value = getattr(raw, name, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return _MISSING


def _positional(raw: Any, position: int) -> Any:
    if isinstance(raw, Mapping) or isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        return _MISSING
    if position >= len(raw) or raw[position] is None:
        return _MISSING
    return raw[position]


def _field(raw: Any, names: tuple[str, ...], position: int) -> Any:
    value = _named(raw, names)
    if value is _MISSING:
        value = _positional(raw, position)
    return value


# MARK: Normalization
def normalize_task(raw: Any) -> Task:
    """Convert one raw contract record into a :class:`Task`."""
    values = {name: _field(raw, names, position) for name, names, position in FIELDS}

    if values["id"] is _MISSING:
        msg = f"Task record {raw!r} has no id"
        raise NormalizationError(msg)
    task_id = coerce_uint(values["id"], what="task id")

    title = values["title"]
    if title is _MISSING:
        title = ""
    elif isinstance(title, bytes):
        title = title.decode("utf-8", errors="replace")
    else:
        title = str(title)

    due_date = values["due_date"]
    due_date = 0 if due_date is _MISSING else coerce_uint(due_date, what=f"due date of task {task_id}")

    completed = values["completed"]
    exists = values["exists"]

    return Task(
        id=task_id,
        title=title,
        due_date=due_date,
        completed=False if completed is _MISSING else bool(completed),
        exists=True if exists is _MISSING else bool(exists),
    )


def normalize_tasks(raw: Any) -> TaskSet:
    """Convert the raw result of a task list read, preserving ledger order.

    Any malformed record fails the whole conversion, so a partially converted task set is never
    exposed.
    """
    if raw is None:
        return ()

    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        msg = f"Expected a sequence of task records, got {type(raw).__name__}"
        raise NormalizationError(msg)

    tasks = []
    for index, record in enumerate(raw):
        try:
            tasks.append(normalize_task(record))
        except NormalizationError as err:
            msg = f"Task record #{index} is malformed: {err}"
            raise NormalizationError(msg) from err
    return tuple(tasks)


# MARK: Due dates
def parse_due_date(value: str | datetime.date | None) -> int:
    """Convert a ``YYYY-MM-DD`` date into Unix seconds at 00:00 UTC; empty means "no due date".

    >>> parse_due_date("2025-01-01")
    1735689600
    >>> parse_due_date("")
    0
    """
    if value is None or value == "":
        return 0

    if isinstance(value, str):
        try:
            value = datetime.date.fromisoformat(value.strip())
        except ValueError as err:
            msg = f"Invalid due date {value!r}, expected YYYY-MM-DD"
            raise ValueError(msg) from err

    if isinstance(value, datetime.datetime):
        value = value.date()

    midnight = datetime.datetime.combine(value, datetime.time.min, tzinfo=datetime.UTC)
    return int(midnight.timestamp())
