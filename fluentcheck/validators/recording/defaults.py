"""Neutral placeholder values for members whose type cannot be recorded further.

When a recording object reads an ``int`` or ``str`` attribute there is nothing
left to record, so it hands back a placeholder of the declared type instead of
another recording object. The placeholder only has to let an accessor
expression like ``lambda o: o.name.strip()`` run to completion.
"""

import copy
from collections.abc import Iterable, Mapping, Set
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any, Optional
from uuid import UUID

DEFAULT_VALUES: dict[type, Any] = {
    type(None): None,
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
    bytearray: bytearray(),
    Decimal: Decimal(0),
    Fraction: Fraction(0),
    list: [],
    tuple: (),
    set: set(),
    frozenset: frozenset(),
    dict: {},
    datetime: datetime.min,
    date: date.min,
    time: time.min,
    timedelta: timedelta(0),
    UUID: UUID(int=0),
    PurePath: PurePath("."),
}

# Abstract collection hints (Iterable[str], Mapping[str, int]...). Checked in
# order; Mapping before Iterable since every mapping is iterable.
ABSTRACT_DEFAULTS: tuple[tuple[type, Any], ...] = (
    (Mapping, {}),
    (Set, frozenset()),
    (Iterable, ()),
)


def _is_abstract_collection(declared_type: type) -> bool:
    # Only the ABCs themselves; concrete iterable classes (e.g. pydantic models) can still be recorded
    return declared_type.__module__ == "collections.abc"


def is_terminal(declared_type: type) -> bool:
    """True when members of ``declared_type`` should not be recorded any further."""
    if issubclass(declared_type, Enum) or _is_abstract_collection(declared_type):
        return True
    return any(issubclass(declared_type, known) for known in DEFAULT_VALUES)


def get_default(declared_type: type) -> Optional[Any]:
    """Placeholder for ``declared_type``; ``None`` when no sensible value is known."""
    if declared_type in DEFAULT_VALUES:
        return copy.copy(DEFAULT_VALUES[declared_type])

    if issubclass(declared_type, Enum):
        return next(iter(declared_type), None)

    for base in declared_type.__mro__:
        if base in DEFAULT_VALUES:
            return copy.copy(DEFAULT_VALUES[base])

    if _is_abstract_collection(declared_type):
        for abstract, value in ABSTRACT_DEFAULTS:
            if issubclass(declared_type, abstract):
                return copy.copy(value)

    return None
