# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import re
from typing import Any

from ._errors import InvalidArgumentError

__all__ = (
    "Key",
    "is_int_key",
    "to_key",
    "to_number",
)

Key = int | str

# canonical decimal integers only: "0", "27", "-3"; never "027", "+1", " 1"
_INT_KEY = re.compile(r"-?[1-9][0-9]*|0")


def is_int_key(value: Any, /) -> bool:
    """True for a structurally integer value (``bool`` excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


def to_key(value: Any, /) -> Key:
    """Normalize a write key.

    Integer-like strings become ints so ``"27"`` and ``27`` address the
    same entry; bools become ``0``/``1``.

    Raises:
        InvalidArgumentError: If the key is neither int nor str.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if _INT_KEY.fullmatch(value):
            return int(value)
        return value
    raise InvalidArgumentError.from_value(
        value,
        expected="int | str",
        message=f"Unsupported key type: {type(value).__name__}",
    )


def to_number(value: Any, /) -> float:
    """Coerce a value for numeric comparison.

    Non-numeric strings count as ``0``.

    Raises:
        InvalidArgumentError: If the value has no numeric reading.
    """
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    raise InvalidArgumentError.from_value(
        value,
        expected="int | float | str",
        message=f"Cannot compare {type(value).__name__} numerically",
    )
