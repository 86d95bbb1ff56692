# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum, IntEnum
from typing import Any

from pilekit._errors import InvalidArgumentError, UnknownMemberError
from pilekit._sentinel import Undefined, Unset
from pilekit.config import settings
from pilekit.utils import Key, to_number

__all__ = (
    "SortDirection",
    "SortFlag",
    "extract_member",
    "sort_by_member",
    "sort_pairs",
    "validate_direction",
    "validate_flag",
)

logger = logging.getLogger(__name__)

Pairs = list[tuple[Key, Any]]


class SortDirection(IntEnum):
    ASC = 1
    ASC_PRESERVE_KEYS = 2
    DESC = 3
    DESC_PRESERVE_KEYS = 4

    @property
    def descending(self) -> bool:
        return self in (SortDirection.DESC, SortDirection.DESC_PRESERVE_KEYS)

    @property
    def preserve_keys(self) -> bool:
        return self in (
            SortDirection.ASC_PRESERVE_KEYS,
            SortDirection.DESC_PRESERVE_KEYS,
        )


class SortFlag(str, Enum):
    """How values are compared while sorting."""

    DEFAULT = "default"
    NUMERIC = "numeric"
    STRING = "string"


def validate_direction(value: Any = Unset, /) -> SortDirection:
    if value is Unset:
        value = settings.DEFAULT_SORT_DIRECTION
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError.from_value(
            value,
            expected="SortDirection",
            message=f"Unknown sort direction: {value!r}",
        )
    try:
        return SortDirection(value)
    except ValueError as e:
        raise InvalidArgumentError.from_value(
            value,
            expected="SortDirection",
            message=f"Unknown sort direction: {value!r}",
            cause=e,
        )


def validate_flag(value: Any = Unset, /) -> SortFlag:
    if value is Unset:
        value = settings.DEFAULT_SORT_FLAG
    try:
        return SortFlag(value)
    except ValueError as e:
        raise InvalidArgumentError.from_value(
            value,
            expected="default | numeric | string",
            message=f"Unknown sort flag: {value!r}",
            cause=e,
        )


_COMPARISON_KEYS: dict[SortFlag, Callable[[Any], Any]] = {
    SortFlag.DEFAULT: lambda v: v,
    SortFlag.NUMERIC: to_number,
    SortFlag.STRING: str,
}


def _order(
    pairs: Pairs,
    sort_values: list[Any],
    direction: SortDirection,
    flag: SortFlag,
) -> Pairs:
    """Orders `pairs` by the parallel `sort_values`, stable both ways."""
    compare = _COMPARISON_KEYS[flag]
    keyed = [compare(v) for v in sort_values]
    try:
        positions = sorted(
            range(len(pairs)),
            key=keyed.__getitem__,
            reverse=direction.descending,
        )
    except TypeError as e:
        raise InvalidArgumentError(
            f"Values cannot be compared with the {flag.value!r} flag: {e}",
            details={"flag": flag.value},
            cause=e,
        )
    ordered = [pairs[i] for i in positions]
    if direction.preserve_keys:
        return ordered
    return [(i, value) for i, (_, value) in enumerate(ordered)]


def sort_pairs(
    pairs: Pairs,
    direction: Any = Unset,
    flags: Any = Unset,
) -> Pairs:
    """Sorts (key, value) pairs by value.

    Reindexing directions renumber the result from 0; preserve-keys
    directions keep each value on its original key.

    Raises:
        InvalidArgumentError: For an unknown direction or flag, or values
            that cannot be compared under the chosen flag.
    """
    direction = validate_direction(direction)
    flag = validate_flag(flags)
    logger.debug(
        "Sorting %d items (%s, %s)", len(pairs), direction.name, flag.value
    )
    return _order(pairs, [v for _, v in pairs], direction, flag)


# Member extraction strategies, tried in order. Each returns Undefined
# when it does not apply to the item.


def _field_value(item: Any, member: str) -> Any:
    if isinstance(item, Mapping):
        if member not in item:
            return Undefined
        value = item[member]
    else:
        value = getattr(item, member, Undefined)
    if value is Undefined or callable(value):
        return Undefined
    return value


def _method_value(item: Any, member: str) -> Any:
    if isinstance(item, Mapping):
        return Undefined
    if not callable(getattr(type(item), member, None)):
        return Undefined
    return getattr(item, member)()


def _callable_field_value(item: Any, member: str) -> Any:
    if isinstance(item, Mapping):
        value = item.get(member, Undefined)
    else:
        value = getattr(item, member, Undefined)
    if value is Undefined or not callable(value):
        return Undefined
    return value()


_MEMBER_STRATEGIES = (_field_value, _method_value, _callable_field_value)


def extract_member(item: Any, member: str, key: Key | None = None) -> Any:
    """The comparison value of `member` on `item`.

    Tried in order: a plain (non-callable) field or mapping key, a
    zero-argument method of the item's type, a field holding a callable.

    Raises:
        UnknownMemberError: If no strategy resolves the member.
    """
    for strategy in _MEMBER_STRATEGIES:
        value = strategy(item, member)
        if value is not Undefined:
            return value
    raise UnknownMemberError(
        f'Unknown member "{member}" in item with key: "{key}"',
        details={"member": member, "key": key},
    )


def sort_by_member(
    pairs: Pairs,
    member: str,
    direction: Any = Unset,
    flags: Any = Unset,
) -> Pairs:
    """Sorts (key, value) pairs by a member extracted from each value.

    All members are extracted before anything is ordered, so a failure
    leaves the caller's data untouched.

    Raises:
        InvalidArgumentError: For an unknown direction or flag.
        UnknownMemberError: If any item lacks the member.
    """
    direction = validate_direction(direction)
    flag = validate_flag(flags)
    sort_values = [extract_member(value, member, key) for key, value in pairs]
    logger.debug(
        "Sorting %d items by member %r (%s, %s)",
        len(pairs),
        member,
        direction.name,
        flag.value,
    )
    return _order(pairs, sort_values, direction, flag)
