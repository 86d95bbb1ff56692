# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from pilekit._errors import UnknownIndexError
from pilekit._sentinel import Undefined, Unset
from pilekit.utils import Key, is_int_key, to_key

__all__ = (
    "OrderedStore",
    "validate_contents",
)


def validate_contents(value: Any, /) -> dict[Key, Any]:
    """Normalize initial contents into an insertion-ordered key map.

    Sequences are keyed ``0..n-1``; mappings keep their keys (normalized
    with `to_key`) in iteration order; ``None`` means empty.
    """
    if value is None:
        return {}
    if isinstance(value, OrderedStore):
        return value.snapshot()
    if isinstance(value, Mapping):
        out: dict[Key, Any] = {}
        for k, v in value.items():
            out[to_key(k)] = v
        return out
    if isinstance(value, (str, bytes)):
        return {0: value}
    if isinstance(value, Iterable):
        return dict(enumerate(value))
    return {0: value}


class OrderedStore(BaseModel):
    """Insertion-ordered mapping from int/str keys to arbitrary values.

    Re-assigning an existing key replaces the value in place; the entry
    keeps its position. Appending assigns the next integer key, which is
    one past the largest integer key ever observed and never moves back
    when entries are removed.

    Attributes:
        contents (dict[int | str, Any]):
            The entries in iteration order.
    """

    contents: dict[Key, Any] = Field(
        default_factory=dict,
        title="Contents",
        description="Entries of the store in iteration order.",
    )
    _next_index: int = PrivateAttr(default=0)

    def model_post_init(self, __context: Any) -> None:
        """Initialize the next auto-index from the initial keys."""
        super().model_post_init(__context)
        self._next_index = self._compute_next_index()

    @field_validator("contents", mode="before")
    def _validate_contents(cls, value: Any) -> dict[Key, Any]:
        return validate_contents(value)

    def _compute_next_index(self) -> int:
        ints = [k for k in self.contents if is_int_key(k)]
        return max(0, max(ints) + 1) if ints else 0

    def _lookup(self, key: Any, /) -> Any:
        """The stored form of `key`, or `Undefined` when it is absent."""
        if not isinstance(key, (int, str)):
            return Undefined
        key = to_key(key)
        return key if key in self.contents else Undefined

    def get(self, key: Any, default: Any = Unset, /) -> Any:
        """Returns the value stored under `key`.

        Raises:
            UnknownIndexError: If the key is absent and no default is given.
        """
        if (found := self._lookup(key)) is not Undefined:
            return self.contents[found]
        if default is not Unset:
            return default
        raise UnknownIndexError.for_key(key, f"Undefined index: {key!r}")

    def set(self, key: Any, value: Any, /) -> Key:
        """Stores `value` under the normalized `key` and returns that key."""
        key = to_key(key)
        self.contents[key] = value
        if is_int_key(key) and key >= self._next_index:
            self._next_index = key + 1
        return key

    def append(self, value: Any, /) -> int:
        """Stores `value` under the next integer key and returns that key."""
        key = self._next_index
        self.contents[key] = value
        self._next_index = key + 1
        return key

    def has(self, key: Any, /) -> bool:
        return self._lookup(key) is not Undefined

    def remove(self, key: Any, /) -> None:
        """Removes `key` if present; a missing key is a no-op."""
        if (found := self._lookup(key)) is not Undefined:
            del self.contents[found]

    def replace(self, pairs: Iterable[tuple[Key, Any]], /) -> None:
        """Swaps in new contents wholesale, recomputing the auto-index."""
        self.contents = dict(pairs)
        self._next_index = self._compute_next_index()

    def size(self) -> int:
        return len(self.contents)

    def keys(self) -> list[Key]:
        return list(self.contents)

    def values(self) -> list[Any]:
        return list(self.contents.values())

    def items(self) -> list[tuple[Key, Any]]:
        return list(self.contents.items())

    def at(self, position: int, /) -> Any:
        """Returns the value at an ordinal position (not a key).

        Raises:
            UnknownIndexError: If the position is out of range.
        """
        if not 0 <= position < len(self.contents):
            raise UnknownIndexError.for_key(
                position, f"Position {position} out of range"
            )
        return list(self.contents.values())[position]

    def snapshot(self) -> dict[Key, Any]:
        """A shallow copy of the full ordered mapping."""
        return dict(self.contents)

    def __len__(self) -> int:
        return len(self.contents)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self.contents.values()))

    def __repr__(self) -> str:
        return f"OrderedStore(contents={self.contents!r})"
