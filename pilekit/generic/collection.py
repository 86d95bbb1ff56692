# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, Field, PrivateAttr
from typing_extensions import Self

from pilekit._concepts import Collective, Ordering
from pilekit._errors import UnknownIndexError
from pilekit._sentinel import Unset
from pilekit.config import settings
from pilekit.ops.search import SearchPredicate, search_pairs
from pilekit.ops.sort import SortDirection, sort_by_member, sort_pairs
from pilekit.utils import Key, is_int_key

from .cursor import CycleCursor
from .selector import SelectorHandler, SelectorRegistry
from .store import OrderedStore

__all__ = ("Collection",)


class Collection(BaseModel, Collective, Ordering):
    """An ordered, keyed collection read through string selectors.

    Think of it as a list and a dict at once: values appended without a
    key get the next integer key, values set under a string key keep it,
    and iteration follows insertion order. Reads accept more than plain
    keys:

    - an ``int`` reads that key directly;
    - ``":last"`` reads the key ``len(c) - 1``;
    - any other string is matched against the collection's selectors,
      in registration order. Built in are the range splice
      (``"1:3"``, ``"-2:END"``) and the comma pluck (``"0,2,name"``).

    Writes and membership tests never consult selectors.

    Attributes:
        store (OrderedStore): The backing key/value store.
    """

    SORT_ASC: ClassVar[SortDirection] = SortDirection.ASC
    SORT_ASC_PRESERVE_KEYS: ClassVar[SortDirection] = (
        SortDirection.ASC_PRESERVE_KEYS
    )
    SORT_DESC: ClassVar[SortDirection] = SortDirection.DESC
    SORT_DESC_PRESERVE_KEYS: ClassVar[SortDirection] = (
        SortDirection.DESC_PRESERVE_KEYS
    )

    store: OrderedStore = Field(
        default_factory=OrderedStore,
        title="Store",
        description="Ordered key/value storage backing the collection.",
    )
    _selectors: SelectorRegistry = PrivateAttr(
        default_factory=SelectorRegistry
    )
    _cursor: CycleCursor = PrivateAttr(default_factory=CycleCursor)

    def __init__(self, contents: Any = None, /, **data: Any) -> None:
        """Creates a collection, optionally from initial contents.

        Args:
            contents: A sequence (keyed ``0..n-1``), a mapping (keys kept in
                order) or another collection (copied, selectors excluded).
        """
        if contents is not None:
            if isinstance(contents, Collection):
                contents = contents.to_dict()
            data["store"] = OrderedStore(contents=contents)
        super().__init__(**data)

    def __copy__(self) -> Self:
        """Shallow copy that gets its own selectors and cycle cursor."""
        new = super().__copy__()
        new._selectors = self._selectors.copy()
        new._cursor = CycleCursor(position=self._cursor.position)
        return new

    # ------------------------------------------------------------------
    # index resolution
    # ------------------------------------------------------------------

    def resolve(self, key: Any, /) -> Any:
        """Reads `key`: integer index, last-item shortcut or selector.

        Raises:
            UnknownIndexError: If an integer key is absent, the shortcut is
                used on a collection without a last integer key, or no
                selector matches a string key.
            BoundsError: From the range splice selector.
        """
        if is_int_key(key):
            return self.store.get(key)
        if isinstance(key, str):
            if key == settings.LAST_SHORTCUT:
                if not self.store:
                    raise UnknownIndexError.for_key(
                        key, "Cannot read the last item of an empty collection"
                    )
                return self.store.get(len(self.store) - 1)
            return self._selectors.dispatch(self, key)
        raise UnknownIndexError.for_key(key)

    def get(self, key: Any, default: Any = Unset, /) -> Any:
        """Exact-key read that never consults selectors.

        String keys such as ``"name"`` are not readable with ``c["name"]``
        unless a selector claims them; use this instead.

        Raises:
            UnknownIndexError: If the key is absent and no default is given.
        """
        return self.store.get(key, default)

    def assign(self, key: Any, value: Any, /) -> Key:
        """Writes `value` under `key`, or appends it when `key` is None.

        Returns:
            The key the value was stored under.
        """
        if key is None:
            return self.store.append(value)
        return self.store.set(key, value)

    def append(self, value: Any, /) -> Key:
        return self.assign(None, value)

    def exists(self, key: Any, /) -> bool:
        return self.store.has(key)

    def unassign(self, key: Any, /) -> None:
        self.store.remove(key)

    def __getitem__(self, key: Any) -> Any:
        return self.resolve(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.assign(key, value)

    def __delitem__(self, key: Any) -> None:
        self.unassign(key)

    def __contains__(self, key: Any) -> bool:
        """Key membership, like ``isset`` on an array."""
        return self.exists(key)

    # ------------------------------------------------------------------
    # selectors
    # ------------------------------------------------------------------

    def add_selector(
        self,
        pattern: str,
        handler: SelectorHandler,
        *,
        ignore_case: bool | None = None,
    ) -> Self:
        """Registers a selector for string reads.

        `handler` is called as ``handler(collection, key, match)`` where
        `match` is the ``re.Match`` of `pattern` against the key; whatever
        it returns is the result of the read.

        Raises:
            InvalidArgumentError: If the pattern does not compile or the
                handler is not callable.
        """
        self._selectors.register(pattern, handler, ignore_case=ignore_case)
        return self

    @property
    def selectors(self) -> list[str]:
        """Registered patterns in match priority order."""
        return self._selectors.patterns

    # ------------------------------------------------------------------
    # views and export
    # ------------------------------------------------------------------

    def count(self) -> int:
        return len(self.store)

    def __len__(self) -> int:
        return len(self.store)

    def __iter__(self) -> Iterator[Any]:
        """Iterates over values in order."""
        return iter(self.store)

    def keys(self) -> list[Key]:
        return self.store.keys()

    def values(self) -> list[Any]:
        return self.store.values()

    def items(self) -> list[tuple[Key, Any]]:
        return self.store.items()

    def to_dict(self) -> dict[Key, Any]:
        """The collection as an ordered mapping, reflecting any sort."""
        return self.store.snapshot()

    def to_list(self) -> list[Any]:
        """The values as a plain list, keys discarded."""
        return self.store.values()

    # ------------------------------------------------------------------
    # sorting and searching
    # ------------------------------------------------------------------

    def sort(self, direction: Any = Unset, flags: Any = Unset) -> Self:
        """Sorts the values in place.

        Args:
            direction: A `SortDirection`; the ``*_PRESERVE_KEYS`` variants
                keep each value on its key, the others renumber from 0.
            flags: A `SortFlag` (``"default"``, ``"numeric"``, ``"string"``).

        Raises:
            InvalidArgumentError: For an unknown direction or flag, or values
                that cannot be compared.
        """
        self.store.replace(sort_pairs(self.store.items(), direction, flags))
        return self

    def sort_by_member(
        self, member: str, direction: Any = Unset, flags: Any = Unset
    ) -> Self:
        """Sorts items in place by a field, method or callable field.

        Raises:
            UnknownMemberError: If any item lacks `member`; nothing moves.
            InvalidArgumentError: For an unknown direction or flag.
        """
        self.store.replace(
            sort_by_member(self.store.items(), member, direction, flags)
        )
        return self

    def search(
        self, term: Any, predicate: SearchPredicate | None = None
    ) -> Collection:
        """Items matching `term`, under their original keys.

        Raises:
            BadSearchCallbackError: If `predicate` is not callable.
            BadSearchCallbackReturnError: If `predicate` returns a non-bool.
        """
        return self.__class__(
            dict(search_pairs(self.store.items(), term, predicate))
        )

    # ------------------------------------------------------------------
    # cycling
    # ------------------------------------------------------------------

    def cycle_position(self) -> int:
        return self._cursor.clamp(len(self.store))

    def set_cycle_position(self, position: int) -> Self:
        """Moves the cycle cursor, clamping into the valid positions."""
        self._cursor.set(position, len(self.store))
        return self

    def cycle_forward(self, steps: int = 1) -> Any:
        """Steps the cycle cursor forward, wrapping, and returns the value."""
        return self._cycle(steps)

    def cycle_backward(self, steps: int = 1) -> Any:
        """Steps the cycle cursor backward, wrapping, and returns the value."""
        return self._cycle(-steps)

    def _cycle(self, steps: int) -> Any:
        size = len(self.store)
        if size == 0:
            raise UnknownIndexError("Cannot cycle an empty collection")
        return self.store.at(self._cursor.step(steps, size))

    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Same (key, value) pairs in the same order."""
        if isinstance(other, Collection):
            return self.items() == other.items()
        if isinstance(other, Mapping):
            return self.items() == list(other.items())
        return NotImplemented

    def __repr__(self) -> str:
        return f"Collection({self.store.contents!r})"
