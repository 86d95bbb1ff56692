# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""String-pattern selectors for collection reads.

A selector pairs a regular expression with a handler. When a string key
is read from a collection and is neither an integer nor the last-item
shortcut, the registry tries each selector in registration order and
hands the first match to its handler::

    c = Collection(["a", "b", "c", "d"])
    c["1:2"]      # range splice  -> Collection(["b", "c"])
    c["0,3"]      # comma pluck   -> Collection({0: "a", 3: "d"})

    c.add_selector(r"^even$", lambda coll, key, match: coll["0,2"])
    c["even"]     # -> Collection({0: "a", 2: "c"})

Registering a pattern that an earlier selector already matches leaves the
new entry unreachable for those keys; entries are never de-duplicated.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pilekit._errors import (
    BoundsError,
    InvalidArgumentError,
    UnknownIndexError,
)
from pilekit.config import settings
from pilekit.utils import to_key

if TYPE_CHECKING:
    from .collection import Collection

__all__ = (
    "PLUCK_PATTERN",
    "SPLICE_PATTERN",
    "Selector",
    "SelectorHandler",
    "SelectorRegistry",
    "pluck",
    "splice",
)

logger = logging.getLogger(__name__)

SelectorHandler = Callable[["Collection", str, re.Match[str]], Any]

SPLICE_PATTERN = r"(?P<start>-?[0-9]+):(?P<end>[0-9]+|END)"
PLUCK_PATTERN = r"([a-z0-9_-]+\s*,)+"


@dataclass(frozen=True)
class Selector:
    pattern: str
    handler: SelectorHandler
    regex: re.Pattern[str] = field(repr=False, compare=False)

    @classmethod
    def create(
        cls,
        pattern: str,
        handler: SelectorHandler,
        *,
        ignore_case: bool | None = None,
    ) -> Selector:
        """Compiles `pattern` and validates `handler`.

        Raises:
            InvalidArgumentError: If the pattern does not compile or the
                handler is not callable.
        """
        if not isinstance(pattern, str):
            raise InvalidArgumentError.from_value(
                pattern,
                expected="str",
                message="Selector pattern must be a string",
            )
        if not callable(handler):
            raise InvalidArgumentError.from_value(
                handler,
                expected="callable",
                message="Selector handler must be callable",
            )
        if ignore_case is None:
            ignore_case = settings.SELECTOR_IGNORE_CASE
        try:
            regex = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
        except re.error as e:
            raise InvalidArgumentError.from_value(
                pattern,
                expected="regular expression",
                message=f"Invalid selector pattern: {e}",
                cause=e,
            )
        return cls(pattern=pattern, handler=handler, regex=regex)

    def match(self, key: str) -> re.Match[str] | None:
        return self.regex.search(key)


class SelectorRegistry:
    """Ordered (pattern, handler) list; first match wins.

    Each collection owns its own registry, seeded with the built-in range
    splice and comma pluck selectors in that order.
    """

    __slots__ = ("_selectors",)

    def __init__(self, *, builtins: bool = True) -> None:
        self._selectors: list[Selector] = []
        if builtins:
            self.register(SPLICE_PATTERN, splice)
            self.register(PLUCK_PATTERN, pluck)

    def register(
        self,
        pattern: str,
        handler: SelectorHandler,
        *,
        ignore_case: bool | None = None,
    ) -> Selector:
        selector = Selector.create(pattern, handler, ignore_case=ignore_case)
        self._selectors.append(selector)
        logger.debug(
            "Registered selector #%d: %r", len(self._selectors), pattern
        )
        return selector

    def find(self, key: str) -> tuple[Selector, re.Match[str]] | None:
        """The first selector matching `key`, with its match."""
        for selector in self._selectors:
            if (m := selector.match(key)) is not None:
                return selector, m
        return None

    def dispatch(self, collection: Collection, key: str) -> Any:
        """Runs the first matching selector's handler on `key`.

        Raises:
            UnknownIndexError: If no selector matches.
        """
        if (found := self.find(key)) is None:
            raise UnknownIndexError.for_key(key)
        selector, m = found
        logger.debug("Key %r matched selector %r", key, selector.pattern)
        return selector.handler(collection, key, m)

    @property
    def patterns(self) -> list[str]:
        return [s.pattern for s in self._selectors]

    def copy(self) -> SelectorRegistry:
        new = SelectorRegistry(builtins=False)
        new._selectors = list(self._selectors)
        return new

    def __len__(self) -> int:
        return len(self._selectors)

    def __iter__(self) -> Iterator[Selector]:
        return iter(list(self._selectors))

    def __repr__(self) -> str:
        return f"SelectorRegistry(patterns={self.patterns})"


def splice(
    collection: Collection, key: str, match: re.Match[str]
) -> Collection:
    """Inclusive positional range ``start:end``, re-keyed from 0.

    ``END`` stands for the last position; a negative start counts back
    from the end. An end past the last position is clamped.

    Raises:
        BoundsError: ``START_OUT_OF_RANGE`` when the adjusted start is not
            a valid position, ``START_GT_END`` when it exceeds the end.
    """
    size = len(collection)
    start = int(match.group("start"))
    end_token = match.group("end")
    end = size - 1 if end_token.upper() == "END" else int(end_token)

    if start < 0:
        start = size - abs(start)

    if start >= size or start < 0:
        raise BoundsError(
            f"Start index ({start}) is beyond the end of the collection",
            code=BoundsError.Code.START_OUT_OF_RANGE,
            start=start,
            end=end,
        )
    if start > end:
        raise BoundsError(
            f"Start index is greater than end index: {start} > {end}",
            code=BoundsError.Code.START_GT_END,
            start=start,
            end=end,
        )

    if end >= size:
        end = size - 1

    return collection.__class__(collection.values()[start : end + 1])


def pluck(
    collection: Collection, key: str, match: re.Match[str]
) -> Collection:
    """Entries named in a comma separated key, in request order.

    Empty tokens and tokens naming absent keys are skipped; the result
    keeps the original keys.
    """
    out: dict[Any, Any] = {}
    for token in key.split(","):
        token = token.strip()
        if not token or not collection.exists(token):
            continue
        out[to_key(token)] = collection.store.get(token)
    return collection.__class__(out)
