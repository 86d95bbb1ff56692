# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pilekit._errors import (
    BadSearchCallbackError,
    BadSearchCallbackReturnError,
)
from pilekit.utils import Key

__all__ = (
    "SearchPredicate",
    "search_pairs",
    "strict_equals",
)

logger = logging.getLogger(__name__)

SearchPredicate = Callable[[Any, Any], bool]


def strict_equals(term: Any, item: Any) -> bool:
    """Equality that also requires the same type (``1`` is not ``1.0``)."""
    if item is term:
        return True
    return type(item) is type(term) and bool(item == term)


def search_pairs(
    pairs: Iterable[tuple[Key, Any]],
    term: Any,
    predicate: SearchPredicate | None = None,
) -> list[tuple[Key, Any]]:
    """Every (key, value) pair whose value matches `term`, in order.

    Args:
        pairs: The entries to scan.
        term: What to look for.
        predicate: Called as ``predicate(term, item)``; must return a bool.
            Defaults to `strict_equals`.

    Raises:
        BadSearchCallbackError: If `predicate` is not callable.
        BadSearchCallbackReturnError: If `predicate` returns a non-bool.
    """
    if predicate is None:
        predicate = strict_equals
    elif not callable(predicate):
        raise BadSearchCallbackError(
            "Search predicate must be callable, "
            f"not {type(predicate).__name__}",
            details={"predicate": repr(predicate)},
        )

    found = []
    for key, item in pairs:
        result = predicate(term, item)
        if not isinstance(result, bool):
            raise BadSearchCallbackReturnError(
                "Search predicate must return a bool, "
                f"got {type(result).__name__}",
                details={"key": key, "returned": repr(result)},
            )
        if result:
            found.append((key, item))
    logger.debug("Search for %r matched %d item(s)", term, len(found))
    return found
