# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .collection import Collection
from .cursor import CycleCursor
from .selector import Selector, SelectorRegistry, pluck, splice
from .store import OrderedStore

__all__ = (
    "Collection",
    "CycleCursor",
    "OrderedStore",
    "Selector",
    "SelectorRegistry",
    "pluck",
    "splice",
)
