# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging
from importlib import import_module
from typing import TYPE_CHECKING

from ._errors import (
    BadSearchCallbackError,
    BadSearchCallbackReturnError,
    BoundsError,
    InvalidArgumentError,
    PileError,
    SearchError,
    UnknownIndexError,
    UnknownMemberError,
)
from ._sentinel import Undefined, Unset
from .config import settings
from .version import __version__

if TYPE_CHECKING:
    from .generic.collection import Collection
    from .generic.cursor import CycleCursor
    from .generic.selector import Selector, SelectorRegistry
    from .generic.store import OrderedStore
    from .ops.sort import SortDirection, SortFlag

logger = logging.getLogger(__name__)
logger.setLevel(settings.LOG_LEVEL)

_lazy_imports = {}


def _get_obj(name: str, module: str):
    global _lazy_imports
    obj_ = getattr(import_module(f"{__name__}.{module}"), name)

    _lazy_imports[name] = obj_
    return obj_


def __getattr__(name: str):
    global _lazy_imports
    if name in _lazy_imports:
        return _lazy_imports[name]

    match name:
        case "Collection":
            return _get_obj("Collection", "generic.collection")
        case "OrderedStore":
            return _get_obj("OrderedStore", "generic.store")
        case "CycleCursor":
            return _get_obj("CycleCursor", "generic.cursor")
        case "Selector":
            return _get_obj("Selector", "generic.selector")
        case "SelectorRegistry":
            return _get_obj("SelectorRegistry", "generic.selector")
        case "SortDirection":
            return _get_obj("SortDirection", "ops.sort")
        case "SortFlag":
            return _get_obj("SortFlag", "ops.sort")
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = (
    "__version__",
    "BadSearchCallbackError",
    "BadSearchCallbackReturnError",
    "BoundsError",
    "Collection",
    "CycleCursor",
    "InvalidArgumentError",
    "OrderedStore",
    "PileError",
    "SearchError",
    "Selector",
    "SelectorRegistry",
    "SortDirection",
    "SortFlag",
    "Undefined",
    "UnknownIndexError",
    "UnknownMemberError",
    "Unset",
    "logger",
    "settings",
)
