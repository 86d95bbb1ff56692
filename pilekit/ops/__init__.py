# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .search import search_pairs, strict_equals
from .sort import (
    SortDirection,
    SortFlag,
    extract_member,
    sort_by_member,
    sort_pairs,
)

__all__ = (
    "SortDirection",
    "SortFlag",
    "extract_member",
    "search_pairs",
    "sort_by_member",
    "sort_pairs",
    "strict_equals",
)
