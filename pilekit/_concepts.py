# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from abc import ABC, abstractmethod

__all__ = (
    "Collective",
    "Ordering",
)


class Collective(ABC):
    """Base for keyed collections read through an index resolver."""

    @abstractmethod
    def resolve(self, key, /):
        pass

    @abstractmethod
    def assign(self, key, value, /):
        pass

    @abstractmethod
    def exists(self, key, /) -> bool:
        pass

    @abstractmethod
    def unassign(self, key, /):
        pass


class Ordering(ABC):
    """Base for collections that can be reordered in place."""

    @abstractmethod
    def sort(self, direction, flags):
        pass

    @abstractmethod
    def sort_by_member(self, member, direction, flags):
        pass
