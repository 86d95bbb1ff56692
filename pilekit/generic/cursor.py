# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass

__all__ = ("CycleCursor",)


@dataclass(slots=True)
class CycleCursor:
    """Wrap-around position over an ordered store of a given size.

    The cursor knows nothing about the store itself; callers pass the
    current size to every operation. Explicit positioning clamps into
    ``[0, size - 1]``, stepping wraps modulo ``size``.
    """

    position: int = 0

    def clamp(self, size: int) -> int:
        """Re-clamps the position to the current size and returns it."""
        if size <= 0 or self.position < 0:
            self.position = 0
        elif self.position >= size:
            self.position = size - 1
        return self.position

    def set(self, position: int, size: int) -> int:
        self.position = position
        return self.clamp(size)

    def step(self, n: int, size: int) -> int:
        """Moves `n` places (negative moves backward), wrapping at the ends."""
        if size <= 0:
            self.position = 0
            return 0
        self.position = (self.clamp(size) + n) % size
        return self.position
