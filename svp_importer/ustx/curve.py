from __future__ import annotations

"""Sampled expression curves attached to voice parts."""

from bisect import bisect_left, bisect_right
from typing import List, Optional


class Curve:
    """A piecewise-linear curve stored as sorted (x, y) samples in part ticks."""

    def __init__(self, abbr: str) -> None:
        self.abbr = abbr
        self.xs: List[int] = []
        self.ys: List[int] = []

    def __len__(self) -> int:
        return len(self.xs)

    def is_empty(self) -> bool:
        return not self.xs

    def _index_of(self, x: int) -> Optional[int]:
        index = bisect_left(self.xs, x)
        if index < len(self.xs) and self.xs[index] == x:
            return index
        return None

    def _put(self, x: int, y: int, *, overwrite: bool = True) -> None:
        index = bisect_left(self.xs, x)
        if index < len(self.xs) and self.xs[index] == x:
            if overwrite:
                self.ys[index] = y
            return
        self.xs.insert(index, x)
        self.ys.insert(index, y)

    def _delete_between(self, x0: int, x1: int) -> None:
        start = bisect_right(self.xs, x0)
        end = bisect_left(self.xs, x1)
        del self.xs[start:end]
        del self.ys[start:end]

    def set(self, x: int, y: int, last_x: int, last_y: int) -> None:
        """Draw a segment from (last_x, last_y) to (x, y).

        Samples strictly between the two ends are removed. The sample at x is
        written unconditionally; the one at last_x only if none exists yet.
        """
        if x == last_x:
            self._put(x, y)
            return
        low, high = (last_x, x) if last_x < x else (x, last_x)
        self._delete_between(low, high)
        self._put(x, y)
        self._put(last_x, last_y, overwrite=False)

    def sample(self, x: int) -> int:
        """Linearly interpolated value at x; the ends hold their value."""
        if not self.xs:
            return 0
        if x <= self.xs[0]:
            return self.ys[0]
        if x >= self.xs[-1]:
            return self.ys[-1]
        index = self._index_of(x)
        if index is not None:
            return self.ys[index]
        right = bisect_left(self.xs, x)
        x0, x1 = self.xs[right - 1], self.xs[right]
        y0, y1 = self.ys[right - 1], self.ys[right]
        return int(round(y0 + (y1 - y0) * (x - x0) / (x1 - x0)))

    def is_sorted(self) -> bool:
        return all(a <= b for a, b in zip(self.xs, self.xs[1:]))
