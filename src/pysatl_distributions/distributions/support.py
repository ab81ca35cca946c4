"""
Support objects for univariate distributions.

- :class:`ContinuousSupport` – an interval of the extended real line.
- :class:`IntegerLatticeDiscreteSupport` – consecutive integers, optionally
  bounded on either side.

Both expose ``lower_bound``, ``upper_bound`` and ``is_connected``, which is all
the quantile search needs to know about a support.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import floor, inf, isfinite
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_distributions.types import BoolArray, ContinuousSupportShape1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class Support(Protocol):
    @property
    def lower_bound(self) -> float: ...
    @property
    def upper_bound(self) -> float: ...
    @property
    def is_connected(self) -> bool: ...

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


@dataclass(frozen=True, slots=True)
class ContinuousSupport:
    """
    Interval of the real line between ``left`` and ``right``.

    Infinite ends are always open. Families in this package only use closed
    finite ends; ``left_closed`` and ``right_closed`` exist for user-defined
    distributions.
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        if not self.left <= self.right:
            raise ValueError(
                f"Support bounds must satisfy left <= right, got [{self.left}, {self.right}]"
            )
        object.__setattr__(self, "left_closed", self.left_closed and isfinite(self.left))
        object.__setattr__(self, "right_closed", self.right_closed and isfinite(self.right))

    @property
    def lower_bound(self) -> float:
        return self.left

    @property
    def upper_bound(self) -> float:
        return self.right

    @property
    def is_connected(self) -> bool:
        return True

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        above = xf >= self.left if self.left_closed else xf > self.left
        below = xf <= self.right if self.right_closed else xf < self.right
        inside = above & below
        return bool(inside) if inside.ndim == 0 else cast(BoolArray, inside)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def shape(self) -> ContinuousSupportShape1D:
        if self.left == self.right:
            return ContinuousSupportShape1D.SINGLE_POINT
        bounded_left, bounded_right = isfinite(self.left), isfinite(self.right)
        if bounded_left and bounded_right:
            return ContinuousSupportShape1D.BOUNDED_INTERVAL
        if bounded_left:
            return ContinuousSupportShape1D.RAY_RIGHT
        if bounded_right:
            return ContinuousSupportShape1D.RAY_LEFT
        return ContinuousSupportShape1D.REAL_LINE


@dataclass(frozen=True, slots=True)
class IntegerLatticeDiscreteSupport:
    """
    Consecutive integers ``min_k, min_k + 1, ..., max_k``.

    A ``None`` bound means the lattice is unbounded on that side.
    """

    min_k: int | None = None
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.min_k is not None and self.max_k is not None and self.min_k > self.max_k:
            raise ValueError(
                f"Support bounds must satisfy min_k <= max_k, got [{self.min_k}, {self.max_k}]"
            )

    @property
    def lower_bound(self) -> float:
        return -inf if self.min_k is None else self.min_k

    @property
    def upper_bound(self) -> float:
        return inf if self.max_k is None else self.max_k

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def is_left_bounded(self) -> bool:
        return self.min_k is not None

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        with np.errstate(invalid="ignore"):
            mask = (xf == np.floor(xf)) & np.isfinite(xf)
            if self.min_k is not None:
                mask &= xf >= self.min_k
            if self.max_k is not None:
                mask &= xf <= self.max_k

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def iter_leq(self, x: Number) -> Iterator[int]:
        """Iterate over lattice points ``<= x`` in increasing order."""
        if self.min_k is None:
            raise RuntimeError(
                "iter_leq is not supported for a left-unbounded IntegerLatticeDiscreteSupport."
            )
        if not x >= self.min_k:
            return iter(())
        stop = self.upper_bound if x == inf else min(floor(float(x)), self.upper_bound)
        return iter(range(self.min_k, int(stop) + 1))


__all__ = [
    "Support",
    "ContinuousSupport",
    "IntegerLatticeDiscreteSupport",
]
