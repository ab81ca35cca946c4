"""
Quantile Search
===============

Generic inversion of monotone characteristics, used by every distribution
that has no closed-form ``ppf``/``isf``.

Both searches look for the **smallest** argument satisfying a monotone
predicate (``False`` below the answer, ``True`` at and above it), e.g.
``cdf(x) >= p`` or ``sf(x) <= q``. Flat stretches of the characteristic
therefore resolve to their left end, which is the usual quantile convention
for discrete distributions.

- :func:`find_smallest_real` — bracket by doubling (towards infinite bounds) or
  halving (towards finite bounds), then bisect down to a couple of ulps.
- :func:`find_smallest_integer` — the same on integers.

Tolerances
----------
Bisection stops once ``hi - lo <= rel_tol * max(|lo|, |hi|) + abs_tol``, with
``rel_tol = 2**-52`` and ``abs_tol`` the smallest normal double by default, or
once the midpoint is no longer strictly inside the bracket. Iteration bounds
cover the whole exponent range of IEEE-754 doubles, so exceeding them means
the predicate is not monotone.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from math import ceil, floor, inf, isfinite, isnan
from typing import TYPE_CHECKING

import numpy as np

from pysatl_distributions.errors import ConvergenceError, InvalidProbabilityError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import Any

    import numpy.typing as npt

log = logging.getLogger(__name__)

REL_TOL: float = float(np.finfo(np.float64).eps)
ABS_TOL: float = float(np.finfo(np.float64).tiny)
MAX_FLOAT: float = float(np.finfo(np.float64).max)
MAX_EXPAND: int = 2200
MAX_ITER: int = 2200


def check_probability(p: float) -> float:
    """Return ``p`` as a float, raising :class:`InvalidProbabilityError` outside ``[0, 1]``."""
    value = float(p)
    if isnan(value) or value < 0.0 or value > 1.0:
        raise InvalidProbabilityError(p)
    return value


def check_probabilities(p: Any) -> npt.NDArray[np.float64]:
    """Array version of :func:`check_probability`."""
    values = np.asarray(p, dtype=float)
    invalid = ~((values >= 0.0) & (values <= 1.0))
    if np.any(invalid):
        raise InvalidProbabilityError(float(values[invalid][0]) if values.ndim else p)
    return values


def _start_point(lower: float, upper: float, start: float | None) -> float:
    if start is not None and isfinite(start) and lower <= start <= upper:
        return start
    if isfinite(lower) and isfinite(upper):
        return 0.5 * lower + 0.5 * upper
    if isfinite(lower):
        return min(lower + max(1.0, abs(lower)), MAX_FLOAT)
    if isfinite(upper):
        return max(upper - max(1.0, abs(upper)), -MAX_FLOAT)
    return 0.0


def find_smallest_real(
    predicate: Callable[[float], bool],
    lower: float,
    upper: float,
    *,
    start: float | None = None,
    rel_tol: float = REL_TOL,
    abs_tol: float = ABS_TOL,
    max_expand: int = MAX_EXPAND,
    max_iter: int = MAX_ITER,
) -> float:
    """
    Smallest ``x`` in ``[lower, upper]`` for which a monotone predicate holds.

    Parameters
    ----------
    predicate : Callable[[float], bool]
        Monotone predicate: once true it stays true for larger arguments.
    lower, upper : float
        Search domain, possibly infinite.
    start : float, optional
        Initial guess, e.g. the distribution mean. Ignored if not finite or
        outside the domain.
    rel_tol, abs_tol : float
        Bracket width at which bisection stops.
    max_expand, max_iter : int
        Bounds on the bracketing and bisection iterations.

    Returns
    -------
    float
        The right end of the final bracket, i.e. an argument satisfying the
        predicate. Returns ``upper`` if the predicate never holds inside the
        domain, and ``-MAX_FLOAT`` if it holds for every finite argument of an
        unbounded-below domain.

    Raises
    ------
    ConvergenceError
        If the iteration bounds are exceeded.
    """
    if isfinite(lower) and predicate(lower):
        return lower

    x0 = _start_point(lower, upper, start)
    if predicate(x0):
        lo, hi = _expand_down(predicate, lower, x0, max_expand)
        if lo is None:
            return hi
    else:
        lo, hi_or_none = _expand_up(predicate, upper, x0, max_expand)
        if hi_or_none is None:
            return upper
        hi = hi_or_none

    for it in range(max_iter):
        width = hi - lo
        if width <= rel_tol * max(abs(lo), abs(hi)) + abs_tol:
            log.debug("bisection converged after %d iterations at %r", it, hi)
            return hi
        mid = 0.5 * lo + 0.5 * hi
        if not lo < mid < hi:
            return hi
        if predicate(mid):
            hi = mid
        else:
            lo = mid
    raise ConvergenceError(
        f"Bisection did not converge in {max_iter} iterations, last [{lo}, {hi}]"
    )


def _expand_down(
    predicate: Callable[[float], bool], lower: float, hi: float, max_expand: int
) -> tuple[float | None, float]:
    """Find ``lo < hi`` with ``predicate(lo)`` false, keeping ``predicate(hi)`` true."""
    if isfinite(lower):
        for _ in range(max_expand):
            lo = lower + 0.5 * (hi - lower)
            if lo <= lower or lo >= hi:
                return lower, hi
            if not predicate(lo):
                return lo, hi
            hi = lo
    else:
        step = max(1.0, abs(hi))
        for _ in range(max_expand):
            lo = max(hi - step, -MAX_FLOAT)
            if not predicate(lo):
                return lo, hi
            if lo == -MAX_FLOAT:
                return None, lo
            hi = lo
            step *= 2.0
    raise ConvergenceError(f"Could not bracket from below in {max_expand} steps, last {hi}")


def _expand_up(
    predicate: Callable[[float], bool], upper: float, lo: float, max_expand: int
) -> tuple[float, float | None]:
    """Find ``hi > lo`` with ``predicate(hi)`` true, keeping ``predicate(lo)`` false."""
    if isfinite(upper):
        for _ in range(max_expand):
            hi = upper - 0.5 * (upper - lo)
            if hi >= upper or hi <= lo:
                return lo, upper if predicate(upper) else None
            if predicate(hi):
                return lo, hi
            lo = hi
    else:
        step = max(1.0, abs(lo))
        for _ in range(max_expand):
            hi = min(lo + step, MAX_FLOAT)
            if predicate(hi):
                return lo, hi
            if hi == MAX_FLOAT:
                return lo, None
            lo = hi
            step *= 2.0
    raise ConvergenceError(f"Could not bracket from above in {max_expand} steps, last {lo}")


def find_smallest_integer(
    predicate: Callable[[int], bool],
    lower: float,
    upper: float,
    *,
    hints: Iterable[float] = (),
    max_expand: int = MAX_EXPAND,
    max_iter: int = MAX_ITER,
) -> float:
    """
    Smallest integer ``k`` in ``[lower, upper]`` for which a monotone predicate holds.

    Parameters
    ----------
    predicate : Callable[[int], bool]
        Monotone predicate over integers.
    lower, upper : float
        Integer bounds of the search, possibly infinite.
    hints : Iterable[float]
        Candidate points used to narrow the initial bracket (e.g. Chebyshev
        bounds around the mean). Non-finite hints are ignored.

    Returns
    -------
    float
        The smallest satisfying integer (as ``float`` so that infinite bounds
        can be returned), or ``upper`` if the predicate never holds.
    """
    lo: int | None = None
    hi: int | None = None
    if isfinite(lower):
        lo = int(lower) - 1
        if predicate(lo + 1):
            return float(lo + 1)
    if isfinite(upper):
        hi = int(upper)

    for hint in hints:
        if not isfinite(hint):
            continue
        k = int(floor(hint)) if hint < 0 else int(ceil(hint))
        if (lo is not None and k <= lo) or (hi is not None and k >= hi):
            continue
        if predicate(k):
            hi = k
        else:
            lo = k

    if lo is None:
        anchor = hi if hi is not None else 0
        if hi is None and not predicate(anchor):
            lo = anchor
        else:
            hi = anchor
            step = 1
            for _ in range(max_expand):
                candidate = hi - step
                if not predicate(candidate):
                    lo = candidate
                    break
                hi = candidate
                step *= 2
            else:
                raise ConvergenceError("Could not bracket the integer search from below")
    if hi is None:
        step = 1
        for _ in range(max_expand):
            candidate = lo + step
            if predicate(candidate):
                hi = candidate
                break
            lo = candidate
            step *= 2
        else:
            return upper

    for _ in range(max_iter):
        if hi - lo <= 1:
            return float(hi)
        mid = lo + (hi - lo) // 2
        if predicate(mid):
            hi = mid
        else:
            lo = mid
    raise ConvergenceError(f"Integer bisection did not converge in {max_iter} iterations")


__all__ = [
    "check_probability",
    "check_probabilities",
    "find_smallest_real",
    "find_smallest_integer",
]
