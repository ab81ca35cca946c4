"""
Default Conversions
===================

Fitters for the edges of the characteristic graph. Each fitter receives a
distribution, resolves the source characteristic through the distribution's
computation strategy and returns a :class:`FittedComputationMethod` for the
target characteristic.

- complements: ``cdf <-> sf``;
- logarithms: ``pdf <-> logpdf``, ``pmf <-> logpmf``;
- summation: ``pmf -> cdf`` on a left-bounded integer lattice;
- quantile searches: ``cdf -> ppf`` and ``sf -> isf`` (continuous and
  discrete), see :mod:`pysatl_distributions.distributions.root_finding`.

The complements are the fallback of last resort: families are expected to
provide a direct ``sf`` whenever ``1 - cdf`` cancels in the right tail.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import isfinite, sqrt
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_distributions.distributions.computation import (
    FittedComputationMethod,
    elementwise,
)
from pysatl_distributions.distributions.root_finding import (
    check_probability,
    find_smallest_integer,
    find_smallest_real,
)
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_distributions.distributions.distribution import Distribution
    from pysatl_distributions.types import GenericCharacteristicName

_SEARCH_OPTIONS = ("rel_tol", "abs_tol", "max_expand", "max_iter")


def _resolve(distribution: Distribution, name: GenericCharacteristicName) -> Callable[..., Any]:
    """
    Resolve a characteristic of the distribution through its computation strategy.

    Raises
    ------
    RuntimeError
        If the distribution does not provide a computation strategy.
    """
    try:
        return distribution.query_method(name)
    except AttributeError as e:
        raise RuntimeError(
            "Distribution must provide computation_strategy.query_method(name, distribution)."
        ) from e


def _scalar(func: Callable[..., Any]) -> Callable[[float], float]:
    def _wrap(x: float) -> float:
        return float(func(x))

    return _wrap


def _moment_hint(distribution: Distribution, name: GenericCharacteristicName) -> float | None:
    """Analytical moment if the family provides a finite one, else ``None``."""
    computation = distribution.analytical_computations.get(name)
    if computation is None:
        return None
    value = float(computation(None))
    return value if isfinite(value) else None


def _search_options(options: dict[str, Any]) -> dict[str, Any]:
    return {key: options[key] for key in _SEARCH_OPTIONS if key in options}


# --- Complements and logarithms -----------------------------------------------


def fit_cdf_to_sf(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[Any, Any]:
    """Survival function as the complement ``1 - cdf``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _sf(x: Any, **options: Any) -> Any:
        return 1.0 - cdf_func(x, **options)

    return FittedComputationMethod(
        target=CharacteristicName.SF, source=CharacteristicName.CDF, func=_sf
    )


def fit_sf_to_cdf(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[Any, Any]:
    """Distribution function as the complement ``1 - sf``."""
    sf_func = _resolve(distribution, CharacteristicName.SF)

    def _cdf(x: Any, **options: Any) -> Any:
        return 1.0 - sf_func(x, **options)

    return FittedComputationMethod(
        target=CharacteristicName.CDF, source=CharacteristicName.SF, func=_cdf
    )


def _fit_log(
    distribution: Distribution, source: CharacteristicName, target: CharacteristicName
) -> FittedComputationMethod[Any, Any]:
    func = _resolve(distribution, source)

    def _log(x: Any, **options: Any) -> Any:
        with np.errstate(divide="ignore"):
            result = np.log(func(x, **options))
        return float(result) if np.ndim(result) == 0 else result

    return FittedComputationMethod(target=target, source=source, func=_log)


def _fit_exp(
    distribution: Distribution, source: CharacteristicName, target: CharacteristicName
) -> FittedComputationMethod[Any, Any]:
    func = _resolve(distribution, source)

    def _exp(x: Any, **options: Any) -> Any:
        result = np.exp(func(x, **options))
        return float(result) if np.ndim(result) == 0 else result

    return FittedComputationMethod(target=target, source=source, func=_exp)


def fit_pdf_to_logpdf(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """``logpdf = log(pdf)``; underflows to ``-inf`` where the density does."""
    return _fit_log(distribution, CharacteristicName.PDF, CharacteristicName.LOGPDF)


def fit_logpdf_to_pdf(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """``pdf = exp(logpdf)``."""
    return _fit_exp(distribution, CharacteristicName.LOGPDF, CharacteristicName.PDF)


def fit_pmf_to_logpmf(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """``logpmf = log(pmf)``."""
    return _fit_log(distribution, CharacteristicName.PMF, CharacteristicName.LOGPMF)


def fit_logpmf_to_pmf(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """``pmf = exp(logpmf)``."""
    return _fit_exp(distribution, CharacteristicName.LOGPMF, CharacteristicName.PMF)


# --- Discrete summation --------------------------------------------------------


def fit_pmf_to_cdf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Distribution function as the prefix sum of ``pmf`` over the support.

    Raises
    ------
    RuntimeError
        If the support is not a left-bounded integer lattice.
    """
    support = distribution.support
    if not isinstance(support, IntegerLatticeDiscreteSupport) or not support.is_left_bounded:
        raise RuntimeError("pmf->cdf requires a left-bounded integer lattice support.")

    pmf_func = _scalar(_resolve(distribution, CharacteristicName.PMF))
    upper = support.upper_bound

    @elementwise
    def _cdf(x: float, **_: Any) -> float:
        if x >= upper:
            return 1.0
        total = sum(pmf_func(float(k)) for k in support.iter_leq(x))
        return min(max(total, 0.0), 1.0)

    return FittedComputationMethod(
        target=CharacteristicName.CDF, source=CharacteristicName.PMF, func=_cdf
    )


# --- Quantile searches ---------------------------------------------------------


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Continuous ``ppf`` by searching the smallest ``x`` with ``cdf(x) >= p``.

    ``p = 0`` and ``p = 1`` map to the support bounds. The search starts from
    the analytical mean when the family provides a finite one.
    """
    cdf_func = _scalar(_resolve(distribution, CharacteristicName.CDF))
    lower, upper = distribution.support.lower_bound, distribution.support.upper_bound
    start = _moment_hint(distribution, CharacteristicName.MEAN)
    search = _search_options(options)

    @elementwise
    def _ppf(p: float, **_: Any) -> float:
        p = check_probability(p)
        if p == 0.0:
            return lower
        if p == 1.0:
            return upper
        return find_smallest_real(lambda x: cdf_func(x) >= p, lower, upper, start=start, **search)

    return FittedComputationMethod(
        target=CharacteristicName.PPF, source=CharacteristicName.CDF, func=_ppf
    )


def fit_sf_to_isf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Continuous ``isf`` by searching the smallest ``x`` with ``sf(x) <= q``.

    Working on ``sf`` directly keeps right-tail quantiles accurate for ``q``
    far below machine epsilon.
    """
    sf_func = _scalar(_resolve(distribution, CharacteristicName.SF))
    lower, upper = distribution.support.lower_bound, distribution.support.upper_bound
    start = _moment_hint(distribution, CharacteristicName.MEAN)
    search = _search_options(options)

    @elementwise
    def _isf(q: float, **_: Any) -> float:
        q = check_probability(q)
        if q == 0.0:
            return upper
        if q == 1.0:
            return lower
        return find_smallest_real(lambda x: sf_func(x) <= q, lower, upper, start=start, **search)

    return FittedComputationMethod(
        target=CharacteristicName.ISF, source=CharacteristicName.SF, func=_isf
    )


def _chebyshev_hints(distribution: Distribution, p: float) -> tuple[float, ...]:
    """
    One-sided Chebyshev (Cantelli) bounds on the ``p`` quantile.

    ``mu - sigma * sqrt((1 - p) / p)`` and ``mu + sigma * sqrt(p / (1 - p))``.
    """
    mu = _moment_hint(distribution, CharacteristicName.MEAN)
    var = _moment_hint(distribution, CharacteristicName.VAR)
    if mu is None or var is None or not 0.0 < p < 1.0:
        return ()
    sigma = sqrt(var)
    return (mu - sigma * sqrt((1.0 - p) / p), mu + sigma * sqrt(p / (1.0 - p)))


def fit_cdf_to_ppf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Discrete ``ppf``: the smallest support point ``k`` with ``cdf(k) >= p``.

    ``p = 0`` maps to the lower and ``p = 1`` to the upper support bound.
    """
    cdf_func = _scalar(_resolve(distribution, CharacteristicName.CDF))
    lower, upper = distribution.support.lower_bound, distribution.support.upper_bound
    search = {key: value for key, value in _search_options(options).items() if "tol" not in key}

    @elementwise
    def _ppf(p: float, **_: Any) -> float:
        p = check_probability(p)
        if p == 0.0:
            return lower
        if p == 1.0:
            return upper
        return find_smallest_integer(
            lambda k: cdf_func(float(k)) >= p,
            lower,
            upper,
            hints=_chebyshev_hints(distribution, p),
            **search,
        )

    return FittedComputationMethod(
        target=CharacteristicName.PPF, source=CharacteristicName.CDF, func=_ppf
    )


def fit_sf_to_isf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[Any, Any]:
    """Discrete ``isf``: the smallest support point ``k`` with ``sf(k) <= q``."""
    sf_func = _scalar(_resolve(distribution, CharacteristicName.SF))
    lower, upper = distribution.support.lower_bound, distribution.support.upper_bound
    search = {key: value for key, value in _search_options(options).items() if "tol" not in key}

    @elementwise
    def _isf(q: float, **_: Any) -> float:
        q = check_probability(q)
        if q == 0.0:
            return upper
        if q == 1.0:
            return lower
        return find_smallest_integer(
            lambda k: sf_func(float(k)) <= q,
            lower,
            upper,
            hints=_chebyshev_hints(distribution, 1.0 - q),
            **search,
        )

    return FittedComputationMethod(
        target=CharacteristicName.ISF, source=CharacteristicName.SF, func=_isf
    )


__all__ = [
    "fit_cdf_to_sf",
    "fit_sf_to_cdf",
    "fit_pdf_to_logpdf",
    "fit_logpdf_to_pdf",
    "fit_pmf_to_logpmf",
    "fit_logpmf_to_pmf",
    "fit_pmf_to_cdf_1D",
    "fit_cdf_to_ppf_1C",
    "fit_sf_to_isf_1C",
    "fit_cdf_to_ppf_1D",
    "fit_sf_to_isf_1D",
]
