"""
Distribution Interface
======================

The public :class:`Distribution` protocol used throughout the library.

A distribution exposes its type, its support, the characteristics its family
provides analytically, and the strategies used to resolve everything else.
The named accessors (:meth:`Distribution.pdf`, :meth:`Distribution.cdf`, ...)
are thin wrappers over :meth:`Distribution.calculate_characteristic`.

Notes
-----
- Characteristics accept a scalar or a NumPy array; scalar input gives a
  Python ``float`` back, array input an array of the same shape.
- :meth:`Distribution.interval_probability` answers ``P(k0 <= X <= k1)``
  through survival probabilities when the interval lies in the upper tail.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from pysatl_distributions.types import CharacteristicName, Kind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_distributions.distributions.computation import AnalyticalComputation
    from pysatl_distributions.distributions.sampling import (
        ArraySample,
        Sampler,
        UniformRandomSource,
    )
    from pysatl_distributions.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from pysatl_distributions.distributions.support import Support
    from pysatl_distributions.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies and fitters."""

    __slots__ = ()

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> Support: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        result = self.query_method(characteristic_name, **options)(value)
        return float(result) if np.ndim(result) == 0 else result

    def pdf(self, x: Any, **options: Any) -> Any:
        """Probability density at ``x``."""
        return self.calculate_characteristic(CharacteristicName.PDF, x, **options)

    def logpdf(self, x: Any, **options: Any) -> Any:
        """Natural logarithm of the density at ``x``."""
        return self.calculate_characteristic(CharacteristicName.LOGPDF, x, **options)

    def pmf(self, k: Any, **options: Any) -> Any:
        """Probability mass at ``k``."""
        return self.calculate_characteristic(CharacteristicName.PMF, k, **options)

    def logpmf(self, k: Any, **options: Any) -> Any:
        """Natural logarithm of the probability mass at ``k``."""
        return self.calculate_characteristic(CharacteristicName.LOGPMF, k, **options)

    def cdf(self, x: Any, **options: Any) -> Any:
        """``P(X <= x)``."""
        return self.calculate_characteristic(CharacteristicName.CDF, x, **options)

    def sf(self, x: Any, **options: Any) -> Any:
        """``P(X > x)``."""
        return self.calculate_characteristic(CharacteristicName.SF, x, **options)

    def ppf(self, p: Any, **options: Any) -> Any:
        """
        Smallest ``x`` with ``cdf(x) >= p``.

        Raises
        ------
        InvalidProbabilityError
            If ``p`` is outside ``[0, 1]``.
        """
        return self.calculate_characteristic(CharacteristicName.PPF, p, **options)

    def isf(self, q: Any, **options: Any) -> Any:
        """
        Smallest ``x`` with ``sf(x) <= q``.

        Raises
        ------
        InvalidProbabilityError
            If ``q`` is outside ``[0, 1]``.
        """
        return self.calculate_characteristic(CharacteristicName.ISF, q, **options)

    def mean(self, **options: Any) -> float:
        return float(self.calculate_characteristic(CharacteristicName.MEAN, None, **options))

    def var(self, **options: Any) -> float:
        return float(self.calculate_characteristic(CharacteristicName.VAR, None, **options))

    def interval_probability(self, k0: float, k1: float, **options: Any) -> float:
        """
        Probability that the variable lies in ``[k0, k1]``.

        For discrete distributions this is ``cdf(k1) - cdf(k0 - 1)`` over the
        integers of the interval. When the lower end is in the upper tail
        (``cdf >= 0.5``) the difference of survival probabilities is used
        instead, which does not cancel.

        Raises
        ------
        ValueError
            If ``k0 > k1``.
        """
        if k0 > k1:
            raise ValueError(f"Lower endpoint {k0} must not exceed upper endpoint {k1}")
        if self.distribution_type.kind == Kind.DISCRETE:
            lo, hi = float(np.ceil(k0)) - 1.0, float(np.floor(k1))
        else:
            lo, hi = float(k0), float(k1)
        if hi <= lo:
            return 0.0
        cdf_lo = self.cdf(lo, **options)
        if cdf_lo >= 0.5:
            result = self.sf(lo, **options) - self.sf(hi, **options)
        else:
            result = self.cdf(hi, **options) - cdf_lo
        return max(float(result), 0.0)

    def create_sampler(self, rng: UniformRandomSource) -> Sampler:
        """Sampler bound to this distribution and the uniform source ``rng``."""
        return self.sampling_strategy.create_sampler(self, rng)

    def sample(self, n: int, rng: UniformRandomSource | None = None) -> ArraySample:
        return self.sampling_strategy.sample(n, distr=self, rng=rng)
