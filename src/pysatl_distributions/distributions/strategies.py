"""
Strategies deciding how a distribution answers characteristic queries and
how it is sampled.

:class:`DefaultComputationStrategy` returns analytical characteristics as is
and fits any other one along the characteristic graph, optionally caching the
result per distribution. :class:`DefaultSamplingUnivariateStrategy` draws by
inverse transform through ``ppf``. One strategy object may serve every
distribution of a family, so the cache is weakly keyed and lock-guarded.
"""

__author__ = "Leonid Elkin, Mikhail, Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import threading
import weakref
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_distributions.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from pysatl_distributions.types import CharacteristicName, GenericCharacteristicName

from .registry import characteristic_registry
from .sampling import ArraySample, InverseTransformSampler, Sampler, UniformRandomSource

if TYPE_CHECKING:
    from .distribution import Distribution

log = logging.getLogger(__name__)

type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    enable_caching: bool

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Resolver used by every built-in family.

    Analytical characteristics win. Otherwise a cached conversion is reused
    when caching is on, and failing that the last edge of the shortest chain
    from the analytical characteristics to the target is fitted. The fitter
    resolves its own source through this strategy again.

    Parameters
    ----------
    enable_caching : bool, default False
        If ``True``, cache fitted conversions per distribution. Only
        conversions fitted without options are cached.

    Raises
    ------
    RuntimeError
        If the distribution has no analytical base, or no conversion path exists.
    """

    def __init__(self, enable_caching: bool = False) -> None:
        self.enable_caching = enable_caching
        self._cache: weakref.WeakKeyDictionary[
            Any, dict[GenericCharacteristicName, FittedComputationMethod[In, Out]]
        ] = weakref.WeakKeyDictionary()
        self._lock = threading.Lock()

    def _cached(
        self, distr: "Distribution", state: GenericCharacteristicName
    ) -> FittedComputationMethod[In, Out] | None:
        with self._lock:
            return self._cache.get(distr, {}).get(state)

    def _store(
        self,
        distr: "Distribution",
        state: GenericCharacteristicName,
        method: FittedComputationMethod[In, Out],
    ) -> None:
        with self._lock:
            self._cache.setdefault(distr, {})[state] = method

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """Method computing ``state`` for ``distr``; ``options`` go to the fitter."""
        if state in distr.analytical_computations:
            return distr.analytical_computations[state]

        use_cache = self.enable_caching and not options
        if use_cache:
            cached = self._cached(distr, state)
            if cached is not None:
                return cached

        if not distr.analytical_computations:
            raise RuntimeError(
                "Distribution provides no analytical computations to ground conversions."
            )

        view = characteristic_registry().view(distr)
        path = view.find_path(distr.analytical_computations, state)
        if not path:
            raise RuntimeError(
                f"No conversion path from any analytical characteristic to '{state}'."
            )
        edge = path[-1]
        log.debug(
            "resolving %s via %s",
            state,
            " -> ".join([path[0].source, *(step.target for step in path)]),
        )
        fitted = edge.fit(distr, **options)
        if use_cache:
            self._store(distr, state, fitted)
        return fitted


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies."""

    def create_sampler(self, distr: "Distribution", rng: UniformRandomSource) -> Sampler: ...

    def sample(
        self, n: int, distr: "Distribution", rng: UniformRandomSource | None = None
    ) -> ArraySample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """Inverse transform sampling: ``ppf`` applied to uniform draws."""

    def create_sampler(self, distr: "Distribution", rng: UniformRandomSource) -> Sampler:
        ppf = distr.query_method(CharacteristicName.PPF)
        return InverseTransformSampler(ppf, rng)

    def sample(
        self, n: int, distr: "Distribution", rng: UniformRandomSource | None = None
    ) -> ArraySample:
        """Draw ``n`` values as an ``(n, 1)`` sample."""
        if rng is None:
            rng = np.random.default_rng()
        return self.create_sampler(distr, rng).sample_n(n)
