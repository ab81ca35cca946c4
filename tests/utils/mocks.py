from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import numpy as np

from pysatl_distributions.distributions import (
    AnalyticalComputation,
    ArraySample,
    ComputationStrategy,
    ContinuousSupport,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    Distribution,
    IntegerLatticeDiscreteSupport,
    Sampler,
    SamplingStrategy,
    Support,
    UniformRandomSource,
)
from pysatl_distributions.types import DistributionType, GenericCharacteristicName, Kind


class ConstantSampler(Sampler):
    def __init__(self, value: float, rng: UniformRandomSource) -> None:
        super().__init__(rng)
        self.value = value

    def sample(self) -> float:
        return self.value


class MockSamplingStrategy(SamplingStrategy):
    def create_sampler(self, distr: Distribution, rng: UniformRandomSource) -> Sampler:
        return ConstantSampler(0.5, rng)

    def sample(
        self, n: int, distr: Distribution, rng: UniformRandomSource | None = None
    ) -> ArraySample:
        return ArraySample(np.full((n, 1), 0.5))


class SequenceRandomSource:
    """Uniform source replaying a fixed sequence of values, cyclically."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self._iter: Iterator[float] = iter(())
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        try:
            return next(self._iter)
        except StopIteration:
            self._iter = iter(self._values)
            return next(self._iter)


class StandaloneUnivariateDistribution(Distribution):
    """
    Minimal standalone univariate distribution.

    Notes
    -----
    - Default strategies are attached unless given explicitly.
    """

    def __init__(
        self,
        kind: Kind,
        analytical_computations: (
            Iterable[AnalyticalComputation[Any, Any]]
            | Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]
        ) = (),
        support: Support | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
    ) -> None:
        self._distribution_type = DistributionType(kind)
        if isinstance(analytical_computations, Mapping):
            self._analytical = dict(analytical_computations)
        else:
            self._analytical = {ac.target: ac for ac in analytical_computations}
        if support is None:
            support = (
                ContinuousSupport() if kind == Kind.CONTINUOUS else IntegerLatticeDiscreteSupport()
            )
        self._support = support
        self._computation_strategy = computation_strategy or DefaultComputationStrategy()

    @property
    def distribution_type(self) -> DistributionType:
        """Distribution type descriptor."""
        return self._distribution_type

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Mapping from characteristic name to analytical callable."""
        return self._analytical

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return DefaultSamplingUnivariateStrategy()

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self._computation_strategy

    @property
    def support(self) -> Support:
        return self._support
