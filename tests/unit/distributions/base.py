from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import Any

import numpy as np

from pysatl_distributions.distributions.computation import AnalyticalComputation, elementwise
from pysatl_distributions.distributions.support import (
    ContinuousSupport,
    IntegerLatticeDiscreteSupport,
)
from pysatl_distributions.distributions.strategies import DefaultComputationStrategy
from pysatl_distributions.types import CharacteristicName, Kind
from tests.utils.mocks import StandaloneUnivariateDistribution


class DistributionTestBase:
    PDF = CharacteristicName.PDF
    LOGPDF = CharacteristicName.LOGPDF
    PMF = CharacteristicName.PMF
    LOGPMF = CharacteristicName.LOGPMF
    CDF = CharacteristicName.CDF
    SF = CharacteristicName.SF
    PPF = CharacteristicName.PPF
    ISF = CharacteristicName.ISF
    MEAN = CharacteristicName.MEAN
    VAR = CharacteristicName.VAR

    POINT_MASSES = {0: 0.2, 1: 0.5, 2: 0.3}

    @staticmethod
    def _logistic_cdf(x: Any, **_: Any) -> Any:
        x = np.asarray(x, dtype=float)
        with np.errstate(over="ignore"):
            return 1.0 / (1.0 + np.exp(-x))

    @staticmethod
    def _logistic_sf(x: Any, **_: Any) -> Any:
        x = np.asarray(x, dtype=float)
        with np.errstate(over="ignore"):
            return 1.0 / (1.0 + np.exp(x))

    def make_logistic_cdf_distribution(
        self, *, enable_caching: bool = False, with_mean: bool = False
    ) -> StandaloneUnivariateDistribution:
        computations = [AnalyticalComputation(target=self.CDF, func=self._logistic_cdf)]
        if with_mean:
            computations.append(AnalyticalComputation(target=self.MEAN, func=lambda _: 0.0))
        return StandaloneUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=computations,
            computation_strategy=DefaultComputationStrategy(enable_caching=enable_caching),
        )

    def make_logistic_sf_distribution(self) -> StandaloneUnivariateDistribution:
        return StandaloneUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation(target=self.SF, func=self._logistic_sf)
            ],
        )

    def make_exponential_pdf_cdf_distribution(self) -> StandaloneUnivariateDistribution:
        def pdf(x: Any, **_: Any) -> Any:
            x = np.asarray(x, dtype=float)
            return np.where(x >= 0, np.exp(-np.maximum(x, 0.0)), 0.0)

        def cdf(x: Any, **_: Any) -> Any:
            x = np.asarray(x, dtype=float)
            return np.where(x >= 0, -np.expm1(-np.maximum(x, 0.0)), 0.0)

        return StandaloneUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                AnalyticalComputation(target=self.PDF, func=pdf),
                AnalyticalComputation(target=self.CDF, func=cdf),
                AnalyticalComputation(target=self.MEAN, func=lambda _: 1.0),
            ],
            support=ContinuousSupport(left=0.0),
        )

    def make_discrete_point_pmf_distribution(
        self, *, left_bounded: bool = True
    ) -> StandaloneUnivariateDistribution:
        masses = self.POINT_MASSES

        @elementwise
        def pmf(k: float, **_: Any) -> float:
            if k != math.floor(k):
                return 0.0
            return masses.get(int(k), 0.0)

        support = (
            IntegerLatticeDiscreteSupport(min_k=0, max_k=2)
            if left_bounded
            else IntegerLatticeDiscreteSupport(max_k=2)
        )
        return StandaloneUnivariateDistribution(
            kind=Kind.DISCRETE,
            analytical_computations=[
                AnalyticalComputation(target=self.PMF, func=pmf),
                AnalyticalComputation(target=self.MEAN, func=lambda _: 1.1),
                AnalyticalComputation(target=self.VAR, func=lambda _: 0.49),
            ],
            support=support,
        )
