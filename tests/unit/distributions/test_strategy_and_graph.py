from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math

import numpy as np
import pytest

from pysatl_distributions.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from pysatl_distributions.errors import InvalidProbabilityError
from pysatl_distributions.types import Kind
from tests.unit.distributions.base import DistributionTestBase
from tests.utils.mocks import StandaloneUnivariateDistribution


class TestComputationStrategy(DistributionTestBase):
    def test_analytical_is_returned_as_is(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        method = distr.query_method(self.CDF)
        assert isinstance(method, AnalyticalComputation)
        assert method is distr.analytical_computations[self.CDF]

    def test_sf_from_cdf(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        sf = distr.query_method(self.SF)

        assert isinstance(sf, FittedComputationMethod)
        assert sf.source == self.CDF
        assert sf(0.0) == pytest.approx(0.5)
        assert distr.sf(2.0) == pytest.approx(1.0 / (1.0 + math.exp(2.0)))

    def test_ppf_from_cdf(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        for p in (1e-10, 0.1, 0.5, 0.9):
            expected = math.log(p / (1.0 - p))
            assert distr.ppf(p) == pytest.approx(expected, rel=1e-9, abs=1e-9)
        assert distr.ppf(0.0) == -math.inf
        assert distr.ppf(1.0) == math.inf

    def test_isf_from_cdf_goes_through_sf(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        assert distr.isf(0.25) == pytest.approx(math.log(3.0), rel=1e-9)

    def test_isf_from_sf_far_tail(self) -> None:
        distr = self.make_logistic_sf_distribution()
        q = 1e-300
        assert distr.isf(q) == pytest.approx(-math.log(q), rel=1e-12)

    def test_quantile_tie_break_is_smallest_argument(self) -> None:
        distr = self.make_exponential_pdf_cdf_distribution()
        # cdf is zero on the whole negative axis, ppf(0) is the lower support bound
        assert distr.ppf(0.0) == 0.0
        assert distr.ppf(0.5) == pytest.approx(math.log(2.0), rel=1e-12)

    def test_quantile_array_input(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        p = np.array([[0.25, 0.5], [0.75, 0.9]])
        result = distr.ppf(p)
        assert result.shape == p.shape
        np.testing.assert_allclose(result, np.log(p / (1.0 - p)), rtol=1e-9, atol=1e-12)

    @pytest.mark.parametrize("p", [-0.1, 1.1, math.nan])
    def test_quantile_rejects_invalid_probability(self, p: float) -> None:
        distr = self.make_logistic_cdf_distribution()
        with pytest.raises(InvalidProbabilityError):
            distr.ppf(p)

    def test_logpdf_from_pdf(self) -> None:
        distr = self.make_exponential_pdf_cdf_distribution()
        assert distr.logpdf(2.0) == pytest.approx(-2.0)

    def test_missing_path_raises(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        with pytest.raises(RuntimeError, match="No conversion path"):
            distr.query_method(self.PDF)

    def test_no_analytical_base_raises(self) -> None:
        distr = StandaloneUnivariateDistribution(kind=Kind.CONTINUOUS)
        with pytest.raises(RuntimeError, match="no analytical computations"):
            distr.query_method(self.CDF)

    def test_resolution_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        distr = self.make_logistic_cdf_distribution()
        with caplog.at_level(logging.DEBUG, logger="pysatl_distributions.distributions.strategies"):
            distr.query_method(self.ISF)
        assert "cdf -> sf -> isf" in caplog.text


class TestCaching(DistributionTestBase):
    def test_fitted_methods_are_cached(self) -> None:
        distr = self.make_logistic_cdf_distribution(enable_caching=True)
        assert distr.query_method(self.PPF) is distr.query_method(self.PPF)

    def test_no_cache_by_default(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        assert distr.query_method(self.PPF) is not distr.query_method(self.PPF)

    def test_options_bypass_cache(self) -> None:
        distr = self.make_logistic_cdf_distribution(enable_caching=True)
        cached = distr.query_method(self.PPF)
        assert distr.query_method(self.PPF, rel_tol=1e-6) is not cached
        assert distr.query_method(self.PPF) is cached

    def test_cache_is_per_distribution(self) -> None:
        first = self.make_logistic_cdf_distribution(enable_caching=True)
        second = StandaloneUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=first.analytical_computations,
            computation_strategy=first.computation_strategy,
        )
        assert first.query_method(self.PPF) is not second.query_method(self.PPF)


class TestDiscreteConversions(DistributionTestBase):
    def test_cdf_from_pmf(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()
        assert distr.cdf(-1) == 0.0
        assert distr.cdf(0) == pytest.approx(0.2)
        assert distr.cdf(1.5) == pytest.approx(0.7)
        assert distr.cdf(2) == 1.0
        assert distr.cdf(math.inf) == 1.0

    def test_sf_from_pmf(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()
        assert distr.sf(0) == pytest.approx(0.8)
        assert distr.sf(2) == pytest.approx(0.0)

    @pytest.mark.parametrize(
        "p, expected",
        [(0.0, 0.0), (0.1, 0.0), (0.2, 0.0), (0.21, 1.0), (0.69, 1.0), (0.71, 2.0), (1.0, 2.0)],
    )
    def test_ppf_is_smallest_point_reaching_p(self, p: float, expected: float) -> None:
        distr = self.make_discrete_point_pmf_distribution()
        assert distr.ppf(p) == expected

    @pytest.mark.parametrize(
        "q, expected",
        [(1.0, 0.0), (0.9, 0.0), (0.85, 0.0), (0.5, 1.0), (0.35, 1.0), (0.25, 2.0), (0.0, 2.0)],
    )
    def test_isf_is_smallest_point_below_q(self, q: float, expected: float) -> None:
        distr = self.make_discrete_point_pmf_distribution()
        assert distr.isf(q) == expected

    def test_logpmf_from_pmf(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()
        assert distr.logpmf(1) == pytest.approx(math.log(0.5))
        assert distr.logpmf(7) == -math.inf
