"""
Tests for Gamma Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import gamma

from pysatl_distributions.distributions.computation import FittedComputationMethod
from pysatl_distributions.errors import ParameterConstraintError
from pysatl_distributions.families.builtins.continuous import (
    GammaSamplingStrategy,
    MarsagliaTsangGammaSampler,
)
from pysatl_distributions.types import CharacteristicName, FamilyName

from .base import BaseDistributionTest


class TestGammaFamily(BaseDistributionTest):
    def setup_method(self):
        self.gamma_family = self.get_family(FamilyName.GAMMA)
        self.example = self.gamma_family(shape=2.5, scale=1.5)

    def test_family_properties(self):
        assert self.gamma_family.name == FamilyName.GAMMA
        assert self.gamma_family.parametrization_names == ["shapeScale", "shapeRate"]
        assert isinstance(self.gamma_family.sampling_strategy, GammaSamplingStrategy)

    def test_quantiles_are_resolved_through_the_graph(self):
        analytical = set(self.example.analytical_computations)
        assert analytical == self.ANALYTICAL - {CharacteristicName.PPF, CharacteristicName.ISF}

        ppf = self.example.query_method(CharacteristicName.PPF)
        isf = self.example.query_method(CharacteristicName.ISF)
        assert isinstance(ppf, FittedComputationMethod) and ppf.source == CharacteristicName.CDF
        assert isinstance(isf, FittedComputationMethod) and isf.source == CharacteristicName.SF

    @pytest.mark.parametrize("shape, scale", [(2.5, 1.5), (0.5, 1.0), (1.0, 3.0), (40.0, 0.1)])
    def test_matches_scipy(self, shape, scale):
        distr = self.gamma_family(shape=shape, scale=scale)
        self.assert_matches_reference(distr, gamma(shape, scale=scale))

    def test_shape_rate_parametrization(self):
        distr = self.gamma_family(shape=2.5, rate=2.0, parametrization_name="shapeRate")
        assert distr.parametrization_name == "shapeRate"
        assert distr.mean() == pytest.approx(1.25)
        assert distr.var() == pytest.approx(0.625)
        assert distr.cdf(1.0) == pytest.approx(gamma.cdf(1.0, 2.5, scale=0.5), rel=1e-12)

    @pytest.mark.parametrize(
        "shape, expected", [(0.5, math.inf), (1.0, 1.0 / 1.5), (2.5, 0.0)]
    )
    def test_density_at_zero(self, shape, expected):
        distr = self.gamma_family(shape=shape, scale=1.5)
        assert distr.pdf(0.0) == pytest.approx(expected)

    def test_far_right_tail_quantile(self):
        distr = self.gamma_family(shape=3.0, scale=1.0)
        q = 1e-100
        assert distr.isf(q) == pytest.approx(gamma.isf(q, 3.0), rel=1e-9)
        assert distr.sf(distr.isf(q)) == pytest.approx(q, rel=1e-9)

    def test_limits(self):
        self.assert_saturates(self.example)
        self.assert_quantile_boundaries(self.example)

    @pytest.mark.parametrize(
        "parametrization_name, params, message",
        [
            ("shapeScale", {"shape": 0.0, "scale": 1.0}, "0 < shape < inf"),
            ("shapeScale", {"shape": 1.0, "scale": -1.0}, "0 < scale < inf"),
            ("shapeRate", {"shape": 1.0, "rate": 0.0}, "0 < rate < inf"),
        ],
    )
    def test_parametrization_constraints(self, parametrization_name, params, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.gamma_family(parametrization_name=parametrization_name, **params)


class TestMarsagliaTsangGammaSampler:
    @pytest.mark.parametrize("shape, scale", [(0.5, 2.0), (1.0, 1.0), (3.0, 1.0), (25.0, 0.2)])
    def test_moments(self, shape, scale):
        sampler = MarsagliaTsangGammaSampler(shape, scale, np.random.default_rng(17))
        values = sampler.sample_n(20000).array.ravel()

        mean, var = shape * scale, shape * scale * scale
        assert (values > 0.0).all()
        assert float(values.mean()) == pytest.approx(mean, abs=5.0 * math.sqrt(var / 20000))
        assert float(values.var()) == pytest.approx(var, rel=0.1)

    def test_distribution_uses_sampler(self):
        distr = BaseDistributionTest.get_family(FamilyName.GAMMA)(
            shape=2.0, rate=4.0, parametrization_name="shapeRate"
        )
        sampler = distr.create_sampler(np.random.default_rng(0))
        assert isinstance(sampler, MarsagliaTsangGammaSampler)
        assert sampler.shape == 2.0
        assert sampler.scale == 0.25

        sample = distr.sample(5000, rng=np.random.default_rng(4)).array
        assert float(sample.mean()) == pytest.approx(0.5, abs=0.03)
