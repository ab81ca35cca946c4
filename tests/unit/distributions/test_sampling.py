from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import random
from itertools import islice

import numpy as np
import pytest

from pysatl_distributions.distributions.sampling import (
    ArraySample,
    InverseTransformSampler,
    UniformRandomSource,
)
from tests.unit.distributions.base import DistributionTestBase
from tests.utils.mocks import ConstantSampler, SequenceRandomSource


class TestArraySample:
    def test_shape_len_and_iteration(self) -> None:
        sample = ArraySample(np.arange(6, dtype=float).reshape(3, 2))

        assert len(sample) == 3
        assert sample.shape == (3, 2)
        assert sample.dimension == 2
        assert [row.tolist() for row in sample] == [[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]]

    def test_rejects_non_2d(self) -> None:
        with pytest.raises(ValueError, match="2D"):
            ArraySample(np.zeros(3))


class TestSampler:
    def test_uniform_sources(self) -> None:
        assert isinstance(np.random.default_rng(0), UniformRandomSource)
        assert isinstance(random.Random(0), UniformRandomSource)

    def test_sample_n_shape(self) -> None:
        sampler = ConstantSampler(0.5, SequenceRandomSource([0.1]))
        sample = sampler.sample_n(4)
        assert sample.shape == (4, 1)
        assert (sample.array == 0.5).all()
        assert sampler.sample_n(0).shape == (0, 1)

    def test_negative_size_raises(self) -> None:
        sampler = ConstantSampler(0.5, SequenceRandomSource([0.1]))
        with pytest.raises(ValueError, match="non-negative"):
            sampler.sample_n(-1)

    def test_inverse_transform_redraws_zero(self) -> None:
        rng = SequenceRandomSource([0.0, 0.25])
        sampler = InverseTransformSampler(lambda u: 10.0 * u, rng)

        assert sampler.sample() == pytest.approx(2.5)
        assert rng.calls == 2

    def test_sampler_is_an_endless_stream(self) -> None:
        rng = SequenceRandomSource([0.25, 0.5, 0.75])
        sampler = InverseTransformSampler(lambda u: u, rng)
        assert list(islice(sampler, 4)) == [0.25, 0.5, 0.75, 0.25]


class TestDistributionSampling(DistributionTestBase):
    def test_sample_continuous_shape_bounds_and_mean(self) -> None:
        distr = self.make_exponential_pdf_cdf_distribution()

        n = 2000
        sample = distr.sample(n, rng=np.random.default_rng(7))

        assert sample.shape == (n, 1)
        arr = sample.array
        assert np.isfinite(arr).all()
        assert (arr >= 0.0).all()
        assert float(arr.mean()) == pytest.approx(1.0, abs=0.1)

    def test_create_sampler_uses_given_source(self) -> None:
        distr = self.make_logistic_cdf_distribution()
        sampler = distr.create_sampler(SequenceRandomSource([0.25, 0.5]))

        assert sampler.sample() == pytest.approx(math.log(1.0 / 3.0), rel=1e-9)
        assert sampler.sample() == pytest.approx(0.0, abs=1e-12)

    def test_sample_discrete_hits_only_support_points(self) -> None:
        distr = self.make_discrete_point_pmf_distribution()

        n = 2000
        arr = distr.sample(n, rng=np.random.default_rng(11)).array.ravel()

        assert set(np.unique(arr).tolist()) <= {0.0, 1.0, 2.0}
        for k, mass in self.POINT_MASSES.items():
            assert float(np.mean(arr == k)) == pytest.approx(mass, abs=0.05)
