"""
Gamma distribution family implementation.

Contains the Gamma family with shape-scale and shape-rate parameterizations,
and the Marsaglia–Tsang sampler used for it.

The gamma quantile has no closed form: ``ppf`` and ``isf`` are resolved
through the characteristic graph, i.e. by the generic quantile search on
``cdf`` and ``sf``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import field
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import gammainc, gammaincc, gammaln, ndtri, xlogy

from pysatl_distributions.distributions.sampling import Sampler
from pysatl_distributions.distributions.strategies import DefaultSamplingUnivariateStrategy
from pysatl_distributions.distributions.support import ContinuousSupport
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.families.registry import ParametricFamilyRegister
from pysatl_distributions.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_distributions.distributions.distribution import Distribution
    from pysatl_distributions.distributions.sampling import UniformRandomSource


class MarsagliaTsangGammaSampler(Sampler):
    """
    Gamma sampler of Marsaglia and Tsang (2000).

    Rejection from a transformed normal variate; for ``shape < 1`` a draw
    with shape ``shape + 1`` is multiplied by ``U**(1/shape)``. Normal variates
    are obtained from the uniform source by inversion.

    Parameters
    ----------
    shape, scale : float
        Parameters of the gamma distribution.
    rng : UniformRandomSource
        Uniform source.
    """

    def __init__(self, shape: float, scale: float, rng: UniformRandomSource) -> None:
        super().__init__(rng)
        self.shape = shape
        self.scale = scale
        self._boost = shape < 1.0
        self._d = (shape + 1.0 if self._boost else shape) - 1.0 / 3.0
        self._c = 1.0 / math.sqrt(9.0 * self._d)

    def _normal(self) -> float:
        return float(ndtri(self._uniform_open()))

    def sample(self) -> float:
        d, c = self._d, self._c
        while True:
            x = self._normal()
            v = 1.0 + c * x
            if v <= 0.0:
                continue
            v = v * v * v
            u = self._uniform_open()
            x2 = x * x
            if u < 1.0 - 0.0331 * x2 * x2:
                break
            if math.log(u) < 0.5 * x2 + d * (1.0 - v + math.log(v)):
                break
        value = d * v
        if self._boost:
            value *= self._uniform_open() ** (1.0 / self.shape)
        return value * self.scale


class GammaSamplingStrategy(DefaultSamplingUnivariateStrategy):
    """Sampling strategy of the Gamma family (Marsaglia–Tsang)."""

    def create_sampler(self, distr: Distribution, rng: UniformRandomSource) -> Sampler:
        parameters = distr.parametrization.to_base()  # type: ignore[attr-defined]
        return MarsagliaTsangGammaSampler(parameters.shape, parameters.scale, rng)


def configure_gamma_family() -> None:
    """
    Configure and register the Gamma distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.GAMMA):
        return

    GAMMA_DOC = """
    Gamma distribution.

    Probability density function (shape-scale parametrization):
        f(x) = x^(a-1) * exp(-x/θ) / (Γ(a) * θ^a) for x ≥ 0

    The sum of a independent exponential waiting times with mean θ, for
    integer a; chi-squared distributions are gamma distributions with θ = 2.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density ``(a-1) log x - x/θ - log Γ(a) - a log θ``.

        At ``x = 0`` this gives ``inf``, ``-log θ`` or ``-inf`` for ``a < 1``,
        ``a == 1`` and ``a > 1``.
        """
        parameters = cast(_ShapeScale, parameters)
        x = np.asarray(x, dtype=float)
        a, theta = parameters.shape, parameters.scale
        with np.errstate(divide="ignore", invalid="ignore"):
            log_density = xlogy(a - 1.0, x) - x / theta - parameters.log_norm
            return cast(NumericArray, np.where(x < 0, -np.inf, log_density))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Exponential of :func:`logpdf`."""
        with np.errstate(over="ignore"):
            return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Regularized lower incomplete gamma function ``P(a, x/θ)``."""
        parameters = cast(_ShapeScale, parameters)
        x = np.asarray(x, dtype=float)
        with np.errstate(invalid="ignore"):
            z = np.maximum(x, 0.0) / parameters.scale
            return cast(NumericArray, np.where(x <= 0, 0.0, gammainc(parameters.shape, z)))

    def sf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Regularized upper incomplete gamma function ``Q(a, x/θ)``."""
        parameters = cast(_ShapeScale, parameters)
        x = np.asarray(x, dtype=float)
        with np.errstate(invalid="ignore"):
            z = np.maximum(x, 0.0) / parameters.scale
            return cast(NumericArray, np.where(x <= 0, 1.0, gammaincc(parameters.shape, z)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.shape * parameters.scale

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_ShapeScale, parameters)
        return parameters.shape * parameters.scale * parameters.scale

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of gamma distribution"""
        return ContinuousSupport(left=0.0)

    Gamma = ParametricFamily(
        name=FamilyName.GAMMA,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["shapeScale", "shapeRate"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.SF: sf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        support_by_parametrization=_support,
        sampling_strategy=GammaSamplingStrategy(),
    )
    Gamma.__doc__ = GAMMA_DOC

    @parametrization(family=Gamma, name="shapeScale")
    class _ShapeScale(Parametrization):
        """
        Shape-scale parametrization of gamma distribution.

        Parameters
        ----------
        shape : float
            Shape ``a``
        scale : float
            Scale ``θ``
        """

        shape: float
        scale: float
        log_norm: float = field(init=False, repr=False, compare=False)

        @constraint(description="0 < shape < inf", parameter="shape")
        def check_shape(self) -> bool:
            return 0 < self.shape < math.inf

        @constraint(description="0 < scale < inf", parameter="scale")
        def check_scale(self) -> bool:
            return 0 < self.scale < math.inf

        def derive(self) -> None:
            self._set_derived(
                log_norm=float(gammaln(self.shape)) + self.shape * math.log(self.scale)
            )

    @parametrization(family=Gamma, name="shapeRate")
    class _ShapeRate(Parametrization):
        """
        Shape-rate parametrization of gamma distribution.

        Parameters
        ----------
        shape : float
            Shape ``a``
        rate : float
            Rate ``β = 1/θ``
        """

        shape: float
        rate: float

        @constraint(description="0 < shape < inf", parameter="shape")
        def check_shape(self) -> bool:
            return 0 < self.shape < math.inf

        @constraint(description="0 < rate < inf", parameter="rate")
        def check_rate(self) -> bool:
            return 0 < self.rate < math.inf

        def to_base(self) -> Parametrization:
            return _ShapeScale(shape=self.shape, scale=1.0 / self.rate)

    ParametricFamilyRegister.register(Gamma)
