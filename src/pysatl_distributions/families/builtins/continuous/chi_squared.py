"""
Chi-squared distribution family implementation.

A chi-squared distribution with ``k`` degrees of freedom is the gamma
distribution with shape ``k/2`` and scale ``2``. Every characteristic and the
sampler are delegated to that gamma distribution, which the parametrization
builds once on construction.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import field
from functools import partial
from typing import TYPE_CHECKING, cast

from pysatl_distributions.distributions.strategies import DefaultSamplingUnivariateStrategy
from pysatl_distributions.distributions.support import ContinuousSupport
from pysatl_distributions.families.builtins.continuous.gamma import configure_gamma_family
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
    from pysatl_distributions.distributions.sampling import Sampler, UniformRandomSource
    from pysatl_distributions.families.distribution import ParametricFamilyDistribution


class ChiSquaredSamplingStrategy(DefaultSamplingUnivariateStrategy):
    """Sampling through the equivalent gamma distribution."""

    def create_sampler(self, distr: Distribution, rng: UniformRandomSource) -> Sampler:
        gamma = distr.parametrization.gamma  # type: ignore[attr-defined]
        return cast("Sampler", gamma.create_sampler(rng))


def configure_chi_squared_family() -> None:
    """
    Configure and register the chi-squared distribution family.

    The Gamma family is configured first if it is not registered yet.
    """

    if ParametricFamilyRegister.contains(FamilyName.CHI_SQUARED):
        return
    configure_gamma_family()

    CHI_SQUARED_DOC = """
    Chi-squared distribution.

    Probability density function, with k degrees of freedom:
        f(x) = x^(k/2 - 1) * exp(-x/2) / (2^(k/2) * Γ(k/2)) for x ≥ 0

    Distribution of a sum of k squared independent standard normal variables.
    """

    def _forward(name: CharacteristicName, parameters: Parametrization, x: Any) -> NumericArray:
        parameters = cast(_Dof, parameters)
        return cast(NumericArray, parameters.gamma.calculate_characteristic(name, x))

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    ChiSquared = ParametricFamily(
        name=FamilyName.CHI_SQUARED,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["dof"],
        distr_characteristics={
            name: partial(_forward, name)
            for name in (
                CharacteristicName.PDF,
                CharacteristicName.LOGPDF,
                CharacteristicName.CDF,
                CharacteristicName.SF,
                CharacteristicName.PPF,
                CharacteristicName.ISF,
                CharacteristicName.MEAN,
                CharacteristicName.VAR,
            )
        },
        support_by_parametrization=_support,
        sampling_strategy=ChiSquaredSamplingStrategy(),
    )
    ChiSquared.__doc__ = CHI_SQUARED_DOC

    @parametrization(family=ChiSquared, name="dof")
    class _Dof(Parametrization):
        """
        Degrees-of-freedom parametrization of chi-squared distribution.

        Parameters
        ----------
        dof : float
            Degrees of freedom ``k``; need not be an integer
        """

        dof: float
        gamma: ParametricFamilyDistribution = field(init=False, repr=False, compare=False)

        @constraint(description="0 < dof < inf", parameter="dof")
        def check_dof(self) -> bool:
            return 0 < self.dof < math.inf

        def derive(self) -> None:
            Gamma = ParametricFamilyRegister.get(FamilyName.GAMMA)
            self._set_derived(gamma=Gamma(shape=self.dof / 2.0, scale=2.0))

    ParametricFamilyRegister.register(ChiSquared)
