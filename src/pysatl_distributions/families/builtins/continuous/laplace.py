"""
Laplace distribution family implementation.

Contains the Laplace (double exponential) family in the location-scale
parametrization.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import field
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_distributions.distributions.root_finding import check_probabilities
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


def configure_laplace_family() -> None:
    """
    Configure and register the Laplace distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LAPLACE):
        return

    LAPLACE_DOC = """
    Laplace (double exponential) distribution.

    Probability density function:
        f(x) = 1/(2b) * exp(-|x - μ|/b)

    Two exponential tails glued back to back at the location μ; the scale b
    controls their decay.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Density ``exp(-|x - μ|/b) / (2b)``."""
        parameters = cast(_LocScale, parameters)
        x = np.asarray(x, dtype=float)
        b = parameters.scale
        return cast(NumericArray, np.exp(-np.abs(x - parameters.loc) / b) / (2.0 * b))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log-density ``-|x - μ|/b - log(2b)``, finite wherever ``x`` is."""
        parameters = cast(_LocScale, parameters)
        x = np.asarray(x, dtype=float)
        return cast(
            NumericArray, -np.abs(x - parameters.loc) / parameters.scale - parameters.log2scale
        )

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for Laplace distribution.

        The domain is split at the location so that the exponential is always
        evaluated at a non-positive argument.
        """
        parameters = cast(_LocScale, parameters)
        x = np.asarray(x, dtype=float)
        mu, b = parameters.loc, parameters.scale
        with np.errstate(over="ignore"):
            return cast(
                NumericArray,
                np.where(
                    x <= mu,
                    0.5 * np.exp((x - mu) / b),
                    1.0 - 0.5 * np.exp((mu - x) / b),
                ),
            )

    def sf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Survival function, mirror image of :func:`cdf`."""
        parameters = cast(_LocScale, parameters)
        x = np.asarray(x, dtype=float)
        mu, b = parameters.loc, parameters.scale
        with np.errstate(over="ignore"):
            return cast(
                NumericArray,
                np.where(
                    x <= mu,
                    1.0 - 0.5 * np.exp((x - mu) / b),
                    0.5 * np.exp((mu - x) / b),
                ),
            )

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Inverse CDF, split at ``p = 0.5``; ``-inf`` and ``inf`` at the ends.

        Raises
        ------
        InvalidProbabilityError
            If probability is outside [0, 1]
        """
        parameters = cast(_LocScale, parameters)
        p = check_probabilities(p)
        mu, b = parameters.loc, parameters.scale
        with np.errstate(divide="ignore"):
            return cast(
                NumericArray,
                np.where(p <= 0.5, mu + b * np.log(2.0 * p), mu - b * np.log(2.0 - 2.0 * p)),
            )

    def isf(parameters: Parametrization, q: NumericArray) -> NumericArray:
        """Inverse survival function, split at ``q = 0.5`` like :func:`ppf`."""
        parameters = cast(_LocScale, parameters)
        q = check_probabilities(q)
        mu, b = parameters.loc, parameters.scale
        with np.errstate(divide="ignore"):
            return cast(
                NumericArray,
                np.where(q <= 0.5, mu - b * np.log(2.0 * q), mu + b * np.log(2.0 - 2.0 * q)),
            )

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Laplace distribution."""
        parameters = cast(_LocScale, parameters)
        return parameters.loc

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Laplace distribution."""
        parameters = cast(_LocScale, parameters)
        return 2.0 * parameters.scale * parameters.scale

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Laplace distribution"""
        return ContinuousSupport()

    Laplace = ParametricFamily(
        name=FamilyName.LAPLACE,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["locScale"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.SF: sf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.ISF: isf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        support_by_parametrization=_support,
    )
    Laplace.__doc__ = LAPLACE_DOC

    @parametrization(family=Laplace, name="locScale")
    class _LocScale(Parametrization):
        """
        Location-scale parametrization of Laplace distribution.

        Parameters
        ----------
        loc : float
            Location (mean and median) of the distribution
        scale : float
            Scale of the distribution
        """

        loc: float
        scale: float
        log2scale: float = field(init=False, repr=False, compare=False)

        @constraint(description="loc is finite", parameter="loc")
        def check_loc_finite(self) -> bool:
            return math.isfinite(self.loc)

        @constraint(description="0 < scale < inf", parameter="scale")
        def check_scale(self) -> bool:
            return 0 < self.scale < math.inf

        def derive(self) -> None:
            self._set_derived(log2scale=math.log(2.0) + math.log(self.scale))

    ParametricFamilyRegister.register(Laplace)
