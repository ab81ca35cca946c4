"""
Logistic distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import field
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import expit, logit

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


def configure_logistic_family() -> None:
    """
    Configure and register the Logistic distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LOGISTIC):
        return

    LOGISTIC_DOC = """
    Logistic distribution.

    Probability density function, with z = (x - μ)/s:
        f(x) = exp(-z) / (s * (1 + exp(-z))²)

    The distribution function is the logistic sigmoid of z.
    """

    def _z(parameters: _LocScale, x: NumericArray) -> NumericArray:
        return cast(NumericArray, (np.asarray(x, dtype=float) - parameters.loc) / parameters.scale)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for logistic distribution.

        The density is symmetric in z, so it is evaluated at ``-|z|`` where the
        exponential cannot overflow.
        """
        parameters = cast(_LocScale, parameters)
        v = np.exp(-np.abs(_z(parameters, x)))
        return cast(NumericArray, v / (parameters.scale * (1.0 + v) ** 2))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_LocScale, parameters)
        az = np.abs(_z(parameters, x))
        return cast(NumericArray, -parameters.log_scale - az - 2.0 * np.log1p(np.exp(-az)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_LocScale, parameters)
        return cast(NumericArray, expit(_z(parameters, x)))

    def sf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_LocScale, parameters)
        return cast(NumericArray, expit(-_z(parameters, x)))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function ``μ + s * log(p / (1 - p))``.

        Raises
        ------
        InvalidProbabilityError
            If probability is outside [0, 1]
        """
        parameters = cast(_LocScale, parameters)
        p = check_probabilities(p)
        return cast(NumericArray, parameters.loc + parameters.scale * logit(p))

    def isf(parameters: Parametrization, q: NumericArray) -> NumericArray:
        parameters = cast(_LocScale, parameters)
        q = check_probabilities(q)
        return cast(NumericArray, parameters.loc - parameters.scale * logit(q))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_LocScale, parameters)
        return parameters.loc

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_LocScale, parameters)
        return parameters.scale * parameters.scale * math.pi**2 / 3.0

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport()

    Logistic = ParametricFamily(
        name=FamilyName.LOGISTIC,
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
    Logistic.__doc__ = LOGISTIC_DOC

    @parametrization(family=Logistic, name="locScale")
    class _LocScale(Parametrization):
        """
        Location-scale parametrization of logistic distribution.

        Parameters
        ----------
        loc : float
            Location (mean and median)
        scale : float
            Scale, ``s``; the standard deviation is ``s * π / sqrt(3)``
        """

        loc: float
        scale: float
        log_scale: float = field(init=False, repr=False, compare=False)

        @constraint(description="loc is finite", parameter="loc")
        def check_loc_finite(self) -> bool:
            return math.isfinite(self.loc)

        @constraint(description="0 < scale < inf", parameter="scale")
        def check_scale(self) -> bool:
            return 0 < self.scale < math.inf

        def derive(self) -> None:
            self._set_derived(log_scale=math.log(self.scale))

    ParametricFamilyRegister.register(Logistic)
