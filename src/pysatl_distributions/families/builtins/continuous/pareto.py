"""
Pareto distribution family implementation.

Contains the Pareto (type I) family with scale ``k`` and shape ``a``.

Extreme parameters are supported: the density normalisation ``a * k**a`` is
replaced by its logarithm when it over- or underflows, and an infinite shape
degenerates to a point mass at ``k``.
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

_TINY = float(np.finfo(np.float64).tiny)


def configure_pareto_family() -> None:
    """
    Configure and register the Pareto distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.PARETO):
        return

    PARETO_DOC = """
    Pareto (type I) distribution.

    Probability density function:
        f(x) = a * k^a / x^(a + 1) for x ≥ k

    A power-law tail starting at the scale k. Moments of order a and higher
    do not exist.
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Pareto distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - scale: float (k, lower bound of the support)
            - shape: float (a, tail index)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values at points x; with an infinite shape the
            density is ``inf`` at ``k`` and ``0`` elsewhere
        """
        parameters = cast(_ScaleShape, parameters)
        x = np.asarray(x, dtype=float)
        k, a = parameters.scale, parameters.shape
        with np.errstate(all="ignore"):
            if math.isinf(a):
                density = np.where(x == k, np.inf, 0.0)
            elif parameters.log_form:
                log_ratio = np.log(x) - parameters.log_scale
                density = np.exp(parameters.log_norm - log_ratio * (a + 1.0))
            else:
                density = parameters.norm * np.power(k / x, a + 1.0)
            return cast(NumericArray, np.where(x < k, 0.0, density))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log-density ``log(a) - log(k) - (a + 1) * (log(x) - log(k))``."""
        parameters = cast(_ScaleShape, parameters)
        x = np.asarray(x, dtype=float)
        k, a = parameters.scale, parameters.shape
        with np.errstate(all="ignore"):
            if math.isinf(a):
                log_density = np.where(x == k, np.inf, -np.inf)
            else:
                log_ratio = np.log(x) - parameters.log_scale
                log_density = parameters.log_norm - log_ratio * (a + 1.0)
            return cast(NumericArray, np.where(x < k, -np.inf, log_density))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function ``1 - (k/x)^a``.

        Evaluated as ``-expm1(a * log(k/x))`` so that values just above ``k``
        keep full relative precision.
        """
        parameters = cast(_ScaleShape, parameters)
        x = np.asarray(x, dtype=float)
        k, a = parameters.scale, parameters.shape
        with np.errstate(all="ignore"):
            return cast(NumericArray, np.where(x <= k, 0.0, -np.expm1(a * np.log(k / x))))

    def sf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_ScaleShape, parameters)
        x = np.asarray(x, dtype=float)
        k, a = parameters.scale, parameters.shape
        with np.errstate(all="ignore"):
            return cast(NumericArray, np.where(x <= k, 1.0, np.exp(a * np.log(k / x))))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function ``k / exp(log1p(-p) / a)``.

        Raises
        ------
        InvalidProbabilityError
            If probability is outside [0, 1]
        """
        parameters = cast(_ScaleShape, parameters)
        p = check_probabilities(p)
        k, a = parameters.scale, parameters.shape
        with np.errstate(divide="ignore", invalid="ignore"):
            return cast(NumericArray, np.where(p == 1.0, np.inf, k / np.exp(np.log1p(-p) / a)))

    def isf(parameters: Parametrization, q: NumericArray) -> NumericArray:
        parameters = cast(_ScaleShape, parameters)
        q = check_probabilities(q)
        k, a = parameters.scale, parameters.shape
        with np.errstate(divide="ignore", invalid="ignore"):
            return cast(NumericArray, np.where(q == 0.0, np.inf, k / np.power(q, 1.0 / a)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Pareto distribution, infinite for ``a <= 1``."""
        parameters = cast(_ScaleShape, parameters)
        k, a = parameters.scale, parameters.shape
        if a <= 1.0:
            return math.inf
        if math.isinf(a):
            return k
        return k * (a / (a - 1.0))

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Pareto distribution, infinite for ``a <= 2``."""
        parameters = cast(_ScaleShape, parameters)
        k, a = parameters.scale, parameters.shape
        if a <= 2.0:
            return math.inf
        if math.isinf(a):
            return 0.0
        s1 = a - 1.0
        return k * k * (a / s1 / s1 / (a - 2.0))

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of Pareto distribution, ``[k, inf)``"""
        parameters = cast(_ScaleShape, parameters)
        return ContinuousSupport(left=parameters.scale)

    Pareto = ParametricFamily(
        name=FamilyName.PARETO,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["scaleShape"],
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
    Pareto.__doc__ = PARETO_DOC

    @parametrization(family=Pareto, name="scaleShape")
    class _ScaleShape(Parametrization):
        """
        Scale-shape parametrization of Pareto distribution.

        Parameters
        ----------
        scale : float
            Scale ``k``, the lower bound of the support
        shape : float
            Shape (tail index) ``a``; may be infinite
        """

        scale: float
        shape: float
        norm: float = field(init=False, repr=False, compare=False)
        log_scale: float = field(init=False, repr=False, compare=False)
        log_norm: float = field(init=False, repr=False, compare=False)
        log_form: bool = field(init=False, repr=False, compare=False)

        @constraint(description="0 < scale < inf", parameter="scale")
        def check_scale(self) -> bool:
            return 0 < self.scale < math.inf

        @constraint(description="shape > 0", parameter="shape")
        def check_shape_positive(self) -> bool:
            return self.shape > 0

        def derive(self) -> None:
            with np.errstate(all="ignore"):
                norm = float(np.float64(self.shape) / np.float64(self.scale))
            log_scale = math.log(self.scale)
            self._set_derived(
                norm=norm,
                log_scale=log_scale,
                log_norm=math.log(self.shape) - log_scale,
                log_form=not (math.isfinite(norm) and norm >= _TINY),
            )

    ParametricFamilyRegister.register(Pareto)
