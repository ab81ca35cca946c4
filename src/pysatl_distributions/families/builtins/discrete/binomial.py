"""
Binomial distribution family implementation.

Contains the Binomial family with the trials-probability parametrization.

Interior masses go through the saddle-point expansion of
:mod:`pysatl_distributions.stats.saddle_point`; the masses at ``k = 0`` and
``k = n`` are computed once from the power form, where the binomial
coefficient is exactly one. Quantiles come from the integer quantile search.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import field
from numbers import Integral
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import betainc, betaincc

from pysatl_distributions.distributions.computation import elementwise
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.families.parametric_family import ParametricFamily
from pysatl_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.families.registry import ParametricFamilyRegister
from pysatl_distributions.stats.saddle_point import log_binomial_probability
from pysatl_distributions.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


def configure_binomial_family() -> None:
    """
    Configure and register the Binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BINOMIAL):
        return

    BINOMIAL_DOC = """
    Binomial distribution.

    Number of successes in n independent trials with success probability p.

    Probability mass function:
        P(X = k) = C(n, k) * p^k * (1 - p)^(n - k) for k = 0, ..., n
    """

    def _trial_index(parameters: _TrialsProbability, k: float) -> int | None:
        """``k`` as an index in ``0..n``, ``None`` off the lattice."""
        if not math.isfinite(k) or k != math.floor(k) or k < 0 or k > parameters.n:
            return None
        return int(k)

    def pmf(parameters: Parametrization, k: NumericArray) -> NumericArray:
        """
        Probability mass function for binomial distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - n: int (number of trials)
            - p: float (probability of success)
        k : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            Probabilities P(X = k); zero for points off ``{0, ..., n}``
        """
        parameters = cast(_TrialsProbability, parameters)

        @elementwise
        def _pmf(x: float, **_: Any) -> float:
            index = _trial_index(parameters, x)
            if index is None:
                return 0.0
            if index == 0:
                return parameters.pmf0
            if index == parameters.n:
                return parameters.pmfn
            return math.exp(
                log_binomial_probability(index, parameters.n, parameters.p, parameters.q)
            )

        return cast(NumericArray, _pmf(k))

    def logpmf(parameters: Parametrization, k: NumericArray) -> NumericArray:
        """Log-probability through the saddle-point expansion, boundaries included."""
        parameters = cast(_TrialsProbability, parameters)

        @elementwise
        def _logpmf(x: float, **_: Any) -> float:
            index = _trial_index(parameters, x)
            if index is None:
                return -math.inf
            if parameters.n == 0:
                return 0.0
            # n * log1p(-0.0) is -0.0
            return log_binomial_probability(index, parameters.n, parameters.p, parameters.q) + 0.0

        return cast(NumericArray, _logpmf(k))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function ``I_{1-p}(n - k, k + 1)``.

        ``k = floor(x)``; ``cdf(0)`` is the precomputed mass at zero.
        """
        parameters = cast(_TrialsProbability, parameters)
        n, p = parameters.n, parameters.p
        with np.errstate(invalid="ignore"):
            k = np.floor(np.asarray(x, dtype=float))
            kc = np.clip(k, 0.0, max(n - 1.0, 0.0))
            interior = betaincc(kc + 1.0, np.maximum(n - kc, 1.0), p)
            result = np.where(k == 0, parameters.pmf0, interior)
            result = np.where(k >= n, 1.0, result)
            return cast(NumericArray, np.where(k < 0, 0.0, result))

    def sf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Survival function ``I_p(k + 1, n - k)``.

        ``sf(n - 1)`` is the precomputed mass at ``n``.
        """
        parameters = cast(_TrialsProbability, parameters)
        n, p = parameters.n, parameters.p
        with np.errstate(invalid="ignore"):
            k = np.floor(np.asarray(x, dtype=float))
            kc = np.clip(k, 0.0, max(n - 1.0, 0.0))
            interior = betainc(kc + 1.0, np.maximum(n - kc, 1.0), p)
            result = np.where(k == n - 1, parameters.pmfn, interior)
            result = np.where(k >= n, 0.0, result)
            return cast(NumericArray, np.where(k < 0, 1.0, result))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_TrialsProbability, parameters)
        return parameters.n * parameters.p

    def var_func(parameters: Parametrization, _: Any) -> float:
        parameters = cast(_TrialsProbability, parameters)
        return parameters.n * parameters.p * parameters.q

    def _support(parameters: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support ``{0, ..., n}``, a single point when ``p`` is 0 or 1."""
        parameters = cast(_TrialsProbability, parameters)
        n, p = parameters.n, parameters.p
        return IntegerLatticeDiscreteSupport(
            min_k=0 if p < 1.0 else n,
            max_k=n if p > 0.0 else 0,
        )

    Binomial = ParametricFamily(
        name=FamilyName.BINOMIAL,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["trialsProbability"],
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOGPMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.SF: sf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
        },
        support_by_parametrization=_support,
    )
    Binomial.__doc__ = BINOMIAL_DOC

    @parametrization(family=Binomial, name="trialsProbability")
    class _TrialsProbability(Parametrization):
        """
        Trials-probability parametrization of binomial distribution.

        Parameters
        ----------
        n : int
            Number of trials
        p : float
            Probability of success; ``-0.0`` is stored as ``0.0``
        """

        n: int
        p: float
        q: float = field(init=False, repr=False, compare=False)
        pmf0: float = field(init=False, repr=False, compare=False)
        pmfn: float = field(init=False, repr=False, compare=False)

        @constraint(description="n is a non-negative integer", parameter="n")
        def check_trials(self) -> bool:
            return isinstance(self.n, Integral) and not isinstance(self.n, bool) and self.n >= 0

        @constraint(description="0 <= p <= 1", parameter="p")
        def check_probability(self) -> bool:
            return 0.0 <= self.p <= 1.0

        def derive(self) -> None:
            n, p = int(self.n), abs(float(self.p))
            if p >= 0.5:
                pmf0 = (1.0 - p) ** n
            else:
                pmf0 = math.exp(n * math.log1p(-p))
            self._set_derived(n=n, p=p, q=1.0 - p, pmf0=pmf0, pmfn=p**n)

    ParametricFamilyRegister.register(Binomial)
