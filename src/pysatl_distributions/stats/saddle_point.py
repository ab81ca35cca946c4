"""
Saddle-Point Expansion
======================

Numerically stable log-probabilities of binomial terms, after C. Loader,
"Fast and Accurate Computation of Binomial Probabilities" (2000).

``log(C(n, x) p^x q^(n-x))`` is evaluated as a sum of Stirling-series
corrections and two deviance terms, without ever forming the binomial
coefficient, so it stays accurate for trial counts where the coefficient
overflows.

Notes
-----
- All functions are pure and operate on Python scalars.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

from scipy.special import gammaln

_HALF_LOG_TWO_PI = 0.5 * math.log(2.0 * math.pi)

# Stirling errors for z = 0, 0.5, 1.0, ..., 15.0
_EXACT_STIRLING_ERRORS = (
    0.0,
    0.1534264097200273452913848,
    0.0810614667953272582196702,
    0.0548141210519176538961390,
    0.0413406959554092940938221,
    0.03316287351993628748511048,
    0.02767792568499833914878929,
    0.02374616365629749597132920,
    0.02079067210376509311152277,
    0.01848845053267318523077934,
    0.01664469118982119216319487,
    0.01513497322191737887351255,
    0.01387612882307074799874573,
    0.01281046524292022692424986,
    0.01189670994589177009505572,
    0.01110455975820691732662991,
    0.010411265261972096497478567,
    0.009799416126158803298389475,
    0.009255462182712732917728637,
    0.008768700134139385462952823,
    0.008330563433362871256469318,
    0.007934114564314020547248100,
    0.007573675487951840794972024,
    0.007244554301320383179543912,
    0.006942840107209529865664152,
    0.006665247032707682442354394,
    0.006408994188004207068439631,
    0.006171712263039457647532867,
    0.005951370112758847735624416,
    0.005746216513010115682023589,
    0.005554733551962801371038690,
)


def stirling_error(z: float) -> float:
    """
    Error of Stirling's approximation, ``log Γ(z+1) - log(sqrt(2π z) (z/e)^z)``.

    Tabulated for half-integers below 15, computed from ``log Γ`` for other
    small arguments and from the asymptotic series otherwise.

    Parameters
    ----------
    z : float
        Non-negative argument.
    """
    if z < 15.0:
        z2 = 2.0 * z
        if math.floor(z2) == z2:
            return _EXACT_STIRLING_ERRORS[int(z2)]
        return float(gammaln(z + 1.0)) - (z + 0.5) * math.log(z) + z - _HALF_LOG_TWO_PI
    z2 = z * z
    return (
        0.083333333333333333333
        - (
            0.00277777777777777777778
            - (
                0.00079365079365079365079365
                - (0.000595238095238095238095238 - 0.0008417508417508417508417508 / z2) / z2
            )
            / z2
        )
        / z2
    ) / z


def deviance_part(x: float, mu: float) -> float:
    """
    Deviance term ``x log(x/mu) + mu - x``.

    Close to ``mu`` the term is a small difference of large numbers, so it is
    summed as a series in ``(x - mu)/(x + mu)`` instead.
    """
    if abs(x - mu) < 0.1 * (x + mu):
        d = x - mu
        v = d / (x + mu)
        s1 = v * d
        s = math.nan
        ej = 2.0 * x * v
        v = v * v
        j = 1
        while s1 != s:
            s = s1
            ej *= v
            s1 = s + ej / (2 * j + 1)
            j += 1
        return s1
    if x == 0:
        return mu
    return x * math.log(x / mu) + mu - x


def log_binomial_probability(x: int, n: int, p: float, q: float) -> float:
    """
    Log of the binomial probability ``C(n, x) p^x q^(n-x)``.

    Parameters
    ----------
    x : int
        Number of successes, ``0 <= x <= n``.
    n : int
        Number of trials.
    p : float
        Probability of success.
    q : float
        Probability of failure, ``1 - p``; passed separately so callers keep
        its full precision.

    Returns
    -------
    float
        ``log`` of the probability, ``-inf`` when it is zero.
    """
    if x == 0:
        if p < 0.1:
            return -deviance_part(n, n * q) - n * p
        if n == 0:
            return 0.0
        return n * math.log(q) if q > 0 else -math.inf
    if x == n:
        if q < 0.1:
            return -deviance_part(n, n * p) - n * q
        return n * math.log(p) if p > 0 else -math.inf
    if p == 0.0 or q == 0.0:
        return -math.inf
    n_mx = n - x
    ret = (
        stirling_error(n)
        - stirling_error(x)
        - stirling_error(n_mx)
        - deviance_part(x, n * p)
        - deviance_part(n_mx, n * q)
    )
    f = (2.0 * math.pi * x * n_mx) / n
    return -0.5 * math.log(f) + ret


__all__ = [
    "stirling_error",
    "deviance_part",
    "log_binomial_probability",
]
