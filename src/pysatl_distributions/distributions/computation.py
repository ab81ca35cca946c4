"""
Callables computing distribution characteristics.

A family supplies :class:`AnalyticalComputation` objects; every other
characteristic comes from fitting a :class:`ComputationMethod` edge of the
characteristic graph, which yields a :class:`FittedComputationMethod`.

Analytical callables accept scalars or NumPy arrays. Fitted conversions that
are inherently scalar (the quantile searches) are lifted to arrays with
:func:`elementwise`.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import TYPE_CHECKING, Any

import numpy as np
from mypy_extensions import KwArg

from pysatl_distributions.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_distributions.distributions.distribution import Distribution


def elementwise(
    func: Callable[[float, KwArg(Any)], float],
) -> Callable[[Any, KwArg(Any)], Any]:
    """
    Lift a scalar ``float -> float`` callable to scalars and arrays.

    Scalar input is passed through as ``float``; array input is evaluated point
    by point and returned with the same shape.
    """

    @wraps(func)
    def wrapper(data: Any, **options: Any) -> Any:
        if np.ndim(data) == 0:
            return func(float(data), **options)
        arr = np.asarray(data, dtype=float)
        out = np.empty(arr.shape, dtype=float)
        for index, value in np.ndenumerate(arr):
            out[index] = func(float(value), **options)
        return out

    return wrapper


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """Closed-form ``target`` of one distribution, with its parameters bound."""

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """``target`` derived from ``source`` for one distribution."""

    target: GenericCharacteristicName
    source: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """
    Edge ``source -> target`` of the characteristic graph.

    ``fitter`` takes a distribution, resolves ``source`` on it and returns the
    :class:`FittedComputationMethod` computing ``target``.
    """

    target: GenericCharacteristicName
    source: GenericCharacteristicName
    fitter: Callable[["Distribution", KwArg(Any)], FittedComputationMethod[In, Out]]

    def fit(self, distribution: "Distribution", **options: Any) -> FittedComputationMethod[In, Out]:
        return self.fitter(distribution, **options)
