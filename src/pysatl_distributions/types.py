"""
Core Type Definitions
=====================

Fundamental types, aliases and name enumerations shared by the distribution
contract, the computation graph and the parametric families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from enum import Enum, StrEnum, auto
from typing import Any

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """Whether a random variable is integer valued or has a density."""

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


@dataclass(frozen=True, slots=True)
class DistributionType:
    """
    Type of a univariate distribution.

    The characteristic graph reads ``kind`` to decide which conversions
    apply to a distribution.
    """

    kind: Kind


UnivariateContinuous = DistributionType(Kind.CONTINUOUS)
UnivariateDiscrete = DistributionType(Kind.DISCRETE)

NumPyNumber = np.floating[Any] | np.integer[Any]
Number = NumPyNumber | int | float
NumericArray = NDArray[NumPyNumber]
BoolArray = NDArray[np.bool_]


class ContinuousSupportShape1D(Enum):
    """
    Shapes of a closed interval of the extended real line.

    Attributes
    ----------
    REAL_LINE
        (-∞, ∞).
    RAY_LEFT
        (-∞, b].
    RAY_RIGHT
        [a, ∞).
    BOUNDED_INTERVAL
        [a, b] with a < b.
    SINGLE_POINT
        {a}.
    """

    REAL_LINE = auto()
    RAY_LEFT = auto()
    RAY_RIGHT = auto()
    BOUNDED_INTERVAL = auto()
    SINGLE_POINT = auto()


type GenericCharacteristicName = str
type ParametrizationName = str


class CharacteristicName(StrEnum):
    """
    Enumeration of distribution characteristics.

    Every member is a node of the characteristic graph: a family either
    provides it analytically or it is fitted from another characteristic.
    """

    PDF = "pdf"
    LOGPDF = "logpdf"
    PMF = "pmf"
    LOGPMF = "logpmf"
    CDF = "cdf"
    SF = "sf"
    PPF = "ppf"
    ISF = "isf"
    MEAN = "mean"
    VAR = "var"


class FamilyName(StrEnum):
    LAPLACE = "Laplace"
    LOGISTIC = "Logistic"
    PARETO = "Pareto"
    GAMMA = "Gamma"
    CHI_SQUARED = "ChiSquared"
    BINOMIAL = "Binomial"


__all__ = [
    "Kind",
    "DistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "GenericCharacteristicName",
    "ParametrizationName",
    "ContinuousSupportShape1D",
    "BoolArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "FamilyName",
]
