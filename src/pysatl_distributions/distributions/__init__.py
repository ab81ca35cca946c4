"""
Distributions subpackage

Interfaces and default implementations for probability distributions used by
PySATL Distributions:

- distribution protocol (:mod:`.distribution`);
- supports (:mod:`.support`);
- numerical fitters and the quantile search (:mod:`.fitters`,
  :mod:`.root_finding`);
- characteristic graph registry (:mod:`.registry`);
- samplers and array-backed samples (:mod:`.sampling`);
- pluggable strategies (:mod:`.strategies`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from .distribution import Distribution
from .registry import characteristic_registry, reset_characteristic_registry
from .sampling import (
    ArraySample,
    InverseTransformSampler,
    Sampler,
    UniformRandomSource,
)
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    SamplingStrategy,
)
from .support import ContinuousSupport, IntegerLatticeDiscreteSupport, Support

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    # distribution
    "Distribution",
    # supports
    "Support",
    "ContinuousSupport",
    "IntegerLatticeDiscreteSupport",
    # sampling
    "ArraySample",
    "Sampler",
    "InverseTransformSampler",
    "UniformRandomSource",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    # registry
    "characteristic_registry",
    "reset_characteristic_registry",
]
