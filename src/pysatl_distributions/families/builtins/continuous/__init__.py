"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.continuous.chi_squared import (
    ChiSquaredSamplingStrategy,
    configure_chi_squared_family,
)
from pysatl_distributions.families.builtins.continuous.gamma import (
    GammaSamplingStrategy,
    MarsagliaTsangGammaSampler,
    configure_gamma_family,
)
from pysatl_distributions.families.builtins.continuous.laplace import configure_laplace_family
from pysatl_distributions.families.builtins.continuous.logistic import configure_logistic_family
from pysatl_distributions.families.builtins.continuous.pareto import configure_pareto_family

__all__ = [
    "configure_laplace_family",
    "configure_logistic_family",
    "configure_pareto_family",
    "configure_gamma_family",
    "configure_chi_squared_family",
    "MarsagliaTsangGammaSampler",
    "GammaSamplingStrategy",
    "ChiSquaredSamplingStrategy",
]
