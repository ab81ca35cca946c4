"""
Built-in distribution families for PySATL.

This package contains implementations of standard statistical distribution families
that are available by default in PySATL.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_distributions.families.builtins.continuous import (
    configure_chi_squared_family,
    configure_gamma_family,
    configure_laplace_family,
    configure_logistic_family,
    configure_pareto_family,
)
from pysatl_distributions.families.builtins.discrete import configure_binomial_family

__all__ = [
    "configure_laplace_family",
    "configure_logistic_family",
    "configure_pareto_family",
    "configure_gamma_family",
    "configure_chi_squared_family",
    "configure_binomial_family",
]
