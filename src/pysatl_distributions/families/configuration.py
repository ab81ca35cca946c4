"""
Distribution Families Configuration
====================================

Registers the built-in parametric families in the global
:class:`ParametricFamilyRegister`:

- continuous: Laplace, Logistic, Pareto, Gamma, ChiSquared;
- discrete: Binomial.

Notes
-----
- Gamma is configured before ChiSquared, which delegates to it.
- Configuration happens once per process; ``reset_families_register`` undoes
  it (used by the test suite).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_distributions.families.builtins import (
    configure_binomial_family,
    configure_chi_squared_family,
    configure_gamma_family,
    configure_laplace_family,
    configure_logistic_family,
    configure_pareto_family,
)
from pysatl_distributions.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_laplace_family()
    configure_logistic_family()
    configure_pareto_family()
    configure_gamma_family()
    configure_chi_squared_family()
    configure_binomial_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
