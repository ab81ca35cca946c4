"""
Default configuration and cached accessor for the global characteristic registry.

- No auto-configuration in constructor.
- ``characteristic_registry()`` (``@lru_cache``) builds the singleton instance
  and seeds it with the default conversions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_distributions.distributions.computation import ComputationMethod
from pysatl_distributions.distributions.fitters import (
    fit_cdf_to_ppf_1C,
    fit_cdf_to_ppf_1D,
    fit_cdf_to_sf,
    fit_logpdf_to_pdf,
    fit_logpmf_to_pmf,
    fit_pdf_to_logpdf,
    fit_pmf_to_cdf_1D,
    fit_pmf_to_logpmf,
    fit_sf_to_cdf,
    fit_sf_to_isf_1C,
    fit_sf_to_isf_1D,
)
from pysatl_distributions.distributions.registry.constraint import Applicability
from pysatl_distributions.distributions.registry.graph import CharacteristicRegistry
from pysatl_distributions.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_distributions.types import CharacteristicName, Kind

PDF = CharacteristicName.PDF
LOGPDF = CharacteristicName.LOGPDF
PMF = CharacteristicName.PMF
LOGPMF = CharacteristicName.LOGPMF
CDF = CharacteristicName.CDF
SF = CharacteristicName.SF
PPF = CharacteristicName.PPF
ISF = CharacteristicName.ISF
MEAN = CharacteristicName.MEAN
VAR = CharacteristicName.VAR


def _left_bounded_lattice(support: object) -> bool:
    return isinstance(support, IntegerLatticeDiscreteSupport) and support.is_left_bounded


def _configure(reg: CharacteristicRegistry) -> None:
    """Default PySATL configuration for characteristic registry."""
    continuous = Applicability(kinds=frozenset({Kind.CONTINUOUS}))
    discrete = Applicability(kinds=frozenset({Kind.DISCRETE}))
    discrete_left_bounded = Applicability(
        kinds=frozenset({Kind.DISCRETE}), support=_left_bounded_lattice
    )

    for name in (CDF, SF, PPF, ISF, MEAN, VAR):
        reg.add_characteristic(name)
    for name in (PDF, LOGPDF):
        reg.add_characteristic(name, presence_constraint=continuous)
    for name in (PMF, LOGPMF):
        reg.add_characteristic(name, presence_constraint=discrete)

    # Complements apply to every kind
    reg.add_computation(ComputationMethod(target=SF, source=CDF, fitter=fit_cdf_to_sf))
    reg.add_computation(ComputationMethod(target=CDF, source=SF, fitter=fit_sf_to_cdf))

    for target, source, fitter, rule in (
        (LOGPDF, PDF, fit_pdf_to_logpdf, continuous),
        (PDF, LOGPDF, fit_logpdf_to_pdf, continuous),
        (LOGPMF, PMF, fit_pmf_to_logpmf, discrete),
        (PMF, LOGPMF, fit_logpmf_to_pmf, discrete),
        (CDF, PMF, fit_pmf_to_cdf_1D, discrete_left_bounded),
        (PPF, CDF, fit_cdf_to_ppf_1C, continuous),
        (ISF, SF, fit_sf_to_isf_1C, continuous),
        (PPF, CDF, fit_cdf_to_ppf_1D, discrete),
        (ISF, SF, fit_sf_to_isf_1D, discrete),
    ):
        reg.add_computation(
            ComputationMethod(target=target, source=source, fitter=fitter), constraint=rule
        )


@lru_cache(maxsize=1)
def characteristic_registry() -> CharacteristicRegistry:
    """
    Return a cached, configured characteristic registry (singleton instance).

    Notes
    -----
    - Configuration is applied exactly once per process via LRU caching.
    - Users may extend the returned registry with their own conversions.
    """
    reg = CharacteristicRegistry()
    _configure(reg)
    return reg


def reset_characteristic_registry() -> None:
    """
    Reset the cached characteristic registry.
    """
    characteristic_registry.cache_clear()
    CharacteristicRegistry._reset()
