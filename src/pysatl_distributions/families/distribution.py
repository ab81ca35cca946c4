"""
Members of parametric families.

Instances are immutable: parameters are validated when the parametrization is
created, and the analytical computations are bound once, at construction.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from pysatl_distributions.distributions.distribution import Distribution

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_distributions.distributions.computation import AnalyticalComputation
    from pysatl_distributions.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_distributions.distributions.support import Support
    from pysatl_distributions.families.parametric_family import ParametricFamily
    from pysatl_distributions.families.parametrizations import Parametrization
    from pysatl_distributions.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(frozen=True, slots=True, weakref_slot=True)
class ParametricFamilyDistribution(Distribution):
    """
    Distribution given by a family and validated parameter values.

    Two members are equal when their type, parametrization and support are;
    ``parametrization`` keeps the form the parameters were given in.
    """

    family: ParametricFamily = field(compare=False, repr=False)
    _distribution_type: DistributionType = field(repr=False)
    parametrization: Parametrization
    _support: Support = field(repr=False)
    _analytical_computations: Mapping[
        GenericCharacteristicName, AnalyticalComputation[Any, Any]
    ] = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        computations = self.family._build_analytical_computations(self.parametrization)
        object.__setattr__(self, "_analytical_computations", MappingProxyType(computations))

    @property
    def family_name(self) -> str:
        return self.family.name

    @property
    def parameters(self) -> dict[str, Any]:
        return self.parametrization.parameters

    @property
    def parametrization_name(self) -> str:
        return self.parametrization.name

    @property
    def distribution_type(self) -> DistributionType:
        return self._distribution_type

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Characteristics the family provides in closed form for these parameters."""
        return self._analytical_computations

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self.family.computation_strategy

    @property
    def support(self) -> Support:
        return self._support
