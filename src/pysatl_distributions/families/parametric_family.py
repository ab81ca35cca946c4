"""
Parametric families of distributions.

A family owns its parametrization classes and a set of closed-form
characteristics written against the base parametrization. Distributions
created in any other parametrization are converted to the base one once,
when the characteristics are bound.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial
from typing import TYPE_CHECKING

from pysatl_distributions.distributions.computation import AnalyticalComputation
from pysatl_distributions.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from pysatl_distributions.families.distribution import ParametricFamilyDistribution
from pysatl_distributions.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_distributions.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_distributions.distributions.support import Support
    from pysatl_distributions.families.parametrizations import Parametrization
    from pysatl_distributions.types import (
        DistributionType,
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[[Any, Any], Any]


class ParametricFamily:
    """
    A family of distributions with one or more parametrizations.

    Parameters
    ----------
    name : str
        Family name, normally a :class:`FamilyName` value.
    distr_type : DistributionType
        Type shared by every member of the family.
    distr_parametrizations : list[ParametrizationName]
        Parametrization names; the first one is the base parametrization.
    distr_characteristics : dict[GenericCharacteristicName, Callable]
        Functions ``(base_parameters, x)`` computing each characteristic.
    support_by_parametrization : Callable[[Parametrization], Support]
        Support of the distribution, given base parameters.
    sampling_strategy : SamplingStrategy, optional
        Defaults to inverse transform sampling.
    computation_strategy : ComputationStrategy, optional
        Defaults to :class:`DefaultComputationStrategy`.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType,
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[GenericCharacteristicName, ParametrizedFunction],
        support_by_parametrization: Callable[[Any], Support],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
    ):
        self._name = name
        self.distr_type = distr_type
        self.parametrization_names = distr_parametrizations
        self.base_parametrization_name = distr_parametrizations[0]
        self.distr_characteristics = distr_characteristics
        self._support_resolver = support_by_parametrization
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )
        self.sampling_strategy = (
            DefaultSamplingUnivariateStrategy() if sampling_strategy is None else sampling_strategy
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Registered parametrization classes by name."""
        return self._parametrizations

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Attach ``parametrization_class`` under ``name``; called by :func:`parametrization`.

        Raises
        ------
        ValueError
            If the family does not declare ``name`` or already has a class for it.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Family {self.name} declares no parametrization '{name}'.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Bind the family's characteristic functions to ``parameters``."""
        base_parameters = parameters.to_base()
        return {
            characteristic: AnalyticalComputation(
                target=characteristic, func=partial(func, base_parameters)
            )
            for characteristic, func in self.distr_characteristics.items()
        }

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Member of the family, e.g. ``gamma.distribution("shapeRate", shape=2, rate=1)``.

        The base parametrization is used when ``parametrization_name`` is omitted.

        Raises
        ------
        KeyError
            For an unregistered parametrization name.
        ParameterConstraintError
            For parameter values outside the parametrization's domain.
        """
        if parametrization_name is None:
            parametrization_name = self.base_parametrization_name
        parameters = self._parametrizations[parametrization_name](**parameters_values)
        return ParametricFamilyDistribution(
            family=self,
            _distribution_type=self.distr_type,
            parametrization=parameters,
            _support=self._support_resolver(parameters.to_base()),
        )

    def register(self) -> ParametricFamily:
        """Add the family to the global :class:`ParametricFamilyRegister`."""
        ParametricFamilyRegister.register(self)
        return self

    __call__ = distribution
