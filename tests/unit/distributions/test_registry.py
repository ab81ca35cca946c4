from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from typing import Any

import pytest

from pysatl_distributions.distributions.computation import (
    ComputationMethod,
    FittedComputationMethod,
)
from pysatl_distributions.distributions.registry import (
    Applicability,
    CharacteristicRegistry,
    characteristic_registry,
    reset_characteristic_registry,
)
from pysatl_distributions.types import Kind
from tests.unit.distributions.base import DistributionTestBase


def _identity_fitter(source: str, target: str):
    def fitter(distribution: Any, /, **_: Any) -> FittedComputationMethod[Any, Any]:
        return FittedComputationMethod(target=target, source=source, func=lambda x, **__: x)

    return fitter


def _method(source: str, target: str) -> ComputationMethod[Any, Any]:
    return ComputationMethod(target=target, source=source, fitter=_identity_fitter(source, target))


class TestApplicability(DistributionTestBase):
    def test_default_allows_everything(self) -> None:
        rule = Applicability()
        assert rule.allows(self.make_logistic_cdf_distribution())
        assert rule.allows(self.make_discrete_point_pmf_distribution())

    def test_kinds(self) -> None:
        rule = Applicability(kinds=frozenset({Kind.DISCRETE}))
        assert rule.allows(self.make_discrete_point_pmf_distribution())
        assert not rule.allows(self.make_logistic_cdf_distribution())

    def test_support_predicate(self) -> None:
        rule = Applicability(
            kinds=frozenset({Kind.DISCRETE}),
            support=lambda support: support.is_left_bounded,
        )
        assert rule.allows(self.make_discrete_point_pmf_distribution())
        assert not rule.allows(self.make_discrete_point_pmf_distribution(left_bounded=False))

    def test_equal_rules(self) -> None:
        assert Applicability() == Applicability()
        assert Applicability(kinds=frozenset({Kind.DISCRETE})) != Applicability()


class TestCharacteristicRegistry(DistributionTestBase):
    def test_registry_is_singleton(self) -> None:
        assert characteristic_registry() is CharacteristicRegistry()
        assert characteristic_registry() is characteristic_registry()

    def test_reset_creates_new_instance(self) -> None:
        before = characteristic_registry()
        reset_characteristic_registry()
        assert characteristic_registry() is not before

    def test_continuous_view(self) -> None:
        view = characteristic_registry().view(self.make_logistic_cdf_distribution())

        assert self.PMF not in view.all_characteristics
        assert self.LOGPMF not in view.all_characteristics
        assert {self.PDF, self.LOGPDF, self.CDF, self.SF, self.PPF, self.ISF}.issubset(
            view.all_characteristics
        )
        assert view.successors(self.CDF) == {self.SF, self.PPF}
        assert view.successors(self.PPF) == set()
        assert view.predecessors(self.ISF) == {self.SF}

    def test_quantiles_are_not_complements_of_each_other(self) -> None:
        view = characteristic_registry().view(self.make_logistic_cdf_distribution())

        assert self.ISF not in view.successors(self.PPF)
        assert self.PPF not in view.successors(self.ISF)

    def test_discrete_view(self) -> None:
        view = characteristic_registry().view(self.make_discrete_point_pmf_distribution())

        assert self.PDF not in view.all_characteristics
        assert view.successors(self.PMF) == {self.LOGPMF, self.CDF}
        assert view.find_path([self.PMF], self.PPF) is not None

    def test_pmf_summation_requires_left_bounded_support(self) -> None:
        distr = self.make_discrete_point_pmf_distribution(left_bounded=False)
        view = characteristic_registry().view(distr)

        assert self.CDF not in view.successors(self.PMF)
        assert view.find_path([self.PMF], self.CDF) is None

    def test_find_path_shortest_and_ordered(self) -> None:
        view = characteristic_registry().view(self.make_logistic_cdf_distribution())

        assert view.find_path([self.CDF], self.CDF) == []

        path = view.find_path([self.CDF], self.ISF)
        assert path is not None
        assert [(m.source, m.target) for m in path] == [(self.CDF, self.SF), (self.SF, self.ISF)]

        # A direct source wins over a longer chain
        path = view.find_path([self.CDF, self.SF], self.ISF)
        assert path is not None
        assert [(m.source, m.target) for m in path] == [(self.SF, self.ISF)]

    def test_unreachable_target(self) -> None:
        view = characteristic_registry().view(self.make_logistic_cdf_distribution())
        assert view.find_path([self.CDF], self.PDF) is None
        assert view.find_path([self.MEAN], self.CDF) is None

    def test_add_computation_requires_declared_nodes(self) -> None:
        reg = characteristic_registry()
        with pytest.raises(ValueError, match="has not been declared"):
            reg.add_computation(_method(self.CDF, "median"))

    def test_duplicate_characteristic_warns(self) -> None:
        reg = characteristic_registry()
        with pytest.warns(UserWarning, match="already added"):
            reg.add_characteristic(self.CDF)

    def test_user_extension(self) -> None:
        reg = characteristic_registry()
        reg.add_characteristic("median")
        reg.add_computation(_method(self.PPF, "median"))

        view = reg.view(self.make_logistic_cdf_distribution())
        path = view.find_path([self.CDF], "median")
        assert path is not None
        assert [m.target for m in path] == [self.PPF, "median"]

    def test_same_constraint_replaces_edge(self) -> None:
        reg = characteristic_registry()
        reg.add_characteristic("median")
        first = _method(self.PPF, "median")
        second = _method(self.PPF, "median")
        reg.add_computation(first)
        with pytest.warns(UserWarning, match="replaced"):
            reg.add_computation(second)

        path = reg.view(self.make_logistic_cdf_distribution()).find_path([self.PPF], "median")
        assert path == [second]

    def test_first_applicable_edge_wins(self) -> None:
        reg = characteristic_registry()
        reg.add_characteristic("median")
        discrete_only = Applicability(kinds=frozenset({Kind.DISCRETE}))
        discrete = _method(self.PPF, "median")
        anything = _method(self.PPF, "median")
        reg.add_computation(discrete, constraint=discrete_only)
        reg.add_computation(anything)

        continuous_path = reg.view(self.make_logistic_cdf_distribution()).find_path(
            [self.PPF], "median"
        )
        discrete_path = reg.view(self.make_discrete_point_pmf_distribution()).find_path(
            [self.PPF], "median"
        )
        assert continuous_path == [anything]
        assert discrete_path == [discrete]
