from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from pysatl_distributions.distributions.support import ContinuousSupport
from pysatl_distributions.families import (
    ParametricFamily,
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_distributions.types import (
    CharacteristicName,
    GenericCharacteristicName,
    UnivariateContinuous,
)
from tests.utils.mocks import MockSamplingStrategy


class TestBaseFamily:
    PDF: GenericCharacteristicName = CharacteristicName.PDF
    CDF: GenericCharacteristicName = CharacteristicName.CDF
    PPF: GenericCharacteristicName = CharacteristicName.PPF
    MEAN: GenericCharacteristicName = CharacteristicName.MEAN

    def make_default_family(
        self,
        distr_characteristics: dict[GenericCharacteristicName, object] | None = None,
        *,
        with_sampling_mock: bool = True,
    ) -> ParametricFamily:
        """
        Family with a ``base`` parametrization holding ``value >= 0`` and an
        ``alt`` one holding ``half = value / 2``.
        """
        if distr_characteristics is None:
            distr_characteristics = {
                self.PDF: lambda p, x: x,
                self.CDF: lambda p, x: x,
                self.MEAN: lambda p, _: p.value,
            }
        fam = ParametricFamily(
            name="Default",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["base", "alt"],
            distr_characteristics=distr_characteristics,  # type: ignore[arg-type]
            support_by_parametrization=lambda p: ContinuousSupport(),
            sampling_strategy=MockSamplingStrategy() if with_sampling_mock else None,
        )

        @parametrization(family=fam, name="base")
        class Base(Parametrization):
            value: float

            @constraint("value >= 0", parameter="value")
            def check_value_non_negative(self) -> bool:
                return self.value >= 0

        @parametrization(family=fam, name="alt")
        class Alt(Parametrization):
            half: float

            def to_base(self) -> Parametrization:
                return Base(value=2.0 * self.half)  # type: ignore[call-arg]

        return fam
