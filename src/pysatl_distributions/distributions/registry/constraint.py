"""
Applicability rules of the characteristic registry.

A rule decides whether a characteristic node or a conversion edge applies to
a distribution, from the kind of its type and, optionally, its support.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_distributions.distributions.distribution import Distribution
    from pysatl_distributions.distributions.support import Support
    from pysatl_distributions.types import Kind


@dataclass(frozen=True, slots=True)
class Applicability:
    """
    Rule selecting the distributions a node or an edge applies to.

    Parameters
    ----------
    kinds : frozenset[Kind], optional
        Allowed distribution kinds; every kind when omitted.
    support : Callable[[Support], bool], optional
        Predicate on the distribution's support.

    Notes
    -----
    ``Applicability()`` allows every distribution. Rules compare by value, so
    adding an edge under an equal rule replaces the previous one.
    """

    kinds: frozenset[Kind] | None = None
    support: Callable[[Support], bool] | None = None

    def allows(self, distr: Distribution) -> bool:
        if self.kinds is not None and distr.distribution_type.kind not in self.kinds:
            return False
        return self.support is None or bool(self.support(distr.support))


__all__ = ["Applicability"]
