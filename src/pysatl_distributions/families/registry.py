"""
Process-wide table of parametric families.

Families look each other up here by :class:`FamilyName`, e.g. the chi-squared
family builds its members from the gamma family.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import ClassVar

    from pysatl_distributions.families.parametric_family import ParametricFamily


class ParametricFamilyRegister:
    """
    Singleton holding every registered family, in registration order.

    All lookups are class methods; instantiating the class only gives access
    to the current table, which :meth:`_reset` replaces with an empty one.
    """

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._families = {}
            cls._instance = instance
        return cls._instance

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Family registered under ``name``.

        Raises
        ------
        ValueError
            If nothing is registered under ``name``.
        """
        try:
            return cls()._families[name]
        except KeyError:
            raise ValueError(f"Unknown family '{name}'") from None

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._families

    @classmethod
    def names(cls) -> list[str]:
        return list(cls()._families)

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Add ``family`` under its name.

        Raises
        ------
        ValueError
            If the name is taken.
        """
        families = cls()._families
        if family.name in families:
            raise ValueError(f"Family '{family.name}' is already registered")
        families[family.name] = family

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None
