"""
Parametrizations of distribution families.

A parametrization is a frozen dataclass holding one set of natural parameters
of a family. Instances validate themselves on creation, so an out-of-domain
parametrization is never observable, and may then store derived constants
that every characteristic of the distribution reuses.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, fields, is_dataclass
from typing import TYPE_CHECKING

from pysatl_distributions.errors import ParameterConstraintError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from pysatl_distributions.families.parametric_family import ParametricFamily
    from pysatl_distributions.types import ParametrizationName

_CHECK_ATTR = "__parameter_check__"


@dataclass(slots=True, frozen=True)
class ParameterCheck:
    """
    A validation rule of a parametrization.

    Parameters
    ----------
    description : str
        Constraint as shown to the user, e.g. ``"0 < scale < inf"``.
    parameter : str or None
        Parameter the rule is about; ``None`` for rules over several parameters.
    check : Callable[[Parametrization], bool]
        Returns ``True`` when the rule holds.
    """

    description: str
    parameter: str | None
    check: Callable[[Any], bool]

    def enforce(self, params: Parametrization) -> None:
        if self.check(params):
            return
        if self.parameter is None:
            raise ParameterConstraintError(None, self.description, params.parameters)
        raise ParameterConstraintError(
            self.parameter, self.description, getattr(params, self.parameter)
        )


class Parametrization:
    """
    Base class of parametrizations.

    Subclasses are turned into frozen dataclasses by :func:`parametrization`.
    Constants computed from the parameters are declared as
    ``field(init=False, repr=False, compare=False)`` and stored from
    :meth:`derive` with :meth:`_set_derived`.
    """

    # Set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]
    __checks__: ClassVar[tuple[ParameterCheck, ...]] = ()

    def __post_init__(self) -> None:
        for rule in self.__checks__:
            rule.enforce(self)
        self.derive()

    @property
    def name(self) -> str:
        return self.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """User-supplied parameter values, derived constants excluded."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}

    def derive(self) -> None:
        """Store constants computed from the validated parameters."""

    def _set_derived(self, **values: Any) -> None:
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def to_base(self) -> Parametrization:
        """Equivalent parameters in the family's base parametrization."""
        return self


def constraint(
    description: str, *, parameter: str | None = None
) -> Callable[[Callable[[Any], bool]], Callable[[Any], bool]]:
    """
    Mark a method of a parametrization as a validation rule.

    Parameters
    ----------
    description : str
        Constraint as reported in :class:`ParameterConstraintError`.
    parameter : str, optional
        Parameter whose value is reported when the rule fails. Without it the
        error carries every parameter value.
    """

    def decorator(func: Callable[[Any], bool]) -> Callable[[Any], bool]:
        setattr(func, _CHECK_ATTR, (description, parameter))
        return func

    return decorator


def _collect_checks(cls: type[Parametrization]) -> tuple[ParameterCheck, ...]:
    checks = []
    for attr_name, attr in cls.__dict__.items():
        if isinstance(attr, (staticmethod, classmethod)):
            if hasattr(attr.__func__, _CHECK_ATTR):
                raise TypeError(f"@constraint '{attr_name}' must be an instance method")
            continue
        marker = getattr(attr, _CHECK_ATTR, None)
        if callable(attr) and marker is not None:
            description, parameter = marker
            checks.append(ParameterCheck(description, parameter, attr))
    return tuple(checks)


def parametrization(
    *, family: ParametricFamily, name: str
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Class decorator registering a parametrization with ``family``.

    The class becomes a frozen slotted dataclass whose ``@constraint`` methods
    are checked on every instantiation.
    """

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        checks = _collect_checks(cls)
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)
        cls.__family__ = family
        cls.__param_name__ = name
        cls.__checks__ = checks
        family.register_parametrization(name, cls)
        return cls

    return decorator
