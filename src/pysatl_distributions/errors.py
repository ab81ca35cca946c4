"""
Exceptions raised by distributions and their numerical algorithms.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any


class ParameterConstraintError(ValueError):
    """
    Raised when a parametrization is constructed with out-of-domain values.

    Parameters
    ----------
    parameter : str or None
        Name of the offending parameter, ``None`` for constraints that span
        several parameters.
    description : str
        Human-readable constraint, e.g. ``"0 < scale < inf"``.
    value : Any
        Supplied value of the offending parameter (or a mapping of all
        parameter values when ``parameter`` is ``None``).
    """

    def __init__(self, parameter: str | None, description: str, value: Any) -> None:
        self.parameter = parameter
        self.description = description
        self.value = value
        if parameter is None:
            message = f'Constraint "{description}" does not hold (got {value!r})'
        else:
            message = (
                f'Parameter "{parameter}" violates constraint "{description}" (got {value!r})'
            )
        super().__init__(message)


class InvalidProbabilityError(ValueError):
    """Raised by quantile functions for arguments outside ``[0, 1]``."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Probability must be in [0, 1] (got {value!r})")


class ConvergenceError(RuntimeError):
    """Raised when the quantile search exceeds its iteration bounds."""


__all__ = [
    "ParameterConstraintError",
    "InvalidProbabilityError",
    "ConvergenceError",
]
