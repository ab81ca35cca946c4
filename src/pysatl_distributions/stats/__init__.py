"""
Special-function helpers shared by the distribution families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .saddle_point import deviance_part, log_binomial_probability, stirling_error

__all__ = [
    "deviance_part",
    "log_binomial_probability",
    "stirling_error",
]
