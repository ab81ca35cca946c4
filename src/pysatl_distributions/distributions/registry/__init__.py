"""
Characteristic Registry package.

Exports
-------
Applicability
EdgeMeta, CharacteristicRegistry, RegistryView
characteristic_registry, reset_characteristic_registry
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

# Public factory & reset (lazy configuration happens inside characteristic_registry())
from .configuration import (
    characteristic_registry,
    reset_characteristic_registry,
)
from .constraint import Applicability
from .graph import (
    CharacteristicRegistry,
    EdgeMeta,
    RegistryView,
)

__all__ = [
    "Applicability",
    "EdgeMeta",
    "CharacteristicRegistry",
    "RegistryView",
    "characteristic_registry",
    "reset_characteristic_registry",
]
