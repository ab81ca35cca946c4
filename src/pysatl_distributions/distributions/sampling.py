"""
Sample containers and samplers.

A :class:`Sampler` is bound to one distribution and one uniform source, which
is anything with a ``random()`` method returning floats on ``[0, 1)``, such as
:class:`numpy.random.Generator` or :class:`random.Random`. Drawing ``n`` values
gives an :class:`ArraySample` of shape ``(n, 1)``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

    import numpy.typing as npt


class ArraySample:
    """
    Drawn values as rows of a 2D float array, one column per coordinate.

    Raises
    ------
    ValueError
        If ``data`` is not 2D.
    """

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        if data.ndim != 2:
            raise ValueError(f"ArraySample needs a 2D array, got {data.ndim} dimension(s)")
        self.data = data

    @property
    def dimension(self) -> int:
        return int(self.data.shape[1])

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        return self.data

    @property
    def shape(self) -> tuple[int, int]:
        return int(self.data.shape[0]), self.dimension

    def __len__(self) -> int:
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[np.floating[Any]]]:
        return iter(self.data)


@runtime_checkable
class UniformRandomSource(Protocol):
    """Source of uniform variates on ``[0, 1)``."""

    def random(self) -> float: ...


class Sampler(ABC):
    """
    Reusable sampler of a univariate distribution.

    Parameters
    ----------
    rng : UniformRandomSource
        Uniform source; consumed by every draw.
    """

    def __init__(self, rng: UniformRandomSource) -> None:
        self.rng = rng

    def _uniform_open(self) -> float:
        """Uniform variate on ``(0, 1)``; zero is redrawn."""
        u = float(self.rng.random())
        while u == 0.0:
            u = float(self.rng.random())
        return u

    @abstractmethod
    def sample(self) -> float:
        """Draw a single value."""

    def sample_n(self, n: int) -> ArraySample:
        """
        Draw ``n`` values.

        Returns
        -------
        ArraySample
            Sample of shape ``(n, 1)``.

        Raises
        ------
        ValueError
            If ``n`` is negative.
        """
        if n < 0:
            raise ValueError(f"Sample size must be non-negative (got {n})")
        values = np.fromiter((self.sample() for _ in range(n)), dtype=np.float64, count=n)
        return ArraySample(values.reshape(n, 1))

    def __iter__(self) -> Iterator[float]:
        """Infinite stream of draws."""
        while True:
            yield self.sample()


class InverseTransformSampler(Sampler):
    """
    Sampler returning ``ppf(U)`` for ``U`` uniform on ``(0, 1)``.

    Parameters
    ----------
    ppf : Callable[[float], Any]
        Quantile function of the distribution.
    rng : UniformRandomSource
        Uniform source.
    """

    def __init__(self, ppf: Callable[[float], Any], rng: UniformRandomSource) -> None:
        super().__init__(rng)
        self._ppf = ppf

    def sample(self) -> float:
        return float(self._ppf(self._uniform_open()))


__all__ = [
    "ArraySample",
    "UniformRandomSource",
    "Sampler",
    "InverseTransformSampler",
]
