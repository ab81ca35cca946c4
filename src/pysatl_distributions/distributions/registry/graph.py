"""
The characteristic graph: characteristic names (``pdf``, ``cdf``, ``ppf``, ...)
as nodes, conversions between them as edges, and the per-distribution view
the computation strategy searches.

Nodes and edges are guarded by :class:`Applicability` rules: a node is
*present* for a distribution if its presence rule allows it, an edge is kept
if its own rule allows the distribution and both of its endpoints are
present.

Design notes
------------
* Only **unary** conversions are supported (1 source -> 1 target).
* Nodes must be declared via :meth:`CharacteristicRegistry.add_characteristic`
  before conversions between them are added.
* At most one conversion is kept per ``(source, target)`` pair and
  distribution; registering a second edge for the same pair under an equal
  rule replaces the first with a warning.
* :class:`CharacteristicRegistry` is a process-wide singleton.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pysatl_distributions.distributions.registry.constraint import Applicability

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pysatl_distributions.distributions.computation import ComputationMethod
    from pysatl_distributions.distributions.distribution import Distribution
    from pysatl_distributions.types import GenericCharacteristicName


@dataclass(frozen=True, slots=True)
class EdgeMeta:
    """
    Conversion edge together with its applicability constraint.

    Parameters
    ----------
    method : ComputationMethod
        The conversion ``method.source -> method.target``.
    constraint : Applicability
        Decides for which distributions the edge exists.
    """

    method: ComputationMethod[Any, Any]
    constraint: Applicability = field(default_factory=Applicability)


class CharacteristicRegistry:
    """
    Characteristic graph whose nodes and edges carry applicability rules.

    Public API
    ----------
    add_characteristic(name, presence_constraint=None)
        Declare a characteristic node.
    add_computation(method, constraint=None)
        Add a **unary** conversion edge between already-declared nodes.
    view(distr)
        Graph restricted to what applies to ``distr``.
    """

    _instance: ClassVar[Self | None] = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            inst = super().__new__(cls)
            cls._instance = inst
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        # src -> dst -> edges, in registration order
        self._adj: dict[GenericCharacteristicName, dict[GenericCharacteristicName, list[EdgeMeta]]]
        self._adj = {}
        self._presence_rules: dict[GenericCharacteristicName, Applicability] = {}
        self._initialized = True

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None

    @property
    def characteristics(self) -> set[GenericCharacteristicName]:
        """All declared characteristic names."""
        return set(self._presence_rules)

    def add_characteristic(
        self,
        name: GenericCharacteristicName,
        *,
        presence_constraint: Applicability | None = None,
    ) -> None:
        """
        Declare a characteristic node.

        Parameters
        ----------
        name
            Characteristic name to declare.
        presence_constraint
            Decides for which distributions the node exists. If ``None``, the
            node exists for every distribution.

        Notes
        -----
        Declaring a node twice keeps the first rule and emits a warning.
        """
        if name in self._presence_rules:
            warnings.warn(
                f"Node {name} have been already added. Constraint will not be taken into account",
                UserWarning,
                stacklevel=2,
            )
            return
        self._presence_rules[name] = presence_constraint or Applicability()
        self._adj.setdefault(name, {})

    def add_computation(
        self,
        method: ComputationMethod[Any, Any],
        *,
        constraint: Applicability | None = None,
    ) -> None:
        """
        Add a **unary** conversion edge ``method.source -> method.target``.

        Raises
        ------
        ValueError
            If source or target have not been declared.
        """
        src, dst = method.source, method.target
        if src not in self._presence_rules or dst not in self._presence_rules:
            raise ValueError(
                f"Source characteristic '{src}' or destination characteristic '{dst}' "
                "has not been declared."
            )
        edges = self._adj[src].setdefault(dst, [])
        constraint = constraint or Applicability()
        for i, edge in enumerate(edges):
            if edge.constraint == constraint:
                warnings.warn(
                    f"Conversion {src} -> {dst} is already registered under the same "
                    "constraint and will be replaced",
                    UserWarning,
                    stacklevel=2,
                )
                edges[i] = EdgeMeta(method=method, constraint=constraint)
                return
        edges.append(EdgeMeta(method=method, constraint=constraint))

    def view(self, distr: Distribution) -> RegistryView:
        """
        Build the graph restricted to ``distr``.

        Edges whose constraint rejects the distribution or that touch an absent
        node are dropped. Among several applicable edges for one pair, the
        first registered one is kept.
        """
        present = {
            name for name, constraint in self._presence_rules.items() if constraint.allows(distr)
        }
        adj: dict[GenericCharacteristicName, dict[GenericCharacteristicName, EdgeMeta]] = {
            name: {} for name in present
        }
        for src in present:
            for dst, edges in self._adj.get(src, {}).items():
                if dst not in present:
                    continue
                for edge in edges:
                    if edge.constraint.allows(distr):
                        adj[src][dst] = edge
                        break
        return RegistryView(adj)


class RegistryView:
    """
    A per-distribution filtered view of the global graph.

    Parameters
    ----------
    adj : Mapping[src, Mapping[dst, EdgeMeta]]
        Adjacency with at most one edge per pair.
    """

    def __init__(
        self,
        adj: Mapping[GenericCharacteristicName, Mapping[GenericCharacteristicName, EdgeMeta]],
    ) -> None:
        self._adj = {s: dict(d) for s, d in adj.items()}

    @property
    def all_characteristics(self) -> set[GenericCharacteristicName]:
        """Characteristics present in this view."""
        return set(self._adj)

    def successors(self, v: GenericCharacteristicName) -> set[GenericCharacteristicName]:
        """Characteristics directly computable from ``v``."""
        return set(self._adj.get(v, {}))

    def predecessors(self, v: GenericCharacteristicName) -> set[GenericCharacteristicName]:
        """Characteristics ``v`` is directly computable from."""
        return {s for s, d in self._adj.items() if v in d}

    def find_path(
        self,
        sources: Iterable[GenericCharacteristicName],
        dst: GenericCharacteristicName,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Shortest conversion chain from any of ``sources`` to ``dst`` (BFS).

        Sources are tried in the given order, so ties are broken in favour of
        earlier sources.

        Returns
        -------
        list[ComputationMethod] | None
            Ordered conversions, empty if ``dst`` is itself a source, ``None``
            if ``dst`` is unreachable.
        """
        starts = [s for s in sources if s in self._adj]
        if dst in starts:
            return []

        parent: dict[GenericCharacteristicName, EdgeMeta | None] = dict.fromkeys(starts)
        queue = deque(starts)
        while queue:
            v = queue.popleft()
            for w, edge in self._adj[v].items():
                if w in parent:
                    continue
                parent[w] = edge
                if w == dst:
                    path: list[ComputationMethod[Any, Any]] = []
                    cur: EdgeMeta | None = edge
                    while cur is not None:
                        path.append(cur.method)
                        cur = parent[cur.method.source]
                    path.reverse()
                    return path
                queue.append(w)
        return None


__all__ = [
    "EdgeMeta",
    "CharacteristicRegistry",
    "RegistryView",
]
