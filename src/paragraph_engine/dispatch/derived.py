"""Explicit recomputation graph for values derived from editor state.

Sources (model, selection, canvas width ...) are supplied on every
evaluation; derived nodes are computed in topological order and reused until
one of their inputs changes. Inputs are compared by identity, numbers by
value.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from graphlib import TopologicalSorter
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True, slots=True)
class DerivedNode:
    name: str
    inputs: Tuple[str, ...]
    compute: Callable[..., Any]


def _same(left: Any, right: Any) -> bool:
    if left is right:
        return True
    numeric = (int, float)
    return isinstance(left, numeric) and isinstance(right, numeric) and left == right


class DerivationGraph:
    def __init__(self, sources: Iterable[str], nodes: Iterable[DerivedNode]) -> None:
        self._sources = frozenset(sources)
        self._nodes: Dict[str, DerivedNode] = {}
        for node in nodes:
            if node.name in self._nodes or node.name in self._sources:
                raise ValueError(f"Duplicate graph entry '{node.name}'")
            self._nodes[node.name] = node

        for node in self._nodes.values():
            unknown = [
                name
                for name in node.inputs
                if name not in self._nodes and name not in self._sources
            ]
            if unknown:
                raise ValueError(f"Node '{node.name}' depends on unknown {unknown}")

        sorter = TopologicalSorter(
            {
                node.name: [name for name in node.inputs if name in self._nodes]
                for node in self._nodes.values()
            }
        )
        self.order: Tuple[str, ...] = tuple(sorter.static_order())
        self._values: Dict[str, Any] = {}
        self._seen: Dict[str, Tuple[Any, ...]] = {}
        self.recomputations: Counter[str] = Counter()

    def evaluate(self, sources: Mapping[str, Any]) -> Dict[str, Any]:
        missing = self._sources.difference(sources)
        if missing:
            raise KeyError(f"Missing graph sources {sorted(missing)}")

        values: Dict[str, Any] = dict(sources)
        for name in self.order:
            node = self._nodes[name]
            args = tuple(values[key] for key in node.inputs)
            previous = self._seen.get(name)
            if previous is None or not all(map(_same, args, previous)):
                self._values[name] = node.compute(*args)
                self._seen[name] = args
                self.recomputations[name] += 1
            values[name] = self._values[name]
        return values


__all__ = ["DerivationGraph", "DerivedNode"]
