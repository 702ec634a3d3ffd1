"""Strategies choosing which node to move."""

from __future__ import annotations

from graphplace.protocols import Graph, NodeSelector
from graphplace.utils import generate_rand


def _draw_other(graph: Graph, excluded: int) -> int:
    while True:
        candidate = generate_rand(graph.nb_nodes - 1)
        if candidate != excluded:
            return candidate


def _require_pair(graph: Graph) -> None:
    if graph.nb_nodes < 3:
        raise ValueError(
            f"at least 3 nodes are needed to draw two distinct candidates, got {graph.nb_nodes}"
        )


class RandomNodeSelector(NodeSelector):
    """Draws a node at random among ids 0 to nb_nodes - 2."""

    def select(self, graph: Graph) -> int:
        return generate_rand(graph.nb_nodes - 1)


class BinaryNodeSelector(NodeSelector):
    """Keeps the node with the higher score out of two random distinct nodes."""

    def select(self, graph: Graph) -> int:
        _require_pair(graph)
        first = generate_rand(graph.nb_nodes - 1)
        second = _draw_other(graph, first)
        if graph.node_score(first) > graph.node_score(second):
            return first
        return second


class MultipleNodeSelector(NodeSelector):
    """Keeps the node with the best score out of n random draws; n grows by one per call."""

    def __init__(self, n: int = 3) -> None:
        self.n = n

    def select(self, graph: Graph) -> int:
        if self.n > 1:
            _require_pair(graph)
        best = generate_rand(graph.nb_nodes - 1)
        for _ in range(self.n - 1):
            candidate = _draw_other(graph, best)
            if graph.node_score(candidate) > graph.node_score(best):
                best = candidate
        self.n += 1
        return best