"""Random initial placement."""

from __future__ import annotations

from graphplace.protocols import Graph, PlacementAlgorithm
from graphplace.utils import shuffle


class RandomPlacement(PlacementAlgorithm):
    """Puts every node on a distinct slot chosen at random."""

    def compute(self, graph: Graph) -> list[int]:
        slots = list(range(graph.nb_slots))
        shuffle(slots)
        return slots[:graph.nb_nodes]