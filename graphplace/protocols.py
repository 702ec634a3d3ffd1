"""Interfaces shared by the placement heuristics and selectors."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from graphplace.node import Node
from graphplace.position import Position


class _Slot(Protocol):
    pos: Position


@runtime_checkable
class Graph(Protocol):
    """What the heuristics need from a graph whose nodes are placed on slots."""

    @property
    def nb_nodes(self) -> int: ...

    @property
    def nb_slots(self) -> int: ...

    def node(self, node_id: int) -> Node: ...

    def slot(self, slot_id: int) -> _Slot: ...

    def node_score(self, node_id: int) -> int: ...

    def total_score(self) -> int: ...

    def place_node(self, node_id: int, slot_id: int) -> None: ...

    def place_nodes(self, places: Sequence[int]) -> None: ...

    def node_placement(self) -> list[int]: ...

    def placement_improvement(self, node_id: int, slot_id: int) -> int: ...


class _Cloneable:
    def clone(self):
        """Return an independent copy, including any internal state."""
        return copy.deepcopy(self)


class Heuristic(_Cloneable, ABC):
    """An algorithm that improves the placement of a graph in place."""

    @abstractmethod
    def execute(self, graph: Graph) -> None:
        """Improve the placement of graph."""

    def clone(self) -> Heuristic:
        return super().clone()


class PlacementAlgorithm(_Cloneable, ABC):
    """An algorithm that computes a slot for every node."""

    @abstractmethod
    def compute(self, graph: Graph) -> list[int]:
        """Return the slot chosen for each node, indexed by node id."""

    def clone(self) -> PlacementAlgorithm:
        return super().clone()


class NodeSelector(_Cloneable, ABC):
    """Chooses the node to move at a step of a heuristic."""

    @abstractmethod
    def select(self, graph: Graph) -> int:
        """Return the id of a node of graph."""

    def clone(self) -> NodeSelector:
        return super().clone()


class SlotSelector(_Cloneable, ABC):
    """Chooses the slot a node is moved to at a step of a heuristic."""

    @abstractmethod
    def select(self, graph: Graph, node_id: int) -> int:
        """Return the id of a slot for node node_id."""

    def clone(self) -> SlotSelector:
        return super().clone()