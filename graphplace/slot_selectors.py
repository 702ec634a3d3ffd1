"""Strategies choosing the slot a node is moved to."""

from __future__ import annotations

from collections.abc import Container

from graphplace.protocols import Graph, SlotSelector
from graphplace.utils import generate_rand


def _draw_slot(nb_slots: int, excluded: Container[int]) -> int:
    while True:
        candidate = generate_rand(nb_slots)
        if candidate not in excluded:
            return candidate


def _require_candidates(graph: Graph, current: int, needed: int) -> None:
    available = graph.nb_slots - (1 if 0 <= current < graph.nb_slots else 0)
    if available < needed:
        raise ValueError(
            f"{needed} slot(s) other than the node's own are needed, {available} available"
        )


def _squared_distance(graph: Graph, node_id: int, slot_id: int) -> int:
    a = graph.node(node_id).pos
    b = graph.slot(slot_id).pos
    return int((a.x - b.x) ** 2 + (a.y - b.y) ** 2)


class RandomSlotSelector(SlotSelector):
    """Draws a random slot other than the one the node occupies."""

    def select(self, graph: Graph, node_id: int) -> int:
        current = graph.node(node_id).slot
        _require_candidates(graph, current, 1)
        return _draw_slot(graph.nb_slots, {current})


class BinarySlotSelector(SlotSelector):
    """Keeps the closer to the node of two distinct random slots."""

    def select(self, graph: Graph, node_id: int) -> int:
        current = graph.node(node_id).slot
        _require_candidates(graph, current, 2)
        first = _draw_slot(graph.nb_slots, {current})
        second = _draw_slot(graph.nb_slots, {current, first})
        if _squared_distance(graph, node_id, second) < _squared_distance(graph, node_id, first):
            return second
        return first


class MultipleSlotSelector(SlotSelector):
    """Keeps the closest to the node of n random slots.

    Every `delay` calls, n grows by `increment`.
    """

    def __init__(self, n: int = 3, delay: int = 100000, increment: int = 1) -> None:
        if delay <= 0:
            raise ValueError(f"delay must be positive, got {delay}")
        self.n = n
        self.delay = delay
        self.increment = increment
        self.nb_calls = 0

    def select(self, graph: Graph, node_id: int) -> int:
        current = graph.node(node_id).slot
        _require_candidates(graph, current, 2 if self.n > 1 else 1)
        best = _draw_slot(graph.nb_slots, {current})
        if self.n > 1:
            best_distance = _squared_distance(graph, node_id, best)
            for _ in range(self.n - 1):
                candidate = _draw_slot(graph.nb_slots, {current, best})
                distance = _squared_distance(graph, node_id, candidate)
                if distance < best_distance:
                    best, best_distance = candidate, distance
        self.nb_calls += 1
        while self.nb_calls >= self.delay:
            self.nb_calls -= self.delay
            self.n += self.increment
        return best