from dataclasses import dataclass

import pytest

from graphplace.node import Node
from graphplace.position import Position
from graphplace.protocols import (
    Graph,
    Heuristic,
    NodeSelector,
    PlacementAlgorithm,
    SlotSelector,
)


@dataclass
class Slot:
    pos: Position


class FakeGraph:
    def __init__(self, nb_nodes, nb_slots):
        self.nodes = [Node(i) for i in range(nb_nodes)]
        self.slots = [Slot(Position(float(i), 0.0)) for i in range(nb_slots)]

    @property
    def nb_nodes(self):
        return len(self.nodes)

    @property
    def nb_slots(self):
        return len(self.slots)

    def node(self, node_id):
        return self.nodes[node_id]

    def slot(self, slot_id):
        return self.slots[slot_id]

    def node_score(self, node_id):
        return 0

    def total_score(self):
        return 0

    def place_node(self, node_id, slot_id):
        self.nodes[node_id].slot = slot_id

    def place_nodes(self, places):
        for node, slot in zip(self.nodes, places):
            node.slot = slot

    def node_placement(self):
        return [node.slot for node in self.nodes]

    def placement_improvement(self, node_id, slot_id):
        return 0


class PlaceAllOnFirst(Heuristic):
    def __init__(self):
        self.runs = []

    def execute(self, graph):
        self.runs.append(graph.nb_nodes)
        graph.place_nodes([0] * graph.nb_nodes)


class Identity(PlacementAlgorithm):
    def compute(self, graph):
        return list(range(graph.nb_nodes))


class Counter(NodeSelector):
    def __init__(self):
        self.count = 0

    def select(self, graph):
        self.count += 1
        return 0


class FirstSlot(SlotSelector):
    def select(self, graph, node_id):
        return 0


@pytest.mark.parametrize("cls", [Heuristic, PlacementAlgorithm, NodeSelector, SlotSelector])
def test_abstract_bases_cannot_be_instantiated(cls):
    with pytest.raises(TypeError):
        cls()


def test_fake_graph_satisfies_graph_protocol():
    graph = FakeGraph(2, 3)
    copy = PlacementAlgorithm.clone(Identity())
    assert isinstance(graph, Graph)
    assert not isinstance(object(), Graph)
    assert copy.compute(graph) == [0, 1]


def test_heuristic_execute_and_clone_is_independent():
    heuristic = PlaceAllOnFirst()
    graph = FakeGraph(3, 3)
    heuristic.execute(graph)
    copy = Heuristic.clone(heuristic)
    heuristic.execute(graph)
    assert graph.node_placement() == [0, 0, 0]
    assert heuristic.runs == [3, 3]
    assert copy.runs == [3]
    assert isinstance(copy, PlaceAllOnFirst)


def test_placement_clone_computes_same_result():
    algorithm = Identity()
    graph = FakeGraph(4, 5)
    copy = PlacementAlgorithm.clone(algorithm)
    assert copy is not algorithm
    assert copy.compute(graph) == [0, 1, 2, 3]


def test_node_selector_clone_keeps_state_separately():
    selector = Counter()
    graph = FakeGraph(2, 2)
    selector.select(graph)
    copy = NodeSelector.clone(selector)
    selector.select(graph)
    assert selector.count == 2
    assert copy.count == 1


def test_slot_selector_clone_is_new_object():
    selector = FirstSlot()
    copy = SlotSelector.clone(selector)
    assert copy is not selector
    assert isinstance(copy, FirstSlot)
    assert copy.select(FakeGraph(1, 2), 0) == 0