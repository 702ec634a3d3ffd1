from dataclasses import dataclass

import pytest

from graphplace.annealing import SimulatedAnnealing
from graphplace.node import Node
from graphplace.node_selectors import MultipleNodeSelector
from graphplace.position import Position
from graphplace.protocols import NodeSelector, SlotSelector
from graphplace.slot_selectors import RandomSlotSelector


@dataclass
class _Slot:
    pos: Position
    node: int = -1


class FakeGraph:
    """Nodes want to sit on a target slot; score is the sum of distances to it."""

    def __init__(self, targets, placement):
        self.targets = list(targets)
        self._nodes = [Node(i, Position(float(i), 0.0)) for i in range(len(targets))]
        self._slots = [_Slot(Position(float(i), 0.0)) for i in range(len(targets))]
        self.place_nodes(placement)

    @property
    def nb_nodes(self):
        return len(self._nodes)

    @property
    def nb_slots(self):
        return len(self._slots)

    def node(self, node_id):
        return self._nodes[node_id]

    def slot(self, slot_id):
        return self._slots[slot_id]

    def node_score(self, node_id):
        return abs(self._nodes[node_id].slot - self.targets[node_id])

    def total_score(self):
        return sum(self.node_score(i) for i in range(self.nb_nodes))

    def place_node(self, node_id, slot_id):
        node = self._nodes[node_id]
        old = node.slot
        if old == slot_id:
            return
        if old != -1:
            self._slots[old].node = -1
        if slot_id != -1:
            occupant = self._slots[slot_id].node
            if occupant != -1:
                self._nodes[occupant].slot = old
                if old != -1:
                    self._slots[old].node = occupant
            self._slots[slot_id].node = node_id
        node.slot = slot_id

    def place_nodes(self, places):
        for n in self._nodes:
            n.slot = -1
        for s in self._slots:
            s.node = -1
        for i, s in enumerate(places):
            self.place_node(i, s)

    def node_placement(self):
        return [n.slot for n in self._nodes]

    def placement_improvement(self, node_id, slot_id):
        saved = self.node_placement()
        before = self.total_score()
        self.place_node(node_id, slot_id)
        after = self.total_score()
        self.place_nodes(saved)
        return before - after


class FirstMisplacedSelector(NodeSelector):
    def select(self, graph):
        return next(i for i in range(graph.nb_nodes) if graph.node(i).slot != graph.targets[i])


class TargetSlotSelector(SlotSelector):
    def select(self, graph, node_id):
        return graph.targets[node_id]


class FixedNodeSelector(NodeSelector):
    def __init__(self, node_id):
        self.node_id = node_id

    def select(self, graph):
        return self.node_id


class FixedSlotSelector(SlotSelector):
    def __init__(self, slot_id):
        self.slot_id = slot_id

    def select(self, graph, node_id):
        return self.slot_id


def make(node_selector=None, slot_selector=None, **kwargs):
    params = dict(
        start_temp=2.0,
        start_cooling=0.9,
        cooling=0.9,
        threshold=0.01,
        max_without_improvement=3,
        max_runs=5,
        node_selector=node_selector or FirstMisplacedSelector(),
        slot_selector=slot_selector or TargetSlotSelector(),
        time_limit=-1,
    )
    params.update(kwargs)
    return SimulatedAnnealing(**params)


def test_move_probability_at_zero_temperature():
    annealing = make()
    assert annealing.move_probability(0, 0.0) == 1.0
    assert annealing.move_probability(3, 0.0) == 1.0
    assert annealing.move_probability(-1, 0.0) == 0.0


def test_move_probability_improvement_is_certain():
    annealing = make()
    assert annealing.move_probability(5, 1.0) == 1.0
    assert annealing.move_probability(5, 1e-12) == 1.0


def test_move_probability_grows_with_temperature():
    annealing = make()
    cold = annealing.move_probability(-3, 0.5)
    warm = annealing.move_probability(-3, 5.0)
    assert 0.0 <= cold < warm < 1.0


def test_accept_move_edges():
    annealing = make()
    assert all(annealing.accept_move(1, 1.0) for _ in range(50))
    assert not any(annealing.accept_move(-1, 0.0) for _ in range(50))


def test_execute_reaches_optimum():
    graph = FakeGraph([0, 1, 2, 3], [3, 2, 1, 0])
    annealing = make()
    annealing.execute(graph)
    assert graph.total_score() == 0
    assert graph.node_placement() == [0, 1, 2, 3]
    values = [v.val for v in annealing.best_scores]
    assert values == sorted(values, reverse=True)
    assert len(set(values)) == len(values)
    assert values[-1] == 0.0
    assert annealing.best_placement == [0, 1, 2, 3]


def test_execute_with_random_selectors_never_worsens():
    graph = FakeGraph([0, 1, 2, 3, 4], [4, 3, 2, 1, 0])
    initial = graph.total_score()
    annealing = make(MultipleNodeSelector(2), RandomSlotSelector(), max_runs=3)
    annealing.execute(graph)
    assert graph.total_score() <= initial
    assert sorted(graph.node_placement()) == [0, 1, 2, 3, 4]


def test_rejected_move_is_undone():
    graph = FakeGraph([0, 1, 2], [0, 1, 2])
    annealing = make(FixedNodeSelector(0), FixedSlotSelector(1))
    annealing.temp = 1e-9
    annealing.step(graph)
    assert graph.node_placement() == [0, 1, 2]
    assert annealing.num_iter == 1
    assert annealing.evol_accept[-1].val == 0.0
    assert annealing.evol_improve[-1].val < 0
    assert annealing.evol_proba[-1].val == 0.0


def test_step_records_statistics():
    graph = FakeGraph([0, 1, 2], [1, 0, 2])
    initial = graph.total_score()
    annealing = make()
    annealing.step(graph)
    assert annealing.best_scores[0].val == float(initial)
    assert annealing.best_scores[-1].val == float(graph.total_score())
    assert [v.iter for v in annealing.evol_score] == [0, 1]
    assert annealing.evol_temp[-1].val == 2.0
    assert annealing.temp == pytest.approx(2.0 * 0.9)


def test_reset_statistics_clears():
    graph = FakeGraph([0, 1, 2], [1, 0, 2])
    annealing = make()
    annealing.step(graph)
    annealing.reset_statistics()
    assert annealing.num_iter == 0
    assert annealing.best_scores == []
    assert annealing.evol_score == []


def test_optimal_graph_runs_no_step():
    graph = FakeGraph([0, 1, 2], [0, 1, 2])
    annealing = make(FixedNodeSelector(0), FixedSlotSelector(1))
    annealing.execute(graph)
    assert annealing.num_iter == 0
    assert graph.node_placement() == [0, 1, 2]


def test_zero_time_limit_stops_every_run():
    graph = FakeGraph([0, 1, 2], [2, 1, 0])
    annealing = make(time_limit=0)
    annealing.execute(graph)
    assert annealing.num_iter == 0
    assert graph.node_placement() == [2, 1, 0]


def test_time_limit_inactive_when_negative():
    annealing = make(time_limit=-1)
    assert annealing.time_limit_reached() is False


def test_anneal_cools_start_temperature():
    graph = FakeGraph([0, 1], [0, 1])
    annealing = make()
    annealing.anneal(graph)
    assert annealing.start_temp == pytest.approx(2.0 * 0.9)


def test_selectors_are_copied():
    selector = MultipleNodeSelector(3)
    annealing = make(node_selector=selector)
    assert annealing.node_selector is not selector
    assert annealing.node_selector.n == 3


def test_clone_is_independent():
    annealing = make()
    copy = annealing.clone()
    copy.start_temp = 50.0
    copy.node_selector = FixedNodeSelector(1)
    assert annealing.start_temp == 2.0
    assert isinstance(annealing.node_selector, FirstMisplacedSelector)
    assert copy.slot_selector is not annealing.slot_selector