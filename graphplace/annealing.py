"""Simulated annealing on the placement of a graph's nodes on slots."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager

from graphplace.protocols import Graph, Heuristic, NodeSelector, SlotSelector
from graphplace.stats import ValIter
from graphplace.utils import generate_rand_double, get_ms

logger = logging.getLogger(__name__)


class SimulatedAnnealing(Heuristic):
    """Repeated simulated annealing runs that move one node per step.

    Temperatures: ``start_temp`` is the temperature each run starts from, it is
    multiplied by ``start_cooling`` after each run; ``temp`` is the current
    temperature, multiplied by ``cooling`` after each step. A run stops when
    ``abs(temp)`` falls to ``abs(threshold)``. ``time_limit`` is in
    milliseconds, negative when inactive.
    """

    #: Number of iterations between two kept statistics samples.
    STATS_INTERVAL = 1000

    def __init__(
        self,
        start_temp: float,
        start_cooling: float,
        cooling: float,
        threshold: float,
        max_without_improvement: int,
        max_runs: int,
        node_selector: NodeSelector,
        slot_selector: SlotSelector,
        time_limit: int,
    ) -> None:
        self.start_temp_initial = start_temp
        self.start_temp = start_temp
        self.start_cooling = start_cooling
        self.temp = start_temp
        self.cooling = cooling
        self.threshold = threshold
        self.max_without_improvement = max_without_improvement
        self.max_runs = max_runs
        self.node_selector = node_selector
        self.slot_selector = slot_selector
        self.time_limit = time_limit
        self._start_time: int | None = None
        self.best_placement: list[int] = []
        self.reset_statistics()

    @property
    def node_selector(self) -> NodeSelector:
        return self._node_selector

    @node_selector.setter
    def node_selector(self, selector: NodeSelector) -> None:
        self._node_selector = selector.clone()

    @property
    def slot_selector(self) -> SlotSelector:
        return self._slot_selector

    @slot_selector.setter
    def slot_selector(self, selector: SlotSelector) -> None:
        self._slot_selector = selector.clone()

    @property
    def temperature(self) -> float:
        """The temperature used to decide on moves."""
        return self.temp

    def clone(self) -> SimulatedAnnealing:
        return super().clone()

    @contextmanager
    def _timing(self) -> Iterator[None]:
        owner = self._start_time is None
        if owner:
            self._start_time = get_ms()
        try:
            yield
        finally:
            if owner:
                self._start_time = None

    def execute(self, graph: Graph) -> None:
        """Reset the statistics and run several annealings."""
        self.reset_statistics()
        with self._timing():
            self.reanneal(graph)

    def reanneal(self, graph: Graph) -> None:
        """Run annealings until too many fail to improve or the run budget is spent."""
        with self._timing():
            self.start_temp = self.start_temp_initial
            without_improvement = 0
            runs = 0
            while (not self.time_limit_reached() and runs == 0) or (
                graph.total_score() > 0
                and without_improvement < self.max_without_improvement
                and runs < self.max_runs
            ):
                runs += 1
                logger.debug("annealing run %d", runs)
                score_before = graph.total_score()
                self.anneal(graph)
                if graph.total_score() >= score_before:
                    without_improvement += 1
                else:
                    without_improvement = 0

    def anneal(self, graph: Graph) -> None:
        """Run one annealing, leave the best placement found, then cool the start temperature."""
        with self._timing():
            self.temp = self.start_temp
            while (
                not self.time_limit_reached()
                and graph.total_score() > 0
                and abs(self.temp) > abs(self.threshold)
            ):
                self.step(graph)
            if self.best_placement:
                graph.place_nodes(self.best_placement)
            self.start_temp *= self.start_cooling

    def step(self, graph: Graph) -> None:
        """Try one move, keep or undo it, record statistics and cool the temperature."""
        self._init_statistics(graph)
        node_id = self.node_selector.select(graph)
        slot_id = self.slot_selector.select(graph, node_id)
        old_slot = graph.node(node_id).slot
        old_score = graph.total_score()

        graph.place_node(node_id, slot_id)

        improve = old_score - graph.total_score()
        accepted = self.accept_move(improve, self.temperature)
        if not accepted:
            graph.place_node(node_id, old_slot)

        self._update_statistics(graph, improve, accepted)
        self.temp *= self.cooling

    def move_probability(self, improve: float, temp: float) -> float:
        """Return the probability, between 0 and 1, of accepting a move."""
        if temp == 0.0:
            return 1.0 if improve >= 0 else 0.0
        exponent = improve / temp
        if exponent >= 0:
            return 1.0
        return min(1.0, max(0.0, math.exp(exponent)))

    def accept_move(self, improve: float, temp: float) -> bool:
        """Draw whether a move of the given improvement is accepted."""
        return generate_rand_double(0.0, 1.0) < self.move_probability(improve, temp)

    def reset_statistics(self) -> None:
        """Clear the recorded statistics."""
        self.best_scores: list[ValIter] = []
        self.evol_improve: list[ValIter] = []
        self.evol_proba: list[ValIter] = []
        self.evol_accept: list[ValIter] = []
        self.evol_score: list[ValIter] = []
        self.evol_temp: list[ValIter] = []
        self.num_iter = 0
        self._last_stat_temporary = False

    def time_limit_reached(self) -> bool:
        """Return True if a time limit is set and has run out."""
        if self.time_limit < 0 or self._start_time is None:
            return False
        return get_ms() - self._start_time >= self.time_limit

    def _add_iterations(self, count: int) -> None:
        self.num_iter += count

    def _init_statistics(self, graph: Graph) -> None:
        if not self.best_placement:
            self.best_placement = graph.node_placement()
        if not self.best_scores:
            score = float(graph.total_score())
            self.best_scores.append(ValIter(score, self.num_iter))
            self.evol_score.append(ValIter(score, self.num_iter))

    def _update_statistics(self, graph: Graph, improve: int, accepted: bool) -> None:
        self.num_iter += 1
        score = graph.total_score()
        if score < self.best_scores[-1].val:
            self.best_scores.append(ValIter(float(score), self.num_iter))
            self.best_placement = graph.node_placement()
        series = (
            self.evol_improve,
            self.evol_proba,
            self.evol_accept,
            self.evol_score,
            self.evol_temp,
        )
        if self._last_stat_temporary and self.evol_score:
            for values in series:
                values.pop()
        temp = self.temperature
        self.evol_improve.append(ValIter(float(improve), self.num_iter))
        self.evol_proba.append(ValIter(self.move_probability(improve, temp), self.num_iter))
        self.evol_accept.append(ValIter(float(accepted), self.num_iter))
        self.evol_score.append(ValIter(float(score), self.num_iter))
        self.evol_temp.append(ValIter(temp, self.num_iter))
        self._last_stat_temporary = not (
            self.num_iter % self.STATS_INTERVAL == 0
            or self.best_scores[-1].iter == self.num_iter
        )