"""Simulated annealing whose start temperature is measured before every run."""

from __future__ import annotations

import logging
import math

from graphplace.annealing import SimulatedAnnealing
from graphplace.protocols import Graph, NodeSelector, SlotSelector

logger = logging.getLogger(__name__)

_TINY_TEMPERATURE = 0.000001


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class DynamicStartAnnealing(SimulatedAnnealing):
    """Annealing where each run starts at a temperature sampled from trial moves.

    ``start_percentage`` is the share of sampled deteriorations that the start
    temperature should let through; ``nb_start_simulations`` trial moves are
    sampled; the stop threshold is ``threshold_coef`` times the start temperature.
    """

    def __init__(
        self,
        start_percentage: float,
        nb_start_simulations: int,
        cooling: float,
        threshold_coef: float,
        max_without_improvement: int,
        max_runs: int,
        node_selector: NodeSelector,
        slot_selector: SlotSelector,
        time_limit: int,
    ) -> None:
        super().__init__(
            0.0,
            0.0,
            cooling,
            0.0,
            max_without_improvement,
            max_runs,
            node_selector,
            slot_selector,
            time_limit,
        )
        self.start_percentage = start_percentage
        self.nb_start_simulations = nb_start_simulations
        self.threshold_coef = threshold_coef

    def clone(self) -> DynamicStartAnnealing:
        return super().clone()

    def execute(self, graph: Graph) -> None:
        """Run several annealings; statistics are kept across calls."""
        with self._timing():
            self.reanneal(graph)

    def reanneal(self, graph: Graph) -> None:
        """Run annealings, undoing any run that does not improve the score."""
        with self._timing():
            without_improvement = 0
            runs = 0
            while (not self.time_limit_reached() and runs == 0) or (
                graph.total_score() > 0
                and without_improvement < self.max_without_improvement
                and runs < self.max_runs
            ):
                start = self.start_temperature(graph)
                logger.debug("start temperature: %g", start)
                self.start_temp = start
                self.threshold = start * self.threshold_coef

                runs += 1
                score_before = graph.total_score()
                placement_before = graph.node_placement()
                self.anneal(graph)
                logger.debug("after run %d: %d", runs, graph.total_score())
                if graph.total_score() >= score_before:
                    without_improvement += 1
                    graph.place_nodes(placement_before)
                else:
                    without_improvement = 0

    def start_temperature(self, graph: Graph) -> float:
        """Sample trial moves and return a temperature accepting the wanted share of them."""
        changes = []
        improvements = 0
        for _ in range(self.nb_start_simulations):
            # Copies keep the selectors' own state untouched.
            node_selector = self.node_selector.clone()
            slot_selector = self.slot_selector.clone()
            node_id = node_selector.select(graph)
            slot_id = slot_selector.select(graph, node_id)
            improve = graph.placement_improvement(node_id, slot_id)
            if improve > 0:
                improvements += 1
            changes.append(improve)
        logger.debug("improvements found: %d", improvements)
        if improvements > 0:
            return _TINY_TEMPERATURE
        changes.sort()
        accepted = _round_half_away(len(changes) * self.start_percentage)
        if accepted == 0:
            return _TINY_TEMPERATURE
        if not 0 < accepted <= len(changes):
            raise ValueError(
                f"start percentage {self.start_percentage} selects {accepted} "
                f"of {len(changes)} sampled moves"
            )
        return max(float(-changes[len(changes) - accepted]), _TINY_TEMPERATURE)