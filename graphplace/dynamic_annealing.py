"""Simulated annealing whose temperature follows the score and entropy changes."""

from __future__ import annotations

import math

from graphplace.annealing import SimulatedAnnealing
from graphplace.protocols import Graph, NodeSelector, SlotSelector
from graphplace.stats import ValIter


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class DynamicAnnealing(SimulatedAnnealing):
    """Annealing whose temperature is recomputed at every step.

    ``start_percentage`` is the share of sampled deteriorations the initial
    temperature lets through, measured on ``nb_start_simulations`` trial moves.
    Each execution runs at most ``max_iterations`` steps. ``ka_coef`` scales the
    dynamic temperature (1.0 recommended) and ``start_cooling`` cools the
    initial temperature after every step (0.99 recommended). ``time_limit`` is
    in milliseconds, negative when inactive.
    """

    def __init__(
        self,
        start_percentage: float,
        nb_start_simulations: int,
        max_iterations: int,
        ka_coef: float,
        start_cooling: float,
        node_selector: NodeSelector,
        slot_selector: SlotSelector,
        time_limit: int,
    ) -> None:
        super().__init__(
            1.0, 1.0, 1.0, 1.0, 0, 1, node_selector, slot_selector, time_limit
        )
        self.start_percentage = start_percentage
        self.nb_start_simulations = nb_start_simulations
        self.max_iterations = max_iterations
        self.ka_coef = ka_coef
        self.start_cooling_dynamic = start_cooling
        self.temp_initial = 0.0
        self.dynamic_temp = 0.0
        self.delta_score = 0.0
        self.delta_entropy = 0.0
        self._last_crossings: float = -1
        self.evol_delta_entropy: list[ValIter] = []
        self.evol_delta_score: list[ValIter] = []

    @property
    def temperature(self) -> float:
        """The dynamic temperature used to decide on moves."""
        return self.dynamic_temp

    def clone(self) -> DynamicAnnealing:
        return super().clone()

    def execute(self, graph: Graph) -> None:
        """Run up to max_iterations steps, then leave the best placement found."""
        with self._timing():
            self.temp_initial = self.start_temperature(graph)
            self.delta_score = 0.0
            self.delta_entropy = 0.0
            self._last_crossings = -1
            iterations = 0
            while (
                not self.time_limit_reached()
                and graph.total_score() > 0
                and iterations < self.max_iterations
            ):
                self.step(graph)
                iterations += 1
            if self.best_placement:
                graph.place_nodes(self.best_placement)

    def step(self, graph: Graph) -> None:
        """Update the temperature from the last step, then try one move."""
        score = graph.total_score()
        self.update_temperature(score, self._last_crossings)
        self._last_crossings = score
        super().step(graph)

    def start_temperature(self, graph: Graph) -> float:
        """Sample trial moves and return a temperature accepting the wanted share of deteriorations."""
        changes = []
        for _ in range(self.nb_start_simulations):
            # Copies keep the selectors' own state untouched.
            node_selector = self.node_selector.clone()
            slot_selector = self.slot_selector.clone()
            node_id = node_selector.select(graph)
            slot_id = slot_selector.select(graph, node_id)
            changes.append(graph.placement_improvement(node_id, slot_id))
        deteriorations = sorted(change for change in changes if change < 0)
        if not deteriorations:
            return graph.total_score() / 10.0
        accepted = _round_half_away(len(deteriorations) * self.start_percentage)
        if accepted == 0:
            accepted = 1
        if accepted > len(deteriorations) or accepted < 0:
            raise ValueError(
                f"start percentage {self.start_percentage} selects {accepted} "
                f"of {len(deteriorations)} sampled deteriorations"
            )
        return float(-deteriorations[len(deteriorations) - accepted])

    def update_temperature(self, current: float, previous: float) -> None:
        """Update the dynamic temperature from the crossings now and at the previous step.

        ``previous`` is -1 when there was no previous step.
        """
        if previous != -1:
            self.delta_score += current - previous
        if self.evol_accept and self.evol_accept[-1].val:
            self.delta_entropy += math.log(self.evol_proba[-1].val)
        if self.delta_score >= 0 or self.delta_entropy == 0:
            self.dynamic_temp = self.temp_initial
        else:
            self.dynamic_temp = self.ka_coef * self.delta_score / self.delta_entropy

        if self._last_stat_temporary and self.evol_delta_score:
            self.evol_delta_score.pop()
            self.evol_delta_entropy.pop()
        self.evol_delta_entropy.append(ValIter(self.delta_entropy, self.num_iter + 1))
        self.evol_delta_score.append(ValIter(self.delta_score, self.num_iter + 1))

        self.temp = self.dynamic_temp
        self.temp_initial *= self.start_cooling_dynamic