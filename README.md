# graphplace

Heuristics that place the nodes of a graph onto a fixed set of slots while
keeping the crossing score low. The package also includes the statistics it
records along the way and a few small neural-network building blocks.

## Heuristics

- `graphplace.annealing.SimulatedAnnealing` runs repeated annealing passes.
  Each step moves one node. The move is kept or undone according to
  `move_probability(improve, temp)`. When a pass ends, the best placement found
  is put back on the graph. The object keeps these statistics as lists of
  `ValIter`: `best_scores`, `evol_improve`, `evol_proba`, `evol_accept`,
  `evol_score` and `evol_temp`. It also keeps `best_placement` and `num_iter`.
  `time_limit` is given in milliseconds; a negative value disables it.
- `graphplace.dynamic_start_annealing.DynamicStartAnnealing` measures the
  start temperature of each pass from sampled trial moves
  (`start_temperature`). The stop threshold is that temperature multiplied by
  `threshold_coef`. A pass that does not improve the score is undone.
- `graphplace.dynamic_annealing.DynamicAnnealing` recomputes its temperature
  at every step from the accumulated score change and entropy
  (`update_temperature`). It runs at most `max_iterations` steps per
  `execute`, and also records `evol_delta_score` and `evol_delta_entropy`.

Every heuristic has a `clone()` method that returns an independent deep copy.

## Selectors and initial placement

- `graphplace.node_selectors`:
  - `RandomNodeSelector` draws a node id in `[0, nb_nodes - 1)`.
  - `BinaryNodeSelector` keeps the higher-scoring of two distinct draws.
  - `MultipleNodeSelector(n=3)` keeps the best of `n` draws. `n` grows by one
    on every call.
- `graphplace.slot_selectors`:
  - `RandomSlotSelector` draws any slot other than the node's current one.
  - `BinarySlotSelector` keeps the closer of two distinct such slots.
  - `MultipleSlotSelector(n=3, delay=100000, increment=1)` keeps the closest
    of `n` such slots. `n` grows by `increment` every `delay` calls.
- `graphplace.random_placement.RandomPlacement.compute(graph)` returns a
  distinct random slot for each node.

Your own strategies can subclass the abstract bases in `graphplace.protocols`:
`Heuristic`, `PlacementAlgorithm`, `NodeSelector` and `SlotSelector`.

## The graph

The algorithms accept any object that follows the `graphplace.protocols.Graph`
protocol. That object must provide:

- the properties `nb_nodes` and `nb_slots`;
- `node(node_id)`, returning a `graphplace.node.Node`;
- `slot(slot_id)`, returning an object with a `pos` attribute;
- `node_score(node_id)` and `total_score()`;
- `place_node(node_id, slot_id)`, `place_nodes(places)` and
  `node_placement()`;
- `placement_improvement(node_id, slot_id)`.

## Statistics

`graphplace.stats` contains:

- `ValIter`, a value paired with its iteration, and `ValFreq`, a value with
  its frequency;
- `merge_scores`, which aligns several series on common iterations;
- `frequencies`;
- `acceptance_stats`, which gives refused and accepted moves per block of
  iterations;
- `max_deterioration_stats`;
- the CSV helpers `write_csv_valiter`, `write_csv` and `transpose_csv`, which
  use `;` as the separator.

## Neural-network building blocks

- `graphplace.matrix.Matrix` is a dense matrix.
  - `a @ b` is the matrix product, and `+`, `-`, scalar `*` and `/` work as
    expected.
  - `hadamard`, `dot`, `apply`, `transpose` and `sum` are available.
  - `parse` reads a matrix from text.
  - A shape mismatch raises `MatrixSizeError`.
- `graphplace.neuron_layer.NeuronLayer` is a dense layer with an
  `ActivationFunction`. The package provides `IDENTITY`, `RELU` and `SIGMOID`.
  The layer has `forward`, `backpropagate` and `apply_gradient`.
- `graphplace.softmax_layer.SoftmaxLayer` applies softmax.
  `SoftmaxLayerAlphaGoZero` leaves the last row out of the softmax.

## Other helpers

- `graphplace.position.Position` is an immutable 2D point.
- `graphplace.node.Node` is a node with a position and a slot, where `-1`
  means the node is unplaced.
- `graphplace.utils` provides random-number helpers, `mean`, `variance`,
  `std_dev` and `median`.

## Example

```python
from graphplace.annealing import SimulatedAnnealing
from graphplace.node_selectors import RandomNodeSelector
from graphplace.slot_selectors import MultipleSlotSelector

annealing = SimulatedAnnealing(
    100.0, 0.5, 0.99999, 0.0001, 3, 10,
    RandomNodeSelector(), MultipleSlotSelector(), -1,
)
annealing.execute(graph)  # graph: any object following the Graph protocol
print(annealing.best_scores[-1])
```

## What this package does not do

- It has no graph implementation and no crossing computation. You supply them
  through the `Graph` protocol.
- It has no file loader, no command-line program and no display.
- The neural-network pieces are separate layers. The package includes no
  complete network, training loop or game search.

## Tests

```
pip install -e .[test]
pytest
```