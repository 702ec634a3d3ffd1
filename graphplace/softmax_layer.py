"""Softmax layers."""

from __future__ import annotations

import math
from typing import Any

from graphplace.matrix import Matrix


def softmax_interval(m: Matrix, start: int, end: int) -> Matrix:
    """Return a copy of m with softmax applied to column 0 of rows start (inclusive) to end (exclusive)."""
    if not 0 <= start <= end <= m.height:
        raise ValueError(f"invalid row interval [{start}, {end}) for height {m.height}")
    rows = [list(row) for row in m]
    selected = rows[start:end]
    if selected:
        peak = max(row[0] for row in selected)
        exps = [math.exp(row[0] - peak) for row in selected]
        total = sum(exps)
        for row, e in zip(selected, exps):
            row[0] = e / total
    return Matrix(rows)


class SoftmaxLayer:
    """A parameterless layer applying softmax to a column vector."""

    def __init__(self) -> None:
        self.input: Matrix | None = None
        self.output: Matrix | None = None

    def softmax(self, m: Matrix) -> Matrix:
        """Apply softmax over every row of the column."""
        return softmax_interval(m, 0, m.height)

    def apply(self, m: Matrix) -> Matrix:
        """Compute the output for m without recording anything."""
        return self.softmax(m)

    def forward(self, m: Matrix) -> Matrix:
        """Compute the output for m and remember input and output for backpropagation."""
        self.input = m
        self.output = self.softmax(m)
        return self.output

    def backpropagate(self, d_output: Matrix) -> tuple[Matrix, SoftmaxLayer]:
        """Return the gradient with respect to the input and an empty gradient layer."""
        d_input = self.backpropagate_interval(d_output, 0, d_output.height)
        return d_input, type(self)()

    def backpropagate_interval(self, d_output: Matrix, start: int, end: int) -> Matrix:
        """Return d_output with rows start to end (exclusive) replaced by the softmax gradient."""
        if self.output is None:
            raise ValueError("forward must be called before backpropagation")
        if not 0 <= start <= end <= d_output.height:
            raise ValueError(f"invalid row interval [{start}, {end}) for height {d_output.height}")
        out = [row[0] for row in self.output]
        grad = [row[0] for row in d_output]
        non_zero = [j for j in range(start, end) if grad[j] != 0.0]
        rows = [list(row) for row in d_output]
        for i in range(start, end):
            total = 0.0
            for j in non_zero:
                if i == j:
                    total += out[j] * (1 - out[j]) * grad[j]
                else:
                    total -= out[j] * out[i] * grad[j]
            rows[i][0] = total
        return Matrix(rows)

    def apply_gradient(self, gradient: Any, coef: float) -> None:
        """Accept a softmax gradient; softmax has no parameters, so nothing changes.

        Raises TypeError when the gradient does not come from a softmax layer.
        """
        if not isinstance(gradient, SoftmaxLayer):
            raise TypeError(
                f"expected a softmax gradient, got {type(gradient).__name__}"
            )

    def type_name(self) -> str:
        return "SOFTMAX"

    def __str__(self) -> str:
        empty = Matrix()
        return (
            f"{self.type_name()}\n"
            f"input :\n{self.input if self.input is not None else empty}"
            f"output :\n{self.output if self.output is not None else empty}"
        )


class SoftmaxLayerAlphaGoZero(SoftmaxLayer):
    """Softmax over every row but the last, which carries the position value untouched."""

    def softmax(self, m: Matrix) -> Matrix:
        return softmax_interval(m, 0, m.height - 1)

    def backpropagate(self, d_output: Matrix) -> tuple[Matrix, SoftmaxLayerAlphaGoZero]:
        d_input = self.backpropagate_interval(d_output, 0, d_output.height - 1)
        return d_input, SoftmaxLayerAlphaGoZero()

    def type_name(self) -> str:
        return "SOFTMAX ALPHAGO ZERO"