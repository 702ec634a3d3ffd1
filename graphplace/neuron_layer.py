"""Dense neuron layers with an activation function."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from graphplace.matrix import Matrix


def identity(x: float) -> float:
    return float(x)


def identity_derivative(x: float) -> float:
    # d/dx x = x ** 0, which is 1 everywhere (NaN included).
    return math.pow(x, 0)


def relu(x: float) -> float:
    return max(0.0, x)


def relu_derivative(x: float) -> float:
    return float(x > 0)


def sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


def sigmoid_derivative(x: float) -> float:
    v = sigmoid(x)
    return v * (1 - v)


@dataclass(frozen=True)
class ActivationFunction:
    """An activation function, its derivative and a display name."""

    function: Callable[[float], float]
    derivative: Callable[[float], float]
    name: str


IDENTITY = ActivationFunction(identity, identity_derivative, "Identity")
RELU = ActivationFunction(relu, relu_derivative, "Relu")
SIGMOID = ActivationFunction(sigmoid, sigmoid_derivative, "Sigmoid")


class NeuronLayer:
    """A fully connected layer: output = activation(weights @ input + bias)."""

    def __init__(
        self,
        weights: Matrix | None = None,
        bias: Matrix | None = None,
        activation: ActivationFunction = IDENTITY,
    ) -> None:
        self.weights = weights if weights is not None else Matrix()
        self.bias = bias if bias is not None else Matrix()
        self.activation = activation
        self.input: Matrix | None = None
        self.output: Matrix | None = None
        self._pre_activation: Matrix | None = None

    @classmethod
    def random(
        cls,
        nb_inputs: int,
        nb_outputs: int,
        mini: float = 0.0,
        maxi: float = 1.0,
        activation: ActivationFunction = IDENTITY,
    ) -> NeuronLayer:
        """Build a layer whose weights and biases are drawn in [mini, maxi)."""
        return cls(
            Matrix.random(nb_outputs, nb_inputs, mini, maxi),
            Matrix.random(nb_outputs, 1, mini, maxi),
            activation,
        )

    def apply(self, m: Matrix) -> Matrix:
        """Compute the output for m without recording anything."""
        return (self.weights @ m + self.bias).apply(self.activation.function)

    def forward(self, m: Matrix) -> Matrix:
        """Compute the output for m and remember input and output for backpropagation."""
        self.input = m
        self._pre_activation = self.weights @ m + self.bias
        self.output = self._pre_activation.apply(self.activation.function)
        return self.output

    def backpropagate(self, d_output: Matrix) -> tuple[Matrix, NeuronLayer]:
        """Return the gradient with respect to the input and the parameter gradient layer."""
        if self.input is None or self._pre_activation is None:
            raise ValueError("forward must be called before backpropagation")
        prod = d_output.hadamard(self._pre_activation.apply(self.activation.derivative))
        d_input = self.weights.transpose() @ prod
        gradient = NeuronLayer(prod @ self.input.transpose(), prod, self.activation)
        return d_input, gradient

    def apply_gradient(self, gradient: Any, coef: float) -> None:
        """Subtract coef times the gradient; gradients of other layer kinds are ignored."""
        if not isinstance(gradient, NeuronLayer):
            return
        updated = self - gradient * coef
        self.weights = updated.weights
        self.bias = updated.bias
        self._reset_cache()

    def _reset_cache(self) -> None:
        self.input = None
        self.output = None
        self._pre_activation = None

    @property
    def nb_inputs(self) -> int:
        return self.weights.width

    @property
    def nb_outputs(self) -> int:
        return self.weights.height

    def __add__(self, other: NeuronLayer) -> NeuronLayer:
        if not isinstance(other, NeuronLayer):
            return NotImplemented
        return NeuronLayer(self.weights + other.weights, self.bias + other.bias, self.activation)

    def __sub__(self, other: NeuronLayer) -> NeuronLayer:
        if not isinstance(other, NeuronLayer):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> NeuronLayer:
        return -1.0 * self

    def __mul__(self, k: float) -> NeuronLayer:
        if isinstance(k, NeuronLayer):
            return NotImplemented
        return NeuronLayer(self.weights * k, self.bias * k, self.activation)

    def __rmul__(self, k: float) -> NeuronLayer:
        return self * k

    def __truediv__(self, k: float) -> NeuronLayer:
        return (1.0 / k) * self

    def __str__(self) -> str:
        empty = Matrix()
        return (
            f"weights :\n{self.weights}"
            f"bias :\n{self.bias}"
            f"activation : {self.activation.name}\n"
            f"input :\n{self.input if self.input is not None else empty}"
            f"output :\n{self.output if self.output is not None else empty}"
        )

    def read(self, text: str) -> None:
        """Read the weights then the biases, row by row, keeping the current shape."""
        tokens = text.split()
        split = self.nb_outputs * self.nb_inputs
        weights = Matrix.parse(" ".join(tokens[:split]), self.nb_outputs, self.nb_inputs)
        bias = Matrix.parse(" ".join(tokens[split:]), self.nb_outputs, 1)
        self.weights = weights
        self.bias = bias
        self._reset_cache()