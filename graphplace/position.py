"""Two-dimensional positions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A point in the plane."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Position) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return self + (-other)

    def __mul__(self, k: float) -> Position:
        if isinstance(k, Position):
            return NotImplemented
        return Position(k * self.x, k * self.y)

    def __rmul__(self, k: float) -> Position:
        return self * k

    def __truediv__(self, k: float) -> Position:
        return (1 / k) * self

    def __neg__(self) -> Position:
        return -1 * self

    def __str__(self) -> str:
        return f"{self.x:g},{self.y:g}"

    @classmethod
    def parse(cls, text: str) -> Position:
        """Read two coordinates separated by whitespace or a comma."""
        parts = text.replace(",", " ").split()
        if len(parts) != 2:
            raise ValueError(f"expected two coordinates, got {text!r}")
        return cls(float(parts[0]), float(parts[1]))