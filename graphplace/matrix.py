"""Dense matrices of floats."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence

from graphplace.utils import generate_rand_double


class MatrixSizeError(ValueError):
    """Raised when matrix dimensions do not fit the operation."""


class Matrix:
    """A matrix stored as a list of rows."""

    def __init__(self, rows: Iterable[Iterable[float]] = ()) -> None:
        self._rows: list[list[float]] = [list(row) for row in rows]

    @classmethod
    def random(cls, height: int, width: int, mini: float = 0.0, maxi: float = 1.0) -> Matrix:
        """Build a height x width matrix with values drawn in [mini, maxi)."""
        return cls(
            [generate_rand_double(mini, maxi) for _ in range(width)]
            for _ in range(height)
        )

    @classmethod
    def _filled(cls, height: int, width: int, value: float = 0.0) -> Matrix:
        return cls([value] * width for _ in range(height))

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    def __getitem__(self, i: int) -> list[float]:
        return self._rows[i]

    def __iter__(self) -> Iterator[list[float]]:
        return iter(self._rows)

    def _check_same_shape(self, other: Matrix) -> None:
        if self.height != other.height or self.width != other.width:
            raise MatrixSizeError(
                f"shapes {self.height}x{self.width} and {other.height}x{other.width} differ"
            )

    def _combine(self, other: Matrix, op: Callable[[float, float], float]) -> Matrix:
        self._check_same_shape(other)
        return Matrix(
            [op(a, b) for a, b in zip(row_a, row_b)]
            for row_a, row_b in zip(self._rows, other._rows)
        )

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self + (-other)

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.width != other.height:
            raise MatrixSizeError(
                f"cannot multiply {self.height}x{self.width} by {other.height}x{other.width}"
            )
        columns = list(zip(*other._rows)) if other._rows else []
        return Matrix(
            [sum((a * b for a, b in zip(row, column)), 0.0) for column in columns]
            for row in self._rows
        )

    def __mul__(self, k: float) -> Matrix:
        if isinstance(k, Matrix):
            return NotImplemented
        return Matrix([v * k for v in row] for row in self._rows)

    def __rmul__(self, k: float) -> Matrix:
        return self * k

    def __truediv__(self, k: float) -> Matrix:
        return (1 / k) * self

    def __neg__(self) -> Matrix:
        return -1.0 * self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self.height == other.height
            and self.width == other.width
            and self._rows == other._rows
        )

    __hash__ = None  # type: ignore[assignment]

    def hadamard(self, other: Matrix) -> Matrix:
        """Element-wise product."""
        return self._combine(other, lambda a, b: a * b)

    def dot(self, other: Matrix) -> float:
        """Sum of the element-wise product."""
        return self.hadamard(other).sum()

    def apply(self, f: Callable[[float], float]) -> Matrix:
        """Return a matrix with f applied to every element."""
        return Matrix([f(v) for v in row] for row in self._rows)

    def transpose(self) -> Matrix:
        """Return the transposed matrix."""
        return Matrix(list(column) for column in zip(*self._rows))

    def sum(self) -> float:
        """Sum of all elements."""
        return sum((sum(row, 0.0) for row in self._rows), 0.0)

    def __str__(self) -> str:
        return "".join("".join(f"{v:g} " for v in row) + "\n" for row in self._rows)

    def __repr__(self) -> str:
        return f"Matrix({self._rows!r})"

    @classmethod
    def parse(cls, text: str, height: int, width: int) -> Matrix:
        """Read height x width numbers, row by row, from whitespace-separated text."""
        tokens: Sequence[str] = text.split()
        needed = height * width
        if len(tokens) < needed:
            raise ValueError(f"expected {needed} values, got {len(tokens)}")
        values = iter(float(token) for token in tokens[:needed])
        return cls([next(values) for _ in range(width)] for _ in range(height))