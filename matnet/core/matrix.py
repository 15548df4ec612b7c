"""Dense 2-D matrices with NumPy-style broadcasting."""

from __future__ import annotations

import numbers
from typing import Callable, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import InvalidArgumentError, ShapeMismatchError

ScalarFn = Callable[[float], float]
BinaryFn = Callable[[float, float], float]


def _check_dims(rows: int, cols: int) -> Tuple[int, int]:
    if isinstance(rows, bool) or isinstance(cols, bool):
        raise InvalidArgumentError("Matrix dimensions must be integers")
    if not isinstance(rows, numbers.Integral) or not isinstance(cols, numbers.Integral):
        raise InvalidArgumentError(
            f"Matrix dimensions must be integers, got {rows!r} x {cols!r}"
        )
    if rows < 1 or cols < 1:
        raise InvalidArgumentError(
            f"Matrix dimensions must be positive, got {rows} x {cols}"
        )
    return int(rows), int(cols)


def _elementwise(fn):
    if isinstance(fn, np.ufunc):
        return fn
    return np.vectorize(fn, otypes=[np.float64])


class Matrix:
    """A fixed-shape matrix of ``float64`` values stored in row-major order.

    Every algebraic operation returns a new :class:`Matrix`; operands are never
    mutated and results never share storage with their inputs.  When
    ``values`` is omitted the matrix is filled with samples drawn uniformly
    from ``[-1, 1)`` using ``rng`` (a fresh, unseeded generator by default).
    """

    __slots__ = ("_data",)

    def __init__(
        self,
        rows: int,
        cols: int,
        values: Iterable[float] | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        rows, cols = _check_dims(rows, cols)
        if values is None:
            generator = rng if rng is not None else np.random.default_rng()
            data = generator.uniform(-1.0, 1.0, size=(rows, cols))
        else:
            if not isinstance(values, np.ndarray):
                values = list(values)
            data = np.array(values, dtype=np.float64)
            if data.size != rows * cols:
                raise InvalidArgumentError(
                    f"Expected {rows * cols} values for a {rows}x{cols} matrix, "
                    f"got {data.size}"
                )
            data = data.reshape(rows, cols)
        self._data = np.ascontiguousarray(data, dtype=np.float64)

    # ------------------------------------------------------------------
    # Construction helpers

    @classmethod
    def _wrap(cls, data: np.ndarray) -> "Matrix":
        """Adopt ``data`` without copying; callers pass freshly built arrays."""

        matrix = cls.__new__(cls)
        matrix._data = np.ascontiguousarray(data, dtype=np.float64)
        return matrix

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """Build a matrix from a list of equally sized rows."""

        if not rows:
            raise InvalidArgumentError("from_rows requires at least one row")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidArgumentError("All rows must have the same length")
        return cls(len(rows), width, [value for row in rows for value in row])

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Matrix":
        """Copy a 1-D (treated as a single row) or 2-D array into a matrix."""

        data = np.array(array, dtype=np.float64)
        if data.ndim == 1:
            data = data.reshape(1, -1)
        if data.ndim != 2:
            raise InvalidArgumentError(f"Expected a 1-D or 2-D array, got ndim={data.ndim}")
        _check_dims(*data.shape)
        return cls._wrap(data)

    # ------------------------------------------------------------------
    # Accessors

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    @property
    def values(self) -> List[float]:
        """The flat row-major value sequence (index = ``row * cols + col``)."""

        return self._data.ravel().tolist()

    def get(self, row: int, col: int) -> float:
        if not 0 <= row < self.rows or not 0 <= col < self.cols:
            raise IndexError(
                f"Index ({row}, {col}) out of range for a {self.rows}x{self.cols} matrix"
            )
        return float(self._data[row, col])

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the values as a ``(rows, cols)`` array."""

        return self._data.copy()

    def clone(self) -> "Matrix":
        return Matrix._wrap(self._data.copy())

    # ------------------------------------------------------------------
    # Algebra

    def dot(self, other: "Matrix") -> "Matrix":
        if self.cols != other.rows:
            raise ShapeMismatchError(
                f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}: "
                f"inner dimensions {self.cols} and {other.rows} differ"
            )
        return Matrix._wrap(self._data @ other._data)

    def transpose(self) -> "Matrix":
        return Matrix._wrap(self._data.T.copy())

    def map(self, fn: ScalarFn, *, vectorized: bool = False) -> "Matrix":
        """Apply ``fn`` to every element.

        With ``vectorized=True`` ``fn`` is called once with the whole
        ``(rows, cols)`` array and must return an array of the same shape.
        """

        if vectorized:
            out = np.asarray(fn(self._data.copy()), dtype=np.float64)
            if out.shape != self._data.shape:
                raise ShapeMismatchError(
                    f"Vectorized map returned shape {out.shape}, expected {self.shape}"
                )
            return Matrix._wrap(out.copy())
        return Matrix._wrap(_elementwise(fn)(self._data))

    def broadcast(
        self, other: "Matrix | float", op: BinaryFn, *, strict: bool = True
    ) -> "Matrix":
        """Combine two matrices element-wise, repeating whole rows/columns.

        The result has shape ``(max(R1, R2), max(C1, C2))`` and element
        ``(i, j)`` is ``op(self[i % R1, j % C1], other[i % R2, j % C2])``.
        With ``strict=True`` every dimension pair must be equal or contain a 1;
        ``strict=False`` allows arbitrary wrap-around.
        """

        other = _as_matrix(other)
        (r1, c1), (r2, c2) = self.shape, other.shape
        compatible = all(
            a == b or a == 1 or b == 1 for a, b in ((r1, r2), (c1, c2))
        )
        if compatible:
            left, right = self._data, other._data
        elif strict:
            raise ShapeMismatchError(f"Cannot broadcast {r1}x{c1} with {r2}x{c2}")
        else:
            row_idx = np.arange(max(r1, r2))
            col_idx = np.arange(max(c1, c2))
            left = self._data[np.ix_(row_idx % r1, col_idx % c1)]
            right = other._data[np.ix_(row_idx % r2, col_idx % c2)]
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            out = _elementwise(op)(left, right)
        return Matrix._wrap(np.asarray(out, dtype=np.float64))

    def add(self, other: "Matrix | float", *, strict: bool = True) -> "Matrix":
        return self.broadcast(other, np.add, strict=strict)

    def sub(self, other: "Matrix | float", *, strict: bool = True) -> "Matrix":
        return self.broadcast(other, np.subtract, strict=strict)

    def mult(self, other: "Matrix | float", *, strict: bool = True) -> "Matrix":
        return self.broadcast(other, np.multiply, strict=strict)

    def div(self, other: "Matrix | float", *, strict: bool = True) -> "Matrix":
        return self.broadcast(other, np.true_divide, strict=strict)

    # ------------------------------------------------------------------
    # Reductions

    def sum(self) -> float:
        return float(np.sum(self._data))

    def sum_rows(self) -> "Matrix":
        """Collapse the rows into a single ``1 x cols`` row of column sums."""

        return Matrix._wrap(self._data.sum(axis=0, keepdims=True))

    # ------------------------------------------------------------------
    # Dunder helpers

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.rows}, {self.cols}, {self.values!r})"


def _as_matrix(value: "Matrix | float") -> Matrix:
    if isinstance(value, Matrix):
        return value
    if isinstance(value, numbers.Real):
        return Matrix(1, 1, [float(value)])
    raise TypeError(f"Expected a Matrix or a real number, got {type(value).__name__}")


__all__ = ["Matrix", "ScalarFn", "BinaryFn"]
