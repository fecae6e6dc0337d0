from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, overload

import numpy as np

from chart_layout.entry import Entry
from chart_layout.errors import ChartDataError


class EntryCollection:
    """Insertion-ordered entries backed by read-only float64 arrays.

    Insertion order is the draw order along the x axis. Entries are usually
    non-decreasing in x but nothing here enforces it. Every coordinate is
    finite; NaN or infinity raises ``ChartDataError`` on construction.
    """

    __slots__ = ("_x", "_y")

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        items = list(entries)
        x = np.fromiter((e.x for e in items), dtype=np.float64, count=len(items))
        y = np.fromiter((e.y for e in items), dtype=np.float64, count=len(items))
        self._x = _freeze(x)
        self._y = _freeze(y)

    @classmethod
    def from_arrays(cls, x: Any, y: Any) -> "EntryCollection":
        x_arr = np.array(x, dtype=np.float64)
        y_arr = np.array(y, dtype=np.float64)
        if x_arr.ndim != 1 or y_arr.ndim != 1:
            raise ChartDataError("x and y must be 1-D")
        if x_arr.shape != y_arr.shape:
            raise ChartDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
        bad = ~(np.isfinite(x_arr) & np.isfinite(y_arr))
        if np.any(bad):
            index = int(np.argmax(bad))
            raise ChartDataError(
                f"entries must be finite, got ({x_arr[index]!r}, {y_arr[index]!r}) at index {index}"
            )
        out = cls.__new__(cls)
        out._x = _freeze(x_arr)
        out._y = _freeze(y_arr)
        return out

    @classmethod
    def from_values(cls, *y_values: Any) -> "EntryCollection":
        y = np.array([float(v) for v in y_values], dtype=np.float64)
        return cls.from_arrays(np.arange(y.size, dtype=np.float64), y)

    @classmethod
    def from_pairs(cls, *pairs: tuple[Any, Any]) -> "EntryCollection":
        return cls(Entry(x, y) for x, y in pairs)

    @property
    def x(self) -> np.ndarray:
        return self._x

    @property
    def y(self) -> np.ndarray:
        return self._y

    @property
    def is_empty(self) -> bool:
        return self._x.size == 0

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self)

    def __len__(self) -> int:
        return int(self._x.size)

    def __iter__(self) -> Iterator[Entry]:
        for x, y in zip(self._x.tolist(), self._y.tolist()):
            yield Entry(x, y)

    @overload
    def __getitem__(self, index: int) -> Entry: ...

    @overload
    def __getitem__(self, index: slice) -> EntryCollection: ...

    def __getitem__(self, index: int | slice) -> Entry | EntryCollection:
        if isinstance(index, slice):
            return EntryCollection.from_arrays(self._x[index], self._y[index])
        return Entry(float(self._x[index]), float(self._y[index]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryCollection):
            return NotImplemented
        return bool(np.array_equal(self._x, other._x) and np.array_equal(self._y, other._y))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"EntryCollection({list(self)!r})"


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr
