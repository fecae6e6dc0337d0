from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from chart_layout.collection import EntryCollection
from chart_layout.errors import InvalidConfigurationError
from chart_layout.segment import SegmentSpec


DEFAULT_STEP = 1.0


@dataclass(frozen=True)
class AxisBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"inverted bounds: {self!r}")

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.max_x, self.min_y, self.max_y)

    def entries_length(self, step: float = DEFAULT_STEP) -> int:
        if step <= 0:
            raise InvalidConfigurationError("step must be > 0")
        return int(round(self.width / step)) + 1

    def with_y_range(self, min_y: float, max_y: float) -> AxisBounds:
        return AxisBounds(min_x=self.min_x, max_x=self.max_x, min_y=min_y, max_y=max_y)


def compute_bounds(collections: Iterable[EntryCollection]) -> AxisBounds | None:
    """Fold min/max x and y over every entry; ``None`` means there was no data.

    Order-independent and side-effect free, so repeated calls over unchanged
    collections return identical values.
    """

    min_x = max_x = min_y = max_y = None
    for collection in collections:
        if collection.is_empty:
            continue
        cx0 = float(np.min(collection.x))
        cx1 = float(np.max(collection.x))
        cy0 = float(np.min(collection.y))
        cy1 = float(np.max(collection.y))
        if min_x is None:
            min_x, max_x, min_y, max_y = cx0, cx1, cy0, cy1
            continue
        min_x = min(min_x, cx0)
        max_x = max(max_x, cx1)
        min_y = min(min_y, cy0)
        max_y = max(max_y, cy1)
    if min_x is None:
        return None
    return AxisBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def union_bounds(*bounds: AxisBounds | None) -> AxisBounds | None:
    present = [b for b in bounds if b is not None]
    if not present:
        return None
    return AxisBounds(
        min_x=min(b.min_x for b in present),
        max_x=max(b.max_x for b in present),
        min_y=min(b.min_y for b in present),
        max_y=max(b.max_y for b in present),
    )


def compute_step(collections: Iterable[EntryCollection]) -> float:
    """Smallest positive gap between consecutive x values of any collection."""

    step: float | None = None
    for collection in collections:
        if len(collection) < 2:
            continue
        gaps = np.abs(np.diff(collection.x))
        positive = gaps[gaps > 0]
        if positive.size == 0:
            continue
        candidate = float(np.min(positive))
        step = candidate if step is None else min(step, candidate)
    return DEFAULT_STEP if step is None else step


def stacked_y_range(collections: Iterable[EntryCollection]) -> tuple[float, float]:
    """Extremes of per-x stacked sums, negatives and positives stacked apart."""

    xs: list[np.ndarray] = []
    ys: list[np.ndarray] = []
    for collection in collections:
        if not collection.is_empty:
            xs.append(collection.x)
            ys.append(collection.y)
    if not xs:
        return (0.0, 0.0)
    x = np.concatenate(xs)
    y = np.concatenate(ys)
    keys, inverse = np.unique(x, return_inverse=True)
    negative = np.zeros(keys.size, dtype=np.float64)
    positive = np.zeros(keys.size, dtype=np.float64)
    np.add.at(negative, inverse, np.minimum(y, 0.0))
    np.add.at(positive, inverse, np.maximum(y, 0.0))
    return (float(np.min(negative)), float(np.max(positive)))


@dataclass
class AxisModel:
    """Mutable axis state owned by a single dataset or merged dataset.

    The numeric fields read 0 while empty; check ``is_empty`` or ``bounds``
    to tell "no data" apart from a single point at the origin.
    """

    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    step: float = DEFAULT_STEP
    x_segment_width: float = 0.0
    x_segment_spacing: float = 0.0
    _has_data: bool = field(default=False, init=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self._has_data

    @property
    def bounds(self) -> AxisBounds | None:
        if not self._has_data:
            return None
        return AxisBounds(min_x=self.min_x, max_x=self.max_x, min_y=self.min_y, max_y=self.max_y)

    def update(self, collections: Iterable[EntryCollection]) -> AxisBounds | None:
        items = list(collections)
        self.set_bounds(compute_bounds(items))
        self.step = compute_step(items)
        return self.bounds

    def set_bounds(self, bounds: AxisBounds | None) -> None:
        if bounds is None:
            self.min_x = self.max_x = self.min_y = self.max_y = 0.0
            self._has_data = False
            return
        self.min_x, self.max_x, self.min_y, self.max_y = bounds.as_tuple()
        self._has_data = True

    def apply_segment_spec(self, spec: SegmentSpec) -> None:
        self.x_segment_width = spec.width
        self.x_segment_spacing = spec.spacing

    def entries_length(self) -> int:
        bounds = self.bounds
        return 0 if bounds is None else bounds.entries_length(self.step)

    def clear(self) -> None:
        self.set_bounds(None)
        self.step = DEFAULT_STEP
        self.x_segment_width = 0.0
        self.x_segment_spacing = 0.0
