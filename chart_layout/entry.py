from __future__ import annotations

from dataclasses import dataclass
import math
from numbers import Real
from typing import Any

from chart_layout.errors import ChartDataError


@dataclass(frozen=True, order=True)
class Entry:
    """A single data point. Both coordinates are finite floats."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _as_float(self.x, "x"))
        object.__setattr__(self, "y", _as_float(self.y, "y"))


def entry_of(x: Any, y: Any) -> Entry:
    return Entry(x, y)


def entries_of(*y_values: Any) -> list[Entry]:
    """Build entries from y values, using each value's index as its x."""

    return [Entry(index, y) for index, y in enumerate(y_values)]


def entries_of_pairs(*pairs: tuple[Any, Any]) -> list[Entry]:
    return [Entry(x, y) for x, y in pairs]


def _as_float(value: Any, label: str) -> float:
    if isinstance(value, (bool, str, bytes)):
        raise TypeError(f"entry {label} must be a real number, got {value!r}")
    if isinstance(value, Real):
        out = float(value)
    else:
        try:
            out = float(value)
        except (TypeError, ValueError) as exc:
            raise TypeError(f"entry {label} must be a real number, got {value!r}") from exc
    if not math.isfinite(out):
        raise ChartDataError(f"entry {label} must be finite, got {out!r}")
    return out
