from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    def offset(self, dx: float, dy: float = 0.0) -> Rect:
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def intersects_x(self, left: float, right: float) -> bool:
        return self.left < right and self.right > left


EMPTY_RECT = Rect(0.0, 0.0, 0.0, 0.0)
