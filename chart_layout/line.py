from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from chart_layout.collection import EntryCollection
from chart_layout.config import LayoutDefaults
from chart_layout.dataset import BaseDataSet
from chart_layout.segment import DrawSegmentSpec

_DEFAULTS = LayoutDefaults()

Point = tuple[float, float]


class LineDataSet(BaseDataSet):
    """One polyline per collection, with points at segment centres."""

    def __init__(
        self,
        collections: Iterable[EntryCollection] = (),
        *,
        point_size: float = _DEFAULTS.point_size,
        spacing: float = _DEFAULTS.point_spacing,
        start_margin: float = 0.0,
        end_margin: float = 0.0,
        is_horizontal_scroll_enabled: bool = False,
    ) -> None:
        super().__init__(collections, is_horizontal_scroll_enabled=is_horizontal_scroll_enabled)
        self.point_size = float(point_size)
        self.spacing = float(spacing)
        self.start_margin = float(start_margin)
        self.end_margin = float(end_margin)

    @classmethod
    def from_defaults(
        cls,
        defaults: LayoutDefaults,
        collections: Iterable[EntryCollection] = (),
        **kwargs: Any,
    ) -> LineDataSet:
        return cls(
            collections,
            point_size=defaults.px(defaults.point_size),
            spacing=defaults.px(defaults.point_spacing),
            **kwargs,
        )

    def _base_spec(self) -> DrawSegmentSpec:
        return DrawSegmentSpec(
            width=self.point_size,
            spacing=self.spacing,
            start_margin=self.start_margin,
            end_margin=self.end_margin,
        )

    def layout_lines(self) -> list[list[Point]]:
        frame = self.frame()
        if frame is None or self.bounds.width <= 0:
            return []
        spec = self.segment_spec()
        step = self.step
        origin = self.bounds.left - self.horizontal_scroll
        lines: list[list[Point]] = []
        for collection in self.collections:
            points: list[Point] = []
            for entry in collection:
                x = origin + spec.segment_center((entry.x - frame.min_x) / step)
                points.append((x, self._y_to_pixel(entry.y, frame.min_y, frame.max_y)))
            lines.append(points)
        return lines

    def draw(self, surface: Any, animation_offset: float) -> None:
        for points in self.layout_lines():
            if points:
                surface.draw_line(points, animation_offset)
