from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import enum
from typing import Any

from chart_layout.axis import AxisBounds, stacked_y_range
from chart_layout.collection import EntryCollection
from chart_layout.config import LayoutDefaults
from chart_layout.dataset import BaseDataSet
from chart_layout.entry import Entry
from chart_layout.geometry import Rect
from chart_layout.segment import DrawSegmentSpec

_DEFAULTS = LayoutDefaults()


class MergeMode(enum.Enum):
    GROUPED = "grouped"
    STACK = "stack"


@dataclass(frozen=True)
class ColumnGeometry:
    rect: Rect
    entry: Entry
    series_index: int


class ColumnDataSet(BaseDataSet):
    """Lays out one column per entry; several collections are grouped or stacked.

    All sizes are drawing units. ``draw`` hands every visible column to
    ``surface.draw_column(rect, entry, animation_offset)``.
    """

    def __init__(
        self,
        collections: Iterable[EntryCollection] = (),
        *,
        column_width: float = _DEFAULTS.column_width,
        spacing: float = _DEFAULTS.column_spacing,
        inner_spacing: float = _DEFAULTS.column_inner_spacing,
        merge_mode: MergeMode = MergeMode.GROUPED,
        start_margin: float = 0.0,
        end_margin: float = 0.0,
        is_horizontal_scroll_enabled: bool = False,
    ) -> None:
        super().__init__(collections, is_horizontal_scroll_enabled=is_horizontal_scroll_enabled)
        self.column_width = float(column_width)
        self.spacing = float(spacing)
        self.inner_spacing = float(inner_spacing)
        self.merge_mode = merge_mode
        self.start_margin = float(start_margin)
        self.end_margin = float(end_margin)

    @classmethod
    def from_defaults(
        cls,
        defaults: LayoutDefaults,
        collections: Iterable[EntryCollection] = (),
        **kwargs: Any,
    ) -> ColumnDataSet:
        return cls(
            collections,
            column_width=defaults.px(defaults.column_width),
            spacing=defaults.px(defaults.column_spacing),
            inner_spacing=defaults.px(defaults.column_inner_spacing),
            **kwargs,
        )

    def _series_count(self) -> int:
        return max(1, len(self.collections))

    def _base_spec(self) -> DrawSegmentSpec:
        if self.merge_mode is MergeMode.STACK:
            width = self.column_width
        else:
            n = self._series_count()
            width = self.column_width * n + self.inner_spacing * (n - 1)
        return DrawSegmentSpec(
            width=width,
            spacing=self.spacing,
            start_margin=self.start_margin,
            end_margin=self.end_margin,
        )

    def _y_range(self, bounds: AxisBounds) -> tuple[float, float]:
        if self.axis_bounds is None and self.merge_mode is MergeMode.STACK:
            min_y, max_y = stacked_y_range(self.collections)
        else:
            min_y, max_y = bounds.min_y, bounds.max_y
        # Columns grow from the zero baseline, so zero is always in range.
        return (min(min_y, 0.0), max(max_y, 0.0))

    def layout_columns(self) -> list[ColumnGeometry]:
        frame = self.frame()
        if frame is None or self.bounds.width <= 0:
            return []
        spec = self.segment_spec()
        base = self._base_spec()
        scale = spec.width / base.width if base.width else 1.0
        column_width = self.column_width * scale
        inner_spacing = self.inner_spacing * scale
        step = self.step
        origin = self.bounds.left - self.horizontal_scroll
        baseline = self._y_to_pixel(0.0, frame.min_y, frame.max_y)

        positive: dict[float, float] = {}
        negative: dict[float, float] = {}
        out: list[ColumnGeometry] = []
        for series_index, collection in enumerate(self.collections):
            for entry in collection:
                left = origin + spec.segment_start((entry.x - frame.min_x) / step)
                if self.merge_mode is MergeMode.STACK:
                    sums = positive if entry.y >= 0 else negative
                    start = sums.get(entry.x, 0.0)
                    sums[entry.x] = start + entry.y
                    y0 = self._y_to_pixel(start, frame.min_y, frame.max_y)
                    y1 = self._y_to_pixel(start + entry.y, frame.min_y, frame.max_y)
                else:
                    left += (column_width + inner_spacing) * series_index
                    y0 = baseline
                    y1 = self._y_to_pixel(entry.y, frame.min_y, frame.max_y)
                rect = Rect(left, min(y0, y1), left + column_width, max(y0, y1))
                if not rect.intersects_x(self.bounds.left, self.bounds.right):
                    continue
                out.append(ColumnGeometry(rect=rect, entry=entry, series_index=series_index))
        return out

    def draw(self, surface: Any, animation_offset: float) -> None:
        for column in self.layout_columns():
            surface.draw_column(column.rect, column.entry, animation_offset)
