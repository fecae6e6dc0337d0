from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import Any, Protocol, runtime_checkable

from chart_layout.axis import AxisBounds, AxisModel, compute_bounds, compute_step, union_bounds
from chart_layout.collection import EntryCollection
from chart_layout.geometry import EMPTY_RECT, Rect
from chart_layout.scroll import max_scroll_amount as overflow_width
from chart_layout.segment import DrawSegmentSpec, as_draw_segment_spec, fit_segment_spec


LOGGER = logging.getLogger(__name__)


@runtime_checkable
class DataSet(Protocol):
    def set_bounds(self, bounds: Rect) -> None:
        ...

    def draw(self, surface: Any, animation_offset: float) -> None:
        ...


@runtime_checkable
class ScrollableDataSet(DataSet, Protocol):
    @property
    def max_scroll_amount(self) -> float:
        ...

    def set_horizontal_scroll(self, value: float) -> None:
        ...

    def set_zoom(self, zoom: float) -> None:
        ...


class BaseDataSet:
    """State shared by the segmented datasets.

    Subclasses provide the unscaled segment geometry (``_base_spec``) and the
    y range they plot over (``_y_range``); this class turns them into the
    zoomed, fitted ``DrawSegmentSpec`` and the scroll bound.
    """

    def __init__(
        self,
        collections: Iterable[EntryCollection] = (),
        *,
        is_horizontal_scroll_enabled: bool = False,
    ) -> None:
        self.collections: list[EntryCollection] = list(collections)
        self.bounds: Rect = EMPTY_RECT
        self.axis_bounds: AxisBounds | None = None
        self.is_horizontal_scroll_enabled = is_horizontal_scroll_enabled
        self.horizontal_scroll = 0.0
        self.zoom = 1.0

    def set_collections(self, collections: Iterable[EntryCollection]) -> None:
        self.collections = list(collections)

    def _base_spec(self) -> DrawSegmentSpec:
        raise NotImplementedError

    def _y_range(self, bounds: AxisBounds) -> tuple[float, float]:
        return (bounds.min_y, bounds.max_y)

    @property
    def step(self) -> float:
        return compute_step(self.collections)

    def frame(self) -> AxisBounds | None:
        """Data bounds this dataset maps into its rect; ``None`` when empty."""

        bounds = self.axis_bounds if self.axis_bounds is not None else compute_bounds(self.collections)
        if bounds is None:
            return None
        min_y, max_y = self._y_range(bounds)
        return bounds.with_y_range(min_y, max_y)

    def segment_spec(self) -> DrawSegmentSpec:
        spec = self._base_spec().scaled(self.zoom)
        frame = self.frame()
        if frame is None or self.is_horizontal_scroll_enabled:
            return spec
        fitted = fit_segment_spec(spec, frame.entries_length(self.step), self.bounds.width)
        return as_draw_segment_spec(fitted)

    def update_axis_model(self, axis_model: AxisModel) -> None:
        axis_model.set_bounds(self.frame())
        axis_model.step = self.step
        axis_model.apply_segment_spec(self.segment_spec())

    @property
    def max_scroll_amount(self) -> float:
        frame = self.frame()
        if frame is None or not self.is_horizontal_scroll_enabled:
            return 0.0
        content = self.segment_spec().measured_width(frame.entries_length(self.step))
        return overflow_width(content, self.bounds.width)

    def set_bounds(self, bounds: Rect) -> None:
        self.bounds = bounds

    def set_horizontal_scroll(self, value: float) -> None:
        self.horizontal_scroll = float(value)

    def set_zoom(self, zoom: float) -> None:
        self.zoom = float(zoom)

    def set_axis_bounds(self, bounds: AxisBounds | None) -> None:
        """Pin the data frame, e.g. to bounds aggregated across merged children."""

        self.axis_bounds = bounds

    def _y_to_pixel(self, y: float, min_y: float, max_y: float) -> float:
        span = max_y - min_y
        if span == 0:
            return self.bounds.bottom
        return self.bounds.bottom - (y - min_y) * (self.bounds.height / span)


class MergedDataSet:
    """Draws child datasets in registration order inside one shared rect."""

    def __init__(self, data_sets: Iterable[DataSet] = ()) -> None:
        self.data_sets: list[DataSet] = list(data_sets)
        self.bounds: Rect = EMPTY_RECT
        self._last_error: Exception | None = None

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def max_scroll_amount(self) -> float:
        return max((d.max_scroll_amount for d in self._scrollable()), default=0.0)

    def add(self, *data_sets: DataSet) -> MergedDataSet:
        self.data_sets.extend(data_sets)
        return self

    def remove(self, *data_sets: DataSet) -> MergedDataSet:
        for data_set in data_sets:
            if data_set in self.data_sets:
                self.data_sets.remove(data_set)
        return self

    def set_bounds(self, bounds: Rect) -> None:
        self.bounds = bounds
        for data_set in self.data_sets:
            data_set.set_bounds(bounds)

    def draw(self, surface: Any, animation_offset: float) -> None:
        for data_set in self.data_sets:
            try:
                data_set.draw(surface, animation_offset)
            except Exception as exc:  # noqa: BLE001
                self._last_error = exc
                LOGGER.exception("MergedDataSet child draw failed: %s", exc)

    def set_horizontal_scroll(self, value: float) -> None:
        for data_set in self._scrollable():
            data_set.set_horizontal_scroll(value)

    def set_zoom(self, zoom: float) -> None:
        for data_set in self._scrollable():
            data_set.set_zoom(zoom)

    def _scrollable(self) -> list[ScrollableDataSet]:
        return [d for d in self.data_sets if isinstance(d, ScrollableDataSet)]


def shared_axis_bounds(data_sets: Iterable[DataSet]) -> AxisBounds | None:
    """Union of the children's own frames, for pinning merged children to one frame.

    ``MergedDataSet`` never calls this itself; the host decides whether the
    children share a frame.
    """

    frames: list[AxisBounds | None] = []
    for data_set in data_sets:
        if isinstance(data_set, MergedDataSet):
            frames.append(shared_axis_bounds(data_set.data_sets))
        elif isinstance(data_set, BaseDataSet):
            frames.append(data_set.frame())
    return union_bounds(*frames)
