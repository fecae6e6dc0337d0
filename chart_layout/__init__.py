from chart_layout.axis import (
    AxisBounds,
    AxisModel,
    compute_bounds,
    compute_step,
    stacked_y_range,
    union_bounds,
)
from chart_layout.collection import EntryCollection
from chart_layout.column import ColumnDataSet, ColumnGeometry, MergeMode
from chart_layout.config import LayoutDefaults, load_layout_config
from chart_layout.dataset import BaseDataSet, DataSet, MergedDataSet, ScrollableDataSet, shared_axis_bounds
from chart_layout.entry import Entry, entries_of, entries_of_pairs, entry_of
from chart_layout.errors import ChartDataError, ChartLayoutError, InvalidConfigurationError
from chart_layout.geometry import Rect
from chart_layout.line import LineDataSet
from chart_layout.scroll import InitialScroll, ScrollHandler, ScrollListener, ZoomHandler, max_scroll_amount
from chart_layout.segment import (
    DrawSegmentSpec,
    SegmentSpec,
    fit_segment_spec,
    make_draw_segment_spec,
    make_segment_spec,
)

__all__ = [
    "AxisBounds",
    "AxisModel",
    "BaseDataSet",
    "ChartDataError",
    "ChartLayoutError",
    "ColumnDataSet",
    "ColumnGeometry",
    "DataSet",
    "DrawSegmentSpec",
    "Entry",
    "EntryCollection",
    "InitialScroll",
    "InvalidConfigurationError",
    "LayoutDefaults",
    "LineDataSet",
    "MergeMode",
    "MergedDataSet",
    "Rect",
    "ScrollHandler",
    "ScrollListener",
    "ScrollableDataSet",
    "SegmentSpec",
    "ZoomHandler",
    "compute_bounds",
    "compute_step",
    "entries_of",
    "entries_of_pairs",
    "entry_of",
    "fit_segment_spec",
    "load_layout_config",
    "make_draw_segment_spec",
    "make_segment_spec",
    "max_scroll_amount",
    "shared_axis_bounds",
    "stacked_y_range",
    "union_bounds",
]
