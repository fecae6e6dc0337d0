from __future__ import annotations

from typing import Any
import unittest

from chart_layout import (
    AxisBounds,
    AxisModel,
    ColumnDataSet,
    DataSet,
    EntryCollection,
    LayoutDefaults,
    LineDataSet,
    MergeMode,
    MergedDataSet,
    Rect,
    ScrollHandler,
    ScrollableDataSet,
    shared_axis_bounds,
)
from chart_layout.adapters import normalize_entries


class _RecordingSurface:
    def __init__(self) -> None:
        self.columns: list[tuple[Rect, Any, float]] = []
        self.lines: list[tuple[list[tuple[float, float]], float]] = []

    def draw_column(self, rect: Rect, entry: Any, animation_offset: float) -> None:
        self.columns.append((rect, entry, animation_offset))

    def draw_line(self, points: list[tuple[float, float]], animation_offset: float) -> None:
        self.lines.append((points, animation_offset))


class _FakeDataSet:
    def __init__(self, name: str, log: list[tuple[str, Any]]) -> None:
        self.name = name
        self.log = log
        self.bounds: Rect | None = None

    def set_bounds(self, bounds: Rect) -> None:
        self.bounds = bounds

    def draw(self, surface: Any, animation_offset: float) -> None:
        self.log.append((self.name, surface, animation_offset))


class _BrokenDataSet(_FakeDataSet):
    def draw(self, surface: Any, animation_offset: float) -> None:
        raise RuntimeError("boom")


class MergedDataSetTests(unittest.TestCase):
    def test_children_share_bounds_and_draw_in_registration_order(self) -> None:
        log: list[tuple[str, Any]] = []
        first = _FakeDataSet("first", log)
        second = _FakeDataSet("second", log)
        merged = MergedDataSet([first, second])
        rect = Rect(10, 20, 310, 220)
        surface = object()

        merged.set_bounds(rect)
        merged.draw(surface, 0.5)

        self.assertIs(first.bounds, rect)
        self.assertIs(second.bounds, rect)
        self.assertEqual(log, [("first", surface, 0.5), ("second", surface, 0.5)])

    def test_empty_merged_set_stores_bounds_and_draws_nothing(self) -> None:
        merged = MergedDataSet()
        rect = Rect(0, 0, 100, 50)
        merged.set_bounds(rect)
        merged.draw(_RecordingSurface(), 1.0)
        self.assertIs(merged.bounds, rect)
        self.assertEqual(merged.max_scroll_amount, 0.0)

    def test_add_and_remove_keep_order(self) -> None:
        log: list[tuple[str, Any]] = []
        a, b, c = (_FakeDataSet(n, log) for n in "abc")
        merged = MergedDataSet([a]).add(b, c).remove(a)
        merged.draw(None, 0.0)
        self.assertEqual([name for name, _, _ in log], ["b", "c"])

    def test_child_failure_is_logged_and_remaining_children_draw(self) -> None:
        log: list[tuple[str, Any]] = []
        merged = MergedDataSet([_BrokenDataSet("bad", log), _FakeDataSet("good", log)])
        with self.assertLogs("chart_layout.dataset", level="ERROR"):
            merged.draw(None, 0.25)
        self.assertEqual(log, [("good", None, 0.25)])
        self.assertIsInstance(merged.last_error, RuntimeError)

    def test_scroll_and_zoom_reach_scrollable_children_only(self) -> None:
        log: list[tuple[str, Any]] = []
        plain = _FakeDataSet("plain", log)
        columns = ColumnDataSet(
            [EntryCollection.from_values(1, 1, 1, 1)],
            column_width=10,
            spacing=10,
            is_horizontal_scroll_enabled=True,
        )
        merged = MergedDataSet([plain, columns])
        merged.set_bounds(Rect(0, 0, 40, 40))

        self.assertIsInstance(columns, ScrollableDataSet)
        self.assertNotIsInstance(plain, ScrollableDataSet)
        self.assertIsInstance(plain, DataSet)
        self.assertEqual(merged.max_scroll_amount, 40.0)

        merged.set_horizontal_scroll(12)
        merged.set_zoom(2.0)
        self.assertEqual(columns.horizontal_scroll, 12.0)
        self.assertEqual(columns.zoom, 2.0)
        self.assertEqual(merged.max_scroll_amount, 120.0)

    def test_shared_axis_bounds_unions_child_frames(self) -> None:
        columns = ColumnDataSet([EntryCollection.from_pairs((0, 5), (1, 2), (2, 9))])
        line = LineDataSet([EntryCollection.from_pairs((1, -3), (5, 4))])
        shared = shared_axis_bounds([columns, MergedDataSet([line])])
        self.assertEqual(shared, AxisBounds(min_x=0, max_x=5, min_y=-3, max_y=9))

        columns.set_axis_bounds(shared)
        line.set_axis_bounds(shared)
        self.assertEqual(columns.frame(), shared)
        self.assertEqual(line.frame(), shared)


class ColumnDataSetTests(unittest.TestCase):
    def test_single_series_columns(self) -> None:
        columns = ColumnDataSet([EntryCollection.from_values(1, 2, 4)], column_width=10, spacing=10)
        columns.set_bounds(Rect(0, 0, 300, 100))
        rects = [c.rect for c in columns.layout_columns()]
        self.assertEqual(
            rects,
            [Rect(5, 75, 15, 100), Rect(25, 50, 35, 100), Rect(45, 0, 55, 100)],
        )

    def test_grouped_series_sit_side_by_side(self) -> None:
        columns = ColumnDataSet(
            [EntryCollection.from_values(2, 4), EntryCollection.from_values(4, 2)],
            column_width=10,
            spacing=8,
            inner_spacing=2,
        )
        columns.set_bounds(Rect(0, 0, 200, 80))
        layout = columns.layout_columns()
        self.assertEqual(
            [(c.series_index, c.rect) for c in layout],
            [
                (0, Rect(4, 40, 14, 80)),
                (0, Rect(34, 0, 44, 80)),
                (1, Rect(16, 0, 26, 80)),
                (1, Rect(46, 40, 56, 80)),
            ],
        )
        self.assertEqual(columns.segment_spec().width, 22.0)

    def test_stacked_series_accumulate_per_sign(self) -> None:
        columns = ColumnDataSet(
            [EntryCollection.from_values(1, 2), EntryCollection.from_values(3, -1)],
            column_width=10,
            spacing=10,
            merge_mode=MergeMode.STACK,
        )
        columns.set_bounds(Rect(0, 0, 100, 50))
        frame = columns.frame()
        assert frame is not None
        self.assertEqual((frame.min_y, frame.max_y), (-1.0, 4.0))
        self.assertEqual(
            [c.rect for c in columns.layout_columns()],
            [Rect(5, 30, 15, 40), Rect(25, 20, 35, 40), Rect(5, 0, 15, 30), Rect(25, 40, 35, 50)],
        )

    def test_columns_shrink_to_fit_without_scroll(self) -> None:
        columns = ColumnDataSet([EntryCollection.from_values(1, 1, 1, 1)], column_width=10, spacing=10)
        columns.set_bounds(Rect(0, 0, 40, 40))
        self.assertEqual(columns.segment_spec().width, 5.0)
        self.assertEqual(columns.max_scroll_amount, 0.0)
        first = columns.layout_columns()[0].rect
        self.assertEqual((first.left, first.right), (2.5, 7.5))

    def test_scroll_offsets_columns_and_hides_offscreen_ones(self) -> None:
        columns = ColumnDataSet(
            [EntryCollection.from_values(1, 1, 1, 1)],
            column_width=10,
            spacing=10,
            is_horizontal_scroll_enabled=True,
        )
        columns.set_bounds(Rect(0, 0, 40, 40))
        self.assertEqual(columns.max_scroll_amount, 40.0)

        scroll = ScrollHandler(columns.set_horizontal_scroll, max_scroll_distance=columns.max_scroll_amount)
        scroll.handle_scroll_delta(-20)
        self.assertEqual(columns.horizontal_scroll, 20.0)
        self.assertEqual([c.rect.left for c in columns.layout_columns()], [5.0, 25.0])

    def test_draw_hands_columns_to_surface(self) -> None:
        columns = ColumnDataSet([EntryCollection.from_values(3, 6)], column_width=4, spacing=4)
        columns.set_bounds(Rect(0, 0, 100, 60))
        surface = _RecordingSurface()
        columns.draw(surface, 0.75)
        self.assertEqual(len(surface.columns), 2)
        self.assertEqual([entry.y for _, entry, _ in surface.columns], [3.0, 6.0])
        self.assertTrue(all(offset == 0.75 for _, _, offset in surface.columns))

    def test_empty_dataset_draws_nothing(self) -> None:
        columns = ColumnDataSet()
        columns.set_bounds(Rect(0, 0, 100, 60))
        surface = _RecordingSurface()
        columns.draw(surface, 1.0)
        self.assertEqual(surface.columns, [])
        model = AxisModel()
        columns.update_axis_model(model)
        self.assertTrue(model.is_empty)

    def test_update_axis_model_writes_segment_geometry(self) -> None:
        columns = ColumnDataSet([EntryCollection.from_values(2, 5)], column_width=12, spacing=6)
        columns.set_bounds(Rect(0, 0, 500, 100))
        model = AxisModel()
        columns.update_axis_model(model)
        self.assertEqual((model.min_y, model.max_y), (0.0, 5.0))
        self.assertEqual((model.x_segment_width, model.x_segment_spacing), (12.0, 6.0))

    def test_from_defaults_applies_density(self) -> None:
        columns = ColumnDataSet.from_defaults(LayoutDefaults(density=2.0))
        self.assertEqual((columns.column_width, columns.spacing, columns.inner_spacing), (16.0, 64.0, 16.0))


class LineDataSetTests(unittest.TestCase):
    def test_points_sit_at_segment_centres(self) -> None:
        line = LineDataSet([EntryCollection.from_pairs((0, 0), (1, 10), (2, 5))], spacing=20)
        line.set_bounds(Rect(0, 0, 100, 50))
        self.assertEqual(line.layout_lines(), [[(10.0, 50.0), (30.0, 0.0), (50.0, 25.0)]])

        surface = _RecordingSurface()
        line.draw(surface, 0.4)
        self.assertEqual(surface.lines, [([(10.0, 50.0), (30.0, 0.0), (50.0, 25.0)], 0.4)])

    def test_gaps_in_input_leave_finite_frame_and_geometry(self) -> None:
        nan = float("nan")
        line = LineDataSet([normalize_entries([1.0, nan, 3.0], x=[0.0, nan, 2.0])], spacing=20)
        line.set_bounds(Rect(0, 0, 100, 40))
        self.assertEqual(line.frame(), AxisBounds(0, 2, 1, 3))
        self.assertEqual(line.layout_lines(), [[(10.0, 40.0), (30.0, 0.0)]])

        columns = ColumnDataSet([normalize_entries([2.0, nan, 4.0])], column_width=10, spacing=10)
        columns.set_bounds(Rect(0, 0, 100, 40))
        self.assertEqual(
            [c.rect for c in columns.layout_columns()],
            [Rect(5, 20, 15, 40), Rect(25, 0, 35, 40)],
        )

    def test_flat_line_sits_on_bottom_edge(self) -> None:
        line = LineDataSet([EntryCollection.from_values(3, 3)], spacing=10)
        line.set_bounds(Rect(0, 0, 100, 40))
        self.assertEqual([y for _, y in line.layout_lines()[0]], [40.0, 40.0])


if __name__ == "__main__":
    unittest.main()
