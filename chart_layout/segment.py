from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SegmentSpec:
    """Per-x-unit geometry in absolute drawing units.

    ``width`` is the segment body (a column, or a group of columns) and
    ``spacing`` the gap to the next segment. Half of the spacing sits on each
    side of the body, so a segment occupies ``width + spacing`` along x.
    Negative values are carried through unchanged.
    """

    width: float
    spacing: float

    @property
    def segment_size(self) -> float:
        return self.width + self.spacing

    def scaled(self, factor: float) -> SegmentSpec:
        return replace(self, width=self.width * factor, spacing=self.spacing * factor)

    def measured_width(self, count: int) -> float:
        return self.segment_size * max(0, count)

    def segment_start(self, index: float) -> float:
        """Left edge of the body of segment ``index``."""

        return self.segment_size * index + self.spacing / 2.0

    def segment_center(self, index: float) -> float:
        return self.segment_start(index) + self.width / 2.0


@dataclass(frozen=True)
class DrawSegmentSpec(SegmentSpec):
    start_margin: float = 0.0
    end_margin: float = 0.0

    def scaled(self, factor: float) -> DrawSegmentSpec:
        return replace(
            self,
            width=self.width * factor,
            spacing=self.spacing * factor,
            start_margin=self.start_margin * factor,
            end_margin=self.end_margin * factor,
        )

    def measured_width(self, count: int) -> float:
        return self.start_margin + super().measured_width(count) + self.end_margin

    def segment_start(self, index: float) -> float:
        return self.start_margin + super().segment_start(index)


def make_segment_spec(preferred_width: float, spacing: float, density: float = 1.0) -> SegmentSpec:
    return SegmentSpec(width=float(preferred_width) * density, spacing=float(spacing) * density)


def make_draw_segment_spec(
    preferred_width: float,
    spacing: float,
    start_margin: float = 0.0,
    end_margin: float = 0.0,
    *,
    density: float = 1.0,
) -> DrawSegmentSpec:
    # Margins go through the same density conversion as width and spacing.
    return DrawSegmentSpec(
        width=float(preferred_width) * density,
        spacing=float(spacing) * density,
        start_margin=float(start_margin) * density,
        end_margin=float(end_margin) * density,
    )


def as_draw_segment_spec(spec: SegmentSpec) -> DrawSegmentSpec:
    if isinstance(spec, DrawSegmentSpec):
        return spec
    return DrawSegmentSpec(width=spec.width, spacing=spec.spacing)


def fit_segment_spec(spec: SegmentSpec, count: int, available_width: float) -> SegmentSpec:
    """Shrink ``spec`` uniformly so ``count`` segments fit ``available_width``."""

    measured = spec.measured_width(count)
    if measured <= 0 or measured <= available_width:
        return spec
    return spec.scaled(max(available_width, 0.0) / measured)
