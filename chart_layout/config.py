from __future__ import annotations

from dataclasses import dataclass, fields, replace
import logging
import os
from pathlib import Path
import tomllib
from typing import Literal

from chart_layout.errors import InvalidConfigurationError
from chart_layout.segment import SegmentSpec, make_segment_spec


LOGGER = logging.getLogger(__name__)
ENV_PREFIX = "CHART_LAYOUT_"

SegmentKind = Literal["column", "point"]


@dataclass(frozen=True)
class LayoutDefaults:
    """Default geometry in device-independent units plus the host density."""

    column_width: float = 8.0
    column_inner_spacing: float = 8.0
    column_spacing: float = 32.0
    point_size: float = 0.0
    point_spacing: float = 16.0
    density: float = 1.0
    min_zoom: float = 0.1
    max_zoom: float = 10.0

    def __post_init__(self) -> None:
        if self.density <= 0:
            raise InvalidConfigurationError("density must be > 0")
        if self.min_zoom <= 0 or self.min_zoom > self.max_zoom:
            raise InvalidConfigurationError("zoom range must satisfy 0 < min_zoom <= max_zoom")

    @classmethod
    def from_env(cls, *, prefix: str = ENV_PREFIX, base: LayoutDefaults | None = None) -> LayoutDefaults:
        """Overlay ``<prefix><FIELD>`` variables on ``base``.

        Fields apply one at a time in declaration order; a value that is not a
        number, or that fails validation against the fields applied so far,
        is logged and skipped.
        """

        out = base if base is not None else cls()
        for f in fields(cls):
            env_var = prefix + f.name.upper()
            raw = os.getenv(env_var, "").strip()
            if raw == "":
                continue
            try:
                value = float(raw)
            except ValueError:
                LOGGER.warning("ignoring %s=%r: not a number", env_var, raw)
                continue
            try:
                out = replace(out, **{f.name: value})
            except InvalidConfigurationError as exc:
                LOGGER.warning("ignoring %s=%r: %s", env_var, raw, exc)
        return out

    def segment_spec(self, kind: SegmentKind = "column") -> SegmentSpec:
        if kind == "column":
            return make_segment_spec(self.column_width, self.column_spacing, self.density)
        if kind == "point":
            return make_segment_spec(self.point_size, self.point_spacing, self.density)
        raise InvalidConfigurationError(f"unknown segment kind: {kind!r}")

    def px(self, value: float) -> float:
        return float(value) * self.density


def load_layout_config(path: str | Path) -> LayoutDefaults:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"layout config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("layout", {})
    if not isinstance(table, dict):
        raise InvalidConfigurationError("[layout] must be a table")
    known = {f.name for f in fields(LayoutDefaults)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise InvalidConfigurationError(f"unknown layout keys: {', '.join(unknown)}")
    values: dict[str, float] = {}
    for key, value in table.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidConfigurationError(f"layout.{key} must be a number")
        values[key] = float(value)
    return LayoutDefaults(**values)
