from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

import numpy as np

from chart_layout.collection import EntryCollection
from chart_layout.errors import ChartDataError


LOGGER = logging.getLogger(__name__)

try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_entries(y: Any = None, *, x: Any = None, data: Any = None) -> EntryCollection:
    """Build an ``EntryCollection`` from lists, numpy arrays, pandas or torch input.

    With ``data`` (a DataFrame), ``y`` and ``x`` may name columns; an omitted
    ``y`` picks the frame's only numeric column. Without ``x`` each value's
    index is its x. Entries must be finite, so points where either coordinate
    is missing, NaN or infinite are dropped before the collection is built.
    """

    frame = _as_frame(data)
    ys = _float_values(_select(y, frame), "y")
    if ys.size == 0:
        raise ChartDataError("empty series")
    if x is None:
        xs = np.arange(ys.size, dtype=np.float64)
    else:
        xs = _float_values(_select(x, frame), "x")
        if xs.size != ys.size:
            raise ChartDataError(f"x and y length mismatch: {xs.size} != {ys.size}")

    keep = np.isfinite(xs) & np.isfinite(ys)
    kept = int(np.count_nonzero(keep))
    if kept == 0:
        raise ChartDataError("series contains no finite points")
    if kept < ys.size:
        LOGGER.debug("dropped %d non-finite points out of %d", ys.size - kept, ys.size)
    return EntryCollection.from_arrays(xs[keep], ys[keep])


def normalize_many(*series: Any, x: Any = None, data: Any = None) -> list[EntryCollection]:
    """One collection per input, all sharing the same ``x`` (and ``data``)."""

    return [normalize_entries(s, x=x, data=data) for s in series]


def _as_frame(data: Any) -> Any:
    if data is None:
        return None
    if pd is None:
        raise ChartDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise ChartDataError("`data` must be a pandas DataFrame")
    return data


def _select(value: Any, frame: Any) -> Any:
    """Resolve a column name or bare DataFrame to the series it stands for."""

    if frame is not None:
        if isinstance(value, str):
            if value not in frame.columns:
                raise ChartDataError(f"column not found: {value}")
            return frame[value]
        if value is None:
            return _single_numeric_column(frame)
    if value is None:
        raise ChartDataError("y input is required")
    if pd is not None and isinstance(value, pd.DataFrame):
        return _single_numeric_column(value)
    return value


def _single_numeric_column(frame: Any) -> Any:
    numeric = [c for c in frame.columns if pd.api.types.is_numeric_dtype(frame[c])]
    if len(numeric) != 1:
        raise ChartDataError(f"expected exactly one numeric column, found {len(numeric)}")
    return frame[numeric[0]]


def _float_values(value: Any, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return value.detach().cpu().to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        if pd.api.types.is_numeric_dtype(value):
            return value.to_numpy(dtype=np.float64, na_value=np.nan)
        value = value.to_numpy()
    elif isinstance(value, (str, bytes)) or not isinstance(value, (np.ndarray, Sequence)):
        raise ChartDataError(f"unsupported {label} input type: {type(value).__name__}")

    raw = np.asarray(value, dtype=object) if not isinstance(value, np.ndarray) else value
    if raw.ndim != 1:
        raise ChartDataError(f"{label} must be 1-D")
    if raw.dtype.kind in "iuf":
        return raw.astype(np.float64)

    # Object input: None marks a gap; anything else must convert like a number.
    out = np.empty(raw.size, dtype=np.float64)
    for index, item in enumerate(raw.tolist()):
        if item is None:
            out[index] = np.nan
            continue
        if isinstance(item, (str, bytes, bool)):
            raise ChartDataError(f"{label}[{index}] is not a number: {item!r}")
        try:
            out[index] = float(item)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"{label}[{index}] is not a number: {item!r}") from exc
    return out
