from __future__ import annotations

from dataclasses import dataclass
import enum
import logging
from typing import Callable

from chart_layout.errors import InvalidConfigurationError


LOGGER = logging.getLogger(__name__)

ScrollSink = Callable[[float], None]


class InitialScroll(enum.Enum):
    START = "start"
    END = "end"


class ScrollListener:
    """Receives scroll events from a ``ScrollHandler``; override what you need."""

    def on_value_changed(self, old_value: float, new_value: float) -> None:
        pass

    def on_max_value_changed(self, old_max: float, new_max: float) -> None:
        pass

    def on_scroll_not_consumed(self, delta: float) -> None:
        pass


def max_scroll_amount(content_width: float, viewport_width: float) -> float:
    return max(0.0, float(content_width) - float(viewport_width))


class ScrollHandler:
    """Clamped horizontal scroll offset.

    ``current_scroll`` stays within ``[0, max_scroll_distance]`` after every
    call. Each mutating call passes the clamped offset to ``on_scroll`` and
    to every registered ``ScrollListener``. Access is single-threaded;
    callers sharing a handler serialize calls.
    """

    def __init__(
        self,
        on_scroll: ScrollSink | None = None,
        *,
        max_scroll_distance: float = 0.0,
        current_scroll: float = 0.0,
    ) -> None:
        self._validate_max(max_scroll_distance)
        self._on_scroll = on_scroll
        self._listeners: list[ScrollListener] = []
        self._initial_scroll_handled = False
        self._max_scroll_distance = float(max_scroll_distance)
        self._current_scroll = _clamp(float(current_scroll), 0.0, self._max_scroll_distance)

    @property
    def current_scroll(self) -> float:
        return self._current_scroll

    @property
    def max_scroll_distance(self) -> float:
        return self._max_scroll_distance

    def set_on_scroll(self, on_scroll: ScrollSink | None) -> None:
        self._on_scroll = on_scroll

    def register_listener(self, listener: ScrollListener) -> bool:
        """Add ``listener`` and replay the current state to it.

        Returns ``False`` when it was already registered.
        """

        if any(existing is listener for existing in self._listeners):
            return False
        self._listeners.append(listener)
        listener.on_value_changed(self._current_scroll, self._current_scroll)
        listener.on_max_value_changed(self._max_scroll_distance, self._max_scroll_distance)
        return True

    def remove_listener(self, listener: ScrollListener) -> bool:
        for index, existing in enumerate(self._listeners):
            if existing is listener:
                del self._listeners[index]
                return True
        return False

    def set_scroll(self, value: float) -> None:
        self._apply(_clamp(float(value), 0.0, self._max_scroll_distance))

    def set_max_scroll_distance(self, value: float) -> None:
        self._validate_max(value)
        old_max = self._max_scroll_distance
        self._max_scroll_distance = float(value)
        if self._max_scroll_distance != old_max:
            for listener in list(self._listeners):
                listener.on_max_value_changed(old_max, self._max_scroll_distance)
        clamped = _clamp(self._current_scroll, 0.0, self._max_scroll_distance)
        if clamped != self._current_scroll:
            LOGGER.debug("scroll offset %.3f re-clamped to %.3f", self._current_scroll, clamped)
            self._apply(clamped)

    def can_scroll_by(self, delta: float) -> bool:
        """Whether a pointer ``delta`` would move the offset at all."""

        if delta == 0:
            return True
        target = _clamp(self._current_scroll - float(delta), 0.0, self._max_scroll_distance)
        return target != self._current_scroll

    def handle_initial_scroll(self, initial_scroll: InitialScroll) -> bool:
        """Jump to the start or end once; later calls do nothing and return ``False``."""

        if self._initial_scroll_handled:
            return False
        if initial_scroll is InitialScroll.END:
            self._apply(self._max_scroll_distance)
        else:
            self._apply(0.0)
        self._initial_scroll_handled = True
        return True

    def handle_scroll_delta(self, delta: float) -> float:
        """Scroll opposite to a pointer ``delta``.

        Returns how much of ``delta`` could not be applied because a bound was
        reached; 0 when the whole delta was applied. Listeners hear about a
        partly swallowed delta through ``on_scroll_not_consumed``.
        """

        requested = self._current_scroll - float(delta)
        target = _clamp(requested, 0.0, self._max_scroll_distance)
        self._apply(target)
        unconsumed = abs(requested - target)
        if unconsumed != 0:
            for listener in list(self._listeners):
                listener.on_scroll_not_consumed(float(delta))
        return unconsumed

    def handle_scroll(self, target_scroll: float) -> float:
        return self.handle_scroll_delta(self._current_scroll - float(target_scroll))

    def _apply(self, value: float) -> None:
        old_value = self._current_scroll
        self._current_scroll = value
        if self._on_scroll is not None:
            self._on_scroll(value)
        for listener in list(self._listeners):
            listener.on_value_changed(old_value, value)

    @staticmethod
    def _validate_max(value: float) -> None:
        if value < 0:
            raise InvalidConfigurationError("max_scroll_distance must be >= 0")


@dataclass
class ZoomHandler:
    min_zoom: float = 0.1
    max_zoom: float = 10.0
    zoom: float = 1.0

    def __post_init__(self) -> None:
        if self.min_zoom <= 0:
            raise InvalidConfigurationError("min_zoom must be > 0")
        if self.min_zoom > self.max_zoom:
            raise InvalidConfigurationError("min_zoom must be <= max_zoom")
        if not self.min_zoom <= self.zoom <= self.max_zoom:
            raise InvalidConfigurationError("zoom must lie within [min_zoom, max_zoom]")

    def handle_zoom(
        self,
        zoom_change: float,
        *,
        focus_x: float,
        bounds_left: float,
        scroll: ScrollHandler,
        max_scroll_for_zoom: Callable[[float], float] | None = None,
    ) -> bool:
        """Apply ``zoom_change`` keeping the content under ``focus_x`` in place.

        Returns ``False`` (and changes nothing) when the resulting zoom would
        leave ``[min_zoom, max_zoom]``. ``max_scroll_for_zoom`` maps the new
        zoom to the new scroll bound so the shift is clamped against it.
        """

        new_zoom = self.zoom * zoom_change
        if not self.min_zoom <= new_zoom <= self.max_zoom:
            return False
        previous = scroll.current_scroll
        center_x = previous + focus_x - bounds_left
        self.zoom = new_zoom
        if max_scroll_for_zoom is not None:
            scroll.set_max_scroll_distance(max_scroll_for_zoom(new_zoom))
        scroll.set_scroll(previous + center_x * zoom_change - center_x)
        return True


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(value, upper))
