"""Zoom level arithmetic for the grid view."""

import math

DEFAULT_ZOOM = 1.0


def _round_one_decimal(value: float) -> float:
    # Half-up rounding so 0.25 -> 0.3 the way the browser client rounds
    return math.floor(value * 10 + 0.5) / 10


class GridZoom:
    """Tracks a zoom level clamped to [min_zoom, max_zoom]."""

    def __init__(self, min_zoom: float = 0.5, max_zoom: float = 1.5, zoom_step: float = 0.1):
        if min_zoom <= 0 or min_zoom > max_zoom:
            raise ValueError(f"Invalid zoom range: {min_zoom}..{max_zoom}")
        if zoom_step <= 0:
            raise ValueError(f"zoom_step must be positive, got {zoom_step}")
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom_step = zoom_step
        self.level = DEFAULT_ZOOM

    def zoom_in(self) -> float:
        self.level = min(self.max_zoom, _round_one_decimal(self.level + self.zoom_step))
        return self.level

    def zoom_out(self) -> float:
        self.level = max(self.min_zoom, _round_one_decimal(self.level - self.zoom_step))
        return self.level

    def set_zoom(self, level: float) -> float:
        """Set an explicit level, clamped to the allowed range."""
        clamped = max(self.min_zoom, min(self.max_zoom, level))
        self.level = _round_one_decimal(clamped)
        return self.level

    def reset(self) -> float:
        self.level = DEFAULT_ZOOM
        return self.level

    @property
    def percent(self) -> int:
        return round(self.level * 100)

    def zoom_style(self) -> dict[str, str]:
        """CSS properties applying the current zoom to the grid container."""
        return {
            "transform": f"scale({self.level})",
            "transform-origin": "top left",
        }
