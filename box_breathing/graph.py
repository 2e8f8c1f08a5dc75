"""Canvas geometry for the breathing graph."""
from __future__ import annotations

from dataclasses import dataclass

from box_breathing import phases

MARKER_RADIUS = 10


@dataclass(frozen=True)
class GraphGeometry:
    """Maps (offset, level) to canvas pixels; y grows downwards like tk."""
    width: int = 640
    height: int = 320
    padding: int = 40

    def __post_init__(self):
        if self.width <= self.padding * 2 or self.height <= self.padding * 2:
            raise ValueError(
                f"graph {self.width}x{self.height} too small for padding {self.padding}")

    @property
    def plot_width(self) -> int:
        return self.width - self.padding * 2

    @property
    def plot_height(self) -> int:
        return self.height - self.padding * 2

    def point(self, offset: float, level: float) -> tuple[float, float]:
        x = self.padding + (offset / phases.CYCLE_SECONDS) * self.plot_width
        y = self.height - self.padding - level * self.plot_height
        return x, y

    def polyline(self, samples: list[tuple[float, float]]) -> list[float]:
        """Flat [x0, y0, x1, y1, ...] coordinate list for Canvas.create_line."""
        coords = []
        for offset, lvl in samples:
            coords.extend(self.point(offset, lvl))
        return coords

    def marker(self, offset: float) -> tuple[float, float]:
        return self.point(offset, phases.level(offset))

    def marker_box(self, offset: float, r: int = MARKER_RADIUS) -> tuple[float, float, float, float]:
        """Bounding box of the marker circle, for Canvas.coords."""
        x, y = self.marker(offset)
        return x - r, y - r, x + r, y + r

    def axes(self) -> list[tuple[float, float, float, float]]:
        """Time axis along the bottom, level axis up the left side."""
        bottom = self.height - self.padding
        return [
            (self.padding, bottom, self.width - self.padding, bottom),
            (self.padding, self.padding, self.padding, bottom),
        ]

    def axis_labels(self) -> list[tuple[float, float, str]]:
        bottom = self.height - self.padding
        return [
            (self.width - self.padding + 10, bottom + 5, "t"),
            (self.padding - 10, self.padding - 8, "+y"),
            (self.padding - 20, bottom + 5, "0"),
        ]

    def scaled(self, width: int, height: int) -> "GraphGeometry":
        return GraphGeometry(width, height, self.padding)
