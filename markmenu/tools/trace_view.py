"""
Debug view of a drag: black dots for samples, green dots for decision points.
Collected live from a Menu (see Menu.draw_trace) and rendered with Pillow.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw

from markmenu.core.types import DragDefinition, Point


class TraceView:
    def __init__(self) -> None:
        self.samples: list[Point] = []
        self.decision_points: list[Point] = []

    def clear(self) -> None:
        self.samples.clear()
        self.decision_points.clear()

    def add_sample(self, drag: DragDefinition) -> None:
        self.samples.append(drag.position)

    def add_decision_point(self, point: Point) -> None:
        self.decision_points.append(point)

    def render(self, size: tuple[int, int] = (800, 600)) -> Image.Image:
        img = Image.new("RGBA", size, (255, 255, 255, 255))
        d = ImageDraw.Draw(img)

        if len(self.samples) >= 2:
            d.line([(p.x, p.y) for p in self.samples], fill=(160, 160, 160, 255), width=1)
        for p in self.samples:
            d.ellipse((p.x - 2, p.y - 2, p.x + 2, p.y + 2), fill=(0, 0, 0, 255))
        for p in self.decision_points:
            d.ellipse((p.x - 5, p.y - 5, p.x + 5, p.y + 5), fill=(0, 160, 0, 255))
        return img

    def save(self, path: Path, size: tuple[int, int] = (800, 600)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.render(size).save(path)
        return path
