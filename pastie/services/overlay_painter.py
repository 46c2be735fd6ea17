"""Рисование аннотаций поверх изображения.

Художник создаётся вокруг холста PIL и рисует прямо на нём (холст
изменяется на месте). Толщина линий, радиус маркеров и размер шрифта
масштабируются коэффициентом `ratio`; при экспорте он равен 1e-3 * ширина.
"""
from __future__ import annotations

from typing import Tuple

from PIL import Image, ImageDraw, ImageFont

from pastie.models.image_model import ImageEntry

Color = Tuple[int, int, int]


class OverlayPainter:
    def __init__(
        self,
        canvas: Image.Image,
        color: Color = (255, 64, 64),
        caption_color: Color = (255, 255, 255),
    ) -> None:
        self._canvas = canvas
        self._draw = ImageDraw.Draw(canvas)
        self._color = color
        self._caption_color = caption_color
        self._ratio = 1.0

    @property
    def ratio(self) -> float:
        return self._ratio

    def set_ratio(self, ratio: float) -> None:
        if ratio <= 0:
            raise ValueError(f"ratio must be positive, got {ratio}")
        self._ratio = float(ratio)

    def draw_overlay(self, entry: ImageEntry) -> None:
        """Рисует маркеры записи и подпись с именем и размером."""
        self._draw_markers(entry)
        self._draw_caption(entry)

    # ---- Internals ----
    def _scaled(self, value: float, minimum: int) -> int:
        return max(minimum, int(round(value * self._ratio)))

    def _ink(self, color: Color):
        mode = self._canvas.mode
        if mode == "L":
            r, g, b = color
            return int(round(0.299 * r + 0.587 * g + 0.114 * b))
        if mode == "RGBA":
            return color + (255,)
        return color

    def _font(self, size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
        return ImageFont.load_default(size=size)

    def _draw_markers(self, entry: ImageEntry) -> None:
        if not entry.markers:
            return
        radius = self._scaled(10, 2)
        width = self._scaled(3, 1)
        font = self._font(self._scaled(18, 8))
        ink = self._ink(self._color)
        for number, (x, y) in enumerate(entry.markers, start=1):
            box = [x - radius, y - radius, x + radius, y + radius]
            self._draw.ellipse(box, outline=ink, width=width)
            self._draw.text((x + radius + width, y - radius), str(number), fill=ink, font=font)

    def _draw_caption(self, entry: ImageEntry) -> None:
        w, h = self._canvas.size
        text = f"{entry.path.name}  {w} × {h}"
        font = self._font(self._scaled(20, 10))
        pad = self._scaled(8, 2)
        left, top, right, bottom = self._draw.textbbox((0, 0), text, font=font)
        text_h = bottom - top
        origin = (pad, h - text_h - 2 * pad)
        # dark plate under the caption
        self._draw.rectangle(
            [0, origin[1] - pad, right - left + 2 * pad, h],
            fill=self._ink((0, 0, 0)),
        )
        self._draw.text((origin[0], origin[1] - top), text, fill=self._ink(self._caption_color), font=font)
