"""Виджет просмотра текущего изображения: масштабирование, панорамирование, маркеры.

Принципы:
- SRP: отвечает только за представление и интеракции с изображением.
- Щелчок без перетаскивания сообщает координаты пикселя через `on_click`,
  перетаскивание двигает изображение.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

# pixels of pointer travel before a press turns into a pan
_CLICK_TOLERANCE = 3
_WHEEL_STEP = 1.1
_MIN_SCALE, _MAX_SCALE = 0.1, 4.0


def _clamp_scale(scale: float) -> float:
    return max(_MIN_SCALE, min(_MAX_SCALE, scale))


class ImageViewer(ctk.CTkFrame):
    """Канва с изображением и наложенными аннотациями."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None

        self._scale_factor: float = 1.0
        self._fit_scale_factor: float = 1.0
        self._image_top_left: Optional[Tuple[int, int]] = None

        # panning state
        self._press_xy: Optional[Tuple[int, int]] = None
        self._pan_start_top_left: Optional[Tuple[int, int]] = None
        self._is_panning: bool = False

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_click: Optional[Callable[[int, int], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

        for sequence in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self._canvas.bind(sequence, self._on_wheel)

        self._canvas.bind("<ButtonPress-1>", self._on_press)
        self._canvas.bind("<B1-Motion>", self._on_drag)
        self._canvas.bind("<ButtonRelease-1>", self._on_release)

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image], keep_view: bool = False) -> None:
        """Показывает изображение (None очищает канву).

        keep_view=True сохраняет масштаб и положение, например после добавления маркера.
        """
        same_size = (
            image is not None and self._image is not None and image.size == self._image.size
        )
        self._image = image
        if image is None:
            self._tk_image = None
            self._canvas.delete("all")
            return
        if keep_view and same_size:
            self._render_image()
            return
        self.set_zoom_to_fit()

    def has_image(self) -> bool:
        return self._image is not None

    def set_zoom_to_fit(self) -> None:
        """Масштабирует изображение так, чтобы оно целиком помещалось в доступную область."""
        self._compute_fit_scale()
        self._scale_factor = self._fit_scale_factor
        self._image_top_left = None  # reset to center
        self._render_image()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        """Устанавливает масштаб в процентах (10–400%)."""
        self._scale_factor = _clamp_scale(zoom_percent / 100.0)
        self._render_image()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale_factor * 100))

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if self._image is None:
            return
        # stay in "fit" mode unless the user zoomed manually
        was_fit = abs(self._scale_factor - self._fit_scale_factor) < 1e-6
        self._compute_fit_scale()
        if was_fit:
            self._scale_factor = self._fit_scale_factor
            self._image_top_left = None
        self._render_image()

    @staticmethod
    def _place(content: int, view: int, offset: Optional[int]) -> int:
        """Ось X или Y: центрирует меньшее содержимое, большее держит без пустых полей."""
        if content <= view:
            return (view - content) // 2
        if offset is None:
            return 0
        return max(view - content, min(0, offset))

    def _render_image(self) -> None:
        self._canvas.delete("all")
        if self._image is None:
            return

        size = tuple(max(1, int(side * self._scale_factor)) for side in self._image.size)
        view = (int(self._canvas.winfo_width()), int(self._canvas.winfo_height()))
        offset = self._image_top_left or (None, None)
        x, y = (self._place(size[i], view[i], offset[i]) for i in (0, 1))
        self._image_top_left = (x, y)

        self._tk_image = ImageTk.PhotoImage(self._image.resize(size, Image.Resampling.LANCZOS))
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _compute_fit_scale(self) -> None:
        img_w, img_h = self._image.size if self._image is not None else (0, 0)
        if img_w == 0 or img_h == 0:
            self._fit_scale_factor = 1.0
            return
        view_w = max(1, int(self._canvas.winfo_width()))
        view_h = max(1, int(self._canvas.winfo_height()))
        self._fit_scale_factor = _clamp_scale(min(view_w / img_w, view_h / img_h))

    def _canvas_to_image_coords(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int]]:
        if self._image is None or self._image_top_left is None:
            return None, None
        ox, oy = self._image_top_left
        if cx < ox or cy < oy:
            return None, None
        x = int((cx - ox) / self._scale_factor)
        y = int((cy - oy) / self._scale_factor)
        img_w, img_h = self._image.size
        if x >= img_w or y >= img_h:
            return None, None
        return x, y

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._image is not None and self.on_cursor_move is not None:
            self.on_cursor_move(*self._canvas_to_image_coords(event.x, event.y))

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None)

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Mouse wheel zoom ----
    def _on_wheel(self, event: tk.Event) -> None:
        # <MouseWheel> carries delta; X11 sends Button-4 (up) / Button-5 (down)
        if getattr(event, "num", None) in (4, 5):
            zoom_in = event.num == 4
        elif event.delta:
            zoom_in = event.delta > 0
        else:
            return
        self._zoom_at_point(event.x, event.y, _WHEEL_STEP if zoom_in else 1.0 / _WHEEL_STEP)

    def _zoom_at_point(self, cx: int, cy: int, factor: float) -> None:
        if self._image is None or self._image_top_left is None:
            return
        old_scale = self._scale_factor
        new_scale = _clamp_scale(old_scale * factor)
        if abs(new_scale - old_scale) < 1e-6:
            return
        # keep the image point under the cursor fixed
        k = new_scale / old_scale
        ox, oy = self._image_top_left
        self._scale_factor = new_scale
        self._image_top_left = (int(round(cx - (cx - ox) * k)), int(round(cy - (cy - oy) * k)))
        self._render_image()

        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    # ---- Click / pan ----
    def _on_press(self, event: tk.Event) -> None:
        if self._image_top_left is None:
            return
        self._canvas.focus_set()
        self._press_xy = (event.x, event.y)
        self._pan_start_top_left = self._image_top_left
        self._is_panning = False

    def _on_drag(self, event: tk.Event) -> None:
        if self._press_xy is None or self._pan_start_top_left is None:
            return
        sx, sy = self._press_xy
        dx = event.x - sx
        dy = event.y - sy
        if not self._is_panning and max(abs(dx), abs(dy)) <= _CLICK_TOLERANCE:
            return
        self._is_panning = True
        ox, oy = self._pan_start_top_left
        self._image_top_left = (ox + dx, oy + dy)
        self._render_image()

    def _on_release(self, event: tk.Event) -> None:
        was_click = self._press_xy is not None and not self._is_panning
        self._press_xy = None
        self._pan_start_top_left = None
        self._is_panning = False
        if not was_click or self.on_click is None:
            return
        x, y = self._canvas_to_image_coords(event.x, event.y)
        if x is not None and y is not None:
            self.on_click(x, y)
