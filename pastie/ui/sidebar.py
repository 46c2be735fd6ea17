"""Боковая панель: действия с файлами, информация об изображении, курсор, маркеры.

Принципы:
- SRP: управляет только UI, не содержит логики списка изображений.
- ISP: события наружу через `on_*`, состояние внутрь через `set_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from pastie.models.image_model import ImageEntry


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файлы, информация, курсор, аннотации."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_files: Optional[Callable[[], None]] = None
        self.on_save_file: Optional[Callable[[], None]] = None
        self.on_remove_current: Optional[Callable[[], None]] = None
        self.on_clear: Optional[Callable[[], None]] = None
        self.on_undo_marker: Optional[Callable[[], None]] = None
        self.on_clear_markers: Optional[Callable[[], None]] = None

        # Files
        self._title = ctk.CTkLabel(self, text="Файлы", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображения…", command=lambda: self._emit(self.on_open_files))
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._save_btn = ctk.CTkButton(self, text="Сохранить с аннотациями…", command=lambda: self._emit(self.on_save_file))
        self._save_btn.grid(row=2, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._remove_btn = ctk.CTkButton(
            self, text="Убрать из списка", fg_color="gray40", command=lambda: self._emit(self.on_remove_current)
        )
        self._remove_btn.grid(row=3, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._clear_btn = ctk.CTkButton(
            self, text="Очистить список", fg_color="gray40", command=lambda: self._emit(self.on_clear)
        )
        self._clear_btn.grid(row=4, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=5, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._channels_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_channels = ctk.CTkLabel(self, textvariable=self._channels_val, anchor="w", justify="left")

        self._info_path.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=8, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_channels.grid(row=9, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=10, column=0, padx=8, pady=(8, 4), sticky="w")
        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_xy.grid(row=11, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Annotations
        self._markers_title = ctk.CTkLabel(self, text="Аннотации", font=ctk.CTkFont(size=16, weight="bold"))
        self._markers_title.grid(row=12, column=0, padx=8, pady=(8, 4), sticky="w")
        self._markers_val = ctk.StringVar(value="Маркеров: 0")
        self._markers_label = ctk.CTkLabel(self, textvariable=self._markers_val, anchor="w", justify="left")
        self._markers_label.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._hint = ctk.CTkLabel(
            self, text="Щелчок по изображению ставит маркер", anchor="w", justify="left", text_color="gray50"
        )
        self._hint.grid(row=14, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._undo_btn = ctk.CTkButton(self, text="Отменить маркер", command=lambda: self._emit(self.on_undo_marker))
        self._undo_btn.grid(row=15, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._clear_markers_btn = ctk.CTkButton(
            self, text="Удалить все маркеры", command=lambda: self._emit(self.on_clear_markers)
        )
        self._clear_markers_btn.grid(row=16, column=0, padx=8, pady=(0, 8), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_image_info(self, entry: Optional[ImageEntry]) -> None:
        """Отображает метаданные текущего изображения (None очищает блок)."""
        if entry is None:
            for var in (self._path_val, self._size_val, self._dims_val, self._channels_val):
                var.set("—")
            self.set_marker_count(0)
            return
        self._path_val.set(str(entry.path))
        self._size_val.set(self._format_size(entry.size_bytes))
        if entry.loaded:
            self._dims_val.set(f"{entry.width} × {entry.height} px")
            self._channels_val.set(f"Каналов: {entry.channels}")
        else:
            self._dims_val.set("—")
            self._channels_val.set("—")
        self.set_marker_count(len(entry.markers))

    def set_marker_count(self, count: int) -> None:
        self._markers_val.set(f"Маркеров: {count}")

    def update_cursor_info(self, x: Optional[int], y: Optional[int]) -> None:
        if x is None or y is None:
            self._cursor_xy_val.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")

    def set_has_image(self, has_image: bool) -> None:
        state = "normal" if has_image else "disabled"
        for btn in (self._save_btn, self._remove_btn, self._clear_btn, self._undo_btn, self._clear_markers_btn):
            btn.configure(state=state)

    # ---- Helpers ----
    @staticmethod
    def _emit(callback: Optional[Callable[[], None]]) -> None:
        if callback:
            callback()

    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**4)
        return f"{value:.1f} ГБ"
