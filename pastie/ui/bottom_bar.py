from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_prev: Optional[Callable[[], None]] = None
        self.on_next: Optional[Callable[[], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_preset: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(4, weight=1)  # slider stretches

        # Navigation
        self._prev_btn = ctk.CTkButton(self, text="◀", width=36, command=self._emit_prev)
        self._prev_btn.grid(row=0, column=0, padx=(10, 4), pady=8, sticky="w")
        self._position = ctk.StringVar(value="0 / 0")
        self._position_label = ctk.CTkLabel(self, textvariable=self._position, width=64)
        self._position_label.grid(row=0, column=1, padx=4, pady=8)
        self._next_btn = ctk.CTkButton(self, text="▶", width=36, command=self._emit_next)
        self._next_btn.grid(row=0, column=2, padx=(4, 16), pady=8, sticky="w")

        # Zoom controls
        self._zoom_label = ctk.CTkLabel(self, text="Масштаб")
        self._zoom_label.grid(row=0, column=3, padx=(10, 6), pady=8, sticky="w")

        self._zoom_value = ctk.StringVar(value="100%")
        self._zoom_slider = ctk.CTkSlider(self, from_=10, to=400, number_of_steps=390, command=self._on_slider_change)
        self._zoom_slider.set(100)
        self._zoom_slider.grid(row=0, column=4, padx=6, pady=8, sticky="ew")
        self._zoom_value_label = ctk.CTkLabel(self, textvariable=self._zoom_value, width=48, anchor="w")
        self._zoom_value_label.grid(row=0, column=5, padx=(6, 12), pady=8, sticky="w")

        # Presets + Fit
        self._preset_buttons = ctk.CTkSegmentedButton(
            self,
            values=["Fit", "50%", "100%", "200%"],
            command=self._on_preset_click,
        )
        self._preset_buttons.set("Fit")
        self._preset_buttons.grid(row=0, column=6, padx=(6, 10), pady=8, sticky="e")

    # public API (sync from controller)
    def set_position(self, row: Optional[int], count: int) -> None:
        """Позиция текущего изображения, например «3 / 10»."""
        shown = 0 if row is None else row + 1
        self._position.set(f"{shown} / {count}")
        self._prev_btn.configure(state="normal" if row is not None and row > 0 else "disabled")
        at_end = row is not None and row >= count - 1
        self._next_btn.configure(state="disabled" if count == 0 or at_end else "normal")

    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_slider.set(percent)
        self._zoom_value.set(f"{percent}%")
        if percent in (50, 100, 200):
            self._preset_buttons.set(f"{percent}%")

    # events
    def _emit_prev(self) -> None:
        if self.on_prev:
            self.on_prev()

    def _emit_next(self) -> None:
        if self.on_next:
            self.on_next()

    def _on_slider_change(self, value: float) -> None:
        percent = int(round(value))
        self._zoom_value.set(f"{percent}%")
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _on_preset_click(self, value: str) -> None:
        if value == "Fit":
            if self.on_zoom_fit:
                self.on_zoom_fit()
            return
        if value.endswith("%"):
            try:
                percent = int(value[:-1])
            except ValueError:
                return
            if self.on_zoom_preset:
                self.on_zoom_preset(percent)
