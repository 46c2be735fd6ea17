"""Контроллер приложения: связывает список изображений с виджетами.

SOLID:
- SRP: класс управляет связями между UI и моделью (без логики списка и рисования).
- DIP: окно для диалогов передаётся явно, глобального окна нет.
Clean Code:
- Обработчики компактны; состояние живёт в `ImageList`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from tkinter import TclError, filedialog, messagebox
from typing import Optional

import customtkinter as ctk

from pastie.config import AppConfig
from pastie.errors import DecodeError, PastieError
from pastie.models.image_list import ImageList
from pastie.models.image_model import ImageEntry
from pastie.ui.bottom_bar import BottomBar
from pastie.ui.image_table import ImageTable
from pastie.ui.image_viewer import ImageViewer
from pastie.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с моделью `ImageList`.

    Ответственности:
    - Подписка на события модели и виджетов.
    - Диалоги открытия и сохранения (родитель диалога — `window`).
    - Показ ошибок сохранения пользователю.
    """
    model: ImageList
    viewer: ImageViewer
    table: ImageTable
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk
    config: AppConfig

    def bind_events(self) -> None:
        """Регистрирует обработчики событий модели и UI-компонентов."""
        self.model.on_rows_inserted = self._handle_rows_inserted
        self.model.on_rows_removed = self._handle_rows_removed
        self.model.on_model_reset = self._handle_model_reset
        self.model.on_current_changed = self._handle_current_changed
        self.model.on_row_changed = self._handle_row_changed

        self.sidebar.on_open_files = self.load_file_picker
        self.sidebar.on_save_file = self.save_file_picker
        self.sidebar.on_remove_current = self._handle_remove_current
        self.sidebar.on_clear = self.model.clear
        self.sidebar.on_undo_marker = self._handle_undo_marker
        self.sidebar.on_clear_markers = self._handle_clear_markers

        self.viewer.on_click = self._handle_viewer_click
        self.viewer.on_cursor_move = self.sidebar.update_cursor_info
        self.viewer.on_zoom_change = self.bottom.set_zoom_percent

        self.table.on_activate = self.model.set_current

        # Bottom bar bindings
        self.bottom.on_prev = self.model.prev_image
        self.bottom.on_next = self.model.next_image
        self.bottom.on_zoom_change = self.viewer.set_zoom_percent
        self.bottom.on_zoom_preset = self.viewer.set_zoom_percent
        self.bottom.on_zoom_fit = self._handle_zoom_fit

        # Keyboard
        self.window.bind("<Control-o>", lambda _e: self.load_file_picker())
        self.window.bind("<Control-s>", lambda _e: self.save_file_picker())
        self.window.bind("<Prior>", lambda _e: self.model.prev_image())
        self.window.bind("<Next>", lambda _e: self.model.next_image())

        self._refresh_chrome()

    # ---- File pickers ----
    def load_file_picker(self) -> None:
        try:
            files = filedialog.askopenfilenames(
                parent=self.window,
                title=self.config.dialog_title_open,
                initialdir=str(Path.cwd()),
                filetypes=self.config.filetypes(),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return
        if files:
            self.load(files)

    def save_file_picker(self) -> None:
        entry = self.model.get_current()
        if entry is None:
            self._show_error("Нет изображения для сохранения")
            return
        try:
            path = filedialog.asksaveasfilename(
                parent=self.window,
                title=self.config.dialog_title_save,
                initialdir=str(entry.path.parent),
                initialfile=entry.path.name,
                filetypes=self.config.filetypes(),
            )
        except TclError:
            return
        if path:
            self.save(path)

    # ---- Actions ----
    def load(self, paths) -> None:
        added = self.model.load(paths)
        if not added:
            logger.info("no supported images among %d selected files", len(paths))

    def save(self, path: str) -> Optional[Path]:
        try:
            saved = self.model.save(path)
        except PastieError as exc:
            logger.error("save failed: %s", exc)
            self._show_error(str(exc))
            return None
        self.window.title(f"{self.config.window_title} — {saved.name}")
        return saved

    # ---- Model events ----
    def _handle_rows_inserted(self, first: int, last: int) -> None:
        self.table.rows_inserted(first, last)
        if self.model.current_row is None:
            self.model.get_current()
        self._refresh_chrome()

    def _handle_rows_removed(self, first: int, last: int) -> None:
        self.table.rows_removed(first, last)
        if self.model.current_row is None:
            # the current row was removed: fall back to the first image, if any
            if self.model.get_current() is None:
                self._show_current()
        self._refresh_chrome()

    def _handle_model_reset(self) -> None:
        self.table.reset()
        self._show_current()
        self._refresh_chrome()

    def _handle_current_changed(self, row: int, _entry: ImageEntry) -> None:
        self.table.current_changed(row)
        self._show_current()
        self._refresh_chrome()

    def _handle_row_changed(self, row: int) -> None:
        self.table.row_changed(row)
        if row == self.model.current_row:
            self.sidebar.set_image_info(self.model.at(row))

    # ---- UI events ----
    def _handle_viewer_click(self, x: int, y: int) -> None:
        entry = self._current_entry()
        if entry is None:
            return
        entry.add_marker(x, y)
        logger.debug("marker %d at (%d, %d) on %s", len(entry.markers), x, y, entry.path.name)
        self._show_current(keep_view=True)

    def _handle_undo_marker(self) -> None:
        entry = self._current_entry()
        if entry is not None and entry.undo_marker() is not None:
            self._show_current(keep_view=True)

    def _handle_clear_markers(self) -> None:
        entry = self._current_entry()
        if entry is not None and entry.markers:
            entry.clear_markers()
            self._show_current(keep_view=True)

    def _handle_remove_current(self) -> None:
        row = self.model.current_row
        if row is not None:
            self.model.remove(row)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _current_entry(self) -> Optional[ImageEntry]:
        row = self.model.current_row
        return None if row is None else self.model.at(row)

    def _show_current(self, keep_view: bool = False) -> None:
        """Перерисовывает текущее изображение вместе с аннотациями."""
        row = self.model.current_row
        entry = self._current_entry()
        if row is None or entry is None:
            self.viewer.set_image(None)
            self.sidebar.set_image_info(None)
            return
        try:
            image = self.model.render(row)
        except DecodeError as exc:
            logger.warning("%s", exc)
            self.viewer.set_image(None)
            self.sidebar.set_image_info(entry)
            return
        self.viewer.set_image(image, keep_view=keep_view)
        self.sidebar.set_image_info(entry)
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    def _refresh_chrome(self) -> None:
        self.bottom.set_position(self.model.current_row, len(self.model))
        self.sidebar.set_has_image(len(self.model) > 0)

    def _show_error(self, message: str) -> None:
        messagebox.showerror(title=self.config.window_title, message=message, parent=self.window)
