"""Таблица загруженных изображений поверх `ImageList`.

Виджет читает модель через `row_count`/`data`/`header_data` и
перестраивается по её событиям; выделение строк передаётся обратно
в модель (`set_current`, `set_selection`).
"""
from __future__ import annotations

from tkinter import ttk
from typing import Callable, Optional, Tuple

import customtkinter as ctk

from pastie.models.image_list import ImageList

_ANCHORS = {"left": "w", "right": "e"}
_COLUMN_WIDTHS = (180, 60, 90, 70, 70, 70)


class ImageTable(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, model: ImageList, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self._model = model

        self.on_activate: Optional[Callable[[int], None]] = None

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        columns = tuple(f"c{col}" for col in range(model.column_count()))
        self._tree = ttk.Treeview(self, columns=columns, show="headings", selectmode="extended", height=6)
        for col, col_id in enumerate(columns):
            self._tree.heading(col_id, text=model.header_data(col) or "")
            self._tree.column(
                col_id,
                width=_COLUMN_WIDTHS[col],
                anchor=_ANCHORS[model.column_alignment(col)],
                stretch=(col == 0),
            )
        self._tree.grid(row=0, column=0, sticky="nsew")

        scroll = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        self._tree.configure(yscrollcommand=scroll.set)

        self._tree.bind("<<TreeviewSelect>>", self._on_tree_select)
        self._tree.bind("<Double-1>", self._on_double_click)

    # ---- Model events ----
    def rows_inserted(self, first: int, last: int) -> None:
        for row in range(first, last + 1):
            self._tree.insert("", row, iid=self._iid(row), values=self._values(row))

    def rows_removed(self, _first: int, _last: int) -> None:
        # iids are row numbers, everything after the removed rows shifts
        self.reset()

    def row_changed(self, row: int) -> None:
        iid = self._iid(row)
        if self._tree.exists(iid):
            self._tree.item(iid, values=self._values(row))

    def reset(self) -> None:
        self._tree.delete(*self._tree.get_children())
        if self._model.row_count():
            self.rows_inserted(0, self._model.row_count() - 1)
        self._tree.selection_set([self._iid(row) for row in sorted(self._model.selected_rows)])
        current = self._model.current_row
        if current is not None:
            self._tree.focus(self._iid(current))

    def current_changed(self, row: int) -> None:
        iid = self._iid(row)
        if not self._tree.exists(iid):
            return
        self._tree.focus(iid)
        if iid not in self._tree.selection():
            self._tree.selection_set(iid)
        self._tree.see(iid)

    # ---- Internals ----
    @staticmethod
    def _iid(row: int) -> str:
        return str(row)

    def _values(self, row: int) -> Tuple[str, ...]:
        values = []
        for col in range(self._model.column_count()):
            value = self._model.data(row, col)
            values.append("" if value is None else str(value))
        return tuple(values)

    def _on_tree_select(self, _event: object) -> None:
        # <<TreeviewSelect>> is queued, so this also runs after current_changed; both calls are idempotent
        self._model.set_selection(int(iid) for iid in self._tree.selection())
        focus = self._tree.focus()
        if focus:
            self._model.set_current(int(focus))

    def _on_double_click(self, event: object) -> None:
        iid = self._tree.identify_row(getattr(event, "y", 0))
        if iid and self.on_activate:
            self.on_activate(int(iid))
