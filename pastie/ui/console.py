"""Отладочная консоль: записи `logging`, stdout и stderr в одном текстовом поле."""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import customtkinter as ctk

from pastie.services.log_service import ConsoleHandler, ConsoleStream

_TAG_COLORS = {
    "debug": "#8a8a8a",
    "warning": "#d79b00",
    "error": "#e05252",
}


def _tag_for(level: int) -> Optional[str]:
    if level >= logging.ERROR:
        return "error"
    if level >= logging.WARNING:
        return "warning"
    if level < logging.INFO:
        return "debug"
    return None


class Console(ctk.CTkTextbox):
    def __init__(self, master: ctk.CTk, max_lines: int = 2000, **kwargs) -> None:
        super().__init__(master, height=120, wrap="none", **kwargs)
        self._max_lines = max_lines
        self._handler: Optional[ConsoleHandler] = None
        self._saved_streams: Optional[tuple[TextIO, TextIO]] = None
        for tag, color in _TAG_COLORS.items():
            self.tag_config(tag, foreground=color)
        self.configure(state="disabled")

    def setup(self, level: int = logging.NOTSET) -> None:
        """Подключает консоль к корневому логгеру и перехватывает stdout/stderr."""
        if self._handler is not None:
            return
        self._handler = ConsoleHandler(self.log, level=level)
        logging.getLogger().addHandler(self._handler)
        self._saved_streams = (sys.stdout, sys.stderr)
        sys.stdout = ConsoleStream(self.log, logging.INFO)
        sys.stderr = ConsoleStream(self.log, logging.ERROR)

    def restore(self) -> None:
        """Возвращает стандартные потоки и отключает обработчик логов."""
        if self._saved_streams is not None:
            sys.stdout.flush()
            sys.stderr.flush()
            sys.stdout, sys.stderr = self._saved_streams
            self._saved_streams = None
        if self._handler is not None:
            logging.getLogger().removeHandler(self._handler)
            self._handler = None

    def log(self, text: str, level: int = logging.INFO) -> None:
        """Добавляет уже отформатированный текст в конец консоли."""
        tag = _tag_for(level)
        self.configure(state="normal")
        if tag:
            self.insert("end", text + "\n", tag)
        else:
            self.insert("end", text + "\n")
        self._trim()
        self.configure(state="disabled")
        self.see("end")

    def _trim(self) -> None:
        lines = int(self.index("end-1c").split(".")[0])
        if lines > self._max_lines:
            self.delete("1.0", f"{lines - self._max_lines + 1}.0")
