"""Логирование и перенаправление диагностического вывода в консоль приложения.

`ConsoleHandler` передаёт записи `logging`, а `ConsoleStream` подменяет
`sys.stdout`/`sys.stderr`; оба отдают готовые строки в приёмник
`sink(text, level)`, которым обычно является виджет консоли.
"""
from __future__ import annotations

import io
import logging
from typing import Callable, Dict

from pastie.config import AppConfig

Sink = Callable[[str, int], None]

_PREFIXES: Dict[int, str] = {
    logging.DEBUG: "[debug]",
    logging.INFO: "[info]",
    logging.WARNING: "[warning]",
    logging.ERROR: "[error]",
    logging.CRITICAL: "[fatal]",
}


def configure_logging(config: AppConfig) -> None:
    """Настраивает корневой логгер по конфигурации."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=config.log_format)
    logging.getLogger().setLevel(level)
    # Pillow is chatty at DEBUG
    logging.getLogger("PIL").setLevel(max(level, logging.INFO))


def level_prefix(level: int) -> str:
    for threshold in sorted(_PREFIXES, reverse=True):
        if level >= threshold:
            return _PREFIXES[threshold]
    return _PREFIXES[logging.DEBUG]


def format_message(message: str, level: int) -> str:
    """Префикс важности для каждой строки сообщения."""
    prefix = level_prefix(level)
    lines = message.rstrip("\n").split("\n")
    return "\n".join(f"{prefix} {line}" for line in lines)


class ConsoleHandler(logging.Handler):
    def __init__(self, sink: Sink, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._sink = sink
        self.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
            self._sink(format_message(text, record.levelno), record.levelno)
        except Exception:
            self.handleError(record)


class ConsoleStream(io.TextIOBase):
    """Текстовый поток, который отдаёт в приёмник завершённые строки."""

    def __init__(self, sink: Sink, level: int) -> None:
        super().__init__()
        self._sink = sink
        self._level = level
        self._buffer = ""

    @property
    def level(self) -> int:
        return self._level

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        self._buffer += text
        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            self._sink(format_message(line, self._level), self._level)
        return len(text)

    def flush(self) -> None:
        if self._buffer:
            line, self._buffer = self._buffer, ""
            self._sink(format_message(line, self._level), self._level)
