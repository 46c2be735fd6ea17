"""Настройки приложения.

Значения по умолчанию заданы в `AppConfig`; часть из них можно
переопределить переменными окружения (см. `AppConfig.from_env`).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_EXTENSIONS: Tuple[str, ...] = ("png", "jpg", "bmp")

ENV_EXTENSIONS = "PASTIE_EXTENSIONS"
ENV_LOG_LEVEL = "PASTIE_LOG_LEVEL"
ENV_PRELOAD = "PASTIE_PRELOAD"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _normalize_extensions(values: Tuple[str, ...]) -> Tuple[str, ...]:
    # "PNG", ".png", " png " -> "png"
    cleaned = []
    for value in values:
        ext = value.strip().lstrip(".").lower()
        if ext and ext not in cleaned:
            cleaned.append(ext)
    return tuple(cleaned)


@dataclass
class AppConfig:
    allowed_extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    preload: bool = False  # decode images right after loading instead of on first use
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    window_title: str = "Pastie"
    min_size: Tuple[int, int] = (1000, 680)
    appearance_mode: str = "system"
    color_theme: str = "blue"
    overlay_color: Tuple[int, int, int] = (255, 64, 64)
    caption_color: Tuple[int, int, int] = (255, 255, 255)
    console_lines: int = 2000  # scrollback limit
    dialog_title_open: str = "Открыть изображения"
    dialog_title_save: str = "Сохранить изображение"
    extra_filetypes: Tuple[Tuple[str, str], ...] = field(default_factory=lambda: (("All files", "*.*"),))

    def __post_init__(self) -> None:
        self.allowed_extensions = _normalize_extensions(tuple(self.allowed_extensions))
        self.log_level = self.log_level.upper()

    def accepts(self, extension: str) -> bool:
        """Проверяет расширение по белому списку (без учёта регистра)."""
        return extension.lstrip(".").lower() in self.allowed_extensions

    def filetypes(self) -> Tuple[Tuple[str, str], ...]:
        """Фильтры для диалогов выбора файлов."""
        pattern = " ".join(f"*.{ext}" for ext in self.allowed_extensions)
        return (("Image Files", pattern),) + tuple(self.extra_filetypes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Создаёт конфигурацию с учётом переменных окружения.

        PASTIE_EXTENSIONS: список расширений через запятую, например "png,jpg".
        PASTIE_LOG_LEVEL: уровень логирования (DEBUG, INFO, ...).
        PASTIE_PRELOAD: "1"/"true" чтобы декодировать изображения сразу.
        """
        env = os.environ if environ is None else environ
        config = cls()
        raw_exts = env.get(ENV_EXTENSIONS)
        if raw_exts:
            exts = _normalize_extensions(tuple(raw_exts.split(",")))
            if exts:
                config.allowed_extensions = exts
        raw_level = env.get(ENV_LOG_LEVEL)
        if raw_level:
            config.log_level = raw_level.strip().upper()
        raw_preload = env.get(ENV_PRELOAD)
        if raw_preload is not None:
            config.preload = raw_preload.strip().lower() in _TRUE_VALUES
        return config
