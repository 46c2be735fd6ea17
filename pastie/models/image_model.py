"""Модель записи изображения в списке.

Принципы:
- SRP: только данные записи и её жизненный цикл, без чтения/записи файлов.
- Пиксели появляются после декодирования (`load`, `attach_pixels`) и исчезают при `release`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import numpy as np


@dataclass(eq=False)
class ImageEntry:
    """Одно изображение списка.

    Fields:
        path: Путь к исходному файлу (не меняется после создания).
        size_bytes: Размер файла на момент добавления.
        pixels: Декодированный буфер (H, W) или (H, W, C), uint8; None пока не загружен.
        markers: Точки аннотации в координатах изображения.
    """
    path: Path
    size_bytes: int = 0
    pixels: Optional[np.ndarray] = None
    markers: List[Tuple[int, int]] = field(default_factory=list)
    _released: bool = field(default=False, repr=False)

    @classmethod
    def from_path(cls, file_path: str | Path) -> "ImageEntry":
        path = Path(file_path)
        return cls(path=path, size_bytes=path.stat().st_size)

    # ---- Metadata ----
    @property
    def loaded(self) -> bool:
        return self.pixels is not None

    @property
    def released(self) -> bool:
        return self._released

    @property
    def base_name(self) -> str:
        """Имя файла до первой точки: "scan.2015.png" -> "scan"."""
        return self.path.name.split(".", 1)[0]

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".").lower()

    @property
    def channels(self) -> Optional[int]:
        if self.pixels is None:
            return None
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])

    @property
    def width(self) -> Optional[int]:
        return None if self.pixels is None else int(self.pixels.shape[1])

    @property
    def height(self) -> Optional[int]:
        return None if self.pixels is None else int(self.pixels.shape[0])

    # ---- Lifecycle ----
    def load(self, decoder: Callable[[Path], np.ndarray]) -> bool:
        """Декодирует файл записи, если пиксели ещё не загружены.

        Возвращает True, если декодирование выполнялось.
        """
        if self._released:
            raise RuntimeError(f"Запись уже освобождена: {self.path}")
        if self.pixels is not None:
            return False
        self.attach_pixels(decoder(self.path))
        return True

    def attach_pixels(self, pixels: np.ndarray) -> None:
        if self._released:
            raise RuntimeError(f"Запись уже освобождена: {self.path}")
        if pixels.ndim not in (2, 3):
            raise ValueError(f"Ожидался буфер (H, W) или (H, W, C), получено {pixels.shape}")
        self.pixels = pixels

    def release(self) -> None:
        """Освобождает пиксели; запись больше не используется списком."""
        if self._released:
            raise RuntimeError(f"Запись уже освобождена: {self.path}")
        self.pixels = None
        self.markers.clear()
        self._released = True

    # ---- Annotations ----
    def add_marker(self, x: int, y: int) -> None:
        self.markers.append((int(x), int(y)))

    def undo_marker(self) -> Optional[Tuple[int, int]]:
        return self.markers.pop() if self.markers else None

    def clear_markers(self) -> None:
        self.markers.clear()
