"""Чтение и запись изображений.

Принципы:
- SRP: только декодирование в numpy-буфер и кодирование холста в файл.
- Формат записи выводится из расширения пути, отдельного параметра нет.
"""
from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from pastie.errors import DecodeError, EncodeError, WriteError

logger = logging.getLogger(__name__)

# Форматы без альфа-канала
_NO_ALPHA_FORMATS = {"JPEG", "BMP"}


class ImageService:
    def decode(self, file_path: str | Path) -> np.ndarray:
        """Загружает файл и возвращает пиксели в виде numpy-массива.

        Режимы L, RGB и RGBA сохраняются как есть, остальные приводятся
        к RGB (или RGBA, если в файле есть прозрачность).

        Raises:
            DecodeError: если файл не найден или не распознан как изображение.
        """
        path = Path(file_path)
        try:
            with Image.open(path) as img:
                img.load()
                pil_image = self._normalize_mode(img)
        except FileNotFoundError as exc:
            raise DecodeError(f"Файл не найден: {path}") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise DecodeError(f"Файл не является изображением: {path}") from exc

        pixels = np.array(pil_image, dtype=np.uint8)
        logger.debug("decoded %s: shape=%s", path, pixels.shape)
        return pixels

    def to_canvas(self, pixels: np.ndarray) -> Image.Image:
        """Копия буфера в виде изображения PIL, пригодная для рисования."""
        return Image.fromarray(np.ascontiguousarray(pixels).copy())

    def encode(self, canvas: Image.Image, file_path: str | Path) -> Path:
        """Сохраняет холст; формат определяется по расширению пути.

        Raises:
            EncodeError: расширение не соответствует ни одному формату PIL.
            WriteError: запись на диск не удалась.
        """
        path = Path(file_path)
        fmt = self.format_for(path)
        image = canvas
        if fmt in _NO_ALPHA_FORMATS and image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        try:
            image.save(path, format=fmt)
        except (KeyError, ValueError) as exc:
            raise EncodeError(f"Не удалось закодировать {path.name} как {fmt}: {exc}") from exc
        except OSError as exc:
            # plugins report unsupported modes as OSError without errno
            if exc.errno is None:
                raise EncodeError(f"Не удалось закодировать {path.name} как {fmt}: {exc}") from exc
            raise WriteError(f"Не удалось записать файл: {path} ({exc})") from exc
        logger.info("saved %s (%s, %dx%d)", path, fmt, image.width, image.height)
        return path

    @staticmethod
    def format_for(path: Path) -> str:
        ext = path.suffix.lower()
        if not ext:
            raise EncodeError(f"Не указано расширение файла: {path}")
        fmt = Image.registered_extensions().get(ext)
        if fmt is None or fmt not in Image.SAVE:
            raise EncodeError(f"Неизвестный формат изображения: {ext}")
        return fmt

    @staticmethod
    def _normalize_mode(img: Image.Image) -> Image.Image:
        if img.mode in ("L", "RGB", "RGBA"):
            return img.copy()
        has_alpha = "A" in img.getbands() or "transparency" in img.info
        return img.convert("RGBA" if has_alpha else "RGB")
