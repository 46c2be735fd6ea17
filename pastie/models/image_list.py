"""Список изображений: порядок, выделение, табличные данные, загрузка и сохранение.

Принципы:
- SRP: модель не знает о виджетах; наблюдатели подписываются через атрибуты `on_*`.
- Порядок вставки совпадает с порядком отображения.
- Текущая строка (`current_row`) и множественное выделение (`selected_rows`)
  хранятся независимо и всегда ссылаются на существующие строки.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Set

from PIL import Image

from pastie.config import AppConfig
from pastie.errors import DecodeError, NoCurrentImage
from pastie.models.image_model import ImageEntry
from pastie.services.image_service import ImageService
from pastie.services.overlay_painter import OverlayPainter

logger = logging.getLogger(__name__)

DISPLAY_ROLE = "display"
ALIGNMENT_ROLE = "alignment"

HEADERS = ("Name", "Type", "Size", "Channels", "Width", "Height")

# 1e-3 * ширина изображения
OVERLAY_RATIO_PER_PIXEL = 1e-3


class ImageList:
    """Упорядоченный наблюдаемый список `ImageEntry`.

    События:
        on_rows_inserted(first, last): после добавления строк.
        on_rows_removed(first, last): после удаления строк.
        on_model_reset(): после очистки списка.
        on_current_changed(row, entry): текущая строка изменилась.
        on_row_changed(row): данные строки изменились (например, после декодирования).
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        image_service: Optional[ImageService] = None,
        painter_factory: Optional[Callable[[Image.Image], OverlayPainter]] = None,
    ) -> None:
        self._config = config or AppConfig()
        self._image_service = image_service or ImageService()
        self._painter_factory = painter_factory or self._default_painter
        self._entries: List[ImageEntry] = []
        self._current: Optional[int] = None
        self._selected: Set[int] = set()

        self.on_rows_inserted: Optional[Callable[[int, int], None]] = None
        self.on_rows_removed: Optional[Callable[[int, int], None]] = None
        self.on_model_reset: Optional[Callable[[], None]] = None
        self.on_current_changed: Optional[Callable[[int, ImageEntry], None]] = None
        self.on_row_changed: Optional[Callable[[int], None]] = None

    # ---- Sequence ----
    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ImageEntry]:
        return iter(list(self._entries))

    def at(self, row: int) -> Optional[ImageEntry]:
        if 0 <= row < len(self._entries):
            return self._entries[row]
        return None

    def row_of(self, entry: ImageEntry) -> Optional[int]:
        for row, item in enumerate(self._entries):
            if item is entry:
                return row
        return None

    @property
    def current_row(self) -> Optional[int]:
        return self._current

    @property
    def selected_rows(self) -> frozenset:
        return frozenset(self._selected)

    # ---- Loading ----
    def load(self, paths: Iterable[str | Path]) -> List[ImageEntry]:
        """Добавляет изображения по путям.

        Несуществующие пути, каталоги и файлы с расширением не из белого
        списка пропускаются молча. Возвращает добавленные записи в порядке путей.
        """
        added: List[ImageEntry] = []
        for raw in paths:
            path = Path(raw)
            if not (path.exists() and path.is_file() and self._config.accepts(path.suffix)):
                logger.debug("skipping %s", path)
                continue
            entry = ImageEntry.from_path(path)
            if self._config.preload:
                try:
                    entry.load(self._image_service.decode)
                except DecodeError as exc:
                    logger.debug("skipping %s: %s", path, exc)
                    continue
            self.add(entry)
            added.append(entry)
        if added:
            logger.info("loaded %d of the requested images", len(added))
        return added

    def add(self, entry: ImageEntry) -> int:
        """Добавляет запись в конец списка и возвращает её строку."""
        if self.row_of(entry) is not None:
            raise ValueError(f"Запись уже в списке: {entry.path}")
        row = len(self._entries)
        self._entries.append(entry)
        if self.on_rows_inserted:
            self.on_rows_inserted(row, row)
        return row

    def ensure_loaded(self, row: int) -> ImageEntry:
        """Декодирует запись строки, если она ещё не загружена.

        Raises:
            IndexError: строки нет.
            DecodeError: файл не удалось прочитать.
        """
        entry = self.at(row)
        if entry is None:
            raise IndexError(f"Нет строки {row}")
        if entry.load(self._image_service.decode):
            if self.on_row_changed:
                self.on_row_changed(row)
        return entry

    # ---- Removal ----
    def remove(self, row: int) -> None:
        entry = self.at(row)
        if entry is None:
            raise IndexError(f"Нет строки {row}")
        del self._entries[row]
        entry.release()

        self._selected = {r if r < row else r - 1 for r in self._selected if r != row}
        if self._current is not None:
            if self._current == row:
                self._current = None
            elif self._current > row:
                self._current -= 1

        if self.on_rows_removed:
            self.on_rows_removed(row, row)

    def clear(self) -> None:
        """Освобождает все записи и сбрасывает выделение."""
        entries, self._entries = self._entries, []
        for entry in entries:
            entry.release()
        self._current = None
        self._selected = set()
        logger.debug("cleared %d images", len(entries))
        if self.on_model_reset:
            self.on_model_reset()

    # ---- Selection ----
    def get_selected(self) -> List[ImageEntry]:
        return [self._entries[row] for row in sorted(self._selected)]

    def set_selection(self, rows: Iterable[int]) -> None:
        self._selected = {row for row in rows if 0 <= row < len(self._entries)}

    def get_current(self) -> Optional[ImageEntry]:
        """Текущая запись; если выбора нет, текущей становится первая строка."""
        if not self._entries:
            return None
        if self._current is None:
            self._set_current(0)
        return self._entries[self._current]

    def set_current(self, row: int) -> bool:
        if not 0 <= row < len(self._entries) or row == self._current:
            return False
        self._set_current(row)
        return True

    def next_image(self) -> bool:
        """Переход к следующей строке в порядке отображения."""
        if self._current is None:
            return self.set_current(0)
        return self.set_current(self._current + 1)

    def prev_image(self) -> bool:
        """Переход к предыдущей строке в порядке отображения."""
        if self._current is None:
            return False
        return self.set_current(self._current - 1)

    def _set_current(self, row: int) -> None:
        self._current = row
        if self.on_current_changed:
            self.on_current_changed(row, self._entries[row])

    # ---- Saving ----
    def save(self, file_path: str | Path) -> Path:
        """Сохраняет текущее изображение с наложенными аннотациями.

        Raises:
            NoCurrentImage: список пуст.
            DecodeError: исходный файл не удалось прочитать.
            EncodeError: формат назначения не распознан.
            WriteError: файл не удалось записать.
        """
        if self.get_current() is None:
            raise NoCurrentImage("Нет изображения для сохранения")
        canvas = self.render(self._current)
        return self._image_service.encode(canvas, file_path)

    def render(self, row: int) -> Image.Image:
        """Копия изображения строки с наложенными аннотациями (для просмотра)."""
        entry = self.ensure_loaded(row)
        canvas = self._image_service.to_canvas(entry.pixels)
        painter = self._painter_factory(canvas)
        painter.set_ratio(OVERLAY_RATIO_PER_PIXEL * canvas.width)
        painter.draw_overlay(entry)
        return canvas

    def _default_painter(self, canvas: Image.Image) -> OverlayPainter:
        return OverlayPainter(canvas, color=self._config.overlay_color, caption_color=self._config.caption_color)

    # ---- Table ----
    def row_count(self) -> int:
        return len(self._entries)

    def column_count(self) -> int:
        return len(HEADERS)

    def data(self, row: int, column: int, role: str = DISPLAY_ROLE):
        """Значение ячейки таблицы для указанной роли (None, если значения нет)."""
        entry = self.at(row)
        if entry is None or not 0 <= column < len(HEADERS):
            return None

        if role == ALIGNMENT_ROLE:
            return self.column_alignment(column)
        if role != DISPLAY_ROLE:
            return None

        if column == 0:
            return entry.base_name
        if column == 1:
            return entry.extension
        if column == 2:
            return f"{entry.size_bytes / 1024.0:.2f} kB"
        if column == 3:
            return entry.channels
        if column == 4:
            return entry.width
        return entry.height

    @staticmethod
    def column_alignment(column: int) -> str:
        # width is the only right-aligned column
        return "right" if column == 4 else "left"

    def header_data(self, column: int, role: str = DISPLAY_ROLE) -> Optional[str]:
        if role != DISPLAY_ROLE or not 0 <= column < len(HEADERS):
            return None
        return HEADERS[column]

    def rows(self, columns: Sequence[int] = range(len(HEADERS))) -> Iterator[tuple]:
        """Отображаемые значения всех строк (удобно для заполнения таблицы)."""
        for row in range(len(self._entries)):
            yield tuple(self.data(row, col) for col in columns)
