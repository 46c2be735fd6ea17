"""Исключения приложения.

Ошибки загрузки списка поглощаются моделью; ошибки сохранения поднимаются
до контроллера, который показывает их пользователю.
"""
from __future__ import annotations


class PastieError(Exception):
    """Базовое исключение приложения."""


class NoCurrentImage(PastieError):
    """Нет текущего изображения (пустой список или ничего не выбрано)."""


class DecodeError(PastieError):
    """Файл не удалось декодировать как изображение."""


class EncodeError(PastieError, ValueError):
    """Формат назначения не распознан или не поддерживает данные."""


class WriteError(PastieError, OSError):
    """Результат не удалось записать по указанному пути."""
