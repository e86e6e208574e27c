# src/common/logger.py
"""
Модуль структурированного логирования.
Пишет в stdout в JSON или цветном текстовом формате, к каждой записи
добавляет место вызова (модуль, функция, файл, строка).
"""

from __future__ import annotations

import inspect
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.common.constants import TypeMsg


ROOT_LOGGER_NAME = "rides_api"

_LOGGING_INITIALIZED: bool = False

_LEVELS: dict[TypeMsg, int] = {
    TypeMsg.DEBUG: logging.DEBUG,
    TypeMsg.INFO: logging.INFO,
    TypeMsg.WARNING: logging.WARNING,
    TypeMsg.ERROR: logging.ERROR,
    TypeMsg.CRITICAL: logging.CRITICAL,
}

# Сторонние логгеры, которые слишком многословны на DEBUG/INFO
_QUIET_LOGGERS = ("asyncpg", "uvicorn.access", "httpx")


# =============================================================================
# ФОРМАТТЕРЫ
# =============================================================================

class JsonFormatter(logging.Formatter):
    """Одна запись лога в одну JSON-строку."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_data: dict[str, Any] = {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            log_data["extra"] = extra_data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Цветной вывод для консоли разработчика."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    GRAY = "\033[90m"

    def _caller(self, record: logging.LogRecord) -> str:
        extra_data = getattr(record, "extra_data", None) or {}
        function = extra_data.get("caller_function")
        if not function:
            return ""
        location = f"{extra_data.get('caller_file')}:{extra_data.get('caller_line')}"
        return f" {self.GRAY}[{extra_data.get('caller_module')}.{function}() {location}]{self.RESET}"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.GRAY)
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        line = f"{timestamp} {color}[{record.levelname}]{self.RESET}{self._caller(record)} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# =============================================================================
# ЛОГГЕР
# =============================================================================

_loggers: dict[str, logging.Logger] = {}


def setup_logging() -> None:
    """
    Инициализирует корневой логгер сервиса и приглушает сторонние.
    Повторные вызовы ничего не делают.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED:
        return
    _LOGGING_INITIALIZED = True

    get_logger(ROOT_LOGGER_NAME)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _load_logging_options() -> tuple[str, str]:
    """Возвращает (уровень, формат) из настроек или значения по умолчанию."""
    level, fmt = "DEBUG", "colored"
    try:
        # Ленивый импорт: config импортирует модули, которые логируют
        from src.config import settings

        configured = (settings.logging.LOG_LEVEL, settings.logging.LOG_FORMAT)
    except Exception:
        return level, fmt

    # В тестах settings может быть подменён моком
    if isinstance(configured[0], str):
        level = configured[0]
    if isinstance(configured[1], str):
        fmt = configured[1]
    return level, fmt


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Возвращает логгер с консольным хендлером.
    Хендлер добавляется один раз на имя.
    """
    if name in _loggers:
        return _loggers[name]

    level, fmt = _load_logging_options()

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.DEBUG))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter() if fmt == "json" else ColoredFormatter())
        logger.addHandler(handler)
    logger.propagate = False

    _loggers[name] = logger
    return logger


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ ЛОГИРОВАНИЯ
# =============================================================================

def _get_caller_info() -> dict[str, Any]:
    """Описывает код, вызвавший log_*: два фрейма выше текущего."""
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame is not None and frame.f_back is not None else None
        if caller is None:
            return {}
        module = inspect.getmodule(caller)
        return {
            "caller_function": caller.f_code.co_name,
            "caller_module": module.__name__ if module else "unknown",
            "caller_file": Path(caller.f_code.co_filename).name,
            "caller_line": caller.f_lineno,
        }
    finally:
        del frame


async def log_info(
    message: str,
    *,
    type_msg: TypeMsg = TypeMsg.INFO,
    logger_name: str = ROOT_LOGGER_NAME,
    extra: dict[str, Any] | None = None,
) -> None:
    """
    Асинхронная функция логирования.

    Args:
        message: Сообщение для логирования
        type_msg: Уровень сообщения
        logger_name: Имя логгера
        extra: Дополнительные данные
    """
    extra_data = {**_get_caller_info(), **(extra or {})}
    get_logger(logger_name).log(_LEVELS.get(type_msg, logging.INFO), message, extra={"extra_data": extra_data})


async def log_debug(
    message: str,
    logger_name: str = ROOT_LOGGER_NAME,
    extra: dict[str, Any] | None = None,
) -> None:
    await log_info(message, type_msg=TypeMsg.DEBUG, logger_name=logger_name, extra=extra)


async def log_error(
    message: str,
    logger_name: str = ROOT_LOGGER_NAME,
    extra: dict[str, Any] | None = None,
    exc_info: bool = False,
) -> None:
    """
    Логирование ERROR уровня.

    Args:
        message: Сообщение об ошибке
        logger_name: Имя логгера
        extra: Дополнительные данные
        exc_info: Включать ли трейсбек текущего исключения
    """
    extra_data = {**_get_caller_info(), **(extra or {})}
    get_logger(logger_name).error(message, extra={"extra_data": extra_data}, exc_info=exc_info)
