# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCode(str, Enum):
    """Коды ошибок в ответах API."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RIDES_NOT_FOUND_ERROR = "RIDES_NOT_FOUND_ERROR"
    SERVER_ERROR = "SERVER_ERROR"


# Тексты ошибок являются частью внешнего контракта API
MSG_RIDES_NOT_FOUND = "Could not find any rides"
MSG_UNKNOWN_ERROR = "Unknown error"

# Границы координат (градусы)
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# Размер страницы списка поездок по умолчанию
DEFAULT_PAGE_SIZE = 10
