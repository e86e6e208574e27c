# src/services/rides_service/validation.py
"""
Проверка входных данных для создания поездки.
Чистые функции без ввода-вывода.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from src.common.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE


class ValidationErrorKind(str, Enum):
    """Виды ошибок валидации и их тексты (часть контракта API)."""

    INVALID_START_COORDS = (
        "Start latitude and longitude must be between -90 - 90 and -180 to 180 degrees respectively"
    )
    INVALID_END_COORDS = (
        "End latitude and longitude must be between -90 - 90 and -180 to 180 degrees respectively"
    )
    INVALID_RIDER = "Rider name must be a non empty string"
    INVALID_DRIVER = "Driver name must be a non empty string"
    INVALID_VEHICLE = "Driver Vehicle must be a non empty string"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationResult:
    """Результат валидации: либо успех, либо первая нарушенная проверка."""

    error: Optional[ValidationErrorKind] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""


VALID = ValidationResult()


def to_number(value: Any) -> Optional[float]:
    """
    Приводит значение к числу.

    Принимает int, float и числовые строки. Для bool, None,
    нечисловых строк, NaN и прочих типов возвращает None.
    Целые, не представимые во float, становятся бесконечностью
    со своим знаком и не проходят проверку диапазона.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.copysign(math.inf, value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    return None if math.isnan(number) else number


def _in_range(value: Any, low: float, high: float) -> bool:
    number = to_number(value)
    return number is not None and low <= number <= high


def is_valid_point(lat: Any, long: Any) -> bool:
    """Проверяет, что широта и долгота лежат в допустимых границах."""
    return _in_range(lat, MIN_LATITUDE, MAX_LATITUDE) and _in_range(long, MIN_LONGITUDE, MAX_LONGITUDE)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def validate_create_ride(
    start_lat: Any,
    start_long: Any,
    end_lat: Any,
    end_long: Any,
    rider_name: Any,
    driver_name: Any,
    driver_vehicle: Any,
) -> ValidationResult:
    """
    Проверяет данные новой поездки.

    Проверки выполняются строго по порядку, первая нарушенная
    определяет результат, последующие не вычисляются.

    Returns:
        VALID или ValidationResult с видом ошибки
    """
    rules: list[tuple[Callable[[], bool], ValidationErrorKind]] = [
        (lambda: is_valid_point(start_lat, start_long), ValidationErrorKind.INVALID_START_COORDS),
        (lambda: is_valid_point(end_lat, end_long), ValidationErrorKind.INVALID_END_COORDS),
        (lambda: is_non_empty_string(rider_name), ValidationErrorKind.INVALID_RIDER),
        (lambda: is_non_empty_string(driver_name), ValidationErrorKind.INVALID_DRIVER),
        (lambda: is_non_empty_string(driver_vehicle), ValidationErrorKind.INVALID_VEHICLE),
    ]

    for check, kind in rules:
        if not check():
            return ValidationResult(error=kind)
    return VALID
