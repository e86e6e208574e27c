# src/shared/models/common.py
"""
Общие модели ответов и пагинации.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.common.constants import DEFAULT_PAGE_SIZE, ErrorCode


class PaginationParams(BaseModel):
    """Параметры пагинации (страницы нумеруются с 1)."""

    page: int = Field(default=1, ge=1, description="Номер страницы")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, description="Размер страницы")

    @classmethod
    def from_raw(cls, raw_page: Any, page_size: int = DEFAULT_PAGE_SIZE) -> "PaginationParams":
        """
        Строит параметры из сырого значения query-параметра.

        Отсутствующее, пустое, нечисловое значение и номера <= 0
        трактуются как первая страница.
        """
        try:
            page = int(raw_page)
        except (TypeError, ValueError):
            page = 1
        return cls(page=max(page, 1), page_size=page_size)

    @property
    def offset(self) -> int:
        """Смещение для SQL-запроса."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Лимит для SQL-запроса."""
        return self.page_size


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой."""

    error_code: ErrorCode
    message: str
