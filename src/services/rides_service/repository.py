# src/services/rides_service/repository.py
"""
Репозиторий поездок.
Все запросы используют привязку параметров asyncpg ($1, $2, ...).
"""

from __future__ import annotations

import re
from typing import Any

from asyncpg import Record

from src.common.constants import DEFAULT_PAGE_SIZE
from src.common.logger import log_error
from src.infra.database import DatabaseManager
from src.services.rides_service.exceptions import StoreError
from src.shared.models.common import PaginationParams
from src.shared.models.ride_dto import RideCreate, RideDTO

# Границы BIGINT: id и OFFSET вне диапазона в запрос не передаются
_MAX_BIGINT = 2 ** 63 - 1

_RIDE_ID_PATTERN = re.compile(r"-?[0-9]+")

_RIDE_COLUMNS = """
    id, "startLat", "startLong", "endLat", "endLong",
    "riderName", "driverName", "driverVehicle"
"""


def parse_ride_id(raw_id: Any) -> int | None:
    """
    Приводит идентификатор из пути к int.

    Returns:
        ID или None, если значение не является допустимым ID
    """
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        ride_id = raw_id
    elif isinstance(raw_id, str) and _RIDE_ID_PATTERN.fullmatch(raw_id.strip()):
        try:
            ride_id = int(raw_id.strip())
        except ValueError:
            # Превышен лимит длины строки для int
            return None
    else:
        return None
    return ride_id if 1 <= ride_id <= _MAX_BIGINT else None


class RideRepository:
    """Репозиторий поездок."""

    def __init__(self, db: DatabaseManager) -> None:
        """
        Инициализация репозитория.

        Args:
            db: Менеджер базы данных (Dependency Injection)
        """
        self._db = db

    async def create(self, ride: RideCreate) -> list[RideDTO]:
        """
        Создаёт поездку и перечитывает её из БД по назначенному ID.

        Args:
            ride: Проверенные данные поездки

        Returns:
            Список из одной сохранённой поездки

        Raises:
            StoreError: при любой ошибке хранилища
        """
        try:
            ride_id = await self._db.fetchval(
                """
                INSERT INTO rides (
                    "startLat", "startLong", "endLat", "endLong",
                    "riderName", "driverName", "driverVehicle"
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7)
                RETURNING id
                """,
                ride.start_lat,
                ride.start_long,
                ride.end_lat,
                ride.end_long,
                ride.rider_name,
                ride.driver_name,
                ride.driver_vehicle,
            )
        except Exception as e:
            await log_error(f"Ошибка создания поездки: {e}", exc_info=True)
            raise StoreError("create ride failed") from e

        return await self.get_by_id(ride_id)

    async def get_page(self, page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[RideDTO]:
        """
        Возвращает страницу поездок в порядке вставки.

        Args:
            page: Номер страницы с 1 (значения <= 0 считаются первой страницей)
            page_size: Размер страницы

        Returns:
            Поездки страницы, пустой список если страница пуста

        Raises:
            StoreError: при любой ошибке хранилища
        """
        pagination = PaginationParams(page=max(page, 1), page_size=page_size)
        if pagination.offset > _MAX_BIGINT:
            return []

        try:
            rows = await self._db.fetch(
                f"""
                SELECT {_RIDE_COLUMNS}
                FROM rides
                ORDER BY id ASC
                LIMIT $1 OFFSET $2
                """,
                pagination.limit,
                pagination.offset,
            )
        except Exception as e:
            await log_error(f"Ошибка получения списка поездок (страница {pagination.page}): {e}", exc_info=True)
            raise StoreError("list rides failed") from e

        return [self._row_to_ride(row) for row in rows]

    async def get_by_id(self, ride_id: Any) -> list[RideDTO]:
        """
        Получает поездку по точному совпадению ID.

        Args:
            ride_id: ID поездки (int или строка из пути)

        Returns:
            Список из одной поездки или пустой список

        Raises:
            StoreError: при любой ошибке хранилища
        """
        parsed_id = parse_ride_id(ride_id)
        if parsed_id is None:
            return []

        try:
            row = await self._db.fetchrow(
                f"""
                SELECT {_RIDE_COLUMNS}
                FROM rides
                WHERE id = $1
                """,
                parsed_id,
            )
        except Exception as e:
            await log_error(f"Ошибка получения поездки {parsed_id}: {e}", exc_info=True)
            raise StoreError("get ride failed") from e

        return [self._row_to_ride(row)] if row is not None else []

    @staticmethod
    def _row_to_ride(row: Record | dict[str, Any]) -> RideDTO:
        """Преобразует строку БД в RideDTO."""
        return RideDTO.model_validate(dict(row))
