# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from src.services.rides_service.app import create_app
from src.services.rides_service.dependencies import get_ride_repository
from src.services.rides_service.exceptions import StoreError
from src.services.rides_service.repository import parse_ride_id
from src.shared.models.ride_dto import RideCreate, RideDTO


# =============================================================================
# IN-MEMORY ХРАНИЛИЩЕ
# =============================================================================

class InMemoryRideRepository:
    """
    Репозиторий поездок в памяти с тем же интерфейсом, что и RideRepository.
    При fail=True каждая операция завершается StoreError.
    """

    def __init__(self) -> None:
        self.rides: list[RideDTO] = []
        self.fail = False
        self.create_calls = 0
        self._next_id = 1

    def _check(self) -> None:
        if self.fail:
            raise StoreError("store unavailable")

    async def create(self, ride: RideCreate) -> list[RideDTO]:
        self.create_calls += 1
        self._check()
        stored = RideDTO(id=self._next_id, **ride.model_dump())
        self._next_id += 1
        self.rides.append(stored)
        return [stored.model_copy()]

    async def get_page(self, page: int, page_size: int = 10) -> list[RideDTO]:
        self._check()
        offset = (max(page, 1) - 1) * page_size
        return [ride.model_copy() for ride in self.rides[offset:offset + page_size]]

    async def get_by_id(self, ride_id: Any) -> list[RideDTO]:
        self._check()
        parsed = parse_ride_id(ride_id)
        return [ride.model_copy() for ride in self.rides if ride.id == parsed]


# =============================================================================
# ФИКСТУРЫ
# =============================================================================

@pytest.fixture
def ride_payload() -> dict[str, Any]:
    """Корректное тело запроса создания поездки."""
    return {
        "start_lat": 0,
        "start_long": 0,
        "end_lat": 0,
        "end_long": 0,
        "rider_name": "John Doe",
        "driver_name": "The Driver",
        "driver_vehicle": "The Vehicle",
    }


@pytest.fixture
def sample_ride_row() -> dict[str, Any]:
    """Строка таблицы rides в том виде, в каком её возвращает asyncpg."""
    return {
        "id": 1,
        "startLat": 50.4501,
        "startLong": 30.5234,
        "endLat": 50.3450,
        "endLong": 30.8940,
        "riderName": "John Doe",
        "driverName": "The Driver",
        "driverVehicle": "The Vehicle",
    }


@pytest.fixture
def mock_db() -> MagicMock:
    """Мок DatabaseManager."""
    db = MagicMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.fetchval = AsyncMock(return_value=None)
    return db


@pytest.fixture
def ride_store() -> InMemoryRideRepository:
    """Пустое хранилище поездок в памяти."""
    return InMemoryRideRepository()


@pytest.fixture
def app(mock_db: MagicMock, ride_store: InMemoryRideRepository) -> FastAPI:
    """Приложение с подменённым репозиторием."""
    application = create_app(db=mock_db)
    application.dependency_overrides[get_ride_repository] = lambda: ride_store
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """HTTP клиент без запуска lifespan."""
    return TestClient(app)
